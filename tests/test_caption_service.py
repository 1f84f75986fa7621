"""Tests for caption generation."""

import asyncio

import pytest

from photo_studio.errors import CaptionGenerationError, FormValidationError
from photo_studio.services.captions import (
    CAPTION_PROMPT,
    CaptionService,
    _to_data_url,
)
from tests.conftest import FakeCaptionClient


def test_caption_service_strips_quotes() -> None:
    client = FakeCaptionClient()
    service = CaptionService(client=client, model="gpt-4.1-mini")

    caption = asyncio.run(service.generate(b"\xff\xd8\xffimage"))

    assert caption == "Light spills across a quiet afternoon."
    assert client.prompts == [CAPTION_PROMPT]


def test_caption_failure_is_reported() -> None:
    client = FakeCaptionClient(error=RuntimeError("quota exceeded"))
    service = CaptionService(client=client, model="gpt-4.1-mini")

    with pytest.raises(CaptionGenerationError):
        asyncio.run(service.generate(b"image"))


def test_empty_caption_is_a_failure() -> None:
    service = CaptionService(client=FakeCaptionClient(caption="  "), model="m")

    with pytest.raises(CaptionGenerationError):
        asyncio.run(service.generate(b"image"))


def test_caption_requires_image() -> None:
    client = FakeCaptionClient()
    service = CaptionService(client=client, model="m")

    with pytest.raises(FormValidationError):
        asyncio.run(service.generate(b""))

    assert client.prompts == []


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    url = _to_data_url(b"unknown")

    assert url.startswith("data:image/jpeg;base64,")
