"""Tests for HTTP-based adapters."""

import asyncio

import pytest

from photo_studio.adapters.openai_caption_client import OpenAICaptionClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "A quiet study in light.") -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_caption_client_sends_image_and_prompt() -> None:
    fake = _FakeOpenAI()
    client = OpenAICaptionClient(client=fake)

    result = asyncio.run(
        client.generate(
            model="gpt-4.1-mini",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            prompt="Write a caption",
        )
    )

    assert result == "A quiet study in light."
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4.1-mini"
    assert payload["store"] is False
    parts = payload["input"][0]["content"]
    assert [part["type"] for part in parts] == ["input_image", "input_text"]


def test_openai_caption_client_rejects_empty_output() -> None:
    client = OpenAICaptionClient(client=_FakeOpenAI(output_text=""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.generate(
                model="gpt-4.1-mini",
                image_data_url="data:image/jpeg;base64,ZmFrZQ==",
                prompt="Write a caption",
            )
        )
