"""AI caption suggestions for portfolio uploads."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from photo_studio.errors import CaptionGenerationError, FormValidationError

logger = logging.getLogger(__name__)

CAPTION_PROMPT = (
    "Write a short, artistic, sophisticated one-sentence caption for this "
    "photography portfolio image. Do not include quotes."
)


class CaptionClient(Protocol):
    """Interface for an image captioning model."""

    async def generate(self, *, model: str, image_data_url: str, prompt: str) -> str:
        """Return generated caption text."""


@dataclass
class CaptionService:
    """Service that prepares caption prompts and cleans up the result."""

    client: CaptionClient
    model: str

    async def generate(self, image_bytes: bytes) -> str:
        """Suggest a caption for an image via the configured client."""
        if not image_bytes:
            raise FormValidationError("Choose an image before generating a caption")
        data_url = _to_data_url(image_bytes)
        try:
            raw = await self.client.generate(
                model=self.model,
                image_data_url=data_url,
                prompt=CAPTION_PROMPT,
            )
        except Exception as exc:
            logger.warning("Caption generation failed: %s", exc)
            raise CaptionGenerationError(
                "Could not generate caption. Check your API key or try again."
            ) from exc
        caption = _clean_caption(raw)
        if not caption:
            raise CaptionGenerationError("Caption generator returned no text")
        return caption


def _clean_caption(text: str | None) -> str:
    """Strip whitespace and wrapping quotes from model output."""
    cleaned = (text or "").strip()
    while len(cleaned) > 1 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
