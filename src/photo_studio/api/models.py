"""Pydantic models for the HTTP API."""

import base64
import binascii
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from photo_studio.domain.bookings import DEFAULT_SESSION_TYPE, Booking
from photo_studio.domain.photos import Photo, PhotoCategory
from photo_studio.errors import FormValidationError


class PhotoOut(BaseModel):
    """Photo as returned to clients."""

    id: str
    image_url: str
    caption: str
    category: str
    is_highlight: bool
    is_package_cover: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, photo: Photo) -> "PhotoOut":
        return cls(
            id=photo.id,
            image_url=photo.image_url,
            caption=photo.caption,
            category=photo.category.value,
            is_highlight=photo.is_highlight,
            is_package_cover=photo.is_package_cover,
            created_at=photo.created_at,
        )


class BookingOut(BaseModel):
    """Booking as returned to the admin view."""

    id: str
    name: str
    email: str
    date: str
    type: str
    message: str
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingOut":
        return cls(
            id=booking.id,
            name=booking.name,
            email=booking.email,
            date=booking.date,
            type=booking.type,
            message=booking.message,
            status=booking.status.value,
            created_at=booking.created_at,
        )


class BookingRequest(BaseModel):
    """Public booking form payload."""

    name: str = ""
    email: str = ""
    date: str = ""
    type: str = DEFAULT_SESSION_TYPE
    message: str = ""


class ImagePayload(BaseModel):
    """Base64-encoded image sent by the admin dashboard."""

    image_base64: str = ""

    def image_bytes(self) -> bytes:
        """Decode the image, accepting plain base64 or a data URL."""
        raw = self.image_base64
        if raw.startswith("data:") and "," in raw:
            raw = raw.split(",", 1)[1]
        try:
            return base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise FormValidationError("Image is not valid base64") from exc


class PhotoFields(BaseModel):
    """Caption, category and flags shared by both ways of adding a photo."""

    caption: str = ""
    category: PhotoCategory = PhotoCategory.PORTRAIT
    is_highlight: bool = False
    is_package_cover: bool = False

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, value: object) -> PhotoCategory:
        return PhotoCategory.parse(value if isinstance(value, str) else None)


class PhotoUploadRequest(PhotoFields, ImagePayload):
    """Admin upload form payload."""

    filename: str = ""
    content_type: str | None = None


class PhotoLinkRequest(PhotoFields):
    """Admin form payload for a photo hosted at an external URL."""

    image_url: str = ""


class HeroSlotRequest(BaseModel):
    """New image reference for a hero slot."""

    image_url: str = Field(min_length=1)
