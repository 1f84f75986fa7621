"""Domain models for portfolio photos."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

ALL_CATEGORIES = "All"
DEFAULT_CAPTION = "Untitled"


class PhotoCategory(StrEnum):
    """Known portfolio categories with an explicit fallback."""

    PORTRAIT = "Portrait"
    COUPLES = "Couples"
    FASHION = "Fashion"
    WEDDING = "Wedding"
    EVENT = "Event"
    COMMERCIAL = "Commercial"
    EDITORIAL = "Editorial"
    LANDSCAPE = "Landscape"
    PRODUCT = "Product"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> "PhotoCategory":
        """Map a stored or submitted value to a category, defaulting to Other."""
        return cls.match(value) or cls.OTHER

    @classmethod
    def match(cls, value: str | None) -> "PhotoCategory | None":
        """Return the category named by value, or None when it names none."""
        cleaned = (value or "").strip().lower()
        for category in cls:
            if category.value.lower() == cleaned:
                return category
        return None


@dataclass(frozen=True)
class Photo:
    """Represents a persisted portfolio photo."""

    id: str
    image_url: str
    caption: str
    category: PhotoCategory
    is_highlight: bool
    is_package_cover: bool
    created_at: datetime

    @property
    def object_name(self) -> str:
        """Name of the backing object in the storage bucket."""
        return self.image_url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class PhotoUpload:
    """Admin upload form contents."""

    content: bytes | None
    filename: str = ""
    caption: str = ""
    category: PhotoCategory = PhotoCategory.PORTRAIT
    is_highlight: bool = False
    is_package_cover: bool = False
    content_type: str | None = None
