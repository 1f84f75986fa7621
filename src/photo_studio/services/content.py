"""In-memory view of photos and bookings synchronized from the remote store."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from photo_studio.domain.bookings import Booking, BookingForm, BookingStatus
from photo_studio.domain.photos import ALL_CATEGORIES, Photo, PhotoCategory
from photo_studio.errors import SchemaMissingError, StoreReadError

logger = logging.getLogger(__name__)

SETUP_SQL = """\
create table if not exists photos (
  id uuid primary key default gen_random_uuid(),
  image_url text not null,
  caption text,
  category text,
  is_highlight boolean not null default false,
  is_package_cover boolean not null default false,
  created_at timestamptz not null default now()
);

create table if not exists bookings (
  id uuid primary key default gen_random_uuid(),
  name text not null,
  email text not null,
  date text not null,
  type text,
  message text,
  status text not null default 'pending',
  created_at timestamptz not null default now()
);

insert into storage.buckets (id, name, public)
values ('{bucket}', '{bucket}', true)
on conflict (id) do nothing;
"""


class PhotoStore(Protocol):
    """Persistence interface for photo records."""

    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""

    def insert_photo(  # noqa: PLR0913
        self,
        image_url: str,
        caption: str,
        category: PhotoCategory,
        is_highlight: bool,
        is_package_cover: bool,
    ) -> Photo:
        """Create a photo record and return it."""

    def clear_package_cover(self, category: PhotoCategory) -> None:
        """Unset the package cover flag on every photo in a category."""

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo record by id."""


class BookingStore(Protocol):
    """Persistence interface for booking records."""

    def list_bookings(self) -> list[Booking]:
        """Return all bookings, newest first."""

    def insert_booking(self, form: BookingForm, status: BookingStatus) -> Booking:
        """Create a booking record and return it."""


def filter_by_category(photos: list[Photo], selected: str) -> list[Photo]:
    """Return the photos in the selected category, or all of them for "All".

    A selection that names no known category matches nothing.
    """
    if selected == ALL_CATEGORIES:
        return photos
    category = PhotoCategory.match(selected)
    if category is None:
        return []
    return [photo for photo in photos if photo.category == category]


@dataclass
class ContentRepository:
    """Cache of photos and bookings with derived gallery views."""

    photo_store: PhotoStore
    booking_store: BookingStore
    photos: list[Photo] = field(default_factory=list)
    bookings: list[Booking] = field(default_factory=list)
    schema_missing: bool = False

    def load(self) -> None:
        """Refresh both collections from the store."""
        self.reload_photos()
        self.reload_bookings()

    def reload_photos(self) -> None:
        """Refresh photos; a missing schema is flagged instead of raised."""
        try:
            self.photos = self.photo_store.list_photos()
        except SchemaMissingError:
            logger.warning("Photos table is missing; admin setup required")
            self.schema_missing = True
            self.photos = []
            return
        except StoreReadError:
            logger.exception("Failed to load photos")
            self.photos = []
            return
        self.schema_missing = False

    def reload_bookings(self) -> None:
        """Refresh bookings; any read failure yields an empty list."""
        try:
            self.bookings = self.booking_store.list_bookings()
        except StoreReadError:
            logger.exception("Failed to load bookings")
            self.bookings = []
        except SchemaMissingError:
            logger.warning("Bookings table is missing; admin setup required")
            self.bookings = []

    def highlights(self) -> list[Photo]:
        """Photos flagged for the home page strip."""
        return [photo for photo in self.photos if photo.is_highlight]

    def categories(self) -> list[str]:
        """Distinct categories present, sorted, with the "All" sentinel first."""
        present = {photo.category.value for photo in self.photos}
        return [ALL_CATEGORIES, *sorted(present)]

    def gallery(self, selected: str = ALL_CATEGORIES) -> list[Photo]:
        """Photos shown in the gallery for a category selection."""
        return filter_by_category(self.photos, selected)

    def package_cover(self, category: PhotoCategory) -> Photo | None:
        """Resolve the cover image for a category's pricing package.

        An explicitly flagged cover wins over recency; otherwise the newest
        photo in the category is used.
        """
        in_category = [photo for photo in self.photos if photo.category == category]
        for photo in in_category:
            if photo.is_package_cover:
                return photo
        return in_category[0] if in_category else None

    def package_covers(self) -> dict[PhotoCategory, Photo]:
        """Resolved covers for every category that has at least one photo."""
        covers: dict[PhotoCategory, Photo] = {}
        for category in PhotoCategory:
            cover = self.package_cover(category)
            if cover is not None:
                covers[category] = cover
        return covers

    def get_photo(self, photo_id: str) -> Photo | None:
        """Return a cached photo by id, if present."""
        for photo in self.photos:
            if photo.id == photo_id:
                return photo
        return None

    def forget_photo(self, photo_id: str) -> None:
        """Drop a photo from the cache without touching the store."""
        self.photos = [photo for photo in self.photos if photo.id != photo_id]


def setup_instructions(bucket: str) -> str:
    """SQL an admin runs to create the tables and storage bucket."""
    return SETUP_SQL.format(bucket=bucket)
