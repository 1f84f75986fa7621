"""Supabase-backed photo store."""

from dataclasses import dataclass

import httpx
from supabase import Client, PostgrestAPIError

from photo_studio.adapters.supabase_errors import (
    parse_timestamp,
    read_error,
    write_error,
)
from photo_studio.domain.photos import DEFAULT_CAPTION, Photo, PhotoCategory
from photo_studio.services.content import PhotoStore

_COLUMNS = (
    "id, image_url, caption, category, is_highlight, is_package_cover, created_at"
)


@dataclass
class SupabasePhotoStore(PhotoStore):
    """Supabase implementation for the photos table."""

    client: Client

    def list_photos(self) -> list[Photo]:
        """Return all photos ordered by creation time, newest first."""
        try:
            response = (
                self.client.table("photos")
                .select(_COLUMNS)
                .order("created_at", desc=True)
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise read_error(exc, "photos") from exc
        return [_to_photo(row) for row in response.data or []]

    def insert_photo(  # noqa: PLR0913
        self,
        image_url: str,
        caption: str,
        category: PhotoCategory,
        is_highlight: bool,
        is_package_cover: bool,
    ) -> Photo:
        """Create a photo row and return it."""
        try:
            response = (
                self.client.table("photos")
                .insert(
                    {
                        "image_url": image_url,
                        "caption": caption,
                        "category": category.value,
                        "is_highlight": is_highlight,
                        "is_package_cover": is_package_cover,
                    }
                )
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise write_error(exc, "photos") from exc
        if not response.data:
            raise write_error(RuntimeError("no row returned"), "photos")
        return _to_photo(response.data[0])

    def clear_package_cover(self, category: PhotoCategory) -> None:
        """Unset is_package_cover for every photo in the category."""
        try:
            self.client.table("photos").update({"is_package_cover": False}).eq(
                "category", category.value
            ).execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise write_error(exc, "photos") from exc

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo row by id."""
        try:
            self.client.table("photos").delete().eq("id", photo_id).execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise write_error(exc, "photos") from exc


def _to_photo(row: dict[str, object]) -> Photo:
    return Photo(
        id=str(row["id"]),
        image_url=str(row.get("image_url") or ""),
        caption=str(row.get("caption") or DEFAULT_CAPTION),
        category=PhotoCategory.parse(row.get("category")),
        is_highlight=bool(row.get("is_highlight")),
        is_package_cover=bool(row.get("is_package_cover")),
        created_at=parse_timestamp(row.get("created_at")),
    )
