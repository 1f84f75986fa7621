"""Supabase Storage bucket for portfolio images."""

from dataclasses import dataclass

import httpx
from supabase import Client, StorageException

from photo_studio.adapters.supabase_errors import write_error
from photo_studio.services.admin import ObjectStore


@dataclass
class SupabaseObjectStore(ObjectStore):
    """Public-read bucket holding uploaded images."""

    client: Client
    bucket: str

    def upload(self, name: str, content: bytes, content_type: str) -> None:
        """Upload bytes under the given object name."""
        try:
            self.client.storage.from_(self.bucket).upload(
                path=name,
                file=content,
                file_options={"content-type": content_type},
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise write_error(exc, f"{self.bucket}/{name}") from exc

    def public_url(self, name: str) -> str:
        """Return the public URL for an object."""
        try:
            return self.client.storage.from_(self.bucket).get_public_url(name)
        except StorageException as exc:
            raise write_error(exc, f"{self.bucket}/{name}") from exc

    def remove(self, name: str) -> None:
        """Delete an object from the bucket."""
        try:
            self.client.storage.from_(self.bucket).remove([name])
        except (StorageException, httpx.HTTPError) as exc:
            raise write_error(exc, f"{self.bucket}/{name}") from exc
