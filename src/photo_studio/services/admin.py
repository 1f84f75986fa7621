"""Admin workflows that mutate the portfolio."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import PurePosixPath
from typing import Protocol

from photo_studio.domain.bookings import Booking
from photo_studio.domain.photos import (
    DEFAULT_CAPTION,
    Photo,
    PhotoCategory,
    PhotoUpload,
)
from photo_studio.errors import (
    ConfirmationRequiredError,
    FormValidationError,
    PhotoNotFoundError,
    SchemaMissingError,
    StoreWriteError,
)
from photo_studio.services.captions import detect_mime_type
from photo_studio.services.content import ContentRepository, PhotoStore
from photo_studio.services.hero import HeroSlideshow

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Binary object storage for portfolio images."""

    def upload(self, name: str, content: bytes, content_type: str) -> None:
        """Store an object under the given name."""

    def public_url(self, name: str) -> str:
        """Resolve the public address of a stored object."""

    def remove(self, name: str) -> None:
        """Delete a stored object."""


class StepPolicy(StrEnum):
    """What a failed step does to the rest of a workflow."""

    ABORT = "abort"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True)
class StepOutcome:
    """Result of one step of a multi-step admin workflow."""

    name: str
    policy: StepPolicy
    ok: bool
    error: str | None = None


@dataclass
class WorkflowReport:
    """Ordered record of the steps an admin workflow ran."""

    steps: list[StepOutcome] = field(default_factory=list)
    object_name: str | None = None
    orphaned_object: str | None = None

    def record(
        self, name: str, policy: StepPolicy, error: Exception | None = None
    ) -> None:
        self.steps.append(
            StepOutcome(
                name=name,
                policy=policy,
                ok=error is None,
                error=str(error) if error is not None else None,
            )
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "object_name": self.object_name,
            "orphaned_object": self.orphaned_object,
            "steps": [
                {
                    "name": step.name,
                    "policy": step.policy.value,
                    "ok": step.ok,
                    "error": step.error,
                }
                for step in self.steps
            ],
        }


@dataclass(frozen=True)
class UploadResult:
    """Photo created by an upload plus the steps taken."""

    photo: Photo
    report: WorkflowReport


@dataclass
class AdminService:
    """Orchestrates uploads, deletions and hero slot edits."""

    content: ContentRepository
    photo_store: PhotoStore
    object_store: ObjectStore
    hero: HeroSlideshow
    cleanup_orphaned_uploads: bool = False
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))

    def upload(self, upload: PhotoUpload) -> UploadResult:
        """Store an image, record it and refresh the content cache.

        Clearing the previous package cover is best-effort. Storing the
        object, resolving its URL and inserting the record abort the upload.
        An object left behind by a failed insert is only removed when
        orphan cleanup is enabled.
        """
        if not upload.content:
            raise FormValidationError("Choose an image to upload")
        if self.content.schema_missing:
            raise SchemaMissingError("Create the photos table before uploading")

        report = WorkflowReport()
        if upload.is_package_cover:
            self._clear_package_cover(upload.category, report)

        name = self._object_name(upload.filename)
        report.object_name = name
        content_type = upload.content_type or detect_mime_type(upload.content)
        try:
            self.object_store.upload(name, upload.content, content_type)
        except StoreWriteError as exc:
            report.record("upload_object", StepPolicy.ABORT, exc)
            raise _upload_failed(exc, report) from exc
        report.record("upload_object", StepPolicy.ABORT)

        try:
            image_url = self.object_store.public_url(name)
        except StoreWriteError as exc:
            report.record("resolve_public_url", StepPolicy.ABORT, exc)
            self._handle_orphan(name, report)
            raise _upload_failed(exc, report) from exc
        report.record("resolve_public_url", StepPolicy.ABORT)

        try:
            photo = self.photo_store.insert_photo(
                image_url=image_url,
                caption=upload.caption.strip() or DEFAULT_CAPTION,
                category=upload.category,
                is_highlight=upload.is_highlight,
                is_package_cover=upload.is_package_cover,
            )
        except StoreWriteError as exc:
            report.record("insert_record", StepPolicy.ABORT, exc)
            self._handle_orphan(name, report)
            raise _upload_failed(exc, report) from exc
        report.record("insert_record", StepPolicy.ABORT)

        self.content.load()
        logger.info("Uploaded photo %s as %s", photo.id, name)
        return UploadResult(photo=photo, report=report)

    def add_photo_from_url(  # noqa: PLR0913
        self,
        image_url: str,
        caption: str = "",
        category: PhotoCategory = PhotoCategory.PORTRAIT,
        is_highlight: bool = False,
        is_package_cover: bool = False,
    ) -> UploadResult:
        """Record a photo hosted elsewhere; nothing is written to the bucket."""
        image_url = image_url.strip()
        if not image_url:
            raise FormValidationError("Paste an image URL")
        if not image_url.startswith(("http://", "https://")):
            raise FormValidationError(
                "Image URL must start with http:// or https://",
                details={"image_url": image_url},
            )
        if self.content.schema_missing:
            raise SchemaMissingError("Create the photos table before adding photos")

        report = WorkflowReport()
        if is_package_cover:
            self._clear_package_cover(category, report)

        try:
            photo = self.photo_store.insert_photo(
                image_url=image_url,
                caption=caption.strip() or DEFAULT_CAPTION,
                category=category,
                is_highlight=is_highlight,
                is_package_cover=is_package_cover,
            )
        except StoreWriteError as exc:
            report.record("insert_record", StepPolicy.ABORT, exc)
            raise StoreWriteError(
                f"Could not add photo: {exc.message}", details=report.as_dict()
            ) from exc
        report.record("insert_record", StepPolicy.ABORT)

        self.content.load()
        logger.info("Added linked photo %s", photo.id)
        return UploadResult(photo=photo, report=report)

    def delete_photo(
        self, photo_id: str, confirmed: bool, object_name: str | None = None
    ) -> WorkflowReport:
        """Remove a photo's object and record, then drop it from the cache."""
        if not confirmed:
            raise ConfirmationRequiredError(
                "Are you sure you want to delete this photo?",
                details={"photo_id": photo_id},
            )
        if object_name is None:
            photo = self.content.get_photo(photo_id)
            if photo is None:
                raise PhotoNotFoundError(
                    "Photo not found", details={"photo_id": photo_id}
                )
            object_name = photo.object_name

        report = WorkflowReport(object_name=object_name)
        try:
            self.object_store.remove(object_name)
        except StoreWriteError as exc:
            logger.warning("Could not remove object %s: %s", object_name, exc)
            report.record("remove_object", StepPolicy.BEST_EFFORT, exc)
        else:
            report.record("remove_object", StepPolicy.BEST_EFFORT)

        try:
            self.photo_store.delete_photo(photo_id)
        except StoreWriteError as exc:
            report.record("delete_record", StepPolicy.ABORT, exc)
            raise StoreWriteError(
                f"Could not delete photo: {exc.message}", details=report.as_dict()
            ) from exc
        report.record("delete_record", StepPolicy.ABORT)

        self.content.forget_photo(photo_id)
        logger.info("Deleted photo %s", photo_id)
        return report

    def set_hero_slot(self, index: int, image_ref: str) -> list[str]:
        """Point a hero slideshow slot at an image."""
        return self.hero.set_slot(index, image_ref)

    def clear_hero_slot(self, index: int) -> list[str]:
        """Empty a hero slideshow slot."""
        return self.hero.clear_slot(index)

    def list_bookings(self) -> list[Booking]:
        """Bookings for the admin view, newest first."""
        return list(self.content.bookings)

    def _object_name(self, filename: str) -> str:
        extension = PurePosixPath(filename).suffix.lstrip(".").lower() or "jpg"
        millis = int(self.clock().timestamp() * 1000)
        return f"{millis}.{extension}"

    def _clear_package_cover(
        self, category: PhotoCategory, report: WorkflowReport
    ) -> None:
        try:
            self.photo_store.clear_package_cover(category)
        except StoreWriteError as exc:
            logger.warning("Could not reset package cover for %s: %s", category, exc)
            report.record("clear_package_cover", StepPolicy.BEST_EFFORT, exc)
        else:
            report.record("clear_package_cover", StepPolicy.BEST_EFFORT)

    def _handle_orphan(self, name: str, report: WorkflowReport) -> None:
        if not self.cleanup_orphaned_uploads:
            logger.warning("Object %s is orphaned after a failed insert", name)
            report.orphaned_object = name
            return
        try:
            self.object_store.remove(name)
        except StoreWriteError as exc:
            logger.warning("Could not remove orphaned object %s: %s", name, exc)
            report.record("remove_orphan", StepPolicy.BEST_EFFORT, exc)
            report.orphaned_object = name
        else:
            report.record("remove_orphan", StepPolicy.BEST_EFFORT)


def _upload_failed(exc: StoreWriteError, report: WorkflowReport) -> StoreWriteError:
    return StoreWriteError(f"Upload failed: {exc.message}", details=report.as_dict())
