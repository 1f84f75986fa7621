"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from photo_studio.config import Settings
from photo_studio.containers import AppContainer
from photo_studio.domain.bookings import Booking, BookingForm, BookingStatus
from photo_studio.domain.photos import Photo, PhotoCategory
from photo_studio.errors import StoreWriteError
from photo_studio.services.admin import AdminService, ObjectStore
from photo_studio.services.bookings import BookingService
from photo_studio.services.captions import CaptionClient, CaptionService
from photo_studio.services.content import BookingStore, ContentRepository, PhotoStore
from photo_studio.services.hero import HeroConfigStore, HeroSlideshow

BASE_TIME = datetime(2025, 1, 1, tzinfo=UTC)


def make_photo(  # noqa: PLR0913
    category: PhotoCategory = PhotoCategory.PORTRAIT,
    *,
    minutes: int = 0,
    is_highlight: bool = False,
    is_package_cover: bool = False,
    caption: str = "Golden hour",
    photo_id: str | None = None,
) -> Photo:
    """Build a photo created `minutes` after the base time."""
    return Photo(
        id=photo_id or str(uuid4()),
        image_url=f"https://cdn.example.com/portfolio/{minutes}.jpg",
        caption=caption,
        category=category,
        is_highlight=is_highlight,
        is_package_cover=is_package_cover,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@dataclass
class InMemoryPhotoStore(PhotoStore):
    """In-memory photo store for tests."""

    photos: list[Photo] = field(default_factory=list)
    list_error: Exception | None = None
    insert_error: StoreWriteError | None = None
    clear_error: StoreWriteError | None = None
    delete_error: StoreWriteError | None = None
    calls: list[str] = field(default_factory=list)

    def list_photos(self) -> list[Photo]:
        self.calls.append("list")
        if self.list_error is not None:
            raise self.list_error
        return sorted(self.photos, key=lambda photo: photo.created_at, reverse=True)

    def insert_photo(  # noqa: PLR0913
        self,
        image_url: str,
        caption: str,
        category: PhotoCategory,
        is_highlight: bool,
        is_package_cover: bool,
    ) -> Photo:
        self.calls.append("insert")
        if self.insert_error is not None:
            raise self.insert_error
        newest = max((photo.created_at for photo in self.photos), default=BASE_TIME)
        photo = Photo(
            id=str(uuid4()),
            image_url=image_url,
            caption=caption,
            category=category,
            is_highlight=is_highlight,
            is_package_cover=is_package_cover,
            created_at=newest + timedelta(seconds=1),
        )
        self.photos.append(photo)
        return photo

    def clear_package_cover(self, category: PhotoCategory) -> None:
        self.calls.append("clear_package_cover")
        if self.clear_error is not None:
            raise self.clear_error
        self.photos = [
            replace(photo, is_package_cover=False)
            if photo.category == category
            else photo
            for photo in self.photos
        ]

    def delete_photo(self, photo_id: str) -> None:
        self.calls.append("delete")
        if self.delete_error is not None:
            raise self.delete_error
        self.photos = [photo for photo in self.photos if photo.id != photo_id]


@dataclass
class InMemoryBookingStore(BookingStore):
    """In-memory booking store for tests."""

    bookings: list[Booking] = field(default_factory=list)
    list_error: Exception | None = None
    insert_error: StoreWriteError | None = None
    insert_calls: int = 0

    def list_bookings(self) -> list[Booking]:
        if self.list_error is not None:
            raise self.list_error
        return sorted(
            self.bookings, key=lambda booking: booking.created_at, reverse=True
        )

    def insert_booking(self, form: BookingForm, status: BookingStatus) -> Booking:
        self.insert_calls += 1
        if self.insert_error is not None:
            raise self.insert_error
        booking = Booking(
            id=str(uuid4()),
            name=form.name,
            email=form.email,
            date=form.date,
            type=form.type,
            message=form.message,
            status=status,
            created_at=BASE_TIME + timedelta(minutes=len(self.bookings)),
        )
        self.bookings.append(booking)
        return booking


@dataclass
class InMemoryObjectStore(ObjectStore):
    """In-memory bucket for tests."""

    objects: dict[str, bytes] = field(default_factory=dict)
    content_types: dict[str, str] = field(default_factory=dict)
    upload_error: StoreWriteError | None = None
    remove_error: StoreWriteError | None = None
    removed: list[str] = field(default_factory=list)

    def upload(self, name: str, content: bytes, content_type: str) -> None:
        if self.upload_error is not None:
            raise self.upload_error
        self.objects[name] = content
        self.content_types[name] = content_type

    def public_url(self, name: str) -> str:
        return f"https://cdn.example.com/portfolio/{name}"

    def remove(self, name: str) -> None:
        self.removed.append(name)
        if self.remove_error is not None:
            raise self.remove_error
        self.objects.pop(name, None)


@dataclass
class InMemoryHeroConfigStore(HeroConfigStore):
    """In-memory hero slot persistence for tests."""

    slots: list[str] = field(default_factory=list)
    saves: list[list[str]] = field(default_factory=list)

    def load(self) -> list[str]:
        return list(self.slots)

    def save(self, slots: list[str]) -> None:
        self.slots = list(slots)
        self.saves.append(list(slots))


@dataclass
class FakeCaptionClient(CaptionClient):
    """Fake caption client returning a fixed caption."""

    caption: str = '"Light spills across a quiet afternoon."'
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, image_data_url: str, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.caption


@dataclass
class FixedClock:
    """Clock that advances one millisecond per call."""

    now: datetime = BASE_TIME

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(milliseconds=1)
        return self.now


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="header.payload.signature",
        admin_token="admin-token",
        openai_api_key="openai-key",
        hero_config_path=tmp_path / "hero.json",
    )


@pytest.fixture
def photo_store() -> InMemoryPhotoStore:
    return InMemoryPhotoStore()


@pytest.fixture
def booking_store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def hero_store() -> InMemoryHeroConfigStore:
    return InMemoryHeroConfigStore()


@pytest.fixture
def content(
    photo_store: InMemoryPhotoStore, booking_store: InMemoryBookingStore
) -> ContentRepository:
    return ContentRepository(photo_store=photo_store, booking_store=booking_store)


@pytest.fixture
def admin_service(
    content: ContentRepository,
    photo_store: InMemoryPhotoStore,
    object_store: InMemoryObjectStore,
    hero_store: InMemoryHeroConfigStore,
) -> AdminService:
    return AdminService(
        content=content,
        photo_store=photo_store,
        object_store=object_store,
        hero=HeroSlideshow(hero_store),
        clock=FixedClock(),
    )


@pytest.fixture
def container(
    settings: Settings,
    content: ContentRepository,
    booking_store: InMemoryBookingStore,
    admin_service: AdminService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        content=content,
        hero=admin_service.hero,
        booking_service=BookingService(store=booking_store, content=content),
        admin_service=admin_service,
        caption_service=CaptionService(
            client=FakeCaptionClient(), model=settings.openai_model
        ),
        close_resources=close_resources,
    )
