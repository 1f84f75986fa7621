"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photo_studio.adapters.json_hero_store import JsonHeroConfigStore
from photo_studio.adapters.openai_caption_client import OpenAICaptionClient
from photo_studio.adapters.supabase_booking_store import SupabaseBookingStore
from photo_studio.adapters.supabase_object_store import SupabaseObjectStore
from photo_studio.adapters.supabase_photo_store import SupabasePhotoStore
from photo_studio.config import Settings
from photo_studio.services.admin import AdminService
from photo_studio.services.bookings import BookingService
from photo_studio.services.captions import CaptionService
from photo_studio.services.content import ContentRepository
from photo_studio.services.hero import HeroSlideshow


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    content: ContentRepository
    hero: HeroSlideshow
    booking_service: BookingService
    admin_service: AdminService
    caption_service: CaptionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    photo_store = SupabasePhotoStore(supabase_client)
    booking_store = SupabaseBookingStore(supabase_client)
    object_store = SupabaseObjectStore(
        supabase_client, bucket=resolved_settings.storage_bucket
    )
    content = ContentRepository(photo_store=photo_store, booking_store=booking_store)
    hero = HeroSlideshow(JsonHeroConfigStore(resolved_settings.hero_config_path))
    booking_service = BookingService(store=booking_store, content=content)
    admin_service = AdminService(
        content=content,
        photo_store=photo_store,
        object_store=object_store,
        hero=hero,
        cleanup_orphaned_uploads=resolved_settings.cleanup_orphaned_uploads,
    )
    caption_client = OpenAICaptionClient.create(
        resolved_settings.openai_api_key, store=resolved_settings.openai_store
    )
    caption_service = CaptionService(
        client=caption_client, model=resolved_settings.openai_model
    )

    async def close_resources() -> None:
        await caption_client.close()

    return AppContainer(
        settings=resolved_settings,
        content=content,
        hero=hero,
        booking_service=booking_service,
        admin_service=admin_service,
        caption_service=caption_service,
        close_resources=close_resources,
    )
