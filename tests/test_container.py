"""Tests for container wiring."""

import asyncio

from photo_studio.adapters.json_hero_store import JsonHeroConfigStore
from photo_studio.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.admin_service.content is container.content
    assert container.booking_service.content is container.content
    assert isinstance(container.hero.store, JsonHeroConfigStore)
    assert container.hero.store.path == settings.hero_config_path
    asyncio.run(container.close_resources())
