"""Hero slideshow slot management."""

from dataclasses import dataclass
from typing import Protocol

from photo_studio.errors import FormValidationError

HERO_SLOT_COUNT = 3


class HeroConfigStore(Protocol):
    """Local key-value persistence for the hero slot list."""

    def load(self) -> list[str]:
        """Return the stored slot list, possibly shorter than the slot count."""

    def save(self, slots: list[str]) -> None:
        """Persist the full slot list."""


@dataclass
class HeroSlideshow:
    """Up to three image references rotated behind the home page headline."""

    store: HeroConfigStore

    def slots(self) -> list[str]:
        """Return every slot, empty ones as blank strings."""
        stored = [str(slot) for slot in self.store.load()[:HERO_SLOT_COUNT]]
        return stored + [""] * (HERO_SLOT_COUNT - len(stored))

    def images(self) -> list[str]:
        """Return the filled slots in order."""
        return [slot for slot in self.slots() if slot]

    def set_slot(self, index: int, image_ref: str) -> list[str]:
        """Set one slot and persist the whole list."""
        if not 0 <= index < HERO_SLOT_COUNT:
            raise FormValidationError(
                f"Hero slot must be between 0 and {HERO_SLOT_COUNT - 1}",
                details={"slot": index},
            )
        slots = [str(slot) for slot in self.store.load()[:HERO_SLOT_COUNT]]
        while len(slots) <= index:
            slots.append("")
        slots[index] = image_ref.strip()
        self.store.save(slots)
        return self.slots()

    def clear_slot(self, index: int) -> list[str]:
        """Empty one slot."""
        return self.set_slot(index, "")
