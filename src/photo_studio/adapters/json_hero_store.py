"""JSON file persistence for the hero slideshow."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from photo_studio.services.hero import HeroConfigStore

logger = logging.getLogger(__name__)


@dataclass
class JsonHeroConfigStore(HeroConfigStore):
    """Stores the hero slot list as a JSON array in a local file."""

    path: Path

    def load(self) -> list[str]:
        """Read the slot list; a missing or unreadable file is empty."""
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable hero config at %s", self.path)
            return []
        if not isinstance(payload, list):
            return []
        return [item if isinstance(item, str) else "" for item in payload]

    def save(self, slots: list[str]) -> None:
        """Write the full slot list, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        temp_path.write_text(json.dumps(slots), encoding="utf-8")
        temp_path.replace(self.path)
