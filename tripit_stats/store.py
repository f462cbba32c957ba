"""JSON-file persistence for the manual country override map."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable

from tripit_stats.assemble.overrides import clean_overrides, toggle_override
from tripit_stats.config import OVERRIDES_PATH

logger = logging.getLogger(__name__)


class OverrideStore:
    def __init__(self, path: Path = OVERRIDES_PATH):
        self.path = Path(path)
        self._data: Dict[str, bool] = {}
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable overrides file %s: %s", self.path, e)
            self._data = {}
            return
        self._data = clean_overrides(raw)
        if not isinstance(raw, dict) or len(self._data) != len(raw):
            logger.info("Cleaned malformed entries from %s", self.path)
            self._save()

    @property
    def overrides(self) -> Dict[str, bool]:
        return dict(self._data)

    def replace(self, overrides: Dict[str, bool]):
        self._data = clean_overrides(overrides)
        self._save()

    def toggle(self, iso: str, automated: Iterable[str]) -> Dict[str, bool]:
        self._data = toggle_override(self._data, iso, automated)
        self._save()
        return self.overrides

    def _save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self._data, indent=2, sort_keys=True),
            encoding="utf-8",
        )

    def __len__(self):
        return len(self._data)

    def __contains__(self, iso: str) -> bool:
        return iso in self._data
