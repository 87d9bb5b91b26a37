"""Local read-through cache of the narrow layout preference.

The stored settings record is the only source of truth. The local file lets
the layout apply before the settings fetch resolves and is overwritten from
the record whenever one is loaded or saved. It is never written on its own.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

NARROW_LAYOUT_KEY = "narrow_layout"


class LayoutPreferenceCache:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> bool | None:
        """Return the cached preference, or None if nothing usable is cached."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable layout cache %s: %s", self.path, exc)
            return None
        value = data.get(NARROW_LAYOUT_KEY) if isinstance(data, dict) else None
        return value if isinstance(value, bool) else None

    def reconcile(self, record: Mapping[str, Any]) -> bool:
        """Overwrite the cache from a stored settings record and return its value."""
        narrow = bool(record[NARROW_LAYOUT_KEY])
        if self.read() != narrow:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({NARROW_LAYOUT_KEY: narrow}), encoding="utf-8")
        return narrow
