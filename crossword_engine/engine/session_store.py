"""Persistent guess store for play sessions.

Each puzzle's guesses are saved as a JSON document under
``local_db/collections/sessions/``, keyed by the puzzle key, so a later
session over the same puzzle starts from the saved grid.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..core.models import CellKey
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/sessions")


class SessionStore:
    """Save and restore a session's guesses as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(self, key: str, guesses: Mapping[CellKey, str]) -> Path:
        """Persist the non-empty guesses for ``key`` and return the document path."""
        doc = {
            "id": key,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "guesses": [
                {"row": row, "col": col, "char": char}
                for (row, col), char in sorted(guesses.items())
                if char
            ],
        }
        path = self._path(key)
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.debug("Session saved: %s (%d guesses)", key, len(doc["guesses"]))
        return path

    def load(self, key: str) -> Optional[Dict[CellKey, str]]:
        """Return the saved guesses for ``key``, or None when nothing usable is stored."""
        path = self._path(key)
        if not path.exists():
            LOGGER.debug("Session store miss: %s", path.name)
            return None

        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
            guesses = {
                (int(entry["row"]), int(entry["col"])): str(entry["char"])
                for entry in doc.get("guesses", [])
            }
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError, AttributeError) as exc:
            LOGGER.warning("Session store read error (%s): %s", path.name, exc)
            return None

        LOGGER.info("Session restored: %s (%d guesses)", key, len(guesses))
        return guesses

    def clear(self, key: str) -> bool:
        """Delete the document for ``key``; returns whether one existed."""
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        LOGGER.debug("Session cleared: %s", key)
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _path(self, key: str) -> Path:
        safe = "".join(char if char.isalnum() or char in "-_" else "_" for char in key)
        return self.store_dir / f"{safe}.json"
