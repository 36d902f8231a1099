"""Persistence of the SimBrief user identifier as a one-value JSON document."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from flypad.config import settings

logger = logging.getLogger("flypad.services.user_store")


class UserIdStore:
    """Read and write the user identifier file (e.g. ``"791411"``)."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or settings.user_id_path)

    def _read(self) -> Optional[str]:
        try:
            if not self.path.exists():
                return None
            stored = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load user id from %s: %s", self.path, exc)
            return None

        if not isinstance(stored, str):
            logger.warning("Ignoring non-string user id document in %s", self.path)
            return None
        return stored

    def _write(self, user_id: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(user_id, indent=2), encoding="utf-8")

    async def load(self) -> Optional[str]:
        """Return the stored identifier, or ``None`` when there is none."""

        return await asyncio.to_thread(self._read)

    async def save(self, user_id: str) -> None:
        """Persist the identifier; raises ``OSError`` on failure."""

        await asyncio.to_thread(self._write, user_id)
        logger.info("Saved user id to %s", self.path)


__all__ = ["UserIdStore"]
