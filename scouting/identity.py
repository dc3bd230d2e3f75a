"""Scout-team identity slot (who is recording observations)."""

from __future__ import annotations

import logging

from constants import DEFAULT_SCOUT_TEAM, SCOUT_TEAM_STORAGE_KEY
from scouting.blob_store import BlobStore

logger = logging.getLogger(__name__)


class ScoutIdentity:
    def __init__(self, blobs: BlobStore, key: str = SCOUT_TEAM_STORAGE_KEY):
        self._blobs = blobs
        self._key = key

    def get(self) -> str | None:
        """Stored scout team, or None before login."""
        raw = self._blobs.get(self._key)
        if raw is None:
            return None
        value = raw.strip()
        return value or None

    def set(self, team: object) -> str:
        value = str(team).strip() if team is not None else ""
        if not value:
            raise ValueError("scout team is empty")
        self._blobs.set(self._key, value)
        logger.info("Logged in as Team %s", value)
        return value

    def current(self) -> str:
        """Attribution attached to new records."""
        return self.get() or DEFAULT_SCOUT_TEAM

    def team_number(self) -> int | None:
        value = self.get()
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None
