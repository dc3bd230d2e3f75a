"""Key-value blob slots backing the scouting store.

Each slot holds one text blob. Writes replace the whole slot.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Protocol

logger = logging.getLogger(__name__)

BLOB_SUFFIX = ".blob"


class BlobStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    """Process-local slots, used by tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = str(value)


class FileBlobStore:
    """One ``<key>.blob`` UTF-8 file per slot under *root*."""

    def __init__(self, root: str):
        self.root = root

    def _path(self, key: str) -> str:
        if not key or os.sep in key or (os.altsep and os.altsep in key) or key in {".", ".."}:
            raise ValueError(f"invalid blob key: {key!r}")
        return os.path.join(self.root, key + BLOB_SUFFIX)

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        os.makedirs(self.root, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("Wrote %d chars to slot %s", len(value), key)
