"""
JSON document persistence adapter.

Every operation loads the document fresh from disk and mutating operations
write it back in full. A process-wide lock serializes read-modify-write
cycles so concurrent requests cannot overwrite each other's changes.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import json
import logging
import os
import stat
import tempfile
import threading

logger = logging.getLogger(__name__)

NEW_FILE_MODE = 0o644


class StoreError(Exception):
    """Base class for document store failures."""


class StoreUnavailableError(StoreError):
    """The document is missing or cannot be parsed."""


class StoreWriteError(StoreError):
    """The document could not be written back."""


def default_document() -> dict:
    return {
        "admin": {"username": "admin", "password": ""},
        "hero": {},
        "posts": [],
        "services": [],
        "metrics": [],
        "process": [],
        "messages": [],
    }


class JsonDocumentStore:
    """Load/save helpers around a single JSON file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise StoreUnavailableError(f"Data file not found: {self.path}") from exc
        except (OSError, ValueError) as exc:
            raise StoreUnavailableError(f"Data file unreadable: {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreUnavailableError(f"Data file must hold a JSON object: {self.path}")
        return data

    def save(self, db: dict) -> None:
        payload = json.dumps(db, ensure_ascii=False, indent=2)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # mkstemp creates 0600; keep the mode of the file being replaced.
            mode = stat.S_IMODE(self.path.stat().st_mode) if self.path.exists() else NEW_FILE_MODE
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreWriteError(f"Could not write data file {self.path}: {exc}") from exc
        logger.debug("Saved %s", self.path)

    def read(self) -> dict:
        with self._lock:
            return self.load()

    @contextmanager
    def transaction(self) -> Iterator[dict]:
        """
        Yield the freshly loaded document and write it back when the block
        exits normally. An exception raised inside the block skips the write.
        """
        with self._lock:
            db = self.load()
            yield db
            self.save(db)

    def check(self) -> None:
        """Fail fast when the document is missing or invalid (used on startup)."""
        self.read()

    def initialize(self, document: dict | None = None, *, overwrite: bool = False) -> bool:
        """Create the document with defaults. Returns False when it already exists."""
        with self._lock:
            if self.path.exists() and not overwrite:
                return False
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.save(document if document is not None else default_document())
            return True
