"""
JSON-file persistence for the greeting collection.

The whole collection lives in one pretty-printed JSON array. Reads parse the
full document; writes go to a temporary file in the same directory and are
renamed over the target, so the stored document is never left truncated.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import threading
from pathlib import Path
from typing import List

from greetings_api.core.errors import StorageReadError
from greetings_api.domain.greetings import Greeting, validate_collection

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


DEFAULT_FILE_MODE = 0o666 & ~_current_umask()


class JsonCollectionStore:
    """Loads and saves the full collection from/to a JSON file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self.lock = threading.RLock()

    def initialize(self) -> None:
        """Create the data directory and an empty collection when the file is absent."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write([])
            logger.info("Initialized empty greeting store at %s", self.path)

    def load(self) -> List[Greeting]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except FileNotFoundError as exc:
            raise StorageReadError(f"Data file {self.path} does not exist") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"Could not read {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StorageReadError(f"{self.path} is not valid JSON: {exc}") from exc
        try:
            return validate_collection(raw)
        except ValueError as exc:
            raise StorageReadError(f"{self.path} does not hold a valid greeting collection: {exc}") from exc

    def save(self, records: List[Greeting]) -> bool:
        """Replace the stored collection. Returns False (and logs) when the write failed."""
        try:
            self._write([record.to_dict() for record in records])
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to write greeting collection to %s", self.path)
            return False
        return True

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _write(self, data: list) -> None:
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            # mkstemp creates 0600 files; keep the target's mode (or the umask default for a new file).
            os.chmod(tmp_path, self._file_mode())
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
