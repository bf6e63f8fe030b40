"""
Key-value storage mediums.

The persistence adapter treats storage as an opaque string store with get/set,
the same contract a browser's local storage offers.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

from detox_navigator.domain.errors import StorageError

logger = structlog.get_logger(__name__)


class KeyValueStorage(Protocol):
    """Opaque string store keyed by name."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key was never written."""
        ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, mainly for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStorage:
    """
    Storage backed by a single JSON file holding a key -> string map.

    Writes go to a temp file in the same directory and are moved into place,
    so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.logger = logger.bind(component="json_file_storage", path=str(self.path))

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError("*", f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError("*", f"{self.path} does not hold a key-value map")
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            values = self._read_all()
        except StorageError:
            # An unreadable file is replaced rather than blocking every write
            self.logger.warning("storage_file_unreadable_overwriting")
            values = {}
        values[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(values, fh, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(key, f"cannot write {self.path}: {e}") from e

        self.logger.debug("storage_value_written", key=key, size=len(value))
