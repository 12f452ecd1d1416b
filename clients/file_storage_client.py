"""
Local file backend for invoice storage.

Plays the role browser localStorage plays for a single-page app: one JSON
object on disk mapping keys to string values. Every write rewrites the whole
file through a temp file and an atomic rename, so a crash mid-write leaves
the previous contents intact.

Single process, single user. No locking. A file that cannot be parsed is
reported by reads; writes move it aside to `<name>.corrupt` and start over.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from clients.base import JsonValueMixin

logger = logging.getLogger(__name__)


class FileStorageClient(JsonValueMixin):
    """
    Key-value storage persisted to a JSON file.

    Usage:
        client = FileStorageClient("./data/invoices.json")
        client.set("key", "value")
        value = client.get("key")  # Returns None if missing
    """

    def __init__(self, path: str | Path):
        """
        Args:
            path: File to store data in. Parent directories are created.
                The file itself is created on first write.
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"FileStorageClient using {self.path}")

    def _read_all(self) -> dict[str, str]:
        """
        Load the whole key space.

        Raises ValueError if the file exists but is not a JSON object.
        """
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Storage file {self.path} is corrupt: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold an object")
        return data

    @property
    def quarantine_path(self) -> Path:
        """Where an unreadable storage file is moved before it is replaced."""
        return self.path.with_name(self.path.name + ".corrupt")

    def _read_for_update(self) -> dict[str, str]:
        """
        Load the key space ahead of a change.

        An unreadable file is moved to quarantine_path and the change starts
        from an empty key space.
        """
        try:
            return self._read_all()
        except ValueError as e:
            logger.error(f"{e}; moving it to {self.quarantine_path} and starting empty")
            os.replace(self.path, self.quarantine_path)
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def ping(self) -> bool:
        """Health check. True if the storage directory is writable."""
        return os.access(self.path.parent, os.W_OK)

    def get(self, key: str) -> str | None:
        """
        Get value by key.

        Returns None if key doesn't exist (not an error).
        Raises ValueError if the file is corrupt.
        """
        value = self._read_all().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        """Set key to value."""
        data = self._read_for_update()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> bool:
        """
        Delete key.

        Returns True if key existed and was deleted, False if key didn't exist.
        """
        data = self._read_for_update()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True

    def exists(self, key: str) -> bool:
        """Check if key exists. An unreadable file holds no keys."""
        try:
            return key in self._read_all()
        except ValueError:
            return False

    def incr(self, key: str) -> int:
        """
        Increment key by 1.

        Creates key with value 1 if it doesn't exist.
        Raises ValueError if the current value is not an integer.
        """
        data = self._read_for_update()
        current = data.get(key, "0")
        try:
            new_value = int(current) + 1
        except ValueError:
            raise ValueError(f"Value at key '{key}' is not an integer")
        data[key] = str(new_value)
        self._write_all(data)
        return new_value

    def close(self) -> None:
        """Nothing to release; present for parity with ValkeyClient."""
