"""Contract shared by the key-value storage backends."""

import json
from typing import Protocol


class KeyValueStorage(Protocol):
    """String key -> string value store with a counter and JSON helpers."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> bool: ...

    def exists(self, key: str) -> bool: ...

    def incr(self, key: str) -> int: ...

    def get_json(self, key: str) -> dict | list | None: ...

    def set_json(self, key: str, value: dict | list) -> None: ...

    def close(self) -> None: ...


class JsonValueMixin:
    """JSON (de)serialization on top of a backend's get/set."""

    def set_json(self, key: str, value: dict | list) -> None:
        """
        Set key to JSON-serialized value.

        Args:
            key: Key to set
            value: Dict or list to serialize
        """
        self.set(key, json.dumps(value, ensure_ascii=False))

    def get_json(self, key: str) -> dict | list | None:
        """
        Get and deserialize JSON value.

        Returns None if key doesn't exist.
        Raises ValueError if value is not valid JSON.
        """
        value = self.get(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key '{key}': {e}")
