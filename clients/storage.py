"""Pick a storage backend from a URL."""

from urllib.parse import urlparse

from clients.base import KeyValueStorage
from clients.file_storage_client import FileStorageClient
from clients.valkey_client import ValkeyClient


def open_storage(url: str) -> KeyValueStorage:
    """
    Open the key-value storage named by a URL.

    Supported:
        file://<path>         local JSON file (relative paths allowed: file://./data/x.json)
        redis://, rediss://   Valkey / Redis

    Raises:
        ValueError: Unknown scheme or empty path
        redis.ConnectionError: Valkey unreachable
    """
    parsed = urlparse(url)

    if parsed.scheme == "file":
        path = url[len("file://"):]
        if not path:
            raise ValueError("file:// storage URL needs a path")
        return FileStorageClient(path)

    if parsed.scheme in ("redis", "rediss"):
        return ValkeyClient(url)

    raise ValueError(f"Unsupported storage URL scheme '{parsed.scheme}'")
