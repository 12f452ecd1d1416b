"""Tests for ValkeyClient - redis-py wrapper, exercised against a mocked connection."""

from unittest.mock import MagicMock, patch

import pytest
import redis

from clients.valkey_client import ValkeyClient

URL = "redis://localhost:6379/0"


@pytest.fixture
def redis_mock():
    with patch("clients.valkey_client.redis.from_url") as from_url:
        conn = MagicMock()
        from_url.return_value = conn
        yield conn


@pytest.fixture
def valkey(redis_mock):
    return ValkeyClient(URL)


class TestValkeyClientInit:
    """Connection initialization."""

    def test_connects_with_decoded_responses(self, redis_mock):
        """URL is passed to redis with string decoding and pinged."""
        with patch("clients.valkey_client.redis.from_url", return_value=redis_mock) as from_url:
            ValkeyClient(URL)
        from_url.assert_called_once_with(URL, decode_responses=True)
        redis_mock.ping.assert_called()

    def test_unreachable_server_raises(self, redis_mock):
        """Connection failure surfaces at construction."""
        redis_mock.ping.side_effect = redis.ConnectionError("refused")
        with pytest.raises(redis.ConnectionError):
            ValkeyClient(URL)

    def test_ping(self, valkey):
        """Healthy connection pings True."""
        assert valkey.ping() is True


class TestBasicOperations:
    """Get/set/delete operations."""

    def test_get_passes_through(self, valkey, redis_mock):
        """get returns the stored string."""
        redis_mock.get.return_value = "hello"
        assert valkey.get("test:basic") == "hello"
        redis_mock.get.assert_called_once_with("test:basic")

    def test_get_missing_returns_none(self, valkey, redis_mock):
        """Missing key is None, not an error."""
        redis_mock.get.return_value = None
        assert valkey.get("missing") is None

    def test_set_without_expiry(self, valkey, redis_mock):
        """Values are stored with no TTL."""
        valkey.set("k", "v")
        redis_mock.set.assert_called_once_with("k", "v")

    def test_delete_reports_existence(self, valkey, redis_mock):
        """delete is True when a key was removed, False otherwise."""
        redis_mock.delete.return_value = 1
        assert valkey.delete("k") is True
        redis_mock.delete.return_value = 0
        assert valkey.delete("k") is False

    def test_exists(self, valkey, redis_mock):
        """exists maps the count to a bool."""
        redis_mock.exists.return_value = 1
        assert valkey.exists("k") is True
        redis_mock.exists.return_value = 0
        assert valkey.exists("k") is False

    def test_incr(self, valkey, redis_mock):
        """incr returns the new counter value."""
        redis_mock.incr.return_value = 8
        assert valkey.incr("seq") == 8

    def test_close(self, valkey, redis_mock):
        """close closes the connection."""
        valkey.close()
        redis_mock.close.assert_called_once()


class TestJson:

    def test_set_json_serializes(self, valkey, redis_mock):
        """Lists are stored as JSON text."""
        valkey.set_json("invoices", [{"id": "a"}])
        redis_mock.set.assert_called_once_with("invoices", '[{"id": "a"}]')

    def test_get_json_parses(self, valkey, redis_mock):
        """Stored JSON text comes back as Python data."""
        redis_mock.get.return_value = '[{"id": "a"}]'
        assert valkey.get_json("invoices") == [{"id": "a"}]

    def test_get_json_invalid_raises(self, valkey, redis_mock):
        """Corrupt JSON raises ValueError."""
        redis_mock.get.return_value = "{oops"
        with pytest.raises(ValueError, match="Invalid JSON"):
            valkey.get_json("invoices")
