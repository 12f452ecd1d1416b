"""Tests for FileStorageClient - JSON-file key-value store."""

import json

import pytest

from clients.file_storage_client import FileStorageClient


@pytest.fixture
def client(tmp_path):
    return FileStorageClient(tmp_path / "nested" / "store.json")


class TestInit:

    def test_creates_parent_directory(self, client, tmp_path):
        """Missing parent folders are created."""
        assert (tmp_path / "nested").is_dir()

    def test_file_created_lazily(self, client):
        """Nothing is written until the first set."""
        assert not client.path.exists()

    def test_ping(self, client):
        """Writable directory is healthy."""
        assert client.ping() is True


class TestBasicOperations:
    """Get/set/delete operations."""

    def test_set_and_get(self, client):
        """Set then get returns same value."""
        client.set("test:basic", "hello")
        assert client.get("test:basic") == "hello"

    def test_get_missing_returns_none(self, client):
        """Get on non-existent key returns None (not error)."""
        assert client.get("test:nonexistent") is None

    def test_delete_returns_true_when_existed(self, client):
        """Delete returns True when key existed."""
        client.set("test:delete", "value")
        assert client.delete("test:delete") is True
        assert client.get("test:delete") is None

    def test_delete_returns_false_when_missing(self, client):
        """Delete returns False when key didn't exist."""
        assert client.delete("test:nonexistent") is False

    def test_exists(self, client):
        """Exists reflects presence."""
        client.set("test:exists", "value")
        assert client.exists("test:exists") is True
        assert client.exists("test:other") is False

    def test_persists_across_instances(self, client):
        """A new client on the same file sees earlier writes."""
        client.set("k", "v")
        assert FileStorageClient(client.path).get("k") == "v"

    def test_unicode_preserved(self, client):
        """Non-ASCII text round-trips."""
        client.set("k", "₹ सोफ़ा")
        assert client.get("k") == "₹ सोफ़ा"

    def test_no_temp_files_left(self, client):
        """Atomic writes clean up after themselves."""
        client.set("a", "1")
        client.set("b", "2")
        assert [p.name for p in client.path.parent.iterdir()] == ["store.json"]


class TestIncr:

    def test_incr_creates_at_one(self, client):
        """Missing counter starts at 1."""
        assert client.incr("counter") == 1

    def test_incr_increments(self, client):
        """Counter goes up by one each call."""
        client.set("counter", "41")
        assert client.incr("counter") == 42
        assert client.get("counter") == "42"

    def test_incr_non_integer_raises(self, client):
        """Non-numeric value cannot be incremented."""
        client.set("counter", "abc")
        with pytest.raises(ValueError, match="not an integer"):
            client.incr("counter")


class TestJson:

    def test_set_json_and_get_json(self, client):
        """JSON helpers round-trip lists."""
        client.set_json("invoices", [{"id": "a"}])
        assert client.get_json("invoices") == [{"id": "a"}]

    def test_get_json_missing_returns_none(self, client):
        """Missing JSON key returns None."""
        assert client.get_json("missing") is None

    def test_get_json_invalid_raises(self, client):
        """Non-JSON value raises ValueError."""
        client.set("bad", "{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            client.get_json("bad")


class TestCorruptFile:

    def test_blank_file_is_empty(self, client):
        """Whitespace-only file holds no keys."""
        client.path.write_text("  \n", encoding="utf-8")
        assert client.get("anything") is None

    def test_garbage_raises(self, client):
        """Unparseable file raises ValueError."""
        client.path.write_text("not json", encoding="utf-8")
        with pytest.raises(ValueError, match="corrupt"):
            client.get("anything")

    def test_non_object_raises(self, client):
        """A JSON array at top level is rejected."""
        client.path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(ValueError, match="does not hold an object"):
            client.get("anything")

    def test_exists_on_garbage_is_false(self, client):
        """Unparseable file holds no keys for exists."""
        client.path.write_text("not json", encoding="utf-8")
        assert client.exists("anything") is False

    def test_set_moves_garbage_aside(self, client):
        """A write over an unparseable file keeps the bad bytes and starts empty."""
        client.path.write_text("not json", encoding="utf-8")

        client.set("k", "v")

        assert client.get("k") == "v"
        assert client.quarantine_path.read_text(encoding="utf-8") == "not json"

    def test_incr_after_garbage_starts_at_one(self, client):
        """Counter restarts from an empty key space."""
        client.path.write_text("not json", encoding="utf-8")
        assert client.incr("counter") == 1
        assert client.quarantine_path.exists()

    def test_delete_after_non_object(self, client):
        """Delete on a non-object file reports nothing removed and recovers."""
        client.path.write_text(json.dumps([1, 2]), encoding="utf-8")
        assert client.delete("k") is False
        client.set("k", "v")
        assert client.get("k") == "v"
