"""Unit tests for FilesystemCachePool."""

import json

import pytest

from pyflickr.adapters.cache.filesystem import FilesystemCachePool


@pytest.fixture
def pool(tmp_path):
    return FilesystemCachePool(tmp_path / "cache")


@pytest.fixture
def clock(monkeypatch):
    now = [1_700_000_000.0]
    monkeypatch.setattr("pyflickr.adapters.cache.filesystem.time.time", lambda: now[0])
    return now


def _save(pool, key, value, ttl=None):
    item = pool.get_item(key)
    item.set(value)
    item.expires_after(ttl)
    return pool.save(item)


def test_creates_cache_dir(tmp_path):
    FilesystemCachePool(tmp_path / "a" / "b")
    assert (tmp_path / "a" / "b").is_dir()


def test_round_trip(pool):
    assert _save(pool, "3f2a", '{"stat":"ok"}') is True

    item = pool.get_item("3f2a")
    assert item.is_hit()
    assert item.get() == '{"stat":"ok"}'


def test_persists_across_instances(tmp_path):
    _save(FilesystemCachePool(tmp_path), "k", "body")
    assert FilesystemCachePool(tmp_path).get_item("k").get() == "body"


def test_file_layout(pool, clock):
    _save(pool, "abc", "body", ttl=60)

    data = json.loads((pool.cache_dir / "abc.json").read_text(encoding="utf-8"))
    assert data["key"] == "abc"
    assert data["value"] == "body"
    assert data["expires_at"] == clock[0] + 60
    assert "cached_at" in data


def test_expired_file_is_removed(pool, clock):
    _save(pool, "k", "body", ttl=10)

    clock[0] += 10
    assert not pool.get_item("k").is_hit()
    assert not (pool.cache_dir / "k.json").exists()


def test_corrupt_file_is_a_miss_and_removed(pool):
    path = pool.cache_dir / "k.json"
    path.write_text("{not json", encoding="utf-8")

    assert not pool.get_item("k").is_hit()
    assert not path.exists()


def test_unsafe_key_is_sanitized(pool):
    _save(pool, "../escape/key", "body")

    assert pool.get_item("../escape/key").get() == "body"
    assert all(p.parent == pool.cache_dir for p in pool.cache_dir.iterdir())


def test_write_failure_returns_false(pool, monkeypatch):
    def boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("pathlib.Path.write_text", boom)
    assert _save(pool, "k", "body") is False


def test_clear(pool):
    _save(pool, "a", "1")
    _save(pool, "b", "2")
    assert pool.clear() == 2
    assert not pool.get_item("a").is_hit()
