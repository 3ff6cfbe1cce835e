from __future__ import annotations

import sqlite3
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from freezegun import freeze_time

from feedify.storage import Database, FeedCacheRepository
from tests.test_utils.factories import CachedFeedFactory

if TYPE_CHECKING:
    from pathlib import Path


def test_upsert_and_get_entry_round_trip(cache_repo: FeedCacheRepository) -> None:
    entry = CachedFeedFactory.build()

    cache_repo.upsert(entry)

    assert cache_repo.get_entry(entry.page_url) == entry


def test_upsert_replaces_existing_entry(cache_repo: FeedCacheRepository) -> None:
    cache_repo.upsert(CachedFeedFactory.build(feed_url="http://example.com/old.xml"))
    cache_repo.upsert(CachedFeedFactory.build(feed_url="http://example.com/new.xml"))

    entry = cache_repo.get_entry("example.com")
    assert entry is not None
    assert entry.feed_url == "http://example.com/new.xml"


def test_get_entry_missing_returns_none(cache_repo: FeedCacheRepository) -> None:
    assert cache_repo.get_entry("missing.example") is None


def test_set_then_get_within_ttl(cache_repo: FeedCacheRepository) -> None:
    with freeze_time("2024-01-01T00:00:00Z"):
        cache_repo.set("example.com", "http://example.com/feed.xml", 3600)

    with freeze_time("2024-01-01T00:59:59Z"):
        assert cache_repo.get("example.com") == "http://example.com/feed.xml"


def test_get_after_ttl_returns_none(cache_repo: FeedCacheRepository) -> None:
    with freeze_time("2024-01-01T00:00:00Z"):
        cache_repo.set("example.com", "http://example.com/feed.xml", 3600)

    with freeze_time("2024-01-01T01:00:00Z"):
        assert cache_repo.get("example.com") is None

    entry = cache_repo.get_entry("example.com")
    assert entry is not None
    assert entry.expires_at == datetime(2024, 1, 1, 1, tzinfo=UTC)


def test_keys_are_exact_strings(cache_repo: FeedCacheRepository) -> None:
    cache_repo.set("example.com", "http://example.com/feed.xml", 3600)

    assert cache_repo.get("http://example.com") is None
    assert cache_repo.get("EXAMPLE.COM") is None


def test_purge_expired_removes_only_stale_entries(cache_repo: FeedCacheRepository) -> None:
    stored_at = datetime(2024, 1, 1, tzinfo=UTC)
    cache_repo.upsert(CachedFeedFactory.build(page_url="stale.example", stored_at=stored_at, expires_at=stored_at + timedelta(hours=1)))
    cache_repo.upsert(CachedFeedFactory.build(page_url="fresh.example", stored_at=stored_at, expires_at=stored_at + timedelta(days=7)))

    with freeze_time("2024-01-02T00:00:00Z"):
        removed = cache_repo.purge_expired()

    assert removed == 1
    assert cache_repo.get_entry("stale.example") is None
    assert cache_repo.get_entry("fresh.example") is not None


def test_entries_survive_reopening(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "cache.sqlite"
    with Database(path) as db:
        FeedCacheRepository(db).set("example.com", "http://example.com/feed.xml", 3600)

    with Database(path) as reopened:
        assert FeedCacheRepository(reopened).get("example.com") == "http://example.com/feed.xml"


def test_file_database_uses_wal_journal(database: Database) -> None:
    assert database.execute("PRAGMA journal_mode").fetchone()[0] == "wal"


def test_in_memory_database_needs_no_directory() -> None:
    with Database(":memory:") as db:
        FeedCacheRepository(db).set("example.com", "http://example.com/feed.xml", 3600)

        assert FeedCacheRepository(db).get("example.com") == "http://example.com/feed.xml"


def test_failed_statement_leaves_no_partial_write(cache_repo: FeedCacheRepository, database: Database) -> None:
    cache_repo.set("example.com", "http://example.com/feed.xml", 3600)

    with pytest.raises(sqlite3.IntegrityError):
        database.execute("INSERT INTO feed_cache (page_url, feed_url, stored_at, expires_at) VALUES (?, NULL, ?, ?)", ("other.example", "x", "y"))

    assert cache_repo.get_entry("other.example") is None
    assert cache_repo.get("example.com") == "http://example.com/feed.xml"
