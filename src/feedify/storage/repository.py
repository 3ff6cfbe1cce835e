from __future__ import annotations

import sqlite3
from datetime import UTC, datetime, timedelta

from .database import Database
from .models import CachedFeed


class FeedCacheRepository:
    """TTL store mapping page URLs to their resolved feed URLs."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, key: str) -> str | None:
        entry = self.get_entry(key)
        if entry is None or not entry.is_fresh(datetime.now(UTC)):
            return None
        return entry.feed_url

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        now = datetime.now(UTC)
        self.upsert(
            CachedFeed(
                page_url=key,
                feed_url=value,
                stored_at=now,
                expires_at=now + timedelta(seconds=ttl_seconds),
            )
        )

    def get_entry(self, page_url: str) -> CachedFeed | None:
        row = self._db.execute(
            "SELECT * FROM feed_cache WHERE page_url = ?", (page_url,)
        ).fetchone()
        return self._row_to_entry(row) if row else None

    def upsert(self, entry: CachedFeed) -> None:
        self._db.execute(
            """
            INSERT INTO feed_cache (
                page_url,
                feed_url,
                stored_at,
                expires_at
            ) VALUES (?, ?, ?, ?)
            ON CONFLICT(page_url) DO UPDATE SET
                feed_url=excluded.feed_url,
                stored_at=excluded.stored_at,
                expires_at=excluded.expires_at
            """,
            (
                entry.page_url,
                entry.feed_url,
                entry.stored_at.isoformat(),
                entry.expires_at.isoformat(),
            ),
        )

    def purge_expired(self) -> int:
        cursor = self._db.execute(
            "DELETE FROM feed_cache WHERE expires_at <= ?",
            (datetime.now(UTC).isoformat(),),
        )
        return cursor.rowcount

    def _row_to_entry(self, row: sqlite3.Row) -> CachedFeed:
        return CachedFeed(
            page_url=row["page_url"],
            feed_url=row["feed_url"],
            stored_at=datetime.fromisoformat(row["stored_at"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
        )
