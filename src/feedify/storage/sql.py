SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS feed_cache (
    page_url TEXT PRIMARY KEY,
    feed_url TEXT NOT NULL,
    stored_at TEXT NOT NULL,
    expires_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_feed_cache_expires_at
    ON feed_cache(expires_at);
"""
