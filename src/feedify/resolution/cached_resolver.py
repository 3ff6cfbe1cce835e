from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from feedify.observability import get_logger

if TYPE_CHECKING:
    from feedify.resolution.resolver import Resolver

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60


class CacheStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...


class CachedFeedResolver:
    """Caches feed URLs by the exact input string passed to ``resolve``.

    Concurrent misses for the same key are not coalesced; each one runs the
    wrapped resolver and the last write wins.
    """

    def __init__(self, resolver: Resolver, store: CacheStore, *, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._resolver = resolver
        self._store = store
        self._ttl_seconds = ttl_seconds

    async def resolve(self, url: str | None) -> str | None:
        if url is None:
            return None

        cached = self._store.get(url)
        if cached is not None:
            logger.debug("cache_hit", url=url, feed_url=cached)
            return cached

        feed_url = await self._resolver.resolve(url)
        if feed_url is not None:
            self._store.set(url, feed_url, self._ttl_seconds)
        return feed_url
