from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from urllib.parse import urljoin

from feedify.observability import get_logger
from feedify.resolution.candidates import (
    DEFAULT_CONFIRM_LIMIT,
    HTML_CONTENT_TYPE_RE,
    CandidateExtractor,
    is_feed_content_type,
)
from feedify.resolution.context import DEFAULT_MAX_HOPS, ResolutionContext
from feedify.resolution.errors import MissingPage, NoFeed, UnrecognisedMimeType
from feedify.resolution.http_fetcher import HostNotFoundError
from feedify.resolution.url_normalizer import DEFAULT_SCHEMES, normalize_url

if TYPE_CHECKING:
    from collections.abc import Collection

    from feedify.resolution.http_fetcher import Fetcher, FetchResult

logger = get_logger(__name__)


class Resolver(Protocol):
    async def resolve(self, url: str | None) -> str | None: ...


class FeedResolver:
    """Resolves a page URL to the URL of its feed.

    The resolver holds no per-call state; everything a single resolution needs
    lives in the ResolutionContext created by ``resolve``.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        confirm_limit: int = DEFAULT_CONFIRM_LIMIT,
        max_hops: int = DEFAULT_MAX_HOPS,
        allowed_schemes: Collection[str] = DEFAULT_SCHEMES,
    ) -> None:
        self._fetcher = fetcher
        self._max_hops = max_hops
        self._allowed_schemes = tuple(scheme.lower() for scheme in allowed_schemes)
        self._extractor = CandidateExtractor(fetcher=fetcher, follow=self.resolve_feed, confirm_limit=confirm_limit)

    async def resolve(self, url: str | None) -> str | None:
        if url is None or not url.strip():
            return None

        normalized = normalize_url(url, allowed_schemes=self._allowed_schemes)
        context = ResolutionContext(base_uri=normalized, max_hops=self._max_hops)
        logger.info("resolution_started", url=normalized)

        feed_url = await self.resolve_feed(normalized, context)
        if feed_url is None:
            raise NoFeed(normalized)

        logger.info("feed_found", url=normalized, feed_url=feed_url, hops=len(context.visited))
        return feed_url

    async def resolve_feed(self, url: str | None, context: ResolutionContext) -> str | None:
        if url is None or not url.strip():
            return None

        url = normalize_url(url, allowed_schemes=self._allowed_schemes)
        context.visit(url)
        result = await self._fetch(url)

        if result.redirected:
            logger.debug("redirect_followed", url=url, location=result.final_url, status=result.status_code)
            return await self.resolve_feed(result.final_url, context)

        if is_feed_content_type(result.content_type):
            return url

        if HTML_CONTENT_TYPE_RE.search(result.content_type):
            return await self._resolve_html(result, context)

        raise UnrecognisedMimeType(result.content_type, url)

    async def _fetch(self, url: str) -> FetchResult:
        try:
            return await self._fetcher.fetch(url)
        except HostNotFoundError as exc:
            raise MissingPage(url) from exc

    async def _resolve_html(self, result: FetchResult, context: ResolutionContext) -> str | None:
        extraction = await self._extractor.extract(result.body, context)
        if extraction is None:
            logger.debug("no_candidates", url=result.url)
            return None
        if extraction.resolved:
            return extraction.href

        candidate_url = urljoin(result.url, extraction.href)
        logger.debug("candidate_followed", url=result.url, candidate=candidate_url)
        return await self.resolve_feed(candidate_url, context)
