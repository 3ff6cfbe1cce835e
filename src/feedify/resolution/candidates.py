from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urljoin

import httpx

from feedify.observability import get_logger
from feedify.resolution.errors import BloggerParseError, Confused
from feedify.resolution.html_parser import parse_html
from feedify.resolution.http_fetcher import FetchError
from feedify.resolution.pruning import Candidate, dedupe_hrefs, is_well_formed, prune_candidates

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

    from feedify.resolution.context import ResolutionContext
    from feedify.resolution.http_fetcher import Fetcher

logger = get_logger(__name__)

FEED_CONTENT_TYPE_RE = re.compile(r"atom|rss|xml", re.IGNORECASE)
HTML_CONTENT_TYPE_RE = re.compile(r"html", re.IGNORECASE)

DEFAULT_CONFIRM_LIMIT = 5
BLOGGER_REDIRECT_TITLE = "Blogger: Redirecting"

_ALTERNATE_TYPE_RE = re.compile(r"atom|rss", re.IGNORECASE)
_FEED_ROOT_RE = re.compile(r"<channel[\s>]|<feed[\s>]", re.IGNORECASE)


class FollowFeed(Protocol):
    async def __call__(self, url: str, context: ResolutionContext) -> str | None: ...


@dataclass(frozen=True, slots=True)
class Extraction:
    href: str
    resolved: bool = False


def is_feed_content_type(content_type: str) -> bool:
    return FEED_CONTENT_TYPE_RE.search(content_type) is not None


class CandidateExtractor:
    def __init__(self, *, fetcher: Fetcher, follow: FollowFeed, confirm_limit: int = DEFAULT_CONFIRM_LIMIT) -> None:
        self._fetcher = fetcher
        self._follow = follow
        self._confirm_limit = confirm_limit

    async def extract(self, html: str, context: ResolutionContext) -> Extraction | None:
        document = parse_html(html)

        href = self.from_alternate_links(document)
        if href is not None:
            return Extraction(href=href)

        resolved = await self.from_blogger_redirect(document, context, html=html)
        if resolved is not None:
            return Extraction(href=resolved, resolved=True)

        href = await self.from_in_page_links(document, context)
        if href is not None:
            return Extraction(href=href)

        return None

    def from_alternate_links(self, document: BeautifulSoup) -> str | None:
        links = [link for link in document.find_all("link") if _is_alternate(link) and _ALTERNATE_TYPE_RE.search(_attr(link, "type"))]
        if not links:
            return None

        # duplicates are common, and anything left after pruning is a guess anyway
        hrefs = dedupe_hrefs(prune_candidates(Candidate.from_tag(link) for link in links))
        return hrefs[0] if hrefs else None

    async def from_blogger_redirect(self, document: BeautifulSoup, context: ResolutionContext, *, html: str) -> str | None:
        # Blogger sometimes serves a splash page that only links onwards.
        title = document.find("title")
        if title is None or title.get_text().strip() != BLOGGER_REDIRECT_TITLE:
            return None

        anchor = document.find("a", id="continueButton")
        href = _attr(anchor, "href") if anchor is not None else ""
        if not href or not is_well_formed(href):
            raise BloggerParseError(html)

        logger.debug("blogger_redirect_followed", href=href)
        return await self._follow(urljoin(context.base_uri, href), context)

    async def from_in_page_links(self, document: BeautifulSoup, context: ResolutionContext) -> str | None:
        elements = document.find_all(["a", "img"], href=True)
        pruned = prune_candidates(Candidate.from_tag(element) for element in elements)
        candidates = _dedupe([urljoin(context.base_uri, href) for href in dedupe_hrefs(pruned)])

        if len(candidates) > self._confirm_limit:
            raise Confused(candidates)

        survivors = [candidate for candidate in candidates if await self._confirm(candidate)]
        if len(survivors) > 1:
            raise Confused(survivors)
        return survivors[0] if survivors else None

    async def _confirm(self, url: str) -> bool:
        try:
            result = await self._fetcher.fetch(url, follow_redirects=True)
        except (httpx.HTTPError, FetchError) as exc:
            logger.debug("candidate_rejected", url=url, reason="fetch_failed", error=str(exc))
            return False

        if not is_feed_content_type(result.content_type):
            logger.debug("candidate_rejected", url=url, reason="content_type", content_type=result.content_type)
            return False
        if _FEED_ROOT_RE.search(result.body) is None:
            logger.debug("candidate_rejected", url=url, reason="body")
            return False
        return True


def _is_alternate(link: Tag) -> bool:
    rel_raw = link.get("rel")
    rel = [rel_raw] if isinstance(rel_raw, str) else list(rel_raw or [])
    return "alternate" in [value.lower() for value in rel if isinstance(value, str)]


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    return value if isinstance(value, str) else ""


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))
