"""Errors raised while resolving a page to its feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class FeedifyError(Exception):
    """Base class for every terminal resolution failure."""


class BadScheme(FeedifyError):
    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f"Only http URLs can be resolved, not {scheme}")


class UnrecognisedMimeType(FeedifyError):
    def __init__(self, mime: str, url: str) -> None:
        self.mime = mime
        self.url = url
        super().__init__(f"I don't know what to do with the mime type {mime!r} for the URL {url}")


class NoFeed(FeedifyError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"As best as we can determine there is no feed for {url}")


class Loop(FeedifyError):
    def __init__(self, urls: Sequence[str]) -> None:
        self.urls = tuple(urls)
        super().__init__(f"After traversing {' -> '.join(self.urls)} we seem to be back where we started")


class TooManyHops(FeedifyError):
    def __init__(self, urls: Sequence[str], limit: int) -> None:
        self.urls = tuple(urls)
        self.limit = limit
        super().__init__(f"Gave up after {limit} hops: {' -> '.join(self.urls)}")


class Confused(FeedifyError):
    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = tuple(candidates)
        super().__init__(f"Found {len(self.candidates)} plausible feeds and can't pick one: {', '.join(self.candidates)}")


class MissingPage(FeedifyError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"The host for {url} could not be found")


class BloggerParseError(FeedifyError):
    def __init__(self, html: str) -> None:
        self.html = html
        super().__init__("Something went wrong with our blogger html parsing")
