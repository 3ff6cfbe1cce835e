from feedify.resolution.cached_resolver import CacheStore, CachedFeedResolver
from feedify.resolution.candidates import CandidateExtractor, Extraction
from feedify.resolution.context import ResolutionContext
from feedify.resolution.errors import (
    BadScheme,
    BloggerParseError,
    Confused,
    FeedifyError,
    Loop,
    MissingPage,
    NoFeed,
    TooManyHops,
    UnrecognisedMimeType,
)
from feedify.resolution.http_fetcher import Fetcher, FetchError, FetchResult, HostNotFoundError, HttpFetcher
from feedify.resolution.pruning import Candidate, prune_candidates
from feedify.resolution.resolver import FeedResolver, Resolver
from feedify.resolution.url_normalizer import normalize_url

__all__ = [
    "BadScheme",
    "BloggerParseError",
    "CacheStore",
    "CachedFeedResolver",
    "Candidate",
    "CandidateExtractor",
    "Confused",
    "Extraction",
    "FeedResolver",
    "FeedifyError",
    "FetchError",
    "FetchResult",
    "Fetcher",
    "HostNotFoundError",
    "HttpFetcher",
    "Loop",
    "MissingPage",
    "NoFeed",
    "ResolutionContext",
    "Resolver",
    "TooManyHops",
    "UnrecognisedMimeType",
    "normalize_url",
]
