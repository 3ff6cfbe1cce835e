from feedify.resolution import CachedFeedResolver, FeedifyError, FeedResolver, normalize_url

__all__ = [
    "CachedFeedResolver",
    "FeedResolver",
    "FeedifyError",
    "normalize_url",
]
