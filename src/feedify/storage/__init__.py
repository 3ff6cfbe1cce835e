from .database import Database
from .models import CachedFeed
from .repository import FeedCacheRepository

__all__ = [
    "CachedFeed",
    "Database",
    "FeedCacheRepository",
]
