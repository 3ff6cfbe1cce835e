from .errors import ConfigError
from .loader import load_config
from .models import CacheConfig, FeedifyConfig, HttpConfig, LoggingConfig, ResolverConfig

__all__ = [
    "CacheConfig",
    "ConfigError",
    "FeedifyConfig",
    "HttpConfig",
    "LoggingConfig",
    "ResolverConfig",
    "load_config",
]
