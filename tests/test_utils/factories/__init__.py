from tests.test_utils.factories.resolution import (
    SAMPLE_BASE_URL,
    SAMPLE_HTML,
    FetchResultFactory,
)
from tests.test_utils.factories.storage import CachedFeedFactory

__all__ = [
    "SAMPLE_BASE_URL",
    "SAMPLE_HTML",
    "CachedFeedFactory",
    "FetchResultFactory",
]
