from tests.test_utils.fakes.resolution import FakeCacheStore, FakeFetcher, StubResolver

__all__ = [
    "FakeCacheStore",
    "FakeFetcher",
    "StubResolver",
]
