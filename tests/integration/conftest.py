from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from feedify.resolution import HttpFetcher
from feedify.storage import Database, FeedCacheRepository

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Generator
    from pathlib import Path


@pytest.fixture
def database(tmp_path: Path) -> Generator[Database, None, None]:
    db_path = tmp_path / "test.db"
    db = Database(db_path)
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def cache_repo(database: Database) -> FeedCacheRepository:
    return FeedCacheRepository(database)


@pytest.fixture
async def fetcher() -> AsyncIterator[HttpFetcher]:
    async with httpx.AsyncClient() as client:
        yield HttpFetcher(client, max_attempts=1)
