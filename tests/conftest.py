"""Shared pytest configuration for all test levels."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from hypothesis import HealthCheck, settings

from feedify.resolution import FetchResult
from tests.test_utils.factories import FetchResultFactory
from tests.test_utils.helpers import read_fixture


@pytest.fixture
def rss_valid() -> str:
    return read_fixture("feeds/rss_valid.xml")


@pytest.fixture
def atom_valid() -> str:
    return read_fixture("feeds/atom_valid.xml")


@pytest.fixture
def atom_result(atom_valid: str) -> FetchResult:
    return FetchResultFactory.build(
        url="http://example.com/feed.xml",
        content_type="application/atom+xml",
        body=atom_valid,
    )


# Configure Hypothesis global settings
settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci",
    max_examples=100,
    deadline=5000,
)

if os.getenv("CI"):
    settings.load_profile("ci")
else:
    settings.load_profile("dev")


_LEVEL_MARKERS = {
    "unit": pytest.mark.unit,
    "integration": pytest.mark.integration,
    "e2e": pytest.mark.e2e,
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        rel = item.path.relative_to(Path(__file__).resolve().parent) if item.path else None
        if rel is None:
            continue
        for level, marker in _LEVEL_MARKERS.items():
            if rel.parts[0] == level:
                item.add_marker(marker)
                break


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop logging config pointing at a stream captured by a previous test."""
    yield
    structlog.reset_defaults()
