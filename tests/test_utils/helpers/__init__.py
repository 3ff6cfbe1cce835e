"""Test helpers."""

from tests.test_utils.helpers.fixture import (
    fixture_path,
    read_fixture,
)
from tests.test_utils.helpers.resolution import (
    feed_result,
    html_page,
    html_result,
    redirect_result,
)

__all__ = [
    "feed_result",
    "fixture_path",
    "html_page",
    "html_result",
    "read_fixture",
    "redirect_result",
]
