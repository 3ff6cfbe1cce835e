from __future__ import annotations

from tests.test_utils.strategies.candidates import candidate_lists, candidate_strategy
from tests.test_utils.strategies.url import raw_url_strategy, url_strategy

__all__ = [
    "candidate_lists",
    "candidate_strategy",
    "raw_url_strategy",
    "url_strategy",
]
