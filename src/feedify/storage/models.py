from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class CachedFeed:
    page_url: str
    feed_url: str
    stored_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        if not self.page_url:
            msg = "page_url cannot be empty"
            raise ValueError(msg)
        if self.expires_at < self.stored_at:
            msg = "expires_at cannot precede stored_at"
            raise ValueError(msg)

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at
