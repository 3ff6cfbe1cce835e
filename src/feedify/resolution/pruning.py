"""Narrowing of link-like elements down to plausible feed candidates.

Each narrowing step only applies when it leaves at least one element behind,
so a non-empty input that survives the quick filter never prunes to nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from bs4 import Tag

_UNLIKELY_SUFFIX_RE = re.compile(r"\.(css|js|html?|jpg|gif|zip|jnlp)$", re.IGNORECASE)
_FEEDISH_RE = re.compile(r"(atom|feed|rss)\b", re.IGNORECASE)
_ATOM_RE = re.compile(r"atom", re.IGNORECASE)
_COMMENTS = "comments"


@dataclass(frozen=True, slots=True)
class Candidate:
    href: str | None
    type: str | None = None
    text: str = ""

    @classmethod
    def from_tag(cls, tag: Tag) -> Candidate:
        href = tag.get("href")
        link_type = tag.get("type")
        text = tag.get_text(" ", strip=True)
        if not text:
            title = tag.get("title")
            text = title if isinstance(title, str) else ""
        return cls(
            href=href if isinstance(href, str) else None,
            type=link_type if isinstance(link_type, str) else None,
            text=text,
        )


def passes_quick_filter(href: str | None) -> bool:
    """Cheap rejection of hrefs that cannot be feeds.

    Never rejects a feed URL, but lets plenty of non-feeds through.
    """
    if not href:
        return False
    if href.startswith("#"):
        return False
    if not is_well_formed(href):
        return False
    return _UNLIKELY_SUFFIX_RE.search(href) is None


def is_well_formed(href: str) -> bool:
    """Whether href can be joined to a base URL at all, e.g. no unbalanced IPv6 brackets."""
    try:
        urlsplit(href)
    except ValueError:
        return False
    return True


def prune_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    remaining = [candidate for candidate in candidates if passes_quick_filter(candidate.href)]

    remaining = _narrow(remaining, _looks_feedish)

    if len(remaining) > 1:
        remaining = _narrow(remaining, _mentions_atom)

    if len(remaining) > 1:
        remaining = _narrow(remaining, lambda candidate: _COMMENTS not in (candidate.href or ""))

    return remaining


def dedupe_hrefs(candidates: Iterable[Candidate]) -> list[str]:
    return _dedupe(candidate.href for candidate in candidates if candidate.href)


def _narrow(candidates: Sequence[Candidate], keep: Callable[[Candidate], bool]) -> list[Candidate]:
    narrowed = [candidate for candidate in candidates if keep(candidate)]
    return narrowed or list(candidates)


def _looks_feedish(candidate: Candidate) -> bool:
    return bool(_FEEDISH_RE.search(candidate.href or "") or _FEEDISH_RE.search(candidate.text))


def _mentions_atom(candidate: Candidate) -> bool:
    described_by = candidate.type if candidate.type else candidate.text
    return _ATOM_RE.search(described_by) is not None


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output
