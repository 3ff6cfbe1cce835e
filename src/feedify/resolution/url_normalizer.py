"""URL normalization for resolver input."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from feedify.resolution.errors import BadScheme

if TYPE_CHECKING:
    from collections.abc import Collection

DEFAULT_SCHEMES: tuple[str, ...] = ("http",)

_FEED_PREFIX = "feed:"
_SCHEME_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*):(?P<rest>.*)$", re.DOTALL)


def normalize_url(raw: str, *, allowed_schemes: Collection[str] = DEFAULT_SCHEMES) -> str:
    url = raw.strip()
    url = _rewrite_feed_scheme(url)

    scheme = _parse_scheme(url)
    if scheme is None:
        return f"http://{url.lstrip('/')}"
    if scheme.lower() in allowed_schemes:
        return url
    raise BadScheme(scheme)


def _rewrite_feed_scheme(url: str) -> str:
    if not url.lower().startswith(_FEED_PREFIX):
        return url
    rest = url[len(_FEED_PREFIX) :]
    # feed:http://host/path wraps a full URL; feed://host/path only swaps the scheme
    if rest.startswith("//"):
        return f"http:{rest}"
    return rest


def _parse_scheme(url: str) -> str | None:
    match = _SCHEME_RE.match(url)
    if match is None:
        return None
    rest = match.group("rest")
    # host:8080/path has no scheme, it has a port
    if not rest.startswith("//") and rest[:1].isdigit():
        return None
    return match.group("scheme")
