from __future__ import annotations

from dataclasses import dataclass, field

from feedify.resolution.errors import Loop, TooManyHops

DEFAULT_MAX_HOPS = 20


@dataclass(slots=True)
class ResolutionContext:
    """State for a single top-level resolution: its base URI and visit history.

    A context is owned by exactly one call chain and must not be shared between
    concurrent resolutions.
    """

    base_uri: str
    max_hops: int = DEFAULT_MAX_HOPS
    visited: list[str] = field(default_factory=list)

    def visit(self, url: str) -> None:
        if url in self.visited:
            raise Loop([*self.visited, url])
        if len(self.visited) >= self.max_hops:
            raise TooManyHops([*self.visited, url], self.max_hops)
        self.visited.append(url)
