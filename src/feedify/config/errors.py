from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigError(ValueError):
    """Raised when a config file or an environment override is invalid.

    ``path`` is the file being loaded, if there was one. ``field`` is the dotted
    key that failed validation, e.g. ``resolver.confirm_limit``.
    """

    def __init__(self, message: str, *, path: Path | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.field = field
