from __future__ import annotations

import os
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .errors import ConfigError
from .models import FeedifyConfig

if TYPE_CHECKING:
    from pathlib import Path

_ENV_OVERRIDES: tuple[tuple[str, str, str], ...] = (
    ("FEEDIFY_CACHE_PATH", "cache", "path"),
    ("LOG_LEVEL", "logging", "level"),
    ("LOG_FORMAT", "logging", "format"),
)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"config not found: {path}"
        raise ConfigError(msg, path=path) from exc
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        msg = f"toml parse error in {path}: {exc}"
        raise ConfigError(msg, path=path) from exc


def _apply_env_overrides(data: dict[str, Any], path: Path | None) -> dict[str, Any]:
    merged = dict(data)
    for env_name, section, key in _ENV_OVERRIDES:
        value = os.environ.get(env_name)
        if not value:
            continue
        table = merged.get(section, {})
        if not isinstance(table, dict):
            msg = f"{section} must be a table"
            raise ConfigError(msg, path=path, field=section)
        merged[section] = {**table, key: value}
    return merged


def load_config(path: Path | None = None) -> FeedifyConfig:
    data = _read_toml(path) if path is not None else {}
    data = _apply_env_overrides(data, path)

    try:
        return FeedifyConfig.from_raw(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"{field}: {first['msg']}", path=path, field=field) from exc
