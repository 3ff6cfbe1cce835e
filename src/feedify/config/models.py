from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedify.observability.logging import LEVELS
from feedify.resolution.cached_resolver import DEFAULT_TTL_SECONDS
from feedify.resolution.candidates import DEFAULT_CONFIRM_LIMIT
from feedify.resolution.context import DEFAULT_MAX_HOPS
from feedify.resolution.http_fetcher import DEFAULT_MAX_ATTEMPTS, DEFAULT_USER_AGENT
from feedify.resolution.url_normalizer import DEFAULT_SCHEMES

if TYPE_CHECKING:
    from collections.abc import Mapping

_SUPPORTED_SCHEMES = frozenset({"http", "https"})


def default_cache_path() -> Path:
    return Path.home() / ".cache" / "feedify" / "cache.sqlite"


class HttpConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)


class ResolverConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    confirm_limit: int = Field(default=DEFAULT_CONFIRM_LIMIT, ge=1)
    max_hops: int = Field(default=DEFAULT_MAX_HOPS, ge=1)
    allowed_schemes: tuple[str, ...] = DEFAULT_SCHEMES

    @field_validator("allowed_schemes")
    @classmethod
    def _validate_allowed_schemes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        lowered = tuple(scheme.lower() for scheme in value)
        if "http" not in lowered:
            msg = "must include http"
            raise ValueError(msg)
        unsupported = sorted(set(lowered) - _SUPPORTED_SCHEMES)
        if unsupported:
            msg = f"unsupported schemes: {', '.join(unsupported)}"
            raise ValueError(msg)
        return lowered


class CacheConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = True
    path: Path = Field(default_factory=default_cache_path)
    ttl_seconds: int = Field(default=DEFAULT_TTL_SECONDS, gt=0)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "INFO"
    format: Literal["json", "console"] = "json"

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LEVELS:
            msg = f"must be one of {', '.join(sorted(LEVELS))}"
            raise ValueError(msg)
        return level


class FeedifyConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    http: HttpConfig = Field(default_factory=HttpConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_raw(cls, data: Mapping[str, object]) -> FeedifyConfig:
        return cls.model_validate(data)
