from __future__ import annotations

import json
import os
import re
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping

LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})
DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "json"

_SECRET_KEY_PATTERN = re.compile(r"(token|api_key|apikey|authorization|cookie|secret|password)", re.IGNORECASE)
_URL_SECRET_PATTERN = re.compile(r"(token|api_key|apikey|access_token)=([^&\s]+)")
_URL_USERINFO_PATTERN = re.compile(r"(?P<scheme>[a-z][a-z0-9+.\-]*://)[^/@\s]+@", re.IGNORECASE)
_CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
_MAX_VALUE_LENGTH = 4000


def _escape_control_char(match: re.Match[str]) -> str:
    char = match.group(0)
    if char == "\n":
        return "\\n"
    if char == "\r":
        return "\\r"
    if char == "\t":
        return "\\t"
    return f"\\x{ord(char):02x}"


def sanitize_value(value: object) -> object:
    if isinstance(value, str):
        sanitized = _CONTROL_CHARS_PATTERN.sub(_escape_control_char, value)
        sanitized = _URL_USERINFO_PATTERN.sub(r"\g<scheme>***@", sanitized)
        sanitized = _URL_SECRET_PATTERN.sub(r"\1=***", sanitized)
        # error payloads can carry whole HTML pages
        if len(sanitized) > _MAX_VALUE_LENGTH:
            return sanitized[:_MAX_VALUE_LENGTH] + "..."
        return sanitized
    if isinstance(value, (int, float, bool)) or value is None:
        return value
    if isinstance(value, dict):
        return {key: sanitize_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_value(val) for val in value]
    return str(value)


def sanitize_event(_: object, __: object, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    sanitized: dict[str, Any] = {}
    for key, value in event_dict.items():
        if _SECRET_KEY_PATTERN.search(key):
            sanitized[key] = "***"
        else:
            sanitized[key] = sanitize_value(value)
    return sanitized


def _add_timestamp(_: object, __: object, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _render_json(_: object, __: object, event_dict: MutableMapping[str, Any]) -> str:
    return json.dumps(event_dict, ensure_ascii=False)


def parse_level(value: str | None = None) -> str:
    level = (value or os.environ.get("LOG_LEVEL") or DEFAULT_LEVEL).upper()
    if level not in LEVELS:
        return DEFAULT_LEVEL
    return level


def configure_logging(level: str | None = None, log_format: str | None = None) -> structlog.BoundLogger:
    format_hint = (log_format or os.environ.get("LOG_FORMAT") or DEFAULT_FORMAT).lower()

    processors: list[structlog.types.Processor] = [
        sanitize_event,
        _add_timestamp,
        structlog.processors.add_log_level,
    ]
    if format_hint == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(_render_json)

    # stdout is reserved for resolved feed URLs
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(parse_level(level)),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )

    return cast("structlog.BoundLogger", structlog.get_logger())


def get_logger(name: str) -> structlog.BoundLogger:
    return cast("structlog.BoundLogger", structlog.get_logger(name))
