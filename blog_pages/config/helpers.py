"""Utility helpers shared by the configuration loader and the content scanner."""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ
from urllib.parse import urlsplit

from blog_pages.errors import ConfigParseError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_mapping(value: object | None, key: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case cabc.Mapping():
            return value
        case _:
            msg = f"'{key}' must be a table, got {type(value).__name__}"
            raise ConfigParseError(msg)


def _as_table_list(value: object | None, key: str) -> list[typ.Mapping[str, typ.Any]]:
    """Return a list of tables (``[[key]]`` entries), treating ``None`` as empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{key}' must be a list of tables"
        raise ConfigParseError(msg)
    return [_as_mapping(item, f"{key}[{idx}]") for idx, item in enumerate(value)]


def _without_nulls(value: typ.Any) -> typ.Any:
    """Drop ``None`` entries from nested tables and arrays; TOML has no null."""
    match value:
        case cabc.Mapping():
            return {
                key: _without_nulls(item) for key, item in value.items() if item is not None
            }
        case list():
            return [_without_nulls(item) for item in value if item is not None]
        case _:
            return value


def _require_str(payload: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return a required, non-empty string field or raise ``ConfigParseError``."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"Required configuration key '{key}' is missing or empty."
        raise ConfigParseError(msg)
    return value


def _as_bool(value: object | None, key: str, *, default: bool) -> bool:
    """Return a boolean flag, rejecting anything that is not a real bool."""
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}"
        raise ConfigParseError(msg)
    return value


def _as_int(value: object | None, key: str, *, default: int) -> int:
    """Return an integer field; booleans are rejected even though they subclass int."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'{key}' must be an integer, got {value!r}"
        raise ConfigParseError(msg)
    return value


def _string_tuple(value: object | None, key: str) -> tuple[str, ...]:
    """Normalize a scalar or list into a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else ()
    if isinstance(value, list):
        return tuple(text for item in value if (text := str(item).strip()))
    msg = f"'{key}' must be a string or a list of strings"
    raise ConfigParseError(msg)


def _validate_base_url(value: str) -> str:
    """Ensure ``baseURL`` is an absolute URI with a scheme and host."""
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        msg = f"'baseURL' must be an absolute URL, got {value!r}"
        raise ConfigParseError(msg)
    return value


def _parse_timestamp(value: dt.datetime | dt.date | str | None) -> dt.datetime | None:
    """Return a timezone-aware datetime parsed from ``value``, or None.

    Explicit UTC offsets are preserved; naive values and bare dates are taken
    to be UTC.
    """
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime.combine(value, dt.time())
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith(("Z", "z")):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed


__all__ = [
    "_as_bool",
    "_as_int",
    "_as_mapping",
    "_as_table_list",
    "_optional_str",
    "_parse_timestamp",
    "_require_str",
    "_string_tuple",
    "_validate_base_url",
    "_without_nulls",
]
