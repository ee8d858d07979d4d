"""Normalization helpers.

Centralizes defensive parsing and label sanitizing.
"""

from __future__ import annotations

import math
import re
from typing import Any

_WHITESPACE_RE = re.compile(r"\s")
_INVALID_NAME_CHARS_RE = re.compile(r"[^a-z0-9_]")


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def sanitize_name(value: Any) -> str | None:
    """Turn a friendly name into a safe label value.

    ``"Pit Probe #1"`` becomes ``"pit_probe_1"``. Returns ``None`` when
    nothing usable is left.
    """

    text = safe_str(value)
    if text is None:
        return None
    text = _WHITESPACE_RE.sub("_", text.lower())
    text = _INVALID_NAME_CHARS_RE.sub("", text)
    return text or None


def parse_on_off(value: Any) -> bool | None:
    """Map the device's on/off spellings (``on``, ``1``, ``off``, ``0``) to bool."""
    if isinstance(value, bool):
        return value
    text = safe_str(value)
    if text is None:
        return None
    normalized = text.lower()
    if normalized in {"1", "on", "true"}:
        return True
    if normalized in {"0", "off", "false"}:
        return False
    return None


def split_key_value(token: str) -> tuple[str, str] | None:
    """Split a ``key:value`` token; ``None`` when there is no value part."""
    key, sep, value = token.partition(":")
    if not sep or not key or not value:
        return None
    return key.lower(), value
