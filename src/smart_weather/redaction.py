"""Keep the OpenWeather key and other credentials out of logs and errors."""

from __future__ import annotations

import re
from typing import Any

import httpx

REDACTED = "[REDACTED]"

SENSITIVE_NAMES = (
    "appid",
    "api_key",
    "apikey",
    "api-key",
    "authorization",
    "token",
    "password",
)

_NAMES_PATTERN = "|".join(re.escape(name) for name in SENSITIVE_NAMES)

_SENSITIVE_NAME_RE = re.compile(_NAMES_PATTERN, re.I)
_BEARER_RE = re.compile(r"(?i)\b(bearer)\s+[\w\-.~+/]+=*")
_ASSIGNMENT_RE = re.compile(rf"(?i)\b({_NAMES_PATTERN})\s*[:=]\s*([^\s,;&\"']+)")


def is_sensitive_name(name: str) -> bool:
    return bool(_SENSITIVE_NAME_RE.search(name))


def sanitize_text(text: str) -> str:
    """Redact `appid=...`-style assignments and bearer tokens in free text."""
    text = _BEARER_RE.sub(lambda m: f"{m.group(1)} {REDACTED}", text)
    return _ASSIGNMENT_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def redact_url(url: httpx.URL | str) -> str:
    """Return `url` with sensitive query parameters replaced."""
    parsed = httpx.URL(str(url))
    params = [
        (name, REDACTED if is_sensitive_name(name) else value)
        for name, value in parsed.params.multi_items()
    ]
    return str(parsed.copy_with(params=params)) if params else str(parsed)


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact sensitive keys and embedded secrets in nested data."""
    if isinstance(value, dict):
        return {
            key: REDACTED if is_sensitive_name(str(key)) else sanitize_for_logging(child)
            for key, child in value.items()
        }
    if isinstance(value, (list, tuple)):
        items = [sanitize_for_logging(item) for item in value]
        return items if isinstance(value, list) else tuple(items)
    if isinstance(value, httpx.URL):
        return redact_url(value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
