"""Helpers for safe debug logging.

Hits and tracker state carry user identifiers (client id, user id, IP
overrides, ad click ids). This module masks them before they reach DEBUG
logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# Unprefixed parameter names; "&cid" and "cid" are both matched.
_SENSITIVE_PARAMS: frozenset[str] = frozenset(
    {
        "cid",
        "uid",
        "uip",
        "ua",
        "gclid",
        "dclid",
        "adid",
        "idfa",
    }
)


def _is_sensitive(key: str) -> bool:
    return key.lstrip("&").lower() in _SENSITIVE_PARAMS


def redact_for_log(hit: Mapping[str, Any] | None, *, max_string: int = 256) -> dict[str, Any]:
    """Return a redacted copy of *hit* suitable for debug logs."""
    if not hit:
        return {}

    redacted: dict[str, Any] = {}
    for k, v in hit.items():
        key = str(k)
        if _is_sensitive(key):
            redacted[key] = "<redacted>"
        elif isinstance(v, str) and len(v) > max_string:
            redacted[key] = f"{v[:max_string]}…<truncated>"
        elif v is None or isinstance(v, (str, int, float, bool)):
            redacted[key] = v
        else:
            # Represent unknown objects without dumping internals.
            redacted[key] = repr(v)
    return redacted
