"""Custom exception hierarchy for pygaproxy."""

from __future__ import annotations


class GaProxyError(Exception):
    """Base exception for all pygaproxy errors."""


class ProxyConfigError(GaProxyError):
    """Invalid proxy configuration."""


class InvalidHitError(GaProxyError):
    """Hit payload cannot be turned into a custom event.

    Raised when the hit type parameter is missing or empty, since the
    custom event is named after it.
    """

    def __init__(self, message: str, *, type_key: str = "") -> None:
        self.type_key = type_key
        super().__init__(message)
