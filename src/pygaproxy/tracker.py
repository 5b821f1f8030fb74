"""Collaborator protocols and the in-memory tracker state store."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from pygaproxy.models.event import CustomEvent


@runtime_checkable
class TrackerStateReader(Protocol):
    """Anything the field mapper can read tracker-level values from."""

    def get(self, key: str) -> str | None: ...


@runtime_checkable
class Tracker(TrackerStateReader, Protocol):
    """The wrapped analytics SDK tracker."""

    def set(self, key: str, value: str) -> None: ...

    def send(self, hit: Mapping[str, str]) -> None: ...


@runtime_checkable
class EventSink(Protocol):
    """First-party analytics entry point for finalized custom events."""

    def record_event(self, event: CustomEvent) -> None: ...


class TrackerState:
    """Thread-safe string-to-string store for tracker-level attributes.

    Setting a key to ``None`` removes it, so :meth:`get` never returns an
    empty placeholder for an unset attribute.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}
        if initial:
            for key, value in initial.items():
                self.set(key, value)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str | None) -> None:
        with self._lock:
            if value is None:
                self._values.pop(key, None)
            else:
                self._values[key] = value

    def unset(self, key: str) -> None:
        self.set(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of all current values."""
        with self._lock:
            return dict(self._values)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
