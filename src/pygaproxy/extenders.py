"""Custom event extenders.

An extender is any callable ``(event, hit, tracker) -> None`` that adds or
removes properties on the draft event in place, e.g. to include a tracker
parameter the default mapper leaves out::

    def add_viewport(event, hit, tracker):
        event.add_property("&vp", tracker.get("&vp"))

Extenders run after the mapper and before the event is emitted. Exceptions
raised by an extender propagate to the caller of ``send``.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping

from pygaproxy.models.event import EventDraft
from pygaproxy.tracker import TrackerStateReader

Extender = Callable[[EventDraft, Mapping[str, str], TrackerStateReader], None]


class ExtenderRegistry:
    """Set of extenders, safe to modify while another thread applies them.

    Applying takes a snapshot under the lock and runs the extenders
    without holding it. Run order follows registration order, but callers
    must not depend on it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # dict keeps set semantics with a stable iteration order
        self._extenders: dict[Extender, None] = {}

    def add(self, extender: Extender) -> None:
        if not callable(extender):
            raise TypeError(f"extender must be callable, got {type(extender).__name__}")
        with self._lock:
            self._extenders[extender] = None

    def remove(self, extender: Extender) -> bool:
        """Unregister *extender*; return whether it was registered."""
        with self._lock:
            if extender not in self._extenders:
                return False
            del self._extenders[extender]
            return True

    def clear(self) -> None:
        with self._lock:
            self._extenders.clear()

    def snapshot(self) -> tuple[Extender, ...]:
        with self._lock:
            return tuple(self._extenders)

    def apply(self, event: EventDraft, hit: Mapping[str, str], tracker: TrackerStateReader) -> None:
        for extender in self.snapshot():
            extender(event, hit, tracker)

    def __contains__(self, extender: object) -> bool:
        with self._lock:
            return extender in self._extenders

    def __len__(self) -> int:
        with self._lock:
            return len(self._extenders)
