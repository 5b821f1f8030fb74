"""Dispatch routing between the wrapped tracker and the event sink.

Routing is expressed as two independent flags. The three proxy modes map
onto them as follows:

===============  ==============  ===============
mode             send_to_sdk     send_to_proxy
===============  ==============  ===============
SDK_ONLY         True            False
SDK_AND_PROXY    True            True
PROXY_ONLY       False           True
===============  ==============  ===============

Both flags off drops the hit silently.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping

from pygaproxy.models.event import CustomEvent
from pygaproxy.tracker import EventSink, Tracker

_logger = logging.getLogger(__name__)


def is_hit_type_allowed(hit_type: str | None, allowed_hit_types: Collection[str] | None) -> bool:
    """Return whether *hit_type* may be replicated as a custom event.

    ``None`` for *allowed_hit_types* allows every type.
    """
    if allowed_hit_types is None:
        return True
    return hit_type in allowed_hit_types


def dispatch(
    hit: Mapping[str, str],
    event: CustomEvent | None,
    *,
    tracker: Tracker,
    sink: EventSink,
    send_to_sdk: bool,
    send_to_proxy: bool,
) -> None:
    """Send *hit* and/or *event* to their sinks, one attempt each.

    *event* is already finalized. It is ``None`` when no custom event was built
    for this hit (proxy off or hit type not allowed).
    """
    if send_to_sdk:
        tracker.send(hit)

    if send_to_proxy and event is not None:
        _logger.debug(
            "Recording custom event name=%s properties=%d",
            event.name,
            len(event.properties),
        )
        sink.record_event(event)
