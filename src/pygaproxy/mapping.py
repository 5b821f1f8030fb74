"""Hit to custom event field mapping.

The default mapper names the event after the hit type, copies the
configured tracker-level parameters, then copies the hit-type specific
parameters:

* ``screenview`` - screen name (read from tracker state)
* ``event`` - category, action, label, value
* ``social`` - network, action, target
* ``exception`` - description, is-fatal flag
* ``timing`` - category, variable name, time, label

Keys keep their wire prefix in the resulting properties.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from pygaproxy._constants import HIT_TYPE, wire_key
from pygaproxy.config import ProxyConfig, UnmappedHitPolicy
from pygaproxy.exceptions import InvalidHitError
from pygaproxy.models.event import EventDraft
from pygaproxy.tracker import TrackerStateReader

_logger = logging.getLogger(__name__)

EventMapper = Callable[[Mapping[str, str], TrackerStateReader], EventDraft]
"""Signature of a pluggable mapper: ``(hit, tracker) -> EventDraft``."""


def hit_type_of(hit: Mapping[str, str], prefix: str) -> str:
    """Return the hit type, raising :class:`InvalidHitError` when absent."""
    type_key = wire_key(HIT_TYPE, prefix)
    hit_type = hit.get(type_key)
    if hit_type is None or not str(hit_type).strip():
        raise InvalidHitError(f"hit has no {type_key!r} parameter", type_key=type_key)
    return str(hit_type).strip()


class FieldMapper:
    """Default :data:`EventMapper` driven by a :class:`ProxyConfig`."""

    def __init__(self, config: ProxyConfig | None = None) -> None:
        self._config = config or ProxyConfig()

    @property
    def config(self) -> ProxyConfig:
        return self._config

    def __call__(self, hit: Mapping[str, str], tracker: TrackerStateReader) -> EventDraft:
        return self.map(hit, tracker)

    def map(self, hit: Mapping[str, str], tracker: TrackerStateReader) -> EventDraft:
        """Build a draft custom event from *hit* and *tracker* state."""
        prefix = self._config.key_prefix
        hit_type = hit_type_of(hit, prefix)
        event = EventDraft(hit_type)

        for name in self._config.tracker_fields:
            key = wire_key(name, prefix)
            event.add_property(key, tracker.get(key))

        field_sets = self._config.field_sets
        fields = field_sets.for_hit_type(hit_type)
        if hit_type == "screenview":
            key = wire_key(field_sets.screen_name, prefix)
            event.add_property(key, tracker.get(key))
        elif fields is None:
            if self._config.unmapped_policy == UnmappedHitPolicy.COPY_ALL:
                for key, value in hit.items():
                    event.add_property(key, value)
            else:
                _logger.debug("No field set for hit type %r; copying tracker fields only", hit_type)
            return event

        for name in fields:
            key = wire_key(name, prefix)
            event.add_property(key, hit.get(key))

        return event
