from __future__ import annotations

from collections.abc import Mapping

import pytest

from pygaproxy.dispatch import dispatch, is_hit_type_allowed
from pygaproxy.models.event import CustomEvent


class _RecordingTracker:
    def __init__(self) -> None:
        self.sent: list[Mapping[str, str]] = []

    def get(self, key: str) -> str | None:  # pragma: no cover
        return None

    def set(self, key: str, value: str) -> None:  # pragma: no cover
        pass

    def send(self, hit: Mapping[str, str]) -> None:
        self.sent.append(hit)


class _RecordingSink:
    def __init__(self) -> None:
        self.events: list[CustomEvent] = []

    def record_event(self, event: CustomEvent) -> None:
        self.events.append(event)


@pytest.mark.parametrize(
    ("send_to_sdk", "send_to_proxy", "sent", "recorded"),
    [
        (True, False, 1, 0),
        (True, True, 1, 1),
        (False, True, 0, 1),
        (False, False, 0, 0),
    ],
)
def test_dispatch_routes_by_flags(send_to_sdk: bool, send_to_proxy: bool, sent: int, recorded: int) -> None:
    tracker = _RecordingTracker()
    sink = _RecordingSink()
    hit = {"&t": "event"}

    dispatch(
        hit,
        CustomEvent(name="event", properties={"&ec": "cat"}),
        tracker=tracker,
        sink=sink,
        send_to_sdk=send_to_sdk,
        send_to_proxy=send_to_proxy,
    )

    assert len(tracker.sent) == sent
    assert len(sink.events) == recorded
    if recorded:
        assert sink.events[0].name == "event"
        assert sink.events[0].properties == {"&ec": "cat"}


def test_dispatch_without_event_records_nothing() -> None:
    tracker = _RecordingTracker()
    sink = _RecordingSink()

    dispatch({"&t": "event"}, None, tracker=tracker, sink=sink, send_to_sdk=True, send_to_proxy=True)

    assert len(tracker.sent) == 1
    assert sink.events == []


def test_is_hit_type_allowed() -> None:
    assert is_hit_type_allowed("event", None)
    assert is_hit_type_allowed("event", frozenset({"event"}))
    assert not is_hit_type_allowed("timing", frozenset({"event"}))
    assert not is_hit_type_allowed("event", frozenset())
