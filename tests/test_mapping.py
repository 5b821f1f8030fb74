from __future__ import annotations

import pytest

from pygaproxy.config import FieldSets, ProxyConfig, UnmappedHitPolicy
from pygaproxy.exceptions import InvalidHitError
from pygaproxy.mapping import FieldMapper, hit_type_of
from pygaproxy.tracker import TrackerState


def _state() -> TrackerState:
    return TrackerState({"&cid": "c1", "&an": "a1"})


def test_event_hit_copies_event_and_tracker_fields() -> None:
    hit = {"&t": "event", "&ec": "cat", "&ea": "act", "&el": "lbl", "&ev": "5"}

    event = FieldMapper().map(hit, _state())

    assert event.name == "event"
    assert event.properties == {
        "&ec": "cat",
        "&ea": "act",
        "&el": "lbl",
        "&ev": "5",
        "&cid": "c1",
        "&an": "a1",
    }


def test_screenview_reads_screen_name_from_tracker_state() -> None:
    state = TrackerState({"&cd": "Home"})

    event = FieldMapper().map({"&t": "screenview", "&cd": "FromHit"}, state)

    assert event.name == "screenview"
    assert event.properties == {"&cd": "Home"}


def test_screenview_without_screen_name_adds_nothing() -> None:
    event = FieldMapper().map({"&t": "screenview"}, TrackerState())

    assert event.properties == {}


@pytest.mark.parametrize(
    ("hit", "expected"),
    [
        (
            {"&t": "social", "&sn": "network", "&sa": "action", "&st": "target", "&ec": "ignored"},
            {"&sn": "network", "&sa": "action", "&st": "target"},
        ),
        (
            {"&t": "exception", "&exd": "description", "&exf": "0"},
            {"&exd": "description", "&exf": "0"},
        ),
        (
            {"&t": "timing", "&utc": "category", "&utv": "variable", "&utt": "5", "&utl": "label"},
            {"&utc": "category", "&utv": "variable", "&utt": "5", "&utl": "label"},
        ),
    ],
)
def test_hit_type_field_sets(hit: dict[str, str], expected: dict[str, str]) -> None:
    event = FieldMapper().map(hit, TrackerState())

    assert event.name == hit["&t"]
    assert event.properties == expected


def test_keys_missing_from_hit_are_not_added() -> None:
    event = FieldMapper().map({"&t": "event", "&ec": "cat"}, TrackerState())

    assert event.properties == {"&ec": "cat"}
    assert "&ea" not in event
    assert "&ev" not in event


def test_tracker_fields_copied_for_unrecognized_hit_type() -> None:
    event = FieldMapper().map({"&t": "pageview", "&dp": "/home"}, _state())

    assert event.name == "pageview"
    assert event.properties == {"&cid": "c1", "&an": "a1"}


def test_copy_all_policy_copies_unrecognized_hit_verbatim() -> None:
    config = ProxyConfig(unmapped_policy=UnmappedHitPolicy.COPY_ALL)

    event = FieldMapper(config).map({"&t": "pageview", "&dp": "/home"}, _state())

    assert event.properties == {"&t": "pageview", "&dp": "/home", "&cid": "c1", "&an": "a1"}


def test_copy_all_policy_does_not_affect_mapped_types() -> None:
    config = ProxyConfig(unmapped_policy=UnmappedHitPolicy.COPY_ALL)

    event = FieldMapper(config).map({"&t": "event", "&ec": "cat", "&dp": "/home"}, TrackerState())

    assert event.properties == {"&ec": "cat"}


def test_bare_key_prefix_for_measurement_protocol_payloads() -> None:
    config = ProxyConfig(key_prefix="")
    state = TrackerState({"cid": "c1", "&an": "prefixed"})

    event = FieldMapper(config).map({"t": "social", "sn": "net"}, state)

    assert event.name == "social"
    assert event.properties == {"cid": "c1", "sn": "net"}


def test_custom_tracker_fields_and_field_sets() -> None:
    config = ProxyConfig(
        tracker_fields=frozenset({"vp"}),
        field_sets=FieldSets(event=frozenset({"ec"})),
    )
    state = TrackerState({"&vp": "1x1", "&cid": "c1"})

    event = FieldMapper(config).map({"&t": "event", "&ec": "cat", "&ea": "act"}, state)

    assert event.properties == {"&vp": "1x1", "&ec": "cat"}


def test_mapper_is_callable() -> None:
    mapper = FieldMapper()

    event = mapper({"&t": "event", "&ec": "cat"}, TrackerState())

    assert event.properties == {"&ec": "cat"}


@pytest.mark.parametrize("hit", [{}, {"&t": ""}, {"&t": "   "}, {"t": "event"}])
def test_missing_hit_type_raises(hit: dict[str, str]) -> None:
    with pytest.raises(InvalidHitError) as exc_info:
        FieldMapper().map(hit, TrackerState())

    assert exc_info.value.type_key == "&t"


def test_hit_type_of_uses_prefix() -> None:
    assert hit_type_of({"t": "timing"}, "") == "timing"
    assert hit_type_of({"&t": "timing"}, "&") == "timing"


def test_prefixed_tracker_fields_are_copied() -> None:
    config = ProxyConfig(tracker_fields=frozenset({"&cid", "&an"}))

    event = FieldMapper(config).map({"&t": "event"}, _state())

    assert event.properties == {"&cid": "c1", "&an": "a1"}


def test_hit_type_is_stripped() -> None:
    event = FieldMapper().map({"&t": " timing ", "&utc": "cat"}, TrackerState())

    assert event.name == "timing"
    assert event.properties == {"&utc": "cat"}
    assert hit_type_of({"t": "event\n"}, "") == "event"
