from __future__ import annotations

from pygaproxy.tracker import EventSink, Tracker, TrackerState, TrackerStateReader


def test_set_get_and_unset() -> None:
    state = TrackerState({"&an": "app"})

    state.set("&cid", "c1")
    state.unset("&an")

    assert state.get("&cid") == "c1"
    assert state.get("&an") is None
    assert "&an" not in state
    assert len(state) == 1


def test_setting_none_removes_key() -> None:
    state = TrackerState({"&cd": "Home"})

    state.set("&cd", None)

    assert state.snapshot() == {}


def test_snapshot_is_a_copy() -> None:
    state = TrackerState({"&cid": "c1"})

    snapshot = state.snapshot()
    snapshot["&cid"] = "changed"

    assert state.get("&cid") == "c1"


def test_protocols_are_structural() -> None:
    class _Sink:
        def record_event(self, event: object) -> None:
            pass

    assert isinstance(TrackerState(), TrackerStateReader)
    assert not isinstance(TrackerState(), Tracker)
    assert isinstance(_Sink(), EventSink)
