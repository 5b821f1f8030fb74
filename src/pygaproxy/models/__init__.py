"""Data models for pygaproxy."""

from pygaproxy.models.event import CustomEvent, EventDraft
from pygaproxy.models.hits import (
    EventHit,
    ExceptionHit,
    HitModel,
    ScreenViewHit,
    SocialHit,
    TimingHit,
)

__all__ = [
    "CustomEvent",
    "EventDraft",
    "EventHit",
    "ExceptionHit",
    "HitModel",
    "ScreenViewHit",
    "SocialHit",
    "TimingHit",
]
