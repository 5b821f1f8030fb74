"""pygaproxy - Replicate analytics tracker hits as first-party custom events."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygaproxy")
except PackageNotFoundError:
    __version__ = "0+local"
from pygaproxy._constants import DEFAULT_ALLOWED_HIT_TYPES, DEFAULT_TRACKER_FIELDS
from pygaproxy.config import FieldSets, ProxyConfig, ProxyMode, UnmappedHitPolicy
from pygaproxy.dispatch import dispatch, is_hit_type_allowed
from pygaproxy.exceptions import GaProxyError, InvalidHitError, ProxyConfigError
from pygaproxy.extenders import Extender, ExtenderRegistry
from pygaproxy.mapping import EventMapper, FieldMapper
from pygaproxy.models import (
    CustomEvent,
    EventDraft,
    EventHit,
    ExceptionHit,
    HitModel,
    ScreenViewHit,
    SocialHit,
    TimingHit,
)
from pygaproxy.proxy import TrackerProxy
from pygaproxy.tracker import EventSink, Tracker, TrackerState, TrackerStateReader

__all__ = [
    "__version__",
    "CustomEvent",
    "DEFAULT_ALLOWED_HIT_TYPES",
    "DEFAULT_TRACKER_FIELDS",
    "EventDraft",
    "EventHit",
    "EventMapper",
    "EventSink",
    "ExceptionHit",
    "Extender",
    "ExtenderRegistry",
    "FieldMapper",
    "FieldSets",
    "GaProxyError",
    "HitModel",
    "InvalidHitError",
    "ProxyConfig",
    "ProxyConfigError",
    "ProxyMode",
    "ScreenViewHit",
    "SocialHit",
    "TimingHit",
    "Tracker",
    "TrackerProxy",
    "TrackerState",
    "TrackerStateReader",
    "UnmappedHitPolicy",
    "dispatch",
    "is_hit_type_allowed",
]
