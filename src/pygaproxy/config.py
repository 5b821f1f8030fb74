"""Proxy configuration for pygaproxy."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from pygaproxy._constants import (
    DEFAULT_KEY_PREFIX,
    DEFAULT_TRACKER_FIELDS,
    EVENT_FIELDS,
    EXCEPTION_FIELDS,
    SCREEN_NAME,
    SOCIAL_FIELDS,
    TIMING_FIELDS,
)
from pygaproxy.exceptions import ProxyConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_set(value: str | None) -> frozenset[str] | None:
    if value is None:
        return None
    return frozenset(item.strip() for item in value.split(",") if item.strip())


class ProxyMode(StrEnum):
    """Which downstream sinks receive traffic."""

    SDK_ONLY = "sdk_only"
    SDK_AND_PROXY = "sdk_and_proxy"
    PROXY_ONLY = "proxy_only"

    @property
    def send_to_sdk(self) -> bool:
        return self is not ProxyMode.PROXY_ONLY

    @property
    def send_to_proxy(self) -> bool:
        return self is not ProxyMode.SDK_ONLY

    @classmethod
    def from_flags(cls, *, send_to_sdk: bool, send_to_proxy: bool) -> ProxyMode | None:
        """Map the two toggles back to a mode; ``None`` when both are off."""
        if send_to_sdk and send_to_proxy:
            return cls.SDK_AND_PROXY
        if send_to_sdk:
            return cls.SDK_ONLY
        if send_to_proxy:
            return cls.PROXY_ONLY
        return None


class UnmappedHitPolicy(StrEnum):
    """What the field mapper copies for hit types it has no field set for."""

    SKIP = "skip"
    COPY_ALL = "copy_all"


@dataclasses.dataclass(frozen=True)
class FieldSets:
    """Per-hit-type parameter names copied into custom events.

    Names are unprefixed; the mapper applies :attr:`ProxyConfig.key_prefix`.
    """

    event: frozenset[str] = EVENT_FIELDS
    social: frozenset[str] = SOCIAL_FIELDS
    exception: frozenset[str] = EXCEPTION_FIELDS
    timing: frozenset[str] = TIMING_FIELDS
    screen_name: str = SCREEN_NAME

    def for_hit_type(self, hit_type: str) -> frozenset[str] | None:
        """Return the field set for *hit_type*, or ``None`` when unmapped.

        ``screenview`` maps to an empty set because its screen name is read
        from tracker state rather than the hit.
        """
        table: dict[str, frozenset[str]] = {
            "screenview": frozenset(),
            "event": self.event,
            "social": self.social,
            "exception": self.exception,
            "timing": self.timing,
        }
        return table.get(hit_type)


@dataclasses.dataclass(frozen=True)
class ProxyConfig:
    """Proxy configuration.

    Parameters
    ----------
    mode : ProxyMode
        Initial routing. Defaults to forwarding to the wrapped tracker and
        emitting custom events.
    tracker_fields : frozenset[str]
        Tracker-level parameter names copied into every custom event.
    allowed_hit_types : frozenset[str] or None
        Hit types replicated as custom events. ``None`` replicates every
        hit type.
    key_prefix : str
        Wire prefix of hit and tracker keys: ``"&"`` for SDK hit builders,
        ``""`` for raw measurement protocol payloads.
    unmapped_policy : UnmappedHitPolicy
        Fallback for hit types without a field set.
    field_sets : FieldSets
        Per-hit-type field selection.
    """

    mode: ProxyMode = ProxyMode.SDK_AND_PROXY
    tracker_fields: frozenset[str] = DEFAULT_TRACKER_FIELDS
    allowed_hit_types: frozenset[str] | None = None
    key_prefix: str = DEFAULT_KEY_PREFIX
    unmapped_policy: UnmappedHitPolicy = UnmappedHitPolicy.SKIP
    field_sets: FieldSets = dataclasses.field(default_factory=FieldSets)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "mode", ProxyMode(self.mode))
            object.__setattr__(self, "unmapped_policy", UnmappedHitPolicy(self.unmapped_policy))
        except ValueError as exc:
            raise ProxyConfigError(str(exc)) from exc

        object.__setattr__(self, "tracker_fields", _frozen_names("tracker_fields", self.tracker_fields))
        if self.allowed_hit_types is not None:
            object.__setattr__(
                self, "allowed_hit_types", _frozen_names("allowed_hit_types", self.allowed_hit_types)
            )

        if not isinstance(self.key_prefix, str) or self.key_prefix not in {"", "&"}:
            raise ProxyConfigError(f"key_prefix must be '' or '&', got {self.key_prefix!r}")
        if not isinstance(self.field_sets, FieldSets):
            raise ProxyConfigError("field_sets must be a FieldSets instance")

    @classmethod
    def from_env(cls, **overrides: Any) -> ProxyConfig:
        """Create configuration from environment variables.

        Reads ``GAPROXY_MODE``, ``GAPROXY_ALLOWED_HIT_TYPES``,
        ``GAPROXY_TRACKER_FIELDS`` (both comma-separated),
        ``GAPROXY_KEY_PREFIX`` and ``GAPROXY_COPY_UNMAPPED``. Explicit
        keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        mode_env = env.get("GAPROXY_MODE")
        if mode_env is not None:
            config_kwargs["mode"] = mode_env.strip().lower()

        allowed = _env_set(env.get("GAPROXY_ALLOWED_HIT_TYPES"))
        if allowed is not None:
            config_kwargs["allowed_hit_types"] = allowed

        tracker_fields = _env_set(env.get("GAPROXY_TRACKER_FIELDS"))
        if tracker_fields is not None:
            config_kwargs["tracker_fields"] = tracker_fields

        prefix_env = env.get("GAPROXY_KEY_PREFIX")
        if prefix_env is not None:
            config_kwargs["key_prefix"] = prefix_env.strip()

        if "unmapped_policy" not in overrides:
            copy_all = _env_bool(env.get("GAPROXY_COPY_UNMAPPED"), False)
            config_kwargs["unmapped_policy"] = UnmappedHitPolicy.COPY_ALL if copy_all else UnmappedHitPolicy.SKIP

        config_kwargs.update(overrides)

        return cls(**config_kwargs)


def _frozen_names(field_name: str, values: Iterable[str]) -> frozenset[str]:
    if isinstance(values, str):
        raise ProxyConfigError(f"{field_name} must be a collection of names, not a string")
    names: set[str] = set()
    for value in values:
        # "&cid" and "cid" name the same parameter
        name = value.strip().lstrip("&") if isinstance(value, str) else value
        if not isinstance(name, str) or not name:
            raise ProxyConfigError(f"{field_name} entries must be non-empty parameter names, got {value!r}")
        names.add(name)
    return frozenset(names)
