"""Tracker wrapper that proxies hits as custom events."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from urllib.parse import parse_qsl, urlsplit

from pydantic import ValidationError

from pygaproxy._constants import CAMPAIGN_PARAMS, HIT_TYPE, TRACKER_PARAMS, wire_key
from pygaproxy._redact import redact_for_log
from pygaproxy.config import ProxyConfig, ProxyMode
from pygaproxy.dispatch import dispatch, is_hit_type_allowed
from pygaproxy.exceptions import InvalidHitError
from pygaproxy.extenders import Extender, ExtenderRegistry
from pygaproxy.mapping import EventMapper, FieldMapper, hit_type_of
from pygaproxy.models.event import CustomEvent
from pygaproxy.tracker import EventSink, Tracker

_logger = logging.getLogger(__name__)


class TrackerProxy:
    """Wraps an analytics tracker and replicates its hits as custom events.

    Usage::

        proxy = TrackerProxy(ga_tracker, analytics)
        proxy.set_client_id("c1")
        proxy.send(EventHit(category="video", action="play").to_hit())

    Each :meth:`send` maps the hit to a draft event, applies the registered
    extenders, then forwards the original hit to the wrapped tracker and
    records the finalized event in *sink*, according to the current
    toggles. The whole sequence runs on the calling thread.
    """

    def __init__(
        self,
        tracker: Tracker,
        sink: EventSink,
        config: ProxyConfig | None = None,
        *,
        mapper: EventMapper | None = None,
    ) -> None:
        self._tracker = tracker
        self._sink = sink
        self._config = config or ProxyConfig()
        self._mapper: EventMapper = mapper or FieldMapper(self._config)
        self._extenders = ExtenderRegistry()
        self._toggle_lock = threading.Lock()
        self._sdk_enabled = self._config.mode.send_to_sdk
        self._proxy_enabled = self._config.mode.send_to_proxy
        self._campaign_params: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def tracker(self) -> Tracker:
        return self._tracker

    @property
    def config(self) -> ProxyConfig:
        return self._config

    @property
    def sdk_enabled(self) -> bool:
        return self._sdk_enabled

    @property
    def proxy_enabled(self) -> bool:
        return self._proxy_enabled

    @property
    def mode(self) -> ProxyMode | None:
        """Current routing as a mode, ``None`` when both toggles are off."""
        with self._toggle_lock:
            return ProxyMode.from_flags(send_to_sdk=self._sdk_enabled, send_to_proxy=self._proxy_enabled)

    # ------------------------------------------------------------------
    # Routing toggles
    # ------------------------------------------------------------------

    def set_sdk_enabled(self, enabled: bool) -> TrackerProxy:
        """Forward hits to the wrapped tracker."""
        with self._toggle_lock:
            self._sdk_enabled = bool(enabled)
        return self

    def set_proxy_enabled(self, enabled: bool) -> TrackerProxy:
        """Record hits as custom events in the sink."""
        with self._toggle_lock:
            self._proxy_enabled = bool(enabled)
        return self

    def set_mode(self, mode: ProxyMode | str) -> TrackerProxy:
        mode = ProxyMode(mode)
        with self._toggle_lock:
            self._sdk_enabled = mode.send_to_sdk
            self._proxy_enabled = mode.send_to_proxy
        return self

    # ------------------------------------------------------------------
    # Extenders
    # ------------------------------------------------------------------

    def add_extender(self, extender: Extender) -> TrackerProxy:
        self._extenders.add(extender)
        return self

    def remove_extender(self, extender: Extender) -> bool:
        return self._extenders.remove(extender)

    # ------------------------------------------------------------------
    # Data plane
    # ------------------------------------------------------------------

    def send(self, hit: Mapping[str, str]) -> None:
        """Send *hit* to the wrapped tracker and/or record it as a custom event.

        Campaign parameters stored by :meth:`set_campaign_params_on_next_hit`
        are merged into *hit* (its own keys win) and then cleared.

        Raises
        ------
        InvalidHitError
            The proxy path is enabled and no valid custom event can be built
            for *hit* (missing hit type, or a mapper or extender left the
            event without a name). Neither sink is called.
        """
        with self._toggle_lock:
            send_to_sdk = self._sdk_enabled
            send_to_proxy = self._proxy_enabled
            campaign, self._campaign_params = self._campaign_params, {}

        if campaign:
            hit = {**campaign, **hit}

        event = self._build_event(hit) if send_to_proxy else None

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Dispatching hit sdk=%s proxy=%s hit=%s",
                send_to_sdk,
                event is not None,
                redact_for_log(hit),
            )

        dispatch(
            hit,
            event,
            tracker=self._tracker,
            sink=self._sink,
            send_to_sdk=send_to_sdk,
            send_to_proxy=send_to_proxy,
        )

    def _build_event(self, hit: Mapping[str, str]) -> CustomEvent | None:
        hit_type = hit_type_of(hit, self._config.key_prefix)
        if not is_hit_type_allowed(hit_type, self._config.allowed_hit_types):
            _logger.debug("Hit type %r not allowed; skipping custom event", hit_type)
            return None
        draft = self._mapper(hit, self._tracker)
        self._extenders.apply(draft, hit, self._tracker)
        try:
            return draft.create()
        except ValidationError as exc:
            raise InvalidHitError(
                f"custom event for hit type {hit_type!r} is invalid: {exc.errors()[0]['msg']}",
                type_key=wire_key(HIT_TYPE, self._config.key_prefix),
            ) from exc

    # ------------------------------------------------------------------
    # Tracker pass-through
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        return self._tracker.get(key)

    def set(self, key: str, value: str) -> None:
        self._tracker.set(key, value)

    def _set_param(self, name: str, value: str) -> None:
        self._tracker.set(wire_key(TRACKER_PARAMS[name], self._config.key_prefix), value)

    def set_anonymize_ip(self, anonymize: bool) -> None:
        self._set_param("anonymize_ip", "1" if anonymize else "0")

    def set_app_id(self, app_id: str) -> None:
        self._set_param("app_id", app_id)

    def set_app_installer_id(self, app_installer_id: str) -> None:
        self._set_param("app_installer_id", app_installer_id)

    def set_app_name(self, app_name: str) -> None:
        self._set_param("app_name", app_name)

    def set_app_version(self, app_version: str) -> None:
        self._set_param("app_version", app_version)

    def set_client_id(self, client_id: str) -> None:
        self._set_param("client_id", client_id)

    def set_encoding(self, encoding: str) -> None:
        self._set_param("encoding", encoding)

    def set_hostname(self, hostname: str) -> None:
        self._set_param("hostname", hostname)

    def set_language(self, language: str) -> None:
        self._set_param("language", language)

    def set_location(self, location: str) -> None:
        self._set_param("location", location)

    def set_page(self, page: str) -> None:
        self._set_param("page", page)

    def set_referrer(self, referrer: str) -> None:
        self._set_param("referrer", referrer)

    def set_sample_rate(self, sample_rate: float) -> None:
        self._set_param("sample_rate", str(sample_rate))

    def set_screen_colors(self, screen_colors: str) -> None:
        self._set_param("screen_colors", screen_colors)

    def set_screen_name(self, screen_name: str) -> None:
        self._set_param("screen_name", screen_name)

    def set_screen_resolution(self, width: int, height: int) -> None:
        self._set_param("screen_resolution", f"{int(width)}x{int(height)}")

    def set_title(self, title: str) -> None:
        self._set_param("title", title)

    def set_user_id(self, user_id: str) -> None:
        self._set_param("user_id", user_id)

    def set_viewport_size(self, viewport_size: str) -> None:
        self._set_param("viewport_size", viewport_size)

    def set_campaign_params_on_next_hit(self, url: str) -> None:
        """Attach the campaign parameters found in *url* to the next hit.

        ``utm_*``, ``gclid`` and ``dclid`` query parameters are translated
        to their measurement protocol names. *url* may also be a bare query
        string. The parameters apply to exactly one :meth:`send` call.
        """
        query = urlsplit(url).query if "?" in url else url
        params: dict[str, str] = {}
        for name, value in parse_qsl(query):
            param = CAMPAIGN_PARAMS.get(name)
            if param is not None and value:
                params[wire_key(param, self._config.key_prefix)] = value
        with self._toggle_lock:
            self._campaign_params = params
