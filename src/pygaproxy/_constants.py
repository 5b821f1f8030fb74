"""Measurement protocol parameter names shared across the library.

Names are stored without the wire prefix. The Android SDK's hit builders
emit ``&``-prefixed keys (``&t``, ``&ec``); raw measurement protocol
payloads use bare keys (``t``, ``ec``).
"""

DEFAULT_KEY_PREFIX = "&"

HIT_TYPE = "t"
SCREEN_NAME = "cd"

# ------------------------------------------------------------------
# Hit-type field sets
# ------------------------------------------------------------------

# category, action, label, value
EVENT_FIELDS: frozenset[str] = frozenset({"ec", "ea", "el", "ev"})
# network, action, target
SOCIAL_FIELDS: frozenset[str] = frozenset({"sn", "sa", "st"})
# description, is-fatal flag
EXCEPTION_FIELDS: frozenset[str] = frozenset({"exd", "exf"})
# category, variable name, time, label
TIMING_FIELDS: frozenset[str] = frozenset({"utc", "utv", "utt", "utl"})

# protocol version, app name, tracking id, client id, user id,
# campaign id, AdWords id, Display Ads id
DEFAULT_TRACKER_FIELDS: frozenset[str] = frozenset({"v", "an", "tid", "cid", "uid", "ci", "gclid", "dclid"})

DEFAULT_ALLOWED_HIT_TYPES: frozenset[str] = frozenset(
    {"pageview", "screenview", "event", "transaction", "item", "social", "exception", "timing"}
)

# ------------------------------------------------------------------
# Tracker-level parameters written by the named setters
# ------------------------------------------------------------------

TRACKER_PARAMS: dict[str, str] = {
    "anonymize_ip": "aip",
    "app_id": "aid",
    "app_installer_id": "aiid",
    "app_name": "an",
    "app_version": "av",
    "client_id": "cid",
    "encoding": "de",
    "hostname": "dh",
    "language": "ul",
    "location": "dl",
    "page": "dp",
    "referrer": "dr",
    "sample_rate": "sf",
    "screen_colors": "sd",
    "screen_name": SCREEN_NAME,
    "screen_resolution": "sr",
    "title": "dt",
    "user_id": "uid",
    "viewport_size": "vp",
}


def wire_key(name: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Return the wire key for parameter *name* under *prefix*."""
    return f"{prefix}{name}"


# Landing-page query parameter -> campaign parameter
CAMPAIGN_PARAMS: dict[str, str] = {
    "utm_id": "ci",
    "utm_source": "cs",
    "utm_medium": "cm",
    "utm_campaign": "cn",
    "utm_term": "ck",
    "utm_content": "cc",
    "gclid": "gclid",
    "dclid": "dclid",
}
