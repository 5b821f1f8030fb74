"""Typed hit payloads.

These models stand in for the analytics SDK's hit builders. Fields use
readable names and are aliased to their measurement protocol parameters;
:meth:`HitModel.to_hit` produces the flat string mapping that
:meth:`pygaproxy.proxy.TrackerProxy.send` consumes.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from pygaproxy._constants import DEFAULT_KEY_PREFIX, wire_key
from pygaproxy._constants import HIT_TYPE as _TYPE_PARAM


def _wire_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class HitModel(BaseModel):
    """Base for typed hits."""

    HIT_TYPE: ClassVar[str] = ""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_hit(self, prefix: str = DEFAULT_KEY_PREFIX) -> dict[str, str]:
        """Dump the hit as a wire mapping, skipping unset fields."""
        hit = {wire_key(_TYPE_PARAM, prefix): self.HIT_TYPE}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            hit[wire_key(key, prefix)] = _wire_value(value)
        return hit


class ScreenViewHit(HitModel):
    """Screen view; the screen name itself is tracker state."""

    HIT_TYPE: ClassVar[str] = "screenview"


class EventHit(HitModel):
    HIT_TYPE: ClassVar[str] = "event"

    category: str | None = Field(default=None, alias="ec")
    action: str | None = Field(default=None, alias="ea")
    label: str | None = Field(default=None, alias="el")
    value: int | None = Field(default=None, alias="ev")


class SocialHit(HitModel):
    HIT_TYPE: ClassVar[str] = "social"

    network: str | None = Field(default=None, alias="sn")
    action: str | None = Field(default=None, alias="sa")
    target: str | None = Field(default=None, alias="st")


class TimingHit(HitModel):
    HIT_TYPE: ClassVar[str] = "timing"

    category: str | None = Field(default=None, alias="utc")
    variable: str | None = Field(default=None, alias="utv")
    value: int | None = Field(default=None, alias="utt", description="Elapsed time in milliseconds")
    label: str | None = Field(default=None, alias="utl")


class ExceptionHit(HitModel):
    HIT_TYPE: ClassVar[str] = "exception"

    description: str | None = Field(default=None, alias="exd")
    fatal: bool | None = Field(default=None, alias="exf")
