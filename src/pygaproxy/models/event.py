"""Custom events emitted to the first-party sink.

A :class:`EventDraft` is built per hit by the field mapper, edited in place
by extenders and finalized with :meth:`EventDraft.create` into an immutable
:class:`CustomEvent`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomEvent(BaseModel):
    """A finalized, named custom event."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Event name (the originating hit type)")
    properties: dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name


class EventDraft:
    """Mutable custom event under construction."""

    __slots__ = ("name", "_properties")

    def __init__(self, name: str, properties: Mapping[str, str] | None = None) -> None:
        self.name = name
        self._properties: dict[str, str] = {}
        if properties:
            for key, value in properties.items():
                self.add_property(key, value)

    def add_property(self, key: str, value: str | None) -> EventDraft:
        """Set *key* to *value*; ``None`` values are ignored."""
        if value is not None:
            self._properties[key] = value
        return self

    def remove_property(self, key: str) -> EventDraft:
        self._properties.pop(key, None)
        return self

    def get(self, key: str) -> str | None:
        return self._properties.get(key)

    @property
    def properties(self) -> dict[str, str]:
        """Copy of the current properties."""
        return dict(self._properties)

    def create(self) -> CustomEvent:
        """Finalize into a :class:`CustomEvent`."""
        return CustomEvent(name=self.name, properties=dict(self._properties))

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"EventDraft(name={self.name!r}, properties={self._properties!r})"
