"""Point-in-time copies of the state store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pystoker.models.reading import BlowerReading, FailureCategory, ProbeReading


class StoreSnapshot(BaseModel):
    """Consistent copy of all entities and counters.

    Safe to hand to any reader: every field is immutable or a private copy.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sensors: dict[str, ProbeReading] = Field(default_factory=dict)
    blowers: dict[str, BlowerReading] = Field(default_factory=dict)
    collections: dict[str, int] = Field(default_factory=dict)
    blower_collections: dict[str, int] = Field(default_factory=dict)
    failures: dict[FailureCategory, int] = Field(default_factory=dict)
    polls_total: int = 0
    poll_failures_total: int = 0
