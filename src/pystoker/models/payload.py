"""Models for the Stoker JSON endpoint.

The controller answers ``GET /stoker.json`` with::

    {"stoker": {
        "sensors": [{"id": "...", "name": "...", "tc": 21.5, "ta": 107.0, "blower": "..."}],
        "blowers": [{"id": "...", "name": "...", "on": 1}]
    }}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pystoker.ingestion.normalize import parse_on_off, safe_float, safe_str, sanitize_name


class SensorEntry(BaseModel):
    """One entry of ``stoker.sensors``.

    ``has_blower_key`` records whether the ``blower`` key was present at
    all, which is how food probes (``"blower": null``) are told apart from
    entries of unknown shape.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    name: str | None = None
    tc: float
    ta: float | None = None
    blower: str | None = None
    has_blower_key: bool = False

    @model_validator(mode="before")
    @classmethod
    def _mark_blower_key(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged["has_blower_key"] = "blower" in values
        return merged

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return sanitize_name(value)

    @field_validator("blower", mode="before")
    @classmethod
    def _coerce_blower(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("ta", mode="before")
    @classmethod
    def _coerce_target(cls, value: Any) -> float | None:
        return safe_float(value)


class BlowerEntry(BaseModel):
    """One entry of ``stoker.blowers``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    name: str | None = None
    on: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return sanitize_name(value)

    @field_validator("on", mode="before")
    @classmethod
    def _coerce_on(cls, value: Any) -> bool:
        parsed = parse_on_off(value)
        if parsed is None:
            raise ValueError(f"unrecognised blower state: {value!r}")
        return parsed


class StokerState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    sensors: list[SensorEntry] = Field(default_factory=list)
    blowers: list[BlowerEntry] = Field(default_factory=list)


class StokerPayload(BaseModel):
    """Top-level JSON document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    stoker: StokerState
