"""Typed readings produced by the record parsers."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pystoker._constants import UNKNOWN_BLOWER


class ProbeKind(StrEnum):
    FOOD = "food"
    PIT = "pit"
    UNKNOWN = "unknown"


class FailureCategory(StrEnum):
    """Why a collection step was rejected."""

    DIAL = "dial"
    READ_LINE = "read_line"
    PARSE_TEMPERATURE = "parse_temperature"
    UNKNOWN_PROBE_TYPE = "unknown_probe_type"
    KIND_CONFLICT = "kind_conflict"
    HTTP_STATUS = "http_status"
    FETCH = "fetch"
    DECODE = "decode"
    EMPTY_RESULT = "empty_result"


class ProbeReading(BaseModel):
    """Latest value reported by one temperature probe.

    Parameters
    ----------
    id : str
        Device-assigned probe serial, e.g. ``"2B0000110A442730"``.
    kind : ProbeKind
        Food or pit probe, derived from the record shape.
    temperature : float
        Current temperature in °C.
    name : str or None
        Sanitized friendly name (JSON mode only).
    blower : str
        Associated blower id; ``"unknown"`` when the device does not say.
    target_temperature : float or None
        Set point in °C, when the record carries one.
    blower_on : bool or None
        Blower state reported inline by a telnet pit record.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    kind: ProbeKind = ProbeKind.UNKNOWN
    temperature: float
    name: str | None = None
    blower: str = UNKNOWN_BLOWER
    target_temperature: float | None = None
    blower_on: bool | None = None

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        probe_id = value.strip()
        if not probe_id:
            raise ValueError("probe id must be non-empty")
        return probe_id


class BlowerReading(BaseModel):
    """Latest state of one blower (JSON mode only)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str | None = None
    on: bool = Field(default=False, description="Whether the blower is currently running")

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        blower_id = value.strip()
        if not blower_id:
            raise ValueError("blower id must be non-empty")
        return blower_id
