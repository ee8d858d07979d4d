"""Immutable metric records handed from the exporter to the collector."""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

_METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
_LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class MetricType(StrEnum):
    GAUGE = "gauge"
    COUNTER = "counter"


class MetricRecord(BaseModel):
    """A single sample with its family metadata.

    Counter names are given without the ``_total`` suffix; the exposition
    layer appends it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    type: MetricType
    documentation: str
    labels: dict[str, str] = Field(default_factory=dict)
    value: float

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _METRIC_NAME_RE.match(value):
            raise ValueError(f"invalid metric name: {value!r}")
        return value

    @field_validator("labels")
    @classmethod
    def _check_labels(cls, value: dict[str, str]) -> dict[str, str]:
        for key, label_value in value.items():
            if not _LABEL_NAME_RE.match(key) or key.startswith("__"):
                raise ValueError(f"invalid label name: {key!r}")
            if not label_value.isprintable():
                raise ValueError(f"label {key!r} has a non-printable value: {label_value!r}")
        return value
