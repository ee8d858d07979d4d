"""Typed models for Stoker readings, JSON payloads, and exported metrics."""

from pystoker.models.metric import MetricRecord, MetricType
from pystoker.models.payload import BlowerEntry, SensorEntry, StokerPayload, StokerState
from pystoker.models.reading import BlowerReading, FailureCategory, ProbeKind, ProbeReading

__all__ = [
    "BlowerEntry",
    "BlowerReading",
    "FailureCategory",
    "MetricRecord",
    "MetricType",
    "ProbeKind",
    "ProbeReading",
    "SensorEntry",
    "StokerPayload",
    "StokerState",
]
