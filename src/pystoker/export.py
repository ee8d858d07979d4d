"""Snapshot export.

:class:`SnapshotExporter` turns one :class:`~pystoker.state.StoreSnapshot`
into a flat list of :class:`~pystoker.models.MetricRecord`, and
:class:`StokerCollector` hands those to ``prometheus_client`` on every
scrape. The store lock is released before any record is built.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from prometheus_client.metrics_core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector
from pydantic import ValidationError

from pystoker._constants import METRICS_NAMESPACE, celsius_to_fahrenheit
from pystoker.models.metric import MetricRecord, MetricType
from pystoker.models.reading import ProbeReading
from pystoker.state.snapshot import StoreSnapshot
from pystoker.state.store import StateStore

_logger = logging.getLogger(__name__)

_BLOWER_TYPE = "blower"


class SnapshotExporter:
    """Renders store snapshots as metric records.

    Parameters
    ----------
    store : StateStore
        Store to snapshot on :meth:`export`.
    include_poll_counters : bool
        Emit the aggregate poll attempt/failure counters (polling mode).
    fahrenheit : bool
        Present temperatures in °F. Readings are always stored in °C.
    namespace : str
        Metric name prefix.
    """

    def __init__(
        self,
        store: StateStore,
        *,
        include_poll_counters: bool = False,
        fahrenheit: bool = False,
        namespace: str = METRICS_NAMESPACE,
    ) -> None:
        self._store = store
        self._include_poll_counters = include_poll_counters
        self._fahrenheit = fahrenheit
        self._namespace = namespace

    @property
    def _unit(self) -> str:
        return "fahrenheit" if self._fahrenheit else "celsius"

    def _temperature(self, value: float) -> float:
        return celsius_to_fahrenheit(value) if self._fahrenheit else value

    def _record(self, **fields: Any) -> MetricRecord | None:
        fields["name"] = f"{self._namespace}_{fields['name']}"
        try:
            return MetricRecord.model_validate(fields)
        except ValidationError as exc:
            _logger.warning("Skipping malformed metric %s: %s", fields.get("name"), exc.errors()[0].get("msg"))
            return None

    def _sensor_records(self, sensor: ProbeReading) -> Iterator[MetricRecord | None]:
        labels = {
            "id": sensor.id,
            "type": str(sensor.kind),
            "name": sensor.name or "",
            "blower": sensor.blower,
        }
        yield self._record(
            name=f"temperature_{self._unit}",
            type=MetricType.GAUGE,
            documentation="Current probe temperature.",
            labels=labels,
            value=self._temperature(sensor.temperature),
        )
        if sensor.target_temperature is not None:
            yield self._record(
                name=f"target_temperature_{self._unit}",
                type=MetricType.GAUGE,
                documentation="Probe set point.",
                labels={"id": sensor.id, "type": str(sensor.kind), "name": sensor.name or ""},
                value=self._temperature(sensor.target_temperature),
            )
        if sensor.blower_on is not None:
            yield self._record(
                name="pit_blower_on",
                type=MetricType.GAUGE,
                documentation="Blower state reported by a pit probe's PID section (1 = on).",
                labels={"id": sensor.id},
                value=1.0 if sensor.blower_on else 0.0,
            )

    def records(self, snapshot: StoreSnapshot) -> list[MetricRecord]:
        """Build metric records for one snapshot; malformed ones are skipped."""
        candidates: list[MetricRecord | None] = []

        for sensor in snapshot.sensors.values():
            candidates.extend(self._sensor_records(sensor))
            candidates.append(
                self._record(
                    name="collections",
                    type=MetricType.COUNTER,
                    documentation="Successful updates per entity.",
                    labels={"id": sensor.id, "type": str(sensor.kind)},
                    value=snapshot.collections.get(sensor.id, 0),
                )
            )

        for blower in snapshot.blowers.values():
            candidates.append(
                self._record(
                    name="blower_on",
                    type=MetricType.GAUGE,
                    documentation="Blower state (1 = on).",
                    labels={"id": blower.id, "name": blower.name or ""},
                    value=1.0 if blower.on else 0.0,
                )
            )
            candidates.append(
                self._record(
                    name="collections",
                    type=MetricType.COUNTER,
                    documentation="Successful updates per entity.",
                    labels={"id": blower.id, "type": _BLOWER_TYPE},
                    value=snapshot.blower_collections.get(blower.id, 0),
                )
            )

        for category, count in sorted(snapshot.failures.items()):
            candidates.append(
                self._record(
                    name="collection_failures",
                    type=MetricType.COUNTER,
                    documentation="Failed collection steps by category.",
                    labels={"category": str(category)},
                    value=count,
                )
            )

        if self._include_poll_counters:
            candidates.append(
                self._record(
                    name="polls",
                    type=MetricType.COUNTER,
                    documentation="JSON collection attempts.",
                    value=snapshot.polls_total,
                )
            )
            candidates.append(
                self._record(
                    name="poll_failures",
                    type=MetricType.COUNTER,
                    documentation="Failed JSON collection attempts.",
                    value=snapshot.poll_failures_total,
                )
            )

        return [record for record in candidates if record is not None]

    def export(self) -> list[MetricRecord]:
        """Snapshot the store and render it."""
        return self.records(self._store.snapshot())


class StokerCollector(Collector):
    """``prometheus_client`` collector backed by a :class:`SnapshotExporter`.

    Register it on an explicit ``CollectorRegistry``; nothing is registered
    globally.
    """

    def __init__(self, exporter: SnapshotExporter) -> None:
        self._exporter = exporter

    def collect(self) -> Iterator[Metric]:
        families: dict[str, GaugeMetricFamily | CounterMetricFamily] = {}
        label_names: dict[str, list[str]] = {}

        for record in self._exporter.export():
            family = families.get(record.name)
            if family is None:
                names = list(record.labels)
                family_cls = CounterMetricFamily if record.type == MetricType.COUNTER else GaugeMetricFamily
                family = family_cls(record.name, record.documentation, labels=names)
                families[record.name] = family
                label_names[record.name] = names
            family.add_metric([record.labels.get(name, "") for name in label_names[record.name]], record.value)

        yield from families.values()
