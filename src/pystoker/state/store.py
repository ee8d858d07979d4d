"""Lock-guarded in-memory state store.

This is the only component allowed to mutate collected state. Every
method takes the same lock and holds it only long enough to copy or
update dicts; parsing, logging and I/O all happen outside.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from pystoker.models.reading import BlowerReading, FailureCategory, ProbeKind, ProbeReading
from pystoker.state.snapshot import StoreSnapshot


class StateStore:
    """Latest reading per entity id plus monotonic counters.

    Telnet ingestion merges readings one at a time and never forgets an
    entity. JSON polling swaps the whole sensor/blower maps with
    :meth:`replace_all`, so entities missing from a payload disappear.
    Collection counts survive both.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sensors: dict[str, ProbeReading] = {}
        self._blowers: dict[str, BlowerReading] = {}
        self._kinds: dict[str, ProbeKind] = {}
        self._collections: dict[str, int] = {}
        self._blower_collections: dict[str, int] = {}
        self._failures: dict[FailureCategory, int] = {}
        self._polls_total = 0
        self._poll_failures_total = 0

    def _kind_conflicts(self, reading: ProbeReading) -> bool:
        known = self._kinds.get(reading.id)
        return known is not None and known != reading.kind

    def _bump_collection(self, entity_id: str) -> None:
        self._collections[entity_id] = self._collections.get(entity_id, 0) + 1

    def _bump_blower_collection(self, blower_id: str) -> None:
        self._blower_collections[blower_id] = self._blower_collections.get(blower_id, 0) + 1

    def _bump_failure(self, category: FailureCategory) -> None:
        self._failures[category] = self._failures.get(category, 0) + 1

    def record_reading(self, reading: ProbeReading) -> bool:
        """Create or update one sensor.

        Returns ``False`` (and counts a ``kind_conflict`` failure) when the
        id was first seen as a different probe kind; state is left as is.
        """
        with self._lock:
            if self._kind_conflicts(reading):
                self._bump_failure(FailureCategory.KIND_CONFLICT)
                return False
            self._kinds[reading.id] = reading.kind
            self._sensors[reading.id] = reading
            self._bump_collection(reading.id)
            return True

    def record_failure(self, category: FailureCategory) -> None:
        with self._lock:
            self._bump_failure(category)

    def replace_all(self, sensors: Iterable[ProbeReading], blowers: Iterable[BlowerReading]) -> list[str]:
        """Swap in a complete sensor/blower set from one JSON fetch.

        Sensors whose kind conflicts with their recorded kind are left out
        and counted as ``kind_conflict``; their ids are returned so the
        caller can log them.
        """
        incoming_sensors = list(sensors)
        incoming_blowers = {blower.id: blower for blower in blowers}
        rejected: list[str] = []
        with self._lock:
            new_sensors: dict[str, ProbeReading] = {}
            for reading in incoming_sensors:
                if self._kind_conflicts(reading):
                    self._bump_failure(FailureCategory.KIND_CONFLICT)
                    rejected.append(reading.id)
                    continue
                new_sensors[reading.id] = reading
            for reading in new_sensors.values():
                self._kinds[reading.id] = reading.kind
                self._bump_collection(reading.id)
            for blower_id in incoming_blowers:
                self._bump_blower_collection(blower_id)
            self._sensors = new_sensors
            self._blowers = incoming_blowers
        return rejected

    def record_poll_attempt(self) -> None:
        with self._lock:
            self._polls_total += 1

    def record_poll_failure(self, category: FailureCategory) -> None:
        """Count a failed poll both in aggregate and by category."""
        with self._lock:
            self._poll_failures_total += 1
            self._bump_failure(category)

    def snapshot(self) -> StoreSnapshot:
        """Return a consistent point-in-time copy of everything."""
        with self._lock:
            sensors = dict(self._sensors)
            blowers = dict(self._blowers)
            collections = dict(self._collections)
            blower_collections = dict(self._blower_collections)
            failures = dict(self._failures)
            polls_total = self._polls_total
            poll_failures_total = self._poll_failures_total
        return StoreSnapshot.model_construct(
            sensors=sensors,
            blowers=blowers,
            collections=collections,
            blower_collections=blower_collections,
            failures=failures,
            polls_total=polls_total,
            poll_failures_total=poll_failures_total,
        )
