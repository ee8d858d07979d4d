"""Ingestion application helpers.

Both ingestion modes funnel parsed records through here so that parse
failures are counted and logged the same way, and so that logging never
happens under the store lock.
"""

from __future__ import annotations

import logging
from typing import Any

from pystoker.exceptions import StokerParseError, StokerPayloadError
from pystoker.ingestion.lines import parse_line
from pystoker.ingestion.payload import parse_payload
from pystoker.models.reading import FailureCategory, ProbeReading
from pystoker.state.store import StateStore

_logger = logging.getLogger(__name__)


def apply_line(store: StateStore, line: str) -> ProbeReading | None:
    """Parse one telnet line and merge it into *store*.

    Returns the applied reading, or ``None`` when the line carried no data
    or was rejected.
    """
    try:
        reading = parse_line(line)
    except StokerParseError as exc:
        store.record_failure(exc.category)
        _logger.debug("Dropping record (%s): %s", exc.category, exc)
        return None

    if reading is None:
        return None

    if not store.record_reading(reading):
        _logger.warning("Probe %s reported as %s but was first seen as another kind", reading.id, reading.kind)
        return None
    return reading


def apply_payload(store: StateStore, payload: Any) -> int:
    """Parse a decoded JSON document and replace the store's entities.

    Raises :class:`StokerPayloadError` without touching the store when the
    payload is rejected. Returns the number of sensors now held.
    """
    sensors, blowers = parse_payload(payload)
    if not sensors:
        # Every entry had an empty id.
        raise StokerPayloadError("no sensors with an id found", category=FailureCategory.EMPTY_RESULT)
    rejected = store.replace_all(sensors, blowers)
    for sensor_id in rejected:
        _logger.warning("Sensor %s changed kind; keeping it out of the snapshot", sensor_id)
    return len(sensors) - len(rejected)
