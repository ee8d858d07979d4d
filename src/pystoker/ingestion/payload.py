"""JSON payload parser.

Turns a decoded ``stoker.json`` document into readings. A payload is
accepted or rejected as a whole.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pystoker.exceptions import StokerPayloadError
from pystoker.models.payload import SensorEntry, StokerPayload
from pystoker.models.reading import BlowerReading, FailureCategory, ProbeKind, ProbeReading

_logger = logging.getLogger(__name__)


def _sensor_kind(entry: SensorEntry) -> ProbeKind:
    if entry.blower:
        return ProbeKind.PIT
    if entry.has_blower_key:
        return ProbeKind.FOOD
    return ProbeKind.UNKNOWN


def parse_payload(payload: Any) -> tuple[list[ProbeReading], list[BlowerReading]]:
    """Parse a decoded JSON document into sensor and blower readings.

    Raises :class:`StokerPayloadError` when the document does not have the
    expected shape (``decode``) or carries no sensors (``empty_result``).
    Entries with an empty id are skipped.
    """
    try:
        document = StokerPayload.model_validate(payload)
    except ValidationError as exc:
        raise StokerPayloadError(
            f"unexpected payload shape: {exc.error_count()} validation error(s)",
            category=FailureCategory.DECODE,
        ) from exc

    if not document.stoker.sensors:
        raise StokerPayloadError("no sensors found", category=FailureCategory.EMPTY_RESULT)

    sensors: list[ProbeReading] = []
    for entry in document.stoker.sensors:
        if not entry.id:
            _logger.debug("Skipping sensor entry without id: %s", entry)
            continue
        kind = _sensor_kind(entry)
        reading_kwargs: dict[str, Any] = {}
        if kind == ProbeKind.PIT and entry.blower:
            reading_kwargs["blower"] = entry.blower
        sensors.append(
            ProbeReading(
                id=entry.id,
                kind=kind,
                temperature=entry.tc,
                name=entry.name,
                target_temperature=entry.ta,
                **reading_kwargs,
            )
        )

    blowers: list[BlowerReading] = []
    for blower in document.stoker.blowers:
        if not blower.id:
            _logger.debug("Skipping blower entry without id: %s", blower)
            continue
        blowers.append(BlowerReading(id=blower.id, name=blower.name, on=blower.on))

    return sensors, blowers
