"""Telnet line parser.

The Stoker streams one record per probe roughly every second::

    2B0000110A442730: 1.0 4.0 39.2 -7.5 -0.2 0.2 -0.0 0.3 32.4
    2A0000110A314B30: 1.0 3.8 38.8 142.5 3.6 0.1 3.7 91.7 197.0 PID: NORM tgt:107.2 error:77.7 drive:2.0 istate:18.2 on:1 off:0 blwr:on

interleaved with free-form status chatter. Parsing is pure: callers decide
what to do with the result.
"""

from __future__ import annotations

from pystoker._constants import (
    PID_MARKER,
    PID_MARKER_INDEX,
    PROBE_ID_SUFFIX,
    PROBE_READING_COUNT,
    TEMPERATURE_READING_INDEX,
)
from pystoker.exceptions import StokerParseError
from pystoker.ingestion.normalize import parse_on_off, safe_float, split_key_value
from pystoker.models.reading import FailureCategory, ProbeKind, ProbeReading

_FOOD_TOKEN_COUNT = 1 + PROBE_READING_COUNT


def _pid_fields(tokens: list[str]) -> tuple[float | None, bool | None]:
    """Pull the set point and blower state out of a PID section.

    Extended fields are best-effort: anything unexpected is ignored.
    """
    target: float | None = None
    blower_on: bool | None = None
    for token in tokens:
        pair = split_key_value(token)
        if pair is None:
            continue
        key, value = pair
        if key == "tgt":
            target = safe_float(value)
        elif key == "blwr":
            blower_on = parse_on_off(value)
    return target, blower_on


def parse_line(line: str) -> ProbeReading | None:
    """Parse one telnet record.

    Returns ``None`` for lines that are not probe data (status messages,
    blank lines). Raises :class:`StokerParseError` when a line looks like a
    probe record but cannot be used; its ``category`` says why.
    """
    tokens = line.split()
    if not tokens or not tokens[0].endswith(PROBE_ID_SUFFIX):
        return None
    if len(tokens) < _FOOD_TOKEN_COUNT:
        return None

    probe_id = tokens[0][: -len(PROBE_ID_SUFFIX)]
    if not probe_id.strip():
        return None

    if len(tokens) == _FOOD_TOKEN_COUNT:
        kind = ProbeKind.FOOD
        target, blower_on = None, None
    else:
        marker = tokens[PID_MARKER_INDEX]
        if marker != PID_MARKER:
            raise StokerParseError(
                f"unknown probe type for {probe_id}: marker {marker!r}",
                category=FailureCategory.UNKNOWN_PROBE_TYPE,
                detail=marker,
            )
        kind = ProbeKind.PIT
        target, blower_on = _pid_fields(tokens[PID_MARKER_INDEX + 1 :])

    raw_temp = tokens[1 + TEMPERATURE_READING_INDEX]
    temperature = safe_float(raw_temp)
    if temperature is None:
        raise StokerParseError(
            f"cannot parse temperature for {probe_id}: {raw_temp!r}",
            category=FailureCategory.PARSE_TEMPERATURE,
            detail=raw_temp,
        )

    return ProbeReading(
        id=probe_id,
        kind=kind,
        temperature=temperature,
        target_temperature=target,
        blower_on=blower_on,
    )
