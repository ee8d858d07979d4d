from __future__ import annotations

import pytest

from pystoker.exceptions import StokerPayloadError
from pystoker.ingestion.normalize import sanitize_name
from pystoker.ingestion.payload import parse_payload
from pystoker.models.reading import FailureCategory, ProbeKind


def _payload() -> dict:
    return {
        "stoker": {
            "sensors": [
                {"id": "2A0000110A314B30", "name": "Pit Probe", "tc": 107.5, "ta": 110.0, "blower": "B50000000A1B2C05"},
                {"id": "2B0000110A442730", "name": "Brisket (Point)", "tc": 62.25, "ta": 95.0, "blower": None},
            ],
            "blowers": [{"id": "B50000000A1B2C05", "name": "Main Blower", "on": 1}],
        }
    }


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Pit Probe", "pit_probe"),
        ("Brisket (Point)", "brisket_point"),
        ("  Pork\tShoulder #2 ", "pork_shoulder_2"),
        ("a  b", "a__b"),
        ("***", None),
        ("", None),
        (None, None),
    ],
)
def test_sanitize_name(raw: str | None, expected: str | None) -> None:
    assert sanitize_name(raw) == expected


def test_parse_payload_sensors_and_blowers() -> None:
    sensors, blowers = parse_payload(_payload())

    by_id = {sensor.id: sensor for sensor in sensors}
    pit = by_id["2A0000110A314B30"]
    food = by_id["2B0000110A442730"]

    assert pit.kind == ProbeKind.PIT
    assert pit.blower == "B50000000A1B2C05"
    assert pit.name == "pit_probe"
    assert pit.temperature == 107.5
    assert pit.target_temperature == 110.0

    assert food.kind == ProbeKind.FOOD
    assert food.blower == "unknown"
    assert food.name == "brisket_point"

    assert len(blowers) == 1
    assert blowers[0].id == "B50000000A1B2C05"
    assert blowers[0].name == "main_blower"
    assert blowers[0].on is True


def test_sensor_without_blower_key_has_unknown_kind() -> None:
    sensors, _ = parse_payload({"stoker": {"sensors": [{"id": "X1", "name": "x", "tc": 20}], "blowers": []}})

    assert sensors[0].kind == ProbeKind.UNKNOWN


def test_entries_with_empty_id_are_skipped() -> None:
    payload = _payload()
    payload["stoker"]["sensors"].append({"id": "", "name": "ghost", "tc": 1.0, "blower": None})
    payload["stoker"]["blowers"].append({"id": "  ", "name": "ghost", "on": 0})

    sensors, blowers = parse_payload(payload)

    assert len(sensors) == 2
    assert len(blowers) == 1


def test_empty_sensor_list_is_rejected() -> None:
    with pytest.raises(StokerPayloadError) as excinfo:
        parse_payload({"stoker": {"sensors": [], "blowers": []}})

    assert excinfo.value.category == FailureCategory.EMPTY_RESULT


def test_empty_sensor_list_discards_blowers_too() -> None:
    with pytest.raises(StokerPayloadError):
        parse_payload({"stoker": {"sensors": [], "blowers": [{"id": "B1", "name": "b", "on": 1}]}})


@pytest.mark.parametrize(
    "payload",
    [
        {},
        [],
        "not an object",
        {"stoker": None},
        {"stoker": {"sensors": [{"id": "X1", "name": "x"}]}},
        {"stoker": {"sensors": [{"id": "X1", "tc": "hot"}]}},
        {"stoker": {"sensors": [{"id": "X1", "tc": 1.0}], "blowers": [{"id": "B1", "on": "maybe"}]}},
    ],
)
def test_malformed_payload_is_a_decode_failure(payload: object) -> None:
    with pytest.raises(StokerPayloadError) as excinfo:
        parse_payload(payload)

    assert excinfo.value.category == FailureCategory.DECODE
