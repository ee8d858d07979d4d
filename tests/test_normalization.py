from __future__ import annotations

import math

import pytest

from pystoker._constants import celsius_to_fahrenheit
from pystoker.ingestion.normalize import parse_on_off, safe_float, split_key_value


@pytest.mark.parametrize(
    ("value", "expected"),
    [("32.4", 32.4), ("-0.0", 0.0), (7, 7.0), ("", None), (None, None), ("abc", None), ("nan", None), (True, None)],
)
def test_safe_float(value: object, expected: float | None) -> None:
    result = safe_float(value)
    if expected is None:
        assert result is None
    else:
        assert result is not None and math.isclose(result, expected)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("on", True), ("OFF", False), (1, True), ("0", False), (True, True), ("maybe", None), ("", None), (None, None)],
)
def test_parse_on_off(value: object, expected: bool | None) -> None:
    assert parse_on_off(value) is expected


def test_split_key_value() -> None:
    assert split_key_value("tgt:107.2") == ("tgt", "107.2")
    assert split_key_value("BLWR:on") == ("blwr", "on")
    assert split_key_value("NORM") is None
    assert split_key_value("PID:") is None
    assert split_key_value(":5") is None


def test_celsius_to_fahrenheit() -> None:
    assert celsius_to_fahrenheit(0.0) == 32.0
    assert celsius_to_fahrenheit(100.0) == 212.0
    assert celsius_to_fahrenheit(-40.0) == -40.0
