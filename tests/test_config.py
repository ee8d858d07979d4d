from __future__ import annotations

import pytest

from pystoker.cli import load_config
from pystoker.config import IngestionMode, StokerConfig, split_host_port
from pystoker.exceptions import StokerConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "STOKER_ADDRESS",
        "STOKER_URL",
        "STOKER_LISTEN",
        "STOKER_POLL_INTERVAL",
        "STOKER_FETCH_TIMEOUT",
        "STOKER_DIAL_TIMEOUT",
        "STOKER_READ_TIMEOUT",
        "STOKER_RECONNECT_BACKOFF",
        "STOKER_FAHRENHEIT",
        "STOKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("192.168.1.103", ("192.168.1.103", 23)),
        ("192.168.1.103:2323", ("192.168.1.103", 2323)),
        ("stoker.lan", ("stoker.lan", 23)),
        (":9190", ("", 9190)),
        ("[::1]:9190", ("::1", 9190)),
        ("[::1]", ("::1", 23)),
    ],
)
def test_split_host_port(value: str, expected: tuple[str, int]) -> None:
    assert split_host_port(value, 23) == expected


def test_split_host_port_rejects_bad_port() -> None:
    with pytest.raises(StokerConfigError):
        split_host_port("stoker:telnet", 23)


def test_defaults_for_stream_mode() -> None:
    config = StokerConfig(address="192.168.1.103")
    config.validate()

    assert config.mode == IngestionMode.STREAM
    assert config.stream_target == ("192.168.1.103", 23)
    assert config.listen_target == ("0.0.0.0", 9190)
    assert config.reconnect_backoff == 1.0
    assert config.dial_timeout == 10.0
    assert config.fetch_timeout == 10.0


def test_url_selects_poll_mode() -> None:
    config = StokerConfig(url="http://stoker/stoker.json")
    config.validate()

    assert config.mode == IngestionMode.POLL


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"address": "stoker", "url": "http://stoker/stoker.json"},
        {"url": "ftp://stoker/stoker.json"},
        {"address": "stoker:99999"},
        {"address": "stoker", "listen": "0.0.0.0"},
        {"address": "stoker", "poll_interval": 0},
        {"address": "stoker", "reconnect_backoff": -1},
    ],
)
def test_invalid_configuration(kwargs: dict) -> None:
    with pytest.raises(StokerConfigError):
        StokerConfig(**kwargs).validate()


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOKER_URL", "http://stoker/stoker.json")
    monkeypatch.setenv("STOKER_POLL_INTERVAL", "5")
    monkeypatch.setenv("STOKER_FAHRENHEIT", "yes")
    monkeypatch.setenv("STOKER_LISTEN", "127.0.0.1:9999")

    config = StokerConfig.from_env()

    assert config.url == "http://stoker/stoker.json"
    assert config.poll_interval == 5.0
    assert config.fahrenheit is True
    assert config.listen_target == ("127.0.0.1", 9999)


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOKER_POLL_INTERVAL", "often")

    with pytest.raises(StokerConfigError):
        StokerConfig.from_env()


def test_from_env_ignores_none_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOKER_ADDRESS", "stoker")

    config = StokerConfig.from_env(address=None, listen=None)

    assert config.address == "stoker"


def test_cli_flag_replaces_env_source(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOKER_ADDRESS", "stoker")

    config, verbose = load_config(["--url", "http://stoker/stoker.json", "--poll-interval", "3", "-v"])

    assert config.mode == IngestionMode.POLL
    assert config.poll_interval == 3.0
    assert verbose is True


def test_cli_requires_a_source() -> None:
    with pytest.raises(StokerConfigError):
        load_config([])
