"""Exporter configuration for pystoker."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from pystoker._constants import (
    DEFAULT_DIAL_TIMEOUT,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_LISTEN,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_RECONNECT_BACKOFF,
    DEFAULT_STREAM_PORT,
)
from pystoker.exceptions import StokerConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def split_host_port(value: str, default_port: int) -> tuple[str, int]:
    """Split ``host[:port]``; IPv6 literals must be bracketed."""
    text = value.strip()
    if not text:
        raise StokerConfigError("address is empty")

    if text.startswith("["):
        host, _, rest = text[1:].partition("]")
        port_text = rest[1:] if rest.startswith(":") else ""
    else:
        host, sep, port_text = text.rpartition(":")
        if not sep:
            host, port_text = text, ""

    if not port_text:
        return host, default_port
    if not port_text.isdigit():
        raise StokerConfigError(f"invalid port in address {value!r}")
    return host, int(port_text)


class IngestionMode(StrEnum):
    STREAM = "stream"
    POLL = "poll"


@dataclasses.dataclass(frozen=True)
class StokerConfig:
    """Exporter configuration.

    Exactly one of ``address`` (telnet streaming) or ``url`` (JSON polling)
    must be set; it selects the ingestion mode.

    Parameters
    ----------
    address : str or None
        Stoker telnet address as ``host[:port]`` (port defaults to 23).
    url : str or None
        URL of the Stoker JSON endpoint, e.g. ``http://stoker/stoker.json``.
    listen : str
        ``host:port`` the metrics server binds to.
    poll_interval : float
        Seconds between JSON fetches.
    fetch_timeout : float
        Upper bound for one JSON fetch in seconds.
    dial_timeout : float
        Upper bound for opening the telnet connection in seconds.
    read_timeout : float
        Seconds of silence on the telnet stream before reconnecting.
    reconnect_backoff : float
        Fixed delay between telnet reconnect attempts.
    fahrenheit : bool
        Export temperatures in °F instead of °C.
    log_level : str
        Root log level name.
    """

    address: str | None = None
    url: str | None = None
    listen: str = DEFAULT_LISTEN
    poll_interval: float = DEFAULT_POLL_INTERVAL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    dial_timeout: float = DEFAULT_DIAL_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    reconnect_backoff: float = DEFAULT_RECONNECT_BACKOFF
    fahrenheit: bool = False
    log_level: str = "INFO"

    @property
    def mode(self) -> IngestionMode:
        return IngestionMode.POLL if self.url else IngestionMode.STREAM

    @property
    def stream_target(self) -> tuple[str, int]:
        if not self.address:
            raise StokerConfigError("no telnet address configured")
        return split_host_port(self.address, DEFAULT_STREAM_PORT)

    @property
    def listen_target(self) -> tuple[str, int]:
        host, port = split_host_port(self.listen, 0)
        return host or "0.0.0.0", port

    def validate(self) -> None:
        """Raise :class:`StokerConfigError` listing every problem found."""
        errors: list[str] = []

        if bool(self.address) == bool(self.url):
            errors.append("set exactly one of a telnet address or a JSON url")
        if self.url and not self.url.startswith(("http://", "https://")):
            errors.append(f"url must be http(s), got {self.url!r}")
        if self.address:
            try:
                host, port = self.stream_target
            except StokerConfigError as exc:
                errors.append(str(exc))
            else:
                if not host or not 1 <= port <= 65535:
                    errors.append(f"invalid telnet address {self.address!r}")
        try:
            _, listen_port = self.listen_target
        except StokerConfigError as exc:
            errors.append(str(exc))
        else:
            if not 1 <= listen_port <= 65535:
                errors.append(f"listen address needs a port between 1 and 65535, got {self.listen!r}")

        for field_name in ("poll_interval", "fetch_timeout", "dial_timeout", "read_timeout"):
            value = getattr(self, field_name)
            if value <= 0:
                errors.append(f"{field_name} must be > 0, got {value}")
        if self.reconnect_backoff < 0:
            errors.append(f"reconnect_backoff must be >= 0, got {self.reconnect_backoff}")

        if errors:
            raise StokerConfigError("Configuration errors:\n  " + "\n  ".join(errors))

    @classmethod
    def from_env(cls, **overrides: Any) -> StokerConfig:
        """Create configuration from ``STOKER_*`` environment variables.

        Explicit keyword arguments override environment values; ``None``
        overrides are ignored so unset CLI flags fall through.

        Raises
        ------
        StokerConfigError
            When a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "STOKER_ADDRESS": "address",
            "STOKER_URL": "url",
            "STOKER_LISTEN": "listen",
            "STOKER_LOG_LEVEL": "log_level",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val.strip()

        _ENV_FLOAT_MAP = {
            "STOKER_POLL_INTERVAL": "poll_interval",
            "STOKER_FETCH_TIMEOUT": "fetch_timeout",
            "STOKER_DIAL_TIMEOUT": "dial_timeout",
            "STOKER_READ_TIMEOUT": "read_timeout",
            "STOKER_RECONNECT_BACKOFF": "reconnect_backoff",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise StokerConfigError(f"{env_key} must be a number, got {val!r}") from exc

        config_kwargs["fahrenheit"] = _env_bool(env.get("STOKER_FAHRENHEIT"), False)

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config_kwargs)
