"""Telnet streaming ingestion.

The Stoker pushes one line per probe about once a second on its telnet
port. This loop keeps a connection open, feeds every line through
:func:`pystoker.ingestion.apply.apply_line`, and reconnects after a fixed
backoff whenever the connection fails. It retries forever; only the
shutdown event stops it.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from pystoker._constants import DEFAULT_DIAL_TIMEOUT, DEFAULT_READ_TIMEOUT, DEFAULT_RECONNECT_BACKOFF
from pystoker.ingestion.apply import apply_line
from pystoker.ingestion.base import wait_or_shutdown
from pystoker.models.reading import FailureCategory
from pystoker.state.store import StateStore

_logger = logging.getLogger(__name__)

# Lines are ~150 bytes; anything past this is garbage on the wire.
_LINE_LIMIT = 4096


class StreamIngestor:
    """Reconnecting reader for the Stoker telnet stream."""

    def __init__(
        self,
        store: StateStore,
        host: str,
        port: int,
        *,
        dial_timeout: float = DEFAULT_DIAL_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        reconnect_backoff: float = DEFAULT_RECONNECT_BACKOFF,
    ) -> None:
        self._store = store
        self._host = host
        self._port = port
        self._dial_timeout = dial_timeout
        self._read_timeout = read_timeout
        self._reconnect_backoff = reconnect_backoff

    async def _connect(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter] | None:
        try:
            return await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port, limit=_LINE_LIMIT),
                timeout=self._dial_timeout,
            )
        except (OSError, TimeoutError) as exc:
            self._store.record_failure(FailureCategory.DIAL)
            _logger.warning("Cannot connect to stoker at %s:%s: %s", self._host, self._port, exc or type(exc).__name__)
            return None

    async def _read_lines(self, reader: asyncio.StreamReader, shutdown: asyncio.Event) -> None:
        """Consume lines until the connection breaks or shutdown is set."""
        while not shutdown.is_set():
            try:
                raw = await asyncio.wait_for(reader.readline(), timeout=self._read_timeout)
            except TimeoutError:
                self._store.record_failure(FailureCategory.READ_LINE)
                _logger.warning("No data from stoker for %.0fs; reconnecting", self._read_timeout)
                return
            except (OSError, ValueError, asyncio.LimitOverrunError, asyncio.IncompleteReadError) as exc:
                self._store.record_failure(FailureCategory.READ_LINE)
                _logger.warning("Error reading from stoker: %s", exc)
                return

            if not raw:
                self._store.record_failure(FailureCategory.READ_LINE)
                _logger.warning("Stoker closed the connection")
                return

            apply_line(self._store, raw.decode("ascii", errors="replace"))

    async def run(self, shutdown: asyncio.Event) -> None:
        """Read the stream until *shutdown* is set."""
        _logger.info("Streaming from stoker at %s:%s", self._host, self._port)
        while not shutdown.is_set():
            connection = await self._connect()
            if connection is not None:
                reader, writer = connection
                _logger.info("Connected to stoker at %s:%s", self._host, self._port)
                try:
                    await self._read_lines(reader, shutdown)
                finally:
                    writer.close()
                    with contextlib.suppress(OSError):
                        await writer.wait_closed()

            if await wait_or_shutdown(shutdown, self._reconnect_backoff):
                break
        _logger.info("Stream ingestion stopped")
