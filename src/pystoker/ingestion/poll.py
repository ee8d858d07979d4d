"""JSON polling ingestion.

Fetches the full controller state on a fixed interval. A successful fetch
replaces the snapshot wholesale; a failed one leaves the previous snapshot
in place so scrapes keep serving the last good values.
"""

from __future__ import annotations

import asyncio
import logging

from pystoker._constants import DEFAULT_POLL_INTERVAL
from pystoker._transport import Transport
from pystoker.exceptions import StokerPayloadError, StokerTransportError
from pystoker.ingestion.apply import apply_payload
from pystoker.ingestion.base import wait_or_shutdown
from pystoker.models.reading import FailureCategory
from pystoker.state.store import StateStore

_logger = logging.getLogger(__name__)


class PollIngestor:
    """Periodic fetch-and-replace loop for the Stoker JSON endpoint."""

    def __init__(
        self,
        store: StateStore,
        transport: Transport,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._store = store
        self._transport = transport
        self._interval = interval

    async def collect_once(self) -> bool:
        """Run one collection; return whether it succeeded.

        Always counts one attempt. Failures are counted and logged, never
        raised; anything unexpected is counted as ``fetch`` so the loop
        keeps running.
        """
        self._store.record_poll_attempt()
        try:
            payload = await self._transport.fetch_json()
            sensors = apply_payload(self._store, payload)
        except StokerTransportError as exc:
            self._store.record_poll_failure(exc.category)
            _logger.warning("Stoker fetch failed: %s", exc)
            return False
        except StokerPayloadError as exc:
            self._store.record_poll_failure(exc.category)
            _logger.warning("Stoker payload rejected (%s): %s", exc.category, exc)
            return False
        except Exception:
            self._store.record_poll_failure(FailureCategory.FETCH)
            _logger.exception("Unexpected error while polling stoker")
            return False

        _logger.debug("Collected %d sensors", sensors)
        return True

    async def run(self, shutdown: asyncio.Event) -> None:
        """Collect immediately, then once per interval until *shutdown* is set."""
        _logger.info("Polling stoker every %.1fs", self._interval)
        while not shutdown.is_set():
            await self.collect_once()
            if await wait_or_shutdown(shutdown, self._interval):
                break
        _logger.info("Poll ingestion stopped")
