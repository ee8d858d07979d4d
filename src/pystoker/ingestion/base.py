"""Common contract for the two ingestion strategies."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Protocol


class Ingestor(Protocol):
    """Continuously feeds the state store until told to stop."""

    async def run(self, shutdown: asyncio.Event) -> None:
        ...


async def wait_or_shutdown(shutdown: asyncio.Event, delay: float) -> bool:
    """Sleep up to *delay* seconds; return ``True`` if shutdown was requested."""
    if shutdown.is_set():
        return True
    with contextlib.suppress(TimeoutError):
        await asyncio.wait_for(shutdown.wait(), timeout=delay)
    return shutdown.is_set()
