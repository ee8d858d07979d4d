"""HTTP transport for the Stoker JSON endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pystoker.exceptions import StokerPayloadError, StokerTransportError
from pystoker.models.reading import FailureCategory

_logger = logging.getLogger(__name__)


def _excerpt(body: bytes) -> str:
    return body[:200].decode("utf-8", errors="replace")


class Transport(Protocol):
    """Structural transport interface used by the polling loop.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def fetch_json(self) -> Any:
        ...


class HttpTransport:
    """Fetches and decodes ``stoker.json`` with a bounded timeout."""

    def __init__(
        self,
        url: str,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float,
    ) -> None:
        self._url = url
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def url(self) -> str:
        return self._url

    async def fetch_json(self) -> Any:
        """GET the endpoint and return the decoded JSON document.

        1. Fail with :class:`StokerTransportError` on network errors,
           timeouts, or a non-200 status
        2. Fail with :class:`StokerPayloadError` when the body is not JSON
        """
        _logger.debug("GET %s", self._url)

        try:
            async with self._http.get(self._url, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    raise StokerTransportError(
                        f"HTTP {resp.status} from {self._url}: {_excerpt(body)}",
                        status_code=resp.status,
                        url=self._url,
                    )
        except StokerTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise StokerTransportError(f"Request to {self._url} timed out", url=self._url) from exc
        except aiohttp.ClientError as exc:
            raise StokerTransportError(f"Request to {self._url} failed: {exc}", url=self._url) from exc

        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StokerPayloadError(
                f"Invalid JSON from {self._url}: {_excerpt(body)}",
                category=FailureCategory.DECODE,
            ) from exc
