"""aiohttp application serving ``/metrics``.

The application owns the ingestion task: it is started with the app and
stopped (shutdown event first, cancellation as a fallback) on cleanup.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

import aiohttp
from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from pystoker._transport import HttpTransport
from pystoker.config import IngestionMode, StokerConfig
from pystoker.export import SnapshotExporter, StokerCollector
from pystoker.ingestion.base import Ingestor
from pystoker.ingestion.poll import PollIngestor
from pystoker.ingestion.stream import StreamIngestor
from pystoker.state.store import StateStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", StateStore)
REGISTRY_KEY = web.AppKey("registry", CollectorRegistry)
CONFIG_KEY = web.AppKey("config", StokerConfig)

# Upper bound for the ingestion task to notice the shutdown event.
_STOP_GRACE_SECONDS = 5.0

_LANDING_PAGE = """<html>
<head><title>Stoker Exporter</title></head>
<body>
<h1>Stoker Exporter</h1>
<p><a href="/metrics">Metrics</a></p>
</body>
</html>
"""


def build_registry(store: StateStore, config: StokerConfig) -> CollectorRegistry:
    """Create a private registry holding the Stoker collector."""
    exporter = SnapshotExporter(
        store,
        include_poll_counters=config.mode == IngestionMode.POLL,
        fahrenheit=config.fahrenheit,
    )
    registry = CollectorRegistry()
    registry.register(StokerCollector(exporter))
    return registry


def build_ingestor(config: StokerConfig, store: StateStore, http_session: aiohttp.ClientSession) -> Ingestor:
    if config.mode == IngestionMode.POLL:
        assert config.url is not None  # noqa: S101
        transport = HttpTransport(config.url, http_session, timeout=config.fetch_timeout)
        return PollIngestor(store, transport, interval=config.poll_interval)
    host, port = config.stream_target
    return StreamIngestor(
        store,
        host,
        port,
        dial_timeout=config.dial_timeout,
        read_timeout=config.read_timeout,
        reconnect_backoff=config.reconnect_backoff,
    )


async def metrics_handler(request: web.Request) -> web.Response:
    body = generate_latest(request.app[REGISTRY_KEY])
    return web.Response(body=body, headers={"Content-Type": CONTENT_TYPE_LATEST})


async def index_handler(_request: web.Request) -> web.Response:
    return web.Response(text=_LANDING_PAGE, content_type="text/html")


async def _ingestion_ctx(app: web.Application) -> AsyncIterator[None]:
    config = app[CONFIG_KEY]
    shutdown = asyncio.Event()
    async with aiohttp.ClientSession() as http_session:
        ingestor = build_ingestor(config, app[STORE_KEY], http_session)
        task = asyncio.create_task(ingestor.run(shutdown), name="stoker-ingestion")
        try:
            yield
        finally:
            shutdown.set()
            try:
                await asyncio.wait_for(task, timeout=_STOP_GRACE_SECONDS)
            except TimeoutError:
                _logger.warning("Ingestion did not stop within %.0fs; cancelled", _STOP_GRACE_SECONDS)


def create_app(
    config: StokerConfig,
    *,
    store: StateStore | None = None,
    start_ingestion: bool = True,
) -> web.Application:
    """Build the exporter web application.

    ``start_ingestion=False`` serves an existing *store* without running a
    collector, which is what the tests do.
    """
    store = store if store is not None else StateStore()
    app = web.Application()
    app[CONFIG_KEY] = config
    app[STORE_KEY] = store
    app[REGISTRY_KEY] = build_registry(store, config)
    app.router.add_get("/", index_handler)
    app.router.add_get("/metrics", metrics_handler)
    if start_ingestion:
        app.cleanup_ctx.append(_ingestion_ctx)
    return app


def run(config: StokerConfig) -> None:
    """Serve metrics until interrupted. Bind failures propagate."""
    host, port = config.listen_target
    _logger.info("Listening on %s:%s (%s mode)", host, port, config.mode)
    web.run_app(create_app(config), host=host, port=port, print=None)
