from __future__ import annotations

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from pystoker._transport import HttpTransport
from pystoker.exceptions import StokerPayloadError, StokerTransportError
from pystoker.models.reading import FailureCategory


async def _ok(_request: web.Request) -> web.Response:
    return web.json_response({"stoker": {"sensors": [], "blowers": []}})


async def _error(_request: web.Request) -> web.Response:
    return web.Response(status=503, text="busy")


async def _garbage(_request: web.Request) -> web.Response:
    return web.Response(text="<html>not json</html>")


async def _not_utf8(_request: web.Request) -> web.Response:
    return web.Response(body=b'{"stoker": "\xff\xfe"}', content_type="application/json", charset="utf-8")


async def _slow(_request: web.Request) -> web.Response:
    await asyncio.sleep(1.0)
    return web.json_response({})


def _device() -> web.Application:
    app = web.Application()
    app.router.add_get("/ok", _ok)
    app.router.add_get("/error", _error)
    app.router.add_get("/garbage", _garbage)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/not-utf8", _not_utf8)
    return app


@pytest.mark.asyncio
async def test_fetch_json_decodes_body() -> None:
    async with TestServer(_device()) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(str(server.make_url("/ok")), session, timeout=2.0)
        assert await transport.fetch_json() == {"stoker": {"sensors": [], "blowers": []}}


@pytest.mark.asyncio
async def test_non_200_is_http_status_failure() -> None:
    async with TestServer(_device()) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(str(server.make_url("/error")), session, timeout=2.0)
        with pytest.raises(StokerTransportError) as excinfo:
            await transport.fetch_json()

    assert excinfo.value.status_code == 503
    assert excinfo.value.category == FailureCategory.HTTP_STATUS


@pytest.mark.asyncio
async def test_invalid_json_is_decode_failure() -> None:
    async with TestServer(_device()) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(str(server.make_url("/garbage")), session, timeout=2.0)
        with pytest.raises(StokerPayloadError) as excinfo:
            await transport.fetch_json()

    assert excinfo.value.category == FailureCategory.DECODE


@pytest.mark.asyncio
async def test_timeout_is_fetch_failure() -> None:
    async with TestServer(_device()) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(str(server.make_url("/slow")), session, timeout=0.1)
        with pytest.raises(StokerTransportError) as excinfo:
            await transport.fetch_json()

    assert excinfo.value.status_code is None
    assert excinfo.value.category == FailureCategory.FETCH


@pytest.mark.asyncio
async def test_connection_refused_is_fetch_failure() -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport("http://127.0.0.1:9/stoker.json", session, timeout=1.0)
        with pytest.raises(StokerTransportError) as excinfo:
            await transport.fetch_json()

    assert excinfo.value.category == FailureCategory.FETCH


@pytest.mark.asyncio
async def test_non_utf8_body_is_decode_failure() -> None:
    async with TestServer(_device()) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(str(server.make_url("/not-utf8")), session, timeout=2.0)
        with pytest.raises(StokerPayloadError) as excinfo:
            await transport.fetch_json()

    assert excinfo.value.category == FailureCategory.DECODE
