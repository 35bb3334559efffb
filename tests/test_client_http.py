from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from pymusic.client import MusicClient
from pymusic.config import MusicConfig
from pymusic.exceptions import MusicAuthenticationError, MusicConfigError
from pymusic.facades import MvFacade
from pymusic.models import MvParams


class FakeApi:
    def __init__(self) -> None:
        self.seen: list[dict[str, Any]] = []

    async def mv_detail(self, request: web.Request) -> web.Response:
        self.seen.append({"query": dict(request.query), "cookie": request.headers.get("Cookie")})
        vids = request.query["vids"]
        return web.json_response({"code": 0, "data": {vids: {"vid": vids, "title": "Hall"}}})

    async def mv_urls(self, request: web.Request) -> web.Response:
        if not request.headers.get("Cookie"):
            return web.Response(status=401, text="login first")
        vids = request.query["vids"]
        return web.json_response(
            {"code": 0, "data": {vids: {"mp4": {"20": "http://cdn/20.mp4", "40": None}, "hls": []}}}
        )

    async def qrcode_start(self, request: web.Request) -> web.Response:
        return web.json_response({"code": 0, "data": {"qrcode": "data:image/png;base64,AAA", "key": "k1"}})

    async def qrcode_subscribe(self, request: web.Request) -> web.StreamResponse:
        response = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await response.prepare(request)
        await response.write(b": keep-alive\n\n")
        await response.write(b'data: {"status": "waiting"}\n\n')
        await response.write(b"event: status\ndata: scanned\n\n")
        await response.write(b'data: {"status": "done", "cookie": "uin=1"}\n\n')
        await response.write_eof()
        return response

    def app(self) -> web.Application:
        app = web.Application()
        app.add_routes(
            [
                web.get("/mv/getDetail", self.mv_detail),
                web.get("/mv/getMvUrls", self.mv_urls),
                web.get("/api/qrcode/start", self.qrcode_start),
                web.get("/api/qrcode/subscribe", self.qrcode_subscribe),
            ]
        )
        return app


@pytest_asyncio.fixture
async def api_server() -> Any:
    api = FakeApi()
    server = test_utils.TestServer(api.app())
    await server.start_server()
    try:
        yield api, str(server.make_url("/"))
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_base_url_set_after_construction(api_server: Any) -> None:
    api, base_url = api_server
    async with MusicClient() as client:
        with pytest.raises(MusicConfigError):
            await client.get_mv_detail("v001")

        client.set_base_url(base_url)
        detail = await client.get_mv_detail("v001", cookie="uin=9")

    assert detail is not None
    assert detail.name == "Hall"
    assert api.seen == [{"query": {"vids": "v001", "cookie": "uin=9"}, "cookie": None}]


@pytest.mark.asyncio
async def test_auth_applies_to_next_request(api_server: Any) -> None:
    _api, base_url = api_server
    async with MusicClient(MusicConfig(base_url=base_url)) as client:
        with pytest.raises(MusicAuthenticationError):
            await client.get_mv_urls("v001")

        client.set_auth(cookie="uin=1; qm_keyst=abc")
        assert await client.get_best_mv_play_url("v001") == "http://cdn/20.mp4"
        assert await client.get_available_mv_qualities("v001") == ["20"]
        assert await client.get_best_mv_play_url("v001", "hls") is None

        client.clear_auth()
        with pytest.raises(MusicAuthenticationError):
            await client.get_mv_urls("v001")


@pytest.mark.asyncio
async def test_facade_over_http_records_auth_error(api_server: Any) -> None:
    _api, base_url = api_server
    async with MusicClient(MusicConfig(base_url=base_url)) as client:
        mv = MvFacade(client)
        with pytest.raises(MusicAuthenticationError):
            await mv.get_mv_urls(MvParams(vids="v001"))

    assert isinstance(mv.urls.error, MusicAuthenticationError)
    assert mv.urls.error.status_code == 401


@pytest.mark.asyncio
async def test_qrcode_login_flow(api_server: Any) -> None:
    _api, base_url = api_server
    async with MusicClient(MusicConfig(base_url=base_url)) as client:
        started = await client.start_qrcode_login()
        events = [event async for event in client.subscribe_qrcode()]

    assert started["data"]["key"] == "k1"
    assert events == [{"status": "waiting"}, "scanned", {"status": "done", "cookie": "uin=1"}]


@pytest.mark.asyncio
async def test_qrcode_subscribe_needs_http_transport() -> None:
    class _NoStream:
        async def request(self, method: str, path: str, **kwargs: Any) -> Any:
            return None

    async with MusicClient(transport=_NoStream()) as client:
        with pytest.raises(MusicConfigError):
            async for _event in client.subscribe_qrcode():
                pass
