from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pytest

from pymusic.cancel import CancelToken
from pymusic.client import MusicClient
from pymusic.exceptions import MusicApiError, MusicError, MusicTransportError
from pymusic.models import MvDetail, MvFormat, MvParams, MvQuality

DETAIL = {"vid": "v001", "name": "Live at the Hall", "duration": "245", "singers": [{"mid": "s1", "name": "Singer"}]}
URLS = {"mp4": {"10": "http://cdn/10.mp4", "30": "http://cdn/30.mp4", "40": ""}, "hls": {"20": "http://cdn/20.m3u8"}}


@dataclass
class FakeMvBackend:
    detail_data: dict[str, Any] = field(default_factory=lambda: {"v001": DETAIL})
    urls_data: dict[str, Any] = field(default_factory=lambda: {"v001": URLS})
    failing_vids: set[str] = field(default_factory=set)
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        cancel_token: CancelToken | None = None,
    ) -> Any:
        assert method == "GET"
        query = dict(params or {})
        self.calls.append((path, query))
        if query.get("vids") in self.failing_vids:
            raise MusicTransportError("HTTP 502", status_code=502, url=path)
        if path == "/mv/getDetail":
            return {"code": 0, "message": "", "data": self.detail_data, "timestamp": 1700000000}
        if path == "/mv/getMvUrls":
            return {"code": 0, "message": "", "data": self.urls_data, "timestamp": 1700000000}
        if path == "/top/getTopCategory":
            return {"code": 1000, "message": "login required"}
        raise AssertionError(f"Unexpected endpoint: {path}")


@pytest.fixture
def backend() -> FakeMvBackend:
    return FakeMvBackend()


@pytest.mark.asyncio
async def test_mv_detail_by_requested_key(backend: FakeMvBackend) -> None:
    async with MusicClient(transport=backend) as client:
        resolution = await client.resolve_mv_detail("v001", cookie="uin=1")

    assert resolution is not None
    assert not resolution.degraded
    assert isinstance(resolution.value, MvDetail)
    assert resolution.value.name == "Live at the Hall"
    assert resolution.value.duration == 245
    assert resolution.value.singers[0].name == "Singer"
    assert backend.calls == [("/mv/getDetail", {"vids": "v001", "cookie": "uin=1"})]


@pytest.mark.asyncio
async def test_mv_detail_falls_back_to_first_key(
    backend: FakeMvBackend,
    caplog: pytest.LogCaptureFixture,
) -> None:
    backend.detail_data = {"v999": DETAIL}
    async with MusicClient(transport=backend) as client:
        with caplog.at_level(logging.WARNING):
            detail = await client.get_mv_detail("v001")
            resolution = await client.resolve_mv_detail("v001")

    assert detail is not None and detail.vid == "v001"
    assert resolution is not None and resolution.degraded and resolution.key == "v999"
    assert any("v999" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_empty_keyed_response_is_not_found(backend: FakeMvBackend) -> None:
    backend.detail_data = {}
    backend.urls_data = {}
    async with MusicClient(transport=backend) as client:
        assert await client.get_mv_detail("v001") is None
        assert await client.get_mv_urls("v001") is None
        assert await client.get_best_mv_play_url("v001") is None
        assert await client.get_available_mv_qualities("v001") == []
        assert await client.get_mv_full_info("v001") is None
        assert await client.validate_mv_id("v001") is False


@pytest.mark.asyncio
async def test_play_url_negotiation(backend: FakeMvBackend) -> None:
    async with MusicClient(transport=backend) as client:
        assert await client.get_mv_play_url("v001") == "http://cdn/30.mp4"
        assert await client.get_mv_play_url("v001", MvFormat.MP4, MvQuality.Q40) is None
        assert await client.get_best_mv_play_url("v001") == "http://cdn/30.mp4"
        assert await client.get_best_mv_play_url("v001", "hls") == "http://cdn/20.m3u8"
        assert await client.get_available_mv_qualities("v001") == ["30", "10"]


@pytest.mark.asyncio
async def test_full_info_combines_detail_and_urls(backend: FakeMvBackend) -> None:
    backend.urls_data = {"other": URLS}
    async with MusicClient(transport=backend) as client:
        info = await client.get_mv_full_info(MvParams(vids="v001"))

    assert info is not None
    assert info.detail.name == "Live at the Hall"
    assert info.best_url() == "http://cdn/30.mp4"
    assert info.url("hls", "20") == "http://cdn/20.m3u8"
    assert info.available_qualities("hls") == ["20"]
    assert info.notice is not None and "'other'" in info.notice
    assert {path for path, _ in backend.calls} == {"/mv/getDetail", "/mv/getMvUrls"}


@pytest.mark.asyncio
async def test_full_info_without_urls(backend: FakeMvBackend) -> None:
    backend.urls_data = {}
    async with MusicClient(transport=backend) as client:
        info = await client.get_mv_full_info("v001")

    assert info is not None
    assert info.urls is None
    assert info.best_url() is None
    assert info.available_qualities() == []


@pytest.mark.asyncio
async def test_batch_details_isolate_failures(backend: FakeMvBackend) -> None:
    backend.failing_vids = {"bad"}
    async with MusicClient(transport=backend) as client:
        items = await client.get_batch_mv_details(["v001", "bad"])

    assert [item.vids for item in items] == ["v001", "bad"]
    assert items[0].data is not None and items[0].data.vid == "v001"
    assert items[1].data is None


@pytest.mark.asyncio
async def test_validate_mv_id(backend: FakeMvBackend) -> None:
    backend.failing_vids = {"bad"}
    async with MusicClient(transport=backend) as client:
        assert await client.validate_mv_id("v001") is True
        assert await client.validate_mv_id("bad") is False


@pytest.mark.asyncio
async def test_transport_failure_propagates(backend: FakeMvBackend) -> None:
    backend.failing_vids = {"v001"}
    async with MusicClient(transport=backend) as client:
        with pytest.raises(MusicTransportError):
            await client.get_mv_detail("v001")


@pytest.mark.asyncio
async def test_non_success_envelope_raises_api_error(backend: FakeMvBackend) -> None:
    async with MusicClient(transport=backend) as client:
        with pytest.raises(MusicApiError, match="getTopCategory") as exc_info:
            await client.get_top_categories()

    assert exc_info.value.code == 1000
    assert exc_info.value.endpoint == "/top/getTopCategory"


@pytest.mark.asyncio
async def test_malformed_sibling_entry_is_dropped(backend: FakeMvBackend) -> None:
    backend.detail_data = {"v001": DETAIL, "v002": "junk"}
    backend.urls_data = {"junk": ["not", "a", "matrix"], "v003": URLS}
    async with MusicClient(transport=backend) as client:
        detail = await client.resolve_mv_detail("v001")
        missing = await client.resolve_mv_detail("v002")
        urls = await client.resolve_mv_urls("v001")

    assert detail is not None and not detail.degraded
    assert detail.value.name == "Live at the Hall"
    assert missing is not None and missing.key == "v001"
    assert urls is not None and urls.key == "v003"


@pytest.mark.asyncio
async def test_malformed_envelope_raises_transport_error(backend: FakeMvBackend) -> None:
    backend.detail_data = "not-a-mapping"  # type: ignore[assignment]
    async with MusicClient(transport=backend) as client:
        with pytest.raises(MusicTransportError, match="Unexpected payload"):
            await client.get_mv_detail("v001")


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = MusicClient()
    with pytest.raises(MusicError, match="not initialized"):
        await client.get_mv_detail("v001")


@pytest.mark.asyncio
async def test_request_raw_skips_envelope_check(backend: FakeMvBackend) -> None:
    async with MusicClient(transport=backend) as client:
        body = await client.request_raw("GET", "/top/getTopCategory")

    assert body == {"code": 1000, "message": "login required"}
