"""Tests for request parameter models and response parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pymusic.models import (
    HotCommentsParams,
    KeyedResponse,
    MvDetail,
    MvParams,
    MvUrls,
    SearchByTypeParams,
    SongUrlsParams,
    UserSonglistParams,
)

# ------------------------------------------------------------------
# Request params
# ------------------------------------------------------------------


class TestParams:
    def test_to_query_drops_none(self) -> None:
        assert MvParams(vids=" v001 ").to_query() == {"vids": "v001"}
        assert MvParams(vids="v001", cookie="uin=1").to_query() == {"vids": "v001", "cookie": "uin=1"}

    def test_paging_defaults(self) -> None:
        assert HotCommentsParams(biz_id="1").to_query() == {"biz_id": "1", "page_num": "1", "page_size": "10"}
        assert SearchByTypeParams(keyword="a").to_query() == {
            "keyword": "a",
            "type": 1,
            "page_num": "1",
            "page_size": "20",
        }

    def test_paging_ints_become_strings(self) -> None:
        params = HotCommentsParams(biz_id="1", page_num=3, page_size=50)
        assert (params.page_num, params.page_size) == ("3", "50")

    @pytest.mark.parametrize("page_num", [0, -1])
    def test_paging_rejects_non_positive(self, page_num: int) -> None:
        with pytest.raises(ValidationError):
            HotCommentsParams(biz_id="1", page_num=page_num)

    @pytest.mark.parametrize("vids", ["", "   "])
    def test_identifiers_must_be_non_empty(self, vids: str) -> None:
        with pytest.raises(ValidationError):
            MvParams(vids=vids)

    def test_id_list_is_comma_joined(self) -> None:
        assert SongUrlsParams(id=["a", " b ", ""]).id == "a,b"
        with pytest.raises(ValidationError):
            SongUrlsParams(id=[])

    def test_numeric_uin(self) -> None:
        assert UserSonglistParams(uin=10001).uin == "10001"

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MvParams(vids="v001", quality="40")  # type: ignore[call-arg]


# ------------------------------------------------------------------
# Keyed responses
# ------------------------------------------------------------------


class TestKeyedResponse:
    @pytest.mark.parametrize("data", [None, []])
    def test_empty_data_becomes_mapping(self, data: object) -> None:
        response = KeyedResponse[MvDetail].model_validate({"code": 0, "data": data})
        assert response.data == {}

    def test_entries_are_parsed_and_nulls_kept(self) -> None:
        response = KeyedResponse[MvDetail].model_validate(
            {"code": 0, "message": None, "data": {"v001": {"vid": "v001"}, "v002": None}, "timestamp": 5}
        )
        assert isinstance(response.data["v001"], MvDetail)
        assert response.data["v002"] is None
        assert response.message == ""
        assert response.timestamp == 5


# ------------------------------------------------------------------
# MV entities
# ------------------------------------------------------------------


class TestMvDetail:
    def test_aliases_and_blank_values(self) -> None:
        detail = MvDetail.model_validate(
            {
                "vid": "v001",
                "title": "Live",
                "desc": "   ",
                "picurl": "http://img/1.jpg",
                "interval": 200,
                "playcnt": "1024",
                "singer": [{"mid": "s1", "name": "A"}, {"name": "B"}],
                "extra": {"kept": True},
            }
        )
        assert detail.name == "Live"
        assert detail.desc == ""
        assert detail.cover_pic == "http://img/1.jpg"
        assert detail.duration == 200
        assert detail.play_count == 1024
        assert [singer.name for singer in detail.singers] == ["A", "B"]
        assert detail.raw["extra"] == {"kept": True}

    def test_frozen(self) -> None:
        detail = MvDetail(vid="v001")
        with pytest.raises(ValidationError):
            detail.name = "x"  # type: ignore[misc]


class TestMvUrls:
    def test_rows_are_normalized(self) -> None:
        urls = MvUrls.model_validate(
            {"mp4": {10: "http://cdn/10.mp4", "20": "", "30": None, "40": 5}, "hls": "unexpected"}
        )
        assert urls.mp4 == {"10": "http://cdn/10.mp4", "20": None, "30": None, "40": None}
        assert urls.hls == {}
        assert urls.variants == {"mp4": urls.mp4, "hls": {}}

    def test_missing_formats_default_empty(self) -> None:
        urls = MvUrls.model_validate({})
        assert urls.mp4 == {} and urls.hls == {}
