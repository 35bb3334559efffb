"""Internal constants shared across the library."""

USER_AGENT = "pymusic/aiohttp"
DEFAULT_TIMEOUT: float = 10.0

#: Envelope ``code`` values that mean success.
SUCCESS_CODES: frozenset[int] = frozenset({0, 200})

# ------------------------------------------------------------------
# Endpoint paths
# ------------------------------------------------------------------

HOT_COMMENTS_ENDPOINT = "/comment/getHotComments"
SEARCH_COMPLETE_ENDPOINT = "/search/complete"
SEARCH_BY_TYPE_ENDPOINT = "/search/searchByType"
SONG_URLS_ENDPOINT = "/song/getSongUrls"
LYRIC_ENDPOINT = "/lyric/getLyric"
USER_SONGLIST_ENDPOINT = "/user/getCreatedSonglist"
SONGLIST_ENDPOINT = "/songlist/getSonglist"
TOP_CATEGORY_ENDPOINT = "/top/getTopCategory"
TOP_DETAIL_ENDPOINT = "/top/getDetail"
MV_DETAIL_ENDPOINT = "/mv/getDetail"
MV_URLS_ENDPOINT = "/mv/getMvUrls"
QRCODE_START_ENDPOINT = "/api/qrcode/start"
QRCODE_SUBSCRIBE_ENDPOINT = "/api/qrcode/subscribe"
