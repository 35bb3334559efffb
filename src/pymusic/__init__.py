"""pymusic - Async Python client for a music-service HTTP API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymusic")
except PackageNotFoundError:
    __version__ = "0+local"
from pymusic._client.media import MvBatchItem, MvFullInfo
from pymusic.cancel import CancelToken
from pymusic.client import MusicClient
from pymusic.config import ApiSettings, MusicConfig
from pymusic.exceptions import (
    MusicApiError,
    MusicAuthenticationError,
    MusicCancelledError,
    MusicConfigError,
    MusicError,
    MusicRateLimitError,
    MusicTransportError,
)
from pymusic.facades import (
    CommentFacade,
    MvFacade,
    PlaylistFacade,
    SearchFacade,
    SongFacade,
    ToplistFacade,
)
from pymusic.keyed import KeyedEntry, KeyedResolution, resolve_by_key, resolve_first, resolve_keyed
from pymusic.models import (
    HotCommentsParams,
    KeyedResponse,
    LyricParams,
    MvDetail,
    MvFormat,
    MvParams,
    MvQuality,
    MvUrls,
    SearchByTypeParams,
    SearchCompleteParams,
    SonglistParams,
    SongUrlsParams,
    TopDetailParams,
    UserSonglistParams,
)
from pymusic.state import RequestCoordinator, RequestState
from pymusic.variants import (
    QUALITY_PRIORITY,
    get_best_variant_url,
    get_variant_url,
    list_available_variants,
)

__all__ = [
    "__version__",
    "QUALITY_PRIORITY",
    "ApiSettings",
    "CancelToken",
    "CommentFacade",
    "HotCommentsParams",
    "KeyedEntry",
    "KeyedResolution",
    "KeyedResponse",
    "LyricParams",
    "MusicApiError",
    "MusicAuthenticationError",
    "MusicCancelledError",
    "MusicClient",
    "MusicConfig",
    "MusicConfigError",
    "MusicError",
    "MusicRateLimitError",
    "MusicTransportError",
    "MvBatchItem",
    "MvDetail",
    "MvFacade",
    "MvFormat",
    "MvFullInfo",
    "MvParams",
    "MvQuality",
    "MvUrls",
    "PlaylistFacade",
    "RequestCoordinator",
    "RequestState",
    "SearchByTypeParams",
    "SearchCompleteParams",
    "SearchFacade",
    "SongFacade",
    "SongUrlsParams",
    "SonglistParams",
    "TopDetailParams",
    "ToplistFacade",
    "UserSonglistParams",
    "get_best_variant_url",
    "get_variant_url",
    "list_available_variants",
    "resolve_by_key",
    "resolve_first",
    "resolve_keyed",
]
