from kappa.http.client import HttpTransport
from kappa.http.errors import (
    InvalidQueryError,
    KappaError,
    MalformedResponseError,
    RateLimitedError,
    ResolutionError,
    ResourceNotFound,
    TransportError,
)
from kappa.http.pagination import MAX_PAGE_SIZE, accumulate
from kappa.http.types import Transport
from kappa.v2.channel import Channel
from kappa.v2.client import KappaClient
from kappa.v2.game import Game, Images
from kappa.v2.proxy import ProxyState
from kappa.v2.stream import Stream, StreamSummary
from kappa.v2.video import Period, Video

__all__ = [
    "MAX_PAGE_SIZE",
    "Channel",
    "Game",
    "HttpTransport",
    "Images",
    "InvalidQueryError",
    "KappaClient",
    "KappaError",
    "MalformedResponseError",
    "Period",
    "ProxyState",
    "RateLimitedError",
    "ResolutionError",
    "ResourceNotFound",
    "Stream",
    "StreamSummary",
    "Transport",
    "TransportError",
    "Video",
    "accumulate",
]
