from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from kappa.core.config import Settings, settings
from kappa.http.client import HttpTransport
from kappa.http.types import Transport
from kappa.v2 import channel as _channel
from kappa.v2 import game as _game
from kappa.v2 import stream as _stream
from kappa.v2 import video as _video
from kappa.v2.channel import Channel
from kappa.v2.game import Game
from kappa.v2.stream import Stream, StreamSummary
from kappa.v2.video import Period, Video


class KappaClient:
    """Query surface bound to one transport.

    Every method is a thin wrapper over the module-level builder of the same
    name; the builders can also be called directly with any `Transport`.
    """

    def __init__(self, *, transport: Transport) -> None:
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        cfg: Settings | None = None,
        *,
        http_transport: httpx.BaseTransport | None = None,
    ) -> KappaClient:
        cfg = cfg or settings
        return cls(
            transport=HttpTransport(
                base_url=cfg.base_url,
                client_id=cfg.client_id,
                api_version=cfg.api_version,
                timeout_s=cfg.timeout_s,
                connect_timeout_s=cfg.connect_timeout_s,
                transport=http_transport,
            )
        )

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> KappaClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # streams

    def get_stream(self, name: str) -> Stream | None:
        return _stream.get_stream(self.transport, name)

    def find_streams(
        self,
        *,
        game: str | Game | None = None,
        channels: Sequence[str | Channel] | None = None,
        embeddable: bool | None = None,
        hls: bool | None = None,
        limit: int | None = None,
        offset: int = 0,
        **unrecognized: Any,
    ) -> list[Stream]:
        return _stream.find_streams(
            self.transport,
            game=game,
            channels=channels,
            embeddable=embeddable,
            hls=hls,
            limit=limit,
            offset=offset,
            **unrecognized,
        )

    def featured_streams(
        self, *, hls: bool | None = None, limit: int | None = None, offset: int = 0
    ) -> list[Stream]:
        return _stream.featured_streams(self.transport, hls=hls, limit=limit, offset=offset)

    def stream_summary(self, *, game: str | Game | None = None) -> StreamSummary:
        return _stream.stream_summary(self.transport, game=game)

    # videos

    def get_video(self, video_id: str) -> Video | None:
        return _video.get_video(self.transport, video_id)

    def top_videos(
        self,
        *,
        game: str | Game | None = None,
        period: str | Period | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Video]:
        return _video.top_videos(
            self.transport, game=game, period=period, limit=limit, offset=offset
        )

    def channel_videos(
        self,
        channel: str | Channel,
        *,
        broadcasts: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Video]:
        return _video.channel_videos(
            self.transport, channel, broadcasts=broadcasts, limit=limit, offset=offset
        )

    # channels

    def get_channel(self, name: str) -> Channel | None:
        return _channel.get_channel(self.transport, name)

    # games

    def top_games(
        self, *, hls: bool | None = None, limit: int | None = None, offset: int = 0
    ) -> list[Game]:
        return _game.top_games(self.transport, hls=hls, limit=limit, offset=offset)

    def find_games(self, name: str, *, live: bool = False) -> list[Game]:
        return _game.find_games(self.transport, name, live=live)

