from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from functools import partial

from kappa.core.dates import parse_optional_iso_z
from kappa.core.text import encode_path_segment, format_bool
from kappa.http.errors import InvalidQueryError, ResourceNotFound
from kappa.http.pagination import accumulate, decode_item
from kappa.http.types import Json, Transport
from kappa.v2.channel import Channel
from kappa.v2.common import is_not_found_payload, name_of
from kappa.v2.game import Game


class Period(StrEnum):
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


def _period_value(period: str | Period) -> str:
    try:
        return Period(str(period).strip().lower()).value
    except ValueError as e:
        allowed = ", ".join(p.value for p in Period)
        raise InvalidQueryError(f"period must be one of {allowed}; got {period!r}") from e


@dataclass(frozen=True)
class Video:
    id: str
    title: str | None = field(default=None, compare=False)
    recorded_at: datetime | None = field(default=None, compare=False)
    url: str | None = field(default=None, compare=False)
    view_count: int | None = field(default=None, compare=False)
    description: str | None = field(default=None, compare=False)
    # seconds
    length: int | None = field(default=None, compare=False)
    game_name: str | None = field(default=None, compare=False)
    preview_url: str | None = field(default=None, compare=False)
    embed_html: str | None = field(default=None, compare=False, repr=False)
    channel: Channel | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_json(cls, data: Json, *, transport: Transport) -> Video:
        channel = data.get("channel")
        return cls(
            id=data["_id"],
            title=data.get("title"),
            recorded_at=parse_optional_iso_z(data.get("recorded_at")),
            url=data.get("url"),
            view_count=data.get("views"),
            description=data.get("description"),
            length=data.get("length"),
            game_name=data.get("game"),
            preview_url=data.get("preview"),
            embed_html=data.get("embed"),
            channel=(
                Channel.embedded(channel, transport=transport)
                if isinstance(channel, dict)
                else None
            ),
        )


def get_video(transport: Transport, video_id: str) -> Video | None:
    """Get a video by id (e.g. "a402689752"). Returns None when it does not exist."""

    path = f"videos/{encode_path_segment(video_id)}"
    try:
        payload = transport.get_json(path)
    except ResourceNotFound:
        return None

    if is_not_found_payload(payload) or "_id" not in payload:
        return None
    return decode_item(partial(Video.from_json, transport=transport), payload, path=path)


def top_videos(
    transport: Transport,
    *,
    game: str | Game | None = None,
    period: str | Period | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Video]:
    """Most viewed videos, optionally for one game and one time period (week, month, all).

    Raises InvalidQueryError before any request for an unknown period.
    """
    params: dict[str, str] = {}
    if game is not None:
        params["game"] = name_of(game, param="game")
    if period is not None:
        params["period"] = _period_value(period)

    return accumulate(
        transport,
        "videos/top",
        json_key="videos",
        decode=lambda item: Video.from_json(item, transport=transport),
        params=params,
        limit=limit,
        offset=offset,
    )


def channel_videos(
    transport: Transport,
    channel: str | Channel,
    *,
    broadcasts: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> list[Video]:
    """Videos recorded on a channel, newest first. Highlights unless `broadcasts` is set."""

    name = name_of(channel, param="channel")
    params: dict[str, str] = {}
    if broadcasts:
        params["broadcasts"] = format_bool(broadcasts)

    return accumulate(
        transport,
        f"channels/{encode_path_segment(name)}/videos",
        json_key="videos",
        decode=lambda item: Video.from_json(item, transport=transport),
        params=params,
        limit=limit,
        offset=offset,
    )
