from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from kappa.core.text import encode_path_segment, format_bool
from kappa.http.errors import InvalidQueryError, ResourceNotFound
from kappa.http.pagination import accumulate, decode_item
from kappa.http.types import Json, Transport
from kappa.v2.channel import Channel
from kappa.v2.common import is_not_found_payload, name_of
from kappa.v2.game import Game

logger = logging.getLogger(__name__)

# Keys that narrow a /streams query. limit/offset are paging, not filters.
STREAM_FILTERS = frozenset({"game", "channels", "embeddable", "hls"})


@dataclass(frozen=True)
class Stream:
    """A live broadcast. Streams belong to a channel and only exist while it is live."""

    id: int
    name: str = field(compare=False)
    broadcaster: str | None = field(default=None, compare=False)
    game_name: str | None = field(default=None, compare=False)
    viewer_count: int | None = field(default=None, compare=False)
    preview_url: str | None = field(default=None, compare=False)
    # Embedded: name/display_name are free, other attributes cost one request.
    channel: Channel | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_json(cls, data: Json, *, transport: Transport) -> Stream:
        channel = data.get("channel")
        return cls(
            id=data["_id"],
            name=data["name"],
            broadcaster=data.get("broadcaster"),
            game_name=data.get("game"),
            viewer_count=data.get("viewers"),
            preview_url=data.get("preview"),
            channel=(
                Channel.embedded(channel, transport=transport)
                if isinstance(channel, dict)
                else None
            ),
        )


@dataclass(frozen=True)
class StreamSummary:
    viewer_count: int
    channel_count: int


def get_stream(transport: Transport, name: str) -> Stream | None:
    """Get a live stream by channel name. Returns None when it is offline or unknown."""

    path = f"streams/{encode_path_segment(name)}"
    try:
        payload = transport.get_json(path)
    except ResourceNotFound:
        return None

    stream = payload.get("stream")
    if is_not_found_payload(payload) or not isinstance(stream, dict):
        return None
    return decode_item(partial(Stream.from_json, transport=transport), stream, path=path)


def find_streams(
    transport: Transport,
    *,
    game: str | Game | None = None,
    channels: Sequence[str | Channel] | None = None,
    embeddable: bool | None = None,
    hls: bool | None = None,
    limit: int | None = None,
    offset: int = 0,
    **unrecognized: Any,
) -> list[Stream]:
    """Live streams for a game, for a set of channels, or by other criteria.

    At least one of `game`, `channels`, `embeddable`, `hls` is required;
    `limit`/`offset` alone are not a query. Channels that are not live are
    simply absent from the result. Unknown keyword filters are ignored.

    Raises InvalidQueryError before any request when no filter is given.
    """
    if unrecognized:
        logger.debug("find_streams ignoring unrecognized filters: %s", sorted(unrecognized))

    params: dict[str, str] = {}
    if game is not None:
        params["game"] = name_of(game, param="game")
    if channels:
        if isinstance(channels, str):
            raise InvalidQueryError("channels must be a sequence of names, not a single string")
        params["channel"] = ",".join(name_of(c, param="channels") for c in channels)
    if embeddable is not None:
        params["embeddable"] = format_bool(embeddable)
    if hls is not None:
        params["hls"] = format_bool(hls)

    if not params:
        raise InvalidQueryError(
            f"find_streams requires at least one filter of {sorted(STREAM_FILTERS)}"
        )

    return accumulate(
        transport,
        "streams",
        json_key="streams",
        decode=lambda item: Stream.from_json(item, transport=transport),
        params=params,
        limit=limit,
        offset=offset,
    )


def featured_streams(
    transport: Transport,
    *,
    hls: bool | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Stream]:
    """
    Currently featured (promoted) streams, as shown on the front page.
    There is no guarantee of how many streams are featured at any given time.
    """
    params: dict[str, str] = {}
    if hls is not None:
        params["hls"] = format_bool(hls)

    return accumulate(
        transport,
        "streams/featured",
        json_key="featured",
        sub_json_key="stream",
        decode=lambda item: Stream.from_json(item, transport=transport),
        params=params,
        limit=limit,
        offset=offset,
    )


def stream_summary(transport: Transport, *, game: str | Game | None = None) -> StreamSummary:
    """Site-wide (or per-game) totals of live viewers and live channels."""

    params: dict[str, str] = {}
    if game is not None:
        params["game"] = name_of(game, param="game")

    payload = transport.get_json("streams/summary", params=params)
    return StreamSummary(
        viewer_count=int(payload.get("viewers") or 0),
        channel_count=int(payload.get("channels") or 0),
    )
