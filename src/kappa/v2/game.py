from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from kappa.core.text import format_bool
from kappa.http.errors import InvalidQueryError, MalformedResponseError
from kappa.http.pagination import accumulate, decode_item
from kappa.http.types import Json, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Images:
    """Box art or logo URLs in a few fixed sizes, plus a size template."""

    large: str | None = None
    medium: str | None = None
    small: str | None = None
    template: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> Images:
        if not isinstance(data, dict):
            return cls()
        return cls(
            large=data.get("large"),
            medium=data.get("medium"),
            small=data.get("small"),
            template=data.get("template"),
        )

    def url(self, width: int, height: int) -> str | None:
        if self.template is None:
            return None
        return self.template.replace("{width}", str(width)).replace("{height}", str(height))


@dataclass(frozen=True)
class Game:
    """
    A game as listed in the directory.

    `viewer_count`/`channel_count` are only known for games coming from
    `top_games`; `popularity` only for games coming from `find_games`.
    """

    id: int
    name: str = field(compare=False)
    giantbomb_id: int | None = field(default=None, compare=False)
    box_images: Images = field(default_factory=Images, compare=False)
    logo_images: Images = field(default_factory=Images, compare=False)
    viewer_count: int | None = field(default=None, compare=False)
    channel_count: int | None = field(default=None, compare=False)
    popularity: int | None = field(default=None, compare=False)

    @classmethod
    def from_json(cls, data: Json) -> Game:
        return cls(
            id=data["_id"],
            name=data["name"],
            giantbomb_id=data.get("giantbomb_id"),
            box_images=Images.from_json(data.get("box")),
            logo_images=Images.from_json(data.get("logo")),
            popularity=data.get("popularity"),
        )

    @classmethod
    def from_top_json(cls, data: Json) -> Game:
        """Decode one `games/top` entry: the game itself sits under `game`, counts beside it."""
        game = data["game"]
        return cls(
            id=game["_id"],
            name=game["name"],
            giantbomb_id=game.get("giantbomb_id"),
            box_images=Images.from_json(game.get("box")),
            logo_images=Images.from_json(game.get("logo")),
            viewer_count=data.get("viewers"),
            channel_count=data.get("channels"),
        )


def top_games(
    transport: Transport,
    *,
    hls: bool | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Game]:
    """Games sorted by current viewer count, most watched first."""

    params: dict[str, str] = {}
    if hls is not None:
        params["hls"] = format_bool(hls)

    return accumulate(
        transport,
        "games/top",
        json_key="top",
        decode=Game.from_top_json,
        params=params,
        limit=limit,
        offset=offset,
    )


def find_games(transport: Transport, name: str, *, live: bool = False) -> list[Game]:
    """
    Search games by (partial) name.

    Single request: the search endpoint is not paginated.
    """
    if not name or not name.strip():
        raise InvalidQueryError("find_games requires a non-empty name")

    params = {"q": name.strip(), "type": "suggest"}
    if live:
        params["live"] = format_bool(live)

    payload = transport.get_json("search/games", params=params)
    items = payload.get("games") or []
    if not isinstance(items, list):
        raise MalformedResponseError(
            f"Expected 'games' list, got {type(items)}", path="search/games"
        )

    games = [
        decode_item(Game.from_json, i, path="search/games") for i in items if isinstance(i, dict)
    ]
    logger.debug("search/games q=%r -> %d games", name, len(games))
    return games
