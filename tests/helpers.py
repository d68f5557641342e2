from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from typing import Any

from kappa.http.errors import ResourceNotFound

Json = dict[str, Any]
Route = Json | Callable[[dict[str, Any]], Json] | BaseException


class RecordingTransport:
    """In-memory Transport: maps paths to canned payloads and records every call."""

    def __init__(self, routes: Mapping[str, Route] | None = None) -> None:
        self.routes: dict[str, Route] = dict(routes or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def get_json(self, path: str, *, params: Mapping[str, Any] | None = None) -> Json:
        p = dict(params or {})
        with self._lock:
            self.calls.append((path, p))

        route = self.routes.get(path)
        if route is None:
            raise ResourceNotFound(path)
        if isinstance(route, BaseException):
            raise route
        if callable(route):
            return route(p)
        return route

    def calls_to(self, path: str) -> list[dict[str, Any]]:
        return [params for p, params in self.calls if p == path]


def paged(items: list[Any], json_key: str) -> Callable[[dict[str, Any]], Json]:
    """Serve `items` the way a limit/offset collection endpoint does."""

    def handler(params: dict[str, Any]) -> Json:
        offset = int(params.get("offset", 0))
        limit = int(params.get("limit", 25))
        return {json_key: items[offset : offset + limit]}

    return handler


def stream_json(i: int, *, game: str = "StarCraft II") -> Json:
    return {
        "_id": 1000 + i,
        "name": f"live_user_{i}",
        "broadcaster": "obs",
        "game": game,
        "viewers": 50 + i,
        "preview": f"https://static.example/previews/live_user_{i}.jpg",
        "channel": {"name": f"user_{i}", "display_name": f"User{i}"},
    }


def video_json(i: int, *, game: str = "Super Meat Boy") -> Json:
    return {
        "_id": f"a{400000000 + i}",
        "title": f"Run #{i}",
        "recorded_at": "2013-06-09T01:43:15Z",
        "url": f"https://www.example.tv/wcs_osl/b/{400000000 + i}",
        "views": 1000 - i,
        "description": "Any% attempt",
        "length": 3600,
        "game": game,
        "preview": f"https://static.example/videos/{i}.jpg",
        "embed": "<object data='https://www.example.tv/widgets/archive_embed_player.swf'></object>",
        "channel": {"name": "wcs_osl", "display_name": "WCS_OSL"},
    }


def channel_json(name: str = "wcs_osl") -> Json:
    return {
        "_id": 27311131,
        "name": name,
        "display_name": name.upper(),
        "status": "WCS Season 2 Korea",
        "game": "StarCraft II: Heart of the Swarm",
        "mature": False,
        "url": f"https://www.example.tv/{name}",
        "logo": f"https://static.example/logos/{name}.png",
        "banner": None,
        "video_banner": None,
        "background": None,
        "created_at": "2012-01-17T02:24:55Z",
        "updated_at": "2013-06-10T04:12:05Z",
        "views": 12345678,
        "followers": 54321,
    }

