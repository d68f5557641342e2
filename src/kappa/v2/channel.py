from __future__ import annotations

from datetime import datetime
from functools import partial
from typing import TYPE_CHECKING, Any

from kappa.core.dates import parse_optional_iso_z
from kappa.core.text import encode_path_segment
from kappa.http.errors import ResolutionError, ResourceNotFound
from kappa.http.types import Json, Transport
from kappa.v2.common import is_not_found_payload
from kappa.v2.proxy import LazyRecord, ProxyState

if TYPE_CHECKING:
    from kappa.v2.video import Video


def _fetch_channel_json(transport: Transport, name: str) -> Json:
    path = f"channels/{encode_path_segment(name)}"
    try:
        payload = transport.get_json(path)
    except ResourceNotFound as e:
        raise ResolutionError(f"Channel not found at {e.path}", name) from e

    if is_not_found_payload(payload) or "_id" not in payload:
        raise ResolutionError(f"Channel not found at {path}", name)
    return payload


class Channel:
    """
    A broadcaster's channel.

    Streams and videos embed a channel with only a few fields (name, display
    name). Reading one of those costs nothing; reading anything else fetches
    the full channel once and serves every field from it afterwards.
    """

    def __init__(self, fields: Json, *, transport: Transport, complete: bool = False) -> None:
        self._transport = transport
        name = fields.get("name")
        self._record = LazyRecord(
            fields,
            identity=name if isinstance(name, str) else None,
            fetch=partial(_fetch_channel_json, transport),
            complete=complete,
        )

    @classmethod
    def from_json(cls, data: Json, *, transport: Transport) -> Channel:
        """Decode a full channel document."""
        return cls(data, transport=transport, complete=True)

    @classmethod
    def embedded(cls, data: Json | None, *, transport: Transport) -> Channel:
        """Decode a channel fragment nested in another resource."""
        return cls(data or {}, transport=transport)

    @property
    def state(self) -> ProxyState:
        return self._record.state

    def is_loaded(self, attribute: str) -> bool:
        """True when reading `attribute` will not issue a request."""
        return self._record.has(_FIELDS.get(attribute, attribute))

    # Always part of the embedded form.

    @property
    def name(self) -> str:
        return self._record.get("name")

    @property
    def display_name(self) -> str:
        return self._record.get("display_name")

    # Possibly deferred.

    @property
    def id(self) -> int:
        return self._record.get("_id")

    @property
    def status(self) -> str | None:
        return self._record.get("status")

    @property
    def game_name(self) -> str | None:
        return self._record.get("game")

    @property
    def mature(self) -> bool | None:
        return self._record.get("mature")

    @property
    def url(self) -> str | None:
        return self._record.get("url")

    @property
    def logo_url(self) -> str | None:
        return self._record.get("logo")

    @property
    def banner_url(self) -> str | None:
        return self._record.get("banner")

    @property
    def video_banner_url(self) -> str | None:
        return self._record.get("video_banner")

    @property
    def background_url(self) -> str | None:
        return self._record.get("background")

    @property
    def created_at(self) -> datetime | None:
        return parse_optional_iso_z(self._record.get("created_at"))

    @property
    def updated_at(self) -> datetime | None:
        return parse_optional_iso_z(self._record.get("updated_at"))

    @property
    def views(self) -> int | None:
        return self._record.get("views")

    @property
    def followers(self) -> int | None:
        return self._record.get("followers")

    def videos(
        self, *, broadcasts: bool = False, limit: int | None = None, offset: int = 0
    ) -> list[Video]:
        """Videos recorded on this channel; highlights unless `broadcasts` is set."""
        from kappa.v2.video import channel_videos

        return channel_videos(
            self._transport, self, broadcasts=broadcasts, limit=limit, offset=offset
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Channel):
            return NotImplemented
        return self._record.identity == other._record.identity

    def __hash__(self) -> int:
        return hash(("channel", self._record.identity))

    def __repr__(self) -> str:
        return f"Channel(name={self._record.identity!r}, state={self.state.value})"


# attribute -> JSON key, for is_loaded()
_FIELDS = {
    "id": "_id",
    "game_name": "game",
    "logo_url": "logo",
    "banner_url": "banner",
    "video_banner_url": "video_banner",
    "background_url": "background",
}


def get_channel(transport: Transport, name: str) -> Channel | None:
    """Get a channel by name. Returns None when the channel does not exist."""

    path = f"channels/{encode_path_segment(name)}"
    try:
        payload = transport.get_json(path)
    except ResourceNotFound:
        return None

    if is_not_found_payload(payload) or "_id" not in payload:
        return None
    return Channel.from_json(payload, transport=transport)
