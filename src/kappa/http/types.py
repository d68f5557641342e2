from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

Json = dict[str, Any]


class Transport(Protocol):
    """
    Everything above the wire depends on this, not on httpx.

    A transport performs exactly one GET per call. It raises ResourceNotFound
    on HTTP 404 and TransportError on every other failure.
    """

    def get_json(self, path: str, *, params: Mapping[str, Any] | None = None) -> Json:
        ...
