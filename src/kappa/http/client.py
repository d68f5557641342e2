from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from .errors import MalformedResponseError, RateLimitedError, ResourceNotFound, TransportError
from .types import Json

logger = logging.getLogger(__name__)


@dataclass
class HttpTransport:
    """
    Kraken HTTP transport.

    - Uses a single underlying httpx.Client for connection pooling.
    - GET only; every call is one request, no retries.
    - HTTP 404 raises ResourceNotFound, everything else that is not a JSON
      object raises TransportError.
    """

    base_url: str
    client_id: str | None = None
    api_version: int = 2
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        headers = {"Accept": f"application/vnd.twitchtv.v{self.api_version}+json"}
        if self.client_id:
            headers["Client-ID"] = self.client_id
        headers.update(self.headers)

        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=headers,
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_json(self, path: str, *, params: Mapping[str, Any] | None = None) -> Json:
        """
        Perform a GET and return the parsed JSON object.
        Raises ResourceNotFound on HTTP 404 and TransportError (including
        RateLimitedError / MalformedResponseError) on any other failure.
        """
        url = path.lstrip("/")
        logger.debug("GET %s params=%s", url, dict(params or {}))

        try:
            resp = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(str(e), path=url) from e

        if resp.status_code == 404:
            raise ResourceNotFound(url)

        if resp.status_code == 429:
            raise RateLimitedError(
                "Server rate limited the request (HTTP 429).", path=url, status_code=429
            )

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"HTTP {resp.status_code} for GET {resp.request.url}",
                path=url,
                status_code=resp.status_code,
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Response was not valid JSON.", path=url, status_code=resp.status_code
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected JSON object, got {type(data)}", path=url, status_code=resp.status_code
            )

        return data
