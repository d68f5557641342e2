from __future__ import annotations


class KappaError(RuntimeError):
    """Base exception for all client failures."""


class InvalidQueryError(KappaError, ValueError):
    """Caller-supplied filters failed validation. Raised before any request is made."""


class TransportError(KappaError):
    """HTTP/network failures (timeouts, connection errors, non-2xx other than 404, bad bodies)."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code


class RateLimitedError(TransportError):
    """Server throttled the request (HTTP 429)."""


class MalformedResponseError(TransportError):
    """Response body was not shaped the way the endpoint promises."""


class ResourceNotFound(KappaError):
    """The server answered HTTP 404 for the requested path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Resource not found: {path}")
        self.path = path


class ResolutionError(KappaError):
    """A lazily embedded resource could not be fetched by its identity."""

    def __init__(self, message: str, identity: str | None = None) -> None:
        super().__init__(f"{message} | identity={identity!r}")
        self.message = message
        self.identity = identity
