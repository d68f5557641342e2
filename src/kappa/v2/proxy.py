from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from kappa.http.errors import KappaError, ResolutionError
from kappa.http.types import Json

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], Json]


class ProxyState(StrEnum):
    PARTIAL = "partial"
    FETCHING = "fetching"
    FETCHED = "fetched"
    FAILED = "failed"


class LazyRecord:
    """
    Field storage for a resource that may have been embedded only partially.

    Keys present in the embedded fragment are served from memory. The first
    read of a missing key fetches the full document exactly once (guarded by a
    per-instance lock); from then on every key is served from that document.
    The outcome of the fetch is final: a failure is remembered and re-raised
    on later reads without another request.
    """

    def __init__(
        self,
        fields: Mapping[str, Any],
        *,
        identity: str | None,
        fetch: FetchFn,
        complete: bool = False,
    ) -> None:
        self._fields = dict(fields)
        self._identity = identity
        self._fetch = fetch
        self._lock = threading.Lock()
        self._full: Json | None = dict(fields) if complete else None
        self._error: KappaError | None = None
        self._state = ProxyState.FETCHED if complete else ProxyState.PARTIAL

    @property
    def state(self) -> ProxyState:
        return self._state

    @property
    def identity(self) -> str | None:
        return self._identity

    def has(self, key: str) -> bool:
        """True when `key` can be read without I/O."""
        return self._full is not None or key in self._fields

    def get(self, key: str) -> Any:
        full = self._full
        if full is not None:
            return full.get(key)
        if key in self._fields:
            return self._fields[key]
        return self._resolve().get(key)

    def _resolve(self) -> Json:
        with self._lock:
            if self._full is not None:
                return self._full
            if self._error is not None:
                raise self._error

            self._state = ProxyState.FETCHING
            try:
                if not self._identity or not self._identity.strip():
                    raise ResolutionError(
                        "Embedded resource has no usable identity", self._identity
                    )
                logger.debug("Resolving embedded resource identity=%s", self._identity)
                full = dict(self._fetch(self._identity))
            except KappaError as e:
                self._fail(e)
                raise
            except Exception as e:
                err = ResolutionError(f"Fetching embedded resource failed: {e!r}", self._identity)
                self._fail(err)
                raise err from e

            self._full = full
            self._state = ProxyState.FETCHED
            return full

    def _fail(self, error: KappaError) -> None:
        self._error = error
        self._state = ProxyState.FAILED
        logger.debug("Resolving identity=%s failed: %s", self._identity, error)
