from __future__ import annotations

from typing import Any

from kappa.http.errors import InvalidQueryError
from kappa.http.types import Json


def is_not_found_payload(payload: Json) -> bool:
    """Kraken sometimes answers 200 with an error body: {"status": 404, "error": "Not Found"}."""
    return payload.get("status") == 404


def name_of(value: Any, *, param: str) -> str:
    """Accept a plain name or any object exposing `.name` (Channel, Game)."""

    name = value if isinstance(value, str) else getattr(value, "name", None)
    if not isinstance(name, str) or not name.strip():
        raise InvalidQueryError(f"{param} must be a non-empty name, got {value!r}")
    return name.strip()
