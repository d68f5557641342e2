from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def parse_iso_z(value: str) -> datetime:
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    dt = datetime.fromisoformat(v)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_optional_iso_z(value: Any) -> datetime | None:
    """
    Best-effort parser for Kraken timestamps ("2013-06-09T01:43:15Z").

    Returns None instead of raising on missing or unparseable input.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return parse_iso_z(value)
    except ValueError:
        return None
