from __future__ import annotations

from urllib.parse import quote


def encode_path_segment(value: str) -> str:
    """Percent-encode a caller-supplied identifier for use as one URL path segment."""

    return quote(value.strip(), safe="")


def format_bool(value: bool) -> str:
    return "true" if value else "false"
