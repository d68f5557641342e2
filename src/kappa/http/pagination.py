from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from .errors import MalformedResponseError, ResourceNotFound, TransportError
from .types import Json, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest `limit` the server honours for one collection request.
MAX_PAGE_SIZE = 100


def page_size_for(limit: int | None, max_page_size: int = MAX_PAGE_SIZE) -> int:
    """Per-request `limit`: the caller's limit when it fits in one page, else the server max."""

    if limit is not None and 0 < limit < max_page_size:
        return limit
    return max_page_size


def is_exhausted(received: int, requested: int) -> bool:
    """
    Short page => exhaustion.

    The server signals the end of a collection only by returning fewer items
    than were asked for. A server that pads or truncates pages breaks this.
    """
    return received < requested


def _page_items(page: Json, json_key: str, *, path: str) -> list[Any]:
    items = page.get(json_key)
    if items is None:
        # Some endpoints omit the array entirely when there are no results.
        return []
    if not isinstance(items, list):
        raise MalformedResponseError(f"Expected {json_key!r} list, got {type(items)}", path=path)
    return items


def _unwrap(item: Any, sub_json_key: str | None, *, path: str) -> Json:
    if sub_json_key is not None:
        if not isinstance(item, dict) or not isinstance(item.get(sub_json_key), dict):
            raise MalformedResponseError(
                f"Expected {sub_json_key!r} object in page item, got {item!r}", path=path
            )
        item = item[sub_json_key]
    if not isinstance(item, dict):
        raise MalformedResponseError(f"Expected JSON object in page item, got {item!r}", path=path)
    return item


def _get_page(transport: Transport, path: str, params: Mapping[str, Any]) -> Json:
    try:
        return transport.get_json(path, params=params)
    except ResourceNotFound as e:
        # A collection that 404s is a failed run, not an empty one.
        raise TransportError(str(e), path=path, status_code=404) from e


def decode_item(decode: Callable[[Json], T], item: Json, *, path: str) -> T:
    """Decode one response object. A missing or mistyped field is a malformed response."""
    try:
        return decode(item)
    except MalformedResponseError as e:
        if e.path is None:
            raise MalformedResponseError(str(e), path=path, status_code=e.status_code) from e
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponseError(f"Could not decode item: {e!r}", path=path) from e


def accumulate(
    transport: Transport,
    path: str,
    *,
    json_key: str,
    decode: Callable[[Json], T],
    params: Mapping[str, Any] | None = None,
    limit: int | None = None,
    offset: int = 0,
    sub_json_key: str | None = None,
    max_page_size: int = MAX_PAGE_SIZE,
) -> list[T]:
    """Walk a paginated collection endpoint and return its decoded items in server order.

    `params` carries the caller's filters; `limit`/`offset` query parameters are
    owned by this function. A `limit` that is None or non-positive means "no
    explicit limit": pages are fetched until the server runs dry.

    Stops when `limit` items were collected, when `json_key` is missing or
    empty, or when a page comes back shorter than requested. Any transport
    failure aborts the run; items collected before it are discarded. A 404 on
    the collection itself and items that fail to decode surface as
    TransportError (MalformedResponseError for the latter).
    """
    target = limit if limit is not None and limit > 0 else 0
    page_size = page_size_for(target, max_page_size)
    base_params = {k: v for k, v in (params or {}).items() if k not in ("limit", "offset")}

    results: list[T] = []
    received_total = 0

    while True:
        page_params = {**base_params, "limit": page_size, "offset": offset + received_total}
        try:
            page = _get_page(transport, path, page_params)
        except TransportError:
            if results:
                logger.warning(
                    "GET %s failed at offset=%d; discarding %d accumulated items",
                    path,
                    offset + received_total,
                    len(results),
                )
            raise

        items = _page_items(page, json_key, path=path)
        logger.debug(
            "GET %s offset=%d limit=%d -> %d items",
            path,
            offset + received_total,
            page_size,
            len(items),
        )
        if not items:
            break

        for item in items:
            item = _unwrap(item, sub_json_key, path=path)
            results.append(decode_item(decode, item, path=path))
        received_total += len(items)

        if target and len(results) >= target:
            del results[target:]
            break

        if is_exhausted(len(items), page_size):
            break

    return results
