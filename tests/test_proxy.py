from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest
from helpers import RecordingTransport, channel_json

from kappa.http.errors import ResolutionError, TransportError
from kappa.v2.channel import Channel, get_channel
from kappa.v2.proxy import LazyRecord, ProxyState


def _embedded(transport: RecordingTransport, name: str | None = "wcs_osl") -> Channel:
    fragment: dict[str, Any] = {"display_name": "WCS_OSL"}
    if name is not None:
        fragment["name"] = name
    return Channel.embedded(fragment, transport=transport)


def test_embedded_fields_cost_no_request() -> None:
    transport = RecordingTransport({"channels/wcs_osl": channel_json()})
    channel = _embedded(transport)

    assert channel.name == "wcs_osl"
    assert channel.display_name == "WCS_OSL"
    assert channel.is_loaded("display_name")
    assert not channel.is_loaded("status")
    assert channel.state is ProxyState.PARTIAL
    assert transport.calls == []


def test_missing_field_fetches_full_channel_once() -> None:
    transport = RecordingTransport({"channels/wcs_osl": channel_json()})
    channel = _embedded(transport)

    assert channel.status == "WCS Season 2 Korea"
    assert channel.followers == 54321
    assert channel.id == 27311131
    assert channel.created_at is not None
    assert channel.created_at.year == 2012

    assert transport.calls == [("channels/wcs_osl", {})]
    assert channel.state is ProxyState.FETCHED


def test_after_fetch_all_fields_come_from_full_document() -> None:
    full = channel_json()
    full["display_name"] = "WCS OSL (renamed)"
    transport = RecordingTransport({"channels/wcs_osl": full})
    channel = _embedded(transport)

    assert channel.display_name == "WCS_OSL"
    _ = channel.status
    assert channel.display_name == "WCS OSL (renamed)"
    assert channel.is_loaded("banner_url")


def test_repeated_access_never_refetches() -> None:
    transport = RecordingTransport({"channels/wcs_osl": channel_json()})
    channel = _embedded(transport)

    for _ in range(5):
        _ = channel.status
        _ = channel.logo_url
        _ = channel.views

    assert len(transport.calls) == 1


def test_not_found_raises_resolution_error_at_access() -> None:
    transport = RecordingTransport()
    channel = _embedded(transport, name="ghost")

    # Construction never fails.
    assert channel.display_name == "WCS_OSL"

    with pytest.raises(ResolutionError) as exc:
        _ = channel.status
    assert exc.value.identity == "ghost"
    assert channel.state is ProxyState.FAILED


def test_not_found_envelope_raises_resolution_error() -> None:
    envelope = {"error": "Not Found", "status": 404, "message": "Channel 'ghost' does not exist"}
    transport = RecordingTransport({"channels/ghost": envelope})
    channel = _embedded(transport, name="ghost")

    with pytest.raises(ResolutionError):
        _ = channel.mature


def test_missing_identity_raises_without_request() -> None:
    transport = RecordingTransport()
    channel = _embedded(transport, name=None)

    with pytest.raises(ResolutionError) as exc:
        _ = channel.status
    assert exc.value.identity is None
    assert transport.calls == []


def test_failed_fetch_is_final() -> None:
    transport = RecordingTransport({"channels/wcs_osl": TransportError("timed out", path="x")})
    channel = _embedded(transport)

    with pytest.raises(TransportError):
        _ = channel.status
    with pytest.raises(TransportError):
        _ = channel.status

    assert len(transport.calls) == 1
    # Embedded fields remain readable.
    assert channel.name == "wcs_osl"


def test_unexpected_fetch_error_is_final() -> None:
    transport = RecordingTransport({"channels/wcs_osl": RuntimeError("client closed")})
    channel = _embedded(transport)

    with pytest.raises(ResolutionError) as exc:
        _ = channel.status
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert exc.value.identity == "wcs_osl"

    with pytest.raises(ResolutionError):
        _ = channel.followers

    assert channel.state is ProxyState.FAILED
    assert len(transport.calls) == 1


def test_concurrent_first_access_fetches_once() -> None:
    workers = 8
    barrier = threading.Barrier(workers)

    def slow_channel(params: dict[str, Any]) -> dict[str, Any]:
        time.sleep(0.05)
        return channel_json()

    transport = RecordingTransport({"channels/wcs_osl": slow_channel})
    channel = _embedded(transport)

    def read_status() -> str | None:
        barrier.wait()
        return channel.status

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: read_status(), range(workers)))

    assert results == ["WCS Season 2 Korea"] * workers
    assert len(transport.calls) == 1


def test_lazy_record_complete_never_fetches() -> None:
    calls: list[str] = []

    def fetch(identity: str) -> dict[str, Any]:
        calls.append(identity)
        return {}

    record = LazyRecord({"name": "x"}, identity="x", fetch=fetch, complete=True)

    assert record.state is ProxyState.FETCHED
    assert record.get("status") is None
    assert calls == []


def test_get_channel_returns_fetched_channel() -> None:
    transport = RecordingTransport({"channels/wcs_osl": channel_json()})

    channel = get_channel(transport, "wcs_osl")

    assert channel is not None
    assert channel.state is ProxyState.FETCHED
    assert channel.status == "WCS Season 2 Korea"
    assert len(transport.calls) == 1


def test_get_channel_missing_returns_none() -> None:
    transport = RecordingTransport()

    assert get_channel(transport, "does_not_exist") is None


def test_channels_compare_by_name() -> None:
    transport = RecordingTransport()

    a = _embedded(transport)
    b = Channel.from_json(channel_json(), transport=transport)

    assert a == b
    assert len({a, b}) == 1
    assert transport.calls == []
