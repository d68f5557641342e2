from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from kappa.core.config import settings
from kappa.v2.client import KappaClient
from kappa.v2.stream import Stream
from kappa.v2.video import Video


@contextmanager
def client_scope() -> Iterator[KappaClient]:
    """
    Context-managed client for CLI commands.
    Configures logging from settings and always closes the HTTP pool.
    """
    logging.basicConfig(level=settings.log_level.upper())
    client = KappaClient.from_settings(settings)
    try:
        yield client
    finally:
        client.close()


def format_stream(stream: Stream) -> str:
    channel = stream.channel.display_name if stream.channel else stream.name
    viewers = stream.viewer_count or 0
    return f"{stream.name}\t{viewers} viewers\t{stream.game_name or '-'}\t{channel}"


def format_video(video: Video) -> str:
    recorded = video.recorded_at.isoformat() if video.recorded_at else "-"
    return f"{video.id}\t{video.view_count or 0} views\t{recorded}\t{video.title or ''}"
