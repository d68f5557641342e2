from __future__ import annotations

import typer

from kappa.cli.common import client_scope, format_video

app = typer.Typer(help="Recorded videos.")


@app.command("get")
def get_video_cmd(video_id: str = typer.Argument(..., help="Video id, e.g. a402689752.")) -> None:
    """Show one video; exits 1 when it does not exist."""

    with client_scope() as client:
        video = client.get_video(video_id)

        if video is None:
            typer.echo(f"Video {video_id} not found.")
            raise typer.Exit(code=1)

        typer.echo(format_video(video))
        if video.channel is not None:
            typer.echo(f"channel={video.channel.name} ({video.channel.display_name})")


@app.command("top")
def top_videos_cmd(
    game: str | None = typer.Option(None, "--game", help="Only videos of this game."),
    period: str | None = typer.Option(None, "--period", help="week, month or all."),
    limit: int | None = typer.Option(None, "--limit", help="Max videos to return."),
) -> None:
    """List the most viewed videos."""

    with client_scope() as client:
        videos = client.top_videos(game=game, period=period, limit=limit)

        for video in videos:
            typer.echo(format_video(video))


@app.command("channel")
def channel_videos_cmd(
    channel: str = typer.Argument(..., help="Channel name."),
    broadcasts: bool = typer.Option(
        False, "--broadcasts/--highlights", help="Past broadcasts instead of highlights."
    ),
    limit: int | None = typer.Option(None, "--limit", help="Max videos to return."),
) -> None:
    """List videos recorded on a channel."""

    with client_scope() as client:
        videos = client.channel_videos(channel, broadcasts=broadcasts, limit=limit)

        for video in videos:
            typer.echo(format_video(video))
