from __future__ import annotations

import typer

from kappa.cli.common import client_scope, format_stream

app = typer.Typer(help="Live streams.")


@app.command("get")
def get_stream_cmd(name: str = typer.Argument(..., help="Channel name of the stream.")) -> None:
    """Show a live stream; exits 1 when the channel is offline or unknown."""

    with client_scope() as client:
        stream = client.get_stream(name)

        if stream is None:
            typer.echo(f"{name} is not live.")
            raise typer.Exit(code=1)

        typer.echo(format_stream(stream))


@app.command("find")
def find_streams_cmd(
    game: str | None = typer.Option(None, "--game", help="Only streams playing this game."),
    channel: list[str] | None = typer.Option(
        None, "--channel", help="Only streams for these channels (repeatable)."
    ),
    limit: int | None = typer.Option(None, "--limit", help="Max streams to return."),
) -> None:
    """Find live streams by game and/or channel."""

    with client_scope() as client:
        streams = client.find_streams(game=game, channels=channel or None, limit=limit)

        for stream in streams:
            typer.echo(format_stream(stream))


@app.command("featured")
def featured_streams_cmd(
    limit: int | None = typer.Option(None, "--limit", help="Max streams to return."),
) -> None:
    """List currently featured streams."""

    with client_scope() as client:
        streams = client.featured_streams(limit=limit)

        for stream in streams:
            typer.echo(format_stream(stream))


@app.command("summary")
def stream_summary_cmd(
    game: str | None = typer.Option(None, "--game", help="Restrict totals to one game."),
) -> None:
    """Show live viewer and channel totals."""

    with client_scope() as client:
        summary = client.stream_summary(game=game)

        typer.echo(f"viewers={summary.viewer_count} channels={summary.channel_count}")
