from __future__ import annotations

import typer

from kappa.cli.common import client_scope

app = typer.Typer(help="Games directory.")


@app.command("top")
def top_games_cmd(
    limit: int | None = typer.Option(None, "--limit", help="Max games to return."),
) -> None:
    """List games by current viewer count."""

    with client_scope() as client:
        games = client.top_games(limit=limit)

        for game in games:
            viewers = game.viewer_count or 0
            typer.echo(f"{game.name}\t{viewers} viewers\t{game.channel_count or 0} channels")


@app.command("find")
def find_games_cmd(
    name: str = typer.Argument(..., help="Full or partial game name."),
    live: bool = typer.Option(False, "--live", help="Only games being streamed right now."),
) -> None:
    """Search games by name."""

    with client_scope() as client:
        games = client.find_games(name, live=live)

        for game in games:
            typer.echo(f"{game.id}\t{game.name}")
