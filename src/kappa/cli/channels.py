from __future__ import annotations

import typer

from kappa.cli.common import client_scope

app = typer.Typer(help="Channels.")


@app.command("get")
def get_channel_cmd(name: str = typer.Argument(..., help="Channel name.")) -> None:
    """Show a channel; exits 1 when it does not exist."""

    with client_scope() as client:
        channel = client.get_channel(name)

        if channel is None:
            typer.echo(f"Channel {name} not found.")
            raise typer.Exit(code=1)

        typer.echo(
            " ".join(
                [
                    f"{channel.display_name} ({channel.name}):",
                    f"status={channel.status!r}",
                    f"game={channel.game_name!r}",
                    f"followers={channel.followers}",
                    f"views={channel.views}",
                ]
            )
        )
