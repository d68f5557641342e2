from __future__ import annotations

import typer

from kappa.cli.channels import app as channels_app
from kappa.cli.games import app as games_app
from kappa.cli.streams import app as streams_app
from kappa.cli.videos import app as videos_app

app = typer.Typer(no_args_is_help=True)
app.add_typer(streams_app, name="streams")
app.add_typer(videos_app, name="videos")
app.add_typer(games_app, name="games")
app.add_typer(channels_app, name="channels")
