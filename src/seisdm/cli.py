"""Entrypoint to the seisdm command line interface (CLI)."""

import typer

from seisdm.commands import codec
from seisdm.commands import version

app = typer.Typer(no_args_is_help=True)
app.add_typer(codec.app)
app.add_typer(version.app)

# Click command for documentation tooling
cli = typer.main.get_command(app)
