"""Version command."""

import typer

from seisdm import __version__

app = typer.Typer()


@app.command()
def version() -> None:
    """Print the version of the CLI."""
    print(f"seisdm CLI Version {__version__}")
