"""Command-line interface."""

from seisdm.cli import app


def main() -> None:
    """Run the seisdm CLI."""
    app(prog_name="seisdm")


if __name__ == "__main__":
    main()
