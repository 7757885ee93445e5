"""Main CLI entry point for twinbox."""

import typer
from typing_extensions import Annotated

from twinbox import __version__
from twinbox.cli import commands
from twinbox.logger import setup_logging

app = typer.Typer(
    name="twinbox",
    help="Configure two-sided mail synchronization accounts",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(commands.config.app, name="config")


@app.callback()
def main_callback(
    debug: Annotated[
        bool, typer.Option("--debug", help="Enable debug logging")
    ] = False,
):
    """Configure two-sided mail synchronization accounts."""
    setup_logging(debug=debug)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"twinbox version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
