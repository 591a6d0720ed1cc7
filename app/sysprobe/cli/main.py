"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from sysprobe import __version__
from sysprobe.cli.commands import config, file, service
from sysprobe.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="sysprobe",
    help="Inspect the observed state of files and systemd services.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sysprobe version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """sysprobe - point-in-time inspection of files and services."""
    configure_logging(verbose)


# Register commands
app.command("file")(file.file_command)
app.command("service")(service.service_command)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
