"""Config command implementation.

Shows and initializes the sysprobe configuration file.
"""

from typing import Annotated

import typer

from sysprobe.cli.types import load_cli_config
from sysprobe.core.config import ConfigError, ProbeConfig, save_config
from sysprobe.core.paths import get_config_path
from sysprobe.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Show or initialize the configuration.",
    no_args_is_help=True,
)


@app.command("show")
def show() -> None:
    """Show the effective configuration."""
    config = load_cli_config()
    config_path = get_config_path()
    source = str(config_path) if config_path.exists() else "defaults"
    print_info(f"Configuration ({source}):")
    for key, value in config.model_dump().items():
        console.print(f"  {key} = {value!r}")


@app.command("init")
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)
    if config_path.exists():
        print_warning(f"Overwriting existing config: {config_path}")

    try:
        saved = save_config(ProbeConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
