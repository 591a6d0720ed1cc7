"""Service command implementation.

Shows whether a systemd service is enabled and running.
"""

from typing import Annotated

import typer

from sysprobe.cli.types import OutputFormat, load_cli_config, render_results
from sysprobe.models.result import inspect_service
from sysprobe.system.context import System
from sysprobe.utils.formatting import print_error


def service_command(
    name: Annotated[
        str,
        typer.Argument(help="Service name without the .service suffix."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Inspect a systemd service.

    Examples:
        sysprobe service sshd
        sysprobe service nginx --format json
    """
    with System(load_cli_config()) as system:
        try:
            service = system.new_service(name)
        except OSError as e:
            print_error(f"Cannot connect to the service manager: {e}")
            raise typer.Exit(code=1) from e
        results = inspect_service(service)

    render_results(f"Service: {name}", {"service": name}, results, output_format)
