"""File command implementation.

Shows the observed state of one filesystem entry.
"""

from typing import Annotated

import typer

from sysprobe.cli.types import OutputFormat, load_cli_config, render_results
from sysprobe.models.result import inspect_file
from sysprobe.system.context import System


def file_command(
    path: Annotated[
        str,
        typer.Argument(help="Path to inspect (may start with ~ or ~user)."),
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
    """Inspect a file and show every observed attribute.

    Examples:
        sysprobe file /etc/passwd
        sysprobe file ~/.bashrc --format json
    """
    system = System(load_cli_config())
    results = inspect_file(system.new_file(path))
    render_results(f"File: {path}", {"path": path}, results, output_format)
