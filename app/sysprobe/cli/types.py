"""Shared types and utilities for CLI commands."""

import json
from enum import Enum

import typer

from sysprobe.core.config import ConfigError, ProbeConfig, load_config_or_default
from sysprobe.models.result import QueryResult
from sysprobe.utils.formatting import (
    console,
    create_result_table,
    format_result_row,
    print_error,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def load_cli_config() -> ProbeConfig:
    """Load the user configuration or exit with an error message."""
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def results_to_dict(results: dict[str, QueryResult]) -> dict[str, dict[str, object]]:
    """Convert query results to a JSON-serializable dictionary."""
    return {
        name: {
            "value": result.value,
            "error": str(result.error) if result.error is not None else None,
        }
        for name, result in results.items()
    }


def render_results(
    title: str,
    subject: dict[str, str],
    results: dict[str, QueryResult],
    output_format: OutputFormat,
) -> None:
    """Print query results as a table or JSON document.

    Args:
        title: Table title.
        subject: Identifying fields of the inspected resource (JSON only).
        results: Results keyed by attribute name.
        output_format: Table or JSON.
    """
    if output_format == OutputFormat.JSON:
        document = {**subject, "attributes": results_to_dict(results)}
        console.print_json(json.dumps(document))
        return

    table = create_result_table(title)
    for name, result in results.items():
        table.add_row(*format_result_row(name, result))
    console.print(table)
