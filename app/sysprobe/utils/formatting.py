"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from sysprobe.models.result import QueryResult

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
    }
)

# Shared console instances
console = Console(theme=THEME)
err_console = Console(theme=THEME, stderr=True)


def create_result_table(title: str) -> Table:
    """Create a pre-configured table for observed attributes.

    Args:
        title: Table title.

    Returns:
        Rich Table with attribute, value and error columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Attribute", style="text", no_wrap=True)
    table.add_column("Value", style="info")
    table.add_column("Error", style="error", overflow="fold")
    return table


def format_result_row(name: str, result: QueryResult) -> tuple[str, str, str]:
    """Format one query result as a table row.

    Args:
        name: Attribute name.
        result: Outcome of the query.

    Returns:
        Tuple of (attribute, value, error) with Rich markup.
    """
    if result.success:
        return (name, format_value(result.value), "")
    return (name, "[muted]-[/]", f"{type(result.error).__name__}: {result.error}")


def format_value(value: object) -> str:
    """Render an observed value for display."""
    if isinstance(value, bool):
        return "[success]true[/]" if value else "[warning]false[/]"
    return str(value)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
