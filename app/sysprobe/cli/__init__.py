"""CLI package for sysprobe.

This package contains the Typer application and all subcommands.
"""

from sysprobe.cli.main import app

__all__ = ["app"]
