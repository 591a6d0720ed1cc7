"""CLI commands for sysprobe.

This package contains all subcommand implementations.
"""

from sysprobe.cli.commands import config, file, service

__all__ = ["config", "file", "service"]
