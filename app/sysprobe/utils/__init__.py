"""Utility modules for sysprobe (shell helpers, console formatting)."""
