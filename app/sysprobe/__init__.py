"""sysprobe - point-in-time inspection of files and systemd services."""

__version__ = "0.1.0"
