"""Configuration and path helpers for sysprobe."""
