"""Data models for sysprobe.

This module exports the query result types.
"""

from sysprobe.models.result import (
    FAILURE_DEFAULTS,
    FILE_ATTRIBUTES,
    SERVICE_ATTRIBUTES,
    QueryResult,
    inspect_file,
    inspect_service,
    run_query,
)

__all__ = [
    "FAILURE_DEFAULTS",
    "FILE_ATTRIBUTES",
    "SERVICE_ATTRIBUTES",
    "QueryResult",
    "inspect_file",
    "inspect_service",
    "run_query",
]
