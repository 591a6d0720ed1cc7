"""Query result models.

The assertion engine consumes observed state as ``(value, error)``
pairs. :func:`run_query` turns one raising inspector call into such a
pair; :func:`inspect_file` and :func:`inspect_service` run a whole
capability set.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sysprobe.system.errors import ProbeError

if TYPE_CHECKING:
    from sysprobe.system.file import File
    from sysprobe.system.service import Service

# Attribute order of each capability set. File.contains is left out
# because it hands back an open stream.
FILE_ATTRIBUTES: tuple[str, ...] = (
    "exists",
    "mode",
    "size",
    "filetype",
    "owner",
    "group",
    "linked_to",
    "md5",
    "sha256",
)

SERVICE_ATTRIBUTES: tuple[str, ...] = (
    "enabled",
    "running",
)

# Value reported alongside the error when a boolean query fails
FAILURE_DEFAULTS: dict[str, Any] = {
    "exists": False,
    "enabled": False,
    "running": False,
}


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Outcome of one inspector query.

    Attributes:
        value: Observed value. When the query failed, False for boolean
            queries and None otherwise.
        error: Exception the query failed with, None on success.
    """

    value: Any
    error: Exception | None = None

    @property
    def success(self) -> bool:
        """Check if the query produced a value."""
        return self.error is None


def run_query(func: Callable[..., Any], *args: Any, default: Any = None) -> QueryResult:
    """Call an inspector operation and capture its outcome.

    Only inspection failures (``ProbeError`` and ``OSError``) are
    captured; anything else propagates.

    Args:
        func: Bound inspector method, e.g. ``file.mode``.
        *args: Arguments passed to ``func``.
        default: Value reported with the error when the call fails.

    Returns:
        QueryResult holding either the value or the error.
    """
    try:
        return QueryResult(value=func(*args))
    except (ProbeError, OSError) as e:
        return QueryResult(value=default, error=e)


def inspect_file(file: File) -> dict[str, QueryResult]:
    """Run every file attribute query.

    Returns:
        Mapping of attribute name to result, in FILE_ATTRIBUTES order.
    """
    return {
        name: run_query(getattr(file, name), default=FAILURE_DEFAULTS.get(name))
        for name in FILE_ATTRIBUTES
    }


def inspect_service(service: Service) -> dict[str, QueryResult]:
    """Run every service attribute query.

    Returns:
        Mapping of attribute name to result, in SERVICE_ATTRIBUTES order.
    """
    return {
        name: run_query(getattr(service, name), default=FAILURE_DEFAULTS.get(name))
        for name in SERVICE_ATTRIBUTES
    }
