"""Exception types raised by the system inspection layer.

Filesystem failures surface as the builtin ``OSError`` family
(``FileNotFoundError``, ``PermissionError``, ...). Everything else a
query can fail with derives from :class:`ProbeError`.
"""


class ProbeError(Exception):
    """Base exception for system inspection errors."""


class IdentityLookupError(ProbeError):
    """Raised when a home-directory shorthand names an unknown user.

    Also raised when the identity database cannot be read at all.
    """

    def __init__(self, message: str, *, username: str | None = None) -> None:
        super().__init__(message)
        self.username = username


class IdentityNotFoundError(ProbeError):
    """Raised when a numeric uid/gid cannot be mapped to a name.

    Attributes:
        kind: Database that was queried ("passwd" or "group").
        ident: Numeric id that was looked up.
        returncode: Exit status of the fallback command, None if it never ran.
        stdout: Captured fallback output.
        stderr: Captured fallback error output.
        fallback_available: False when the fallback command could not be
            executed (missing binary, timeout), True when it ran and found
            no entry.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        ident: int,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        fallback_available: bool = True,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.ident = ident
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.fallback_available = fallback_available


class PathNormalizationError(ProbeError):
    """Raised when a path cannot be turned into an absolute path."""


class IPCQueryError(ProbeError):
    """Raised when the service manager cannot answer a unit property query.

    Attributes:
        unit: Full unit name (e.g. "sshd.service").
        property_name: Property that was requested.
        error_name: D-Bus error name when the bus returned one.
    """

    def __init__(
        self,
        message: str,
        *,
        unit: str,
        property_name: str,
        error_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.unit = unit
        self.property_name = property_name
        self.error_name = error_name
