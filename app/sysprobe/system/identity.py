"""Numeric uid/gid to name resolution.

Names are looked up in the in-process identity database first
(``pwd`` / ``grp``). Entries that only exist in a networked directory
service can be missing there, so a single ``getent`` query is used as
the fallback.
"""

import grp
import logging
import pwd
import subprocess
from collections.abc import Callable
from typing import Literal

from sysprobe.system.errors import IdentityNotFoundError
from sysprobe.utils.shell import run_command

logger = logging.getLogger(__name__)

IdentityKind = Literal["passwd", "group"]

DEFAULT_GETENT_COMMAND = "getent"
DEFAULT_GETENT_TIMEOUT = 10.0


def _lookup_passwd(uid: int) -> str | None:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return None


def _lookup_group(gid: int) -> str | None:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return None


_PRIMARY_LOOKUPS: dict[IdentityKind, Callable[[int], str | None]] = {
    "passwd": _lookup_passwd,
    "group": _lookup_group,
}


class IdentityResolver:
    """Maps uids and gids to names with a directory-service fallback.

    Args:
        command: Directory-service query command (``getent`` compatible).
        timeout: Seconds to wait for the fallback command.

    Example:
        >>> resolver = IdentityResolver()
        >>> resolver.user_name(0)
        'root'
    """

    def __init__(
        self,
        *,
        command: str = DEFAULT_GETENT_COMMAND,
        timeout: float = DEFAULT_GETENT_TIMEOUT,
    ) -> None:
        self._command = command
        self._timeout = timeout

    def user_name(self, uid: int) -> str:
        """Return the login name for a uid.

        Raises:
            IdentityNotFoundError: If neither strategy knows the uid.
        """
        return self.resolve("passwd", uid)

    def group_name(self, gid: int) -> str:
        """Return the group name for a gid.

        Raises:
            IdentityNotFoundError: If neither strategy knows the gid.
        """
        return self.resolve("group", gid)

    def resolve(self, kind: IdentityKind, ident: int) -> str:
        """Run the primary lookup, then the fallback command once.

        Args:
            kind: Database to query ("passwd" or "group").
            ident: Numeric id.

        Returns:
            The resolved name.

        Raises:
            IdentityNotFoundError: If both strategies fail.
        """
        name = _PRIMARY_LOOKUPS[kind](ident)
        if name is not None:
            return name

        logger.debug(
            "%s entry for id %d not in local database, trying %s", kind, ident, self._command
        )
        return self._fallback(kind, ident)

    def _fallback(self, kind: IdentityKind, ident: int) -> str:
        """Query the directory service and parse the first field.

        Raises:
            IdentityNotFoundError: With the command's exit status and output,
                or with ``fallback_available=False`` if it could not run.
        """
        args = [self._command, kind, str(ident)]
        try:
            result = run_command(args, timeout=self._timeout, errors="surrogateescape")
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Cannot run %s: %s", self._command, e)
            msg = f"No matching entries in {kind} file; {self._command} unavailable: {e}"
            raise IdentityNotFoundError(
                msg,
                kind=kind,
                ident=ident,
                fallback_available=False,
            ) from e

        name = ""
        if result.success:
            first_line = result.stdout.strip().split("\n", 1)[0]
            name = first_line.split(":", 1)[0].strip()

        if not name:
            msg = (
                f"No matching entries in {kind} file. "
                f"{self._command} {kind} {ident}: exit status {result.returncode}"
            )
            raise IdentityNotFoundError(
                msg,
                kind=kind,
                ident=ident,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return name


_default_resolver = IdentityResolver()


def lookup_user_name(uid: int) -> str:
    """Resolve a uid with the default resolver."""
    return _default_resolver.user_name(uid)


def lookup_group_name(gid: int) -> str:
    """Resolve a gid with the default resolver."""
    return _default_resolver.group_name(gid)
