"""File inspection.

A :class:`File` answers point queries about one filesystem entry. The
entry's path is resolved (home shorthand expanded, made absolute) once,
on first use; if that fails the error is kept and re-raised by every
later query. Attribute queries always ``lstat`` the resolved path
afresh, so they describe the entry itself and never a symlink target.
"""

import logging
import os
import stat
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO

from sysprobe.system.checksum import DEFAULT_CHUNK_SIZE, HashAlgorithm, file_digest
from sysprobe.system.errors import ProbeError
from sysprobe.system.identity import IdentityResolver
from sysprobe.system.realpath import expand_path

logger = logging.getLogger(__name__)


class File(ABC):
    """Capability set of an inspectable filesystem entry."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Return the path as supplied by the caller."""

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the entry exists (symlinks are not followed)."""

    @abstractmethod
    def contains(self) -> BinaryIO:
        """Open the entry for reading. The caller closes the stream."""

    @abstractmethod
    def mode(self) -> str:
        """Return the permission bits as a 4-digit octal string."""

    @abstractmethod
    def size(self) -> int:
        """Return the entry's size in bytes."""

    @abstractmethod
    def filetype(self) -> str:
        """Return the entry's type label."""

    @abstractmethod
    def owner(self) -> str:
        """Return the name of the owning user."""

    @abstractmethod
    def group(self) -> str:
        """Return the name of the owning group."""

    @abstractmethod
    def linked_to(self) -> str:
        """Return the symlink target text."""

    @abstractmethod
    def md5(self) -> str:
        """Return the hex MD5 digest of the contents."""

    @abstractmethod
    def sha256(self) -> str:
        """Return the hex SHA-256 digest of the contents."""


# Resolution states


@dataclass(frozen=True, slots=True)
class Unresolved:
    """Resolution has not been attempted yet."""


@dataclass(frozen=True, slots=True)
class Resolved:
    """Resolution succeeded.

    Attributes:
        real_path: Absolute path every query operates on.
    """

    real_path: str


@dataclass(frozen=True, slots=True)
class Failed:
    """Resolution failed; terminal.

    Attributes:
        error: The exception raised by the single resolution attempt.
    """

    error: Exception


ResolutionState = Unresolved | Resolved | Failed


def classify_mode(st_mode: int) -> str:
    """Map ``st_mode`` type bits to a file type label.

    Checks run in a fixed order and the first match wins. Type bits none
    of the checks recognize are reported as "file".

    Args:
        st_mode: Mode field of an ``lstat`` result.

    Returns:
        One of "symlink", "character-device", "block-device", "pipe",
        "socket", "directory", "file".
    """
    if stat.S_ISLNK(st_mode):
        return "symlink"
    if stat.S_ISCHR(st_mode):
        return "character-device"
    if stat.S_ISBLK(st_mode):
        return "block-device"
    if stat.S_ISFIFO(st_mode):
        return "pipe"
    if stat.S_ISSOCK(st_mode):
        return "socket"
    if stat.S_ISDIR(st_mode):
        return "directory"
    if stat.S_ISREG(st_mode):
        return "file"
    return "file"


def format_mode(st_mode: int) -> str:
    """Format permission, setuid/setgid and sticky bits as ``"0644"``."""
    return f"{stat.S_IMODE(st_mode):04o}"


class LocalFile(File):
    """File backed by the local filesystem.

    Not safe for concurrent first use from several threads; distinct
    instances are independent.

    Args:
        path: Path as written by the caller, may start with ``~``.
        identity: Resolver for owner and group names.
        chunk_size: Read size used when hashing.
        resolve: Path resolution function, :func:`expand_path` by default.

    Example:
        >>> f = LocalFile("~/.bashrc")
        >>> f.exists()
        True
        >>> f.mode()
        '0644'
    """

    def __init__(
        self,
        path: str,
        *,
        identity: IdentityResolver | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        resolve: Callable[[str], str] = expand_path,
    ) -> None:
        self._path = path
        self._identity = identity or IdentityResolver()
        self._chunk_size = chunk_size
        self._resolve = resolve
        self._state: ResolutionState = Unresolved()

    def __repr__(self) -> str:
        return f"LocalFile({self._path!r})"

    @property
    def path(self) -> str:
        return self._path

    @property
    def state(self) -> ResolutionState:
        """Current resolution state."""
        return self._state

    def real_path(self) -> str:
        """Return the resolved absolute path, resolving on first call.

        Raises:
            IdentityLookupError: If a ``~user`` prefix names an unknown user.
            PathNormalizationError: If the path cannot be made absolute.
        """
        state = self._state
        if isinstance(state, Unresolved):
            try:
                state = Resolved(self._resolve(self._path))
            except ProbeError as e:
                logger.debug("Resolution of %r failed: %s", self._path, e)
                state = Failed(e)
            self._state = state

        if isinstance(state, Failed):
            raise state.error
        return state.real_path

    def _lstat(self) -> os.stat_result:
        return os.lstat(self.real_path())

    def exists(self) -> bool:
        real_path = self.real_path()
        try:
            os.lstat(real_path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def contains(self) -> BinaryIO:
        return open(self.real_path(), "rb")  # noqa: SIM115

    def mode(self) -> str:
        return format_mode(self._lstat().st_mode)

    def size(self) -> int:
        return self._lstat().st_size

    def filetype(self) -> str:
        return classify_mode(self._lstat().st_mode)

    def owner(self) -> str:
        return self._identity.user_name(self._lstat().st_uid)

    def group(self) -> str:
        return self._identity.group_name(self._lstat().st_gid)

    def linked_to(self) -> str:
        return os.readlink(self.real_path())

    def md5(self) -> str:
        return file_digest(self.real_path(), HashAlgorithm.MD5, chunk_size=self._chunk_size)

    def sha256(self) -> str:
        return file_digest(self.real_path(), HashAlgorithm.SHA256, chunk_size=self._chunk_size)
