"""Home-directory shorthand expansion.

Turns ``~/x`` and ``~user/x`` into absolute paths using the identity
database, and makes every other path absolute against the working
directory.
"""

import os
import pwd

from sysprobe.system.errors import IdentityLookupError, PathNormalizationError

HOME_MARKER = "~"


def _home_for(segment: str) -> str:
    """Return the home directory referenced by a ``~`` / ``~name`` segment.

    Raises:
        IdentityLookupError: If the user is unknown or the database fails.
    """
    username = segment[len(HOME_MARKER) :]
    try:
        if username:
            return pwd.getpwnam(username).pw_dir
        return pwd.getpwuid(os.geteuid()).pw_dir
    except KeyError as e:
        who = username or f"uid {os.geteuid()}"
        msg = f"Unknown user: {who}"
        raise IdentityLookupError(msg, username=username or None) from e
    except OSError as e:
        msg = f"Cannot read identity database: {e}"
        raise IdentityLookupError(msg, username=username or None) from e
    except ValueError as e:
        # names that cannot be encoded for the C library
        msg = f"Invalid user name {username!r}: {e}"
        raise IdentityLookupError(msg, username=username) from e


def _absolute(path: str) -> str:
    try:
        absolute = os.path.abspath(path)
    except OSError as e:
        # abspath calls getcwd, which fails once the working directory is gone
        msg = f"Cannot normalize path {path!r}: {e}"
        raise PathNormalizationError(msg) from e
    # POSIX keeps exactly two leading slashes, e.g. a "/" home joined with "/x"
    if absolute.startswith("//"):
        absolute = absolute[1:]
    return absolute


def expand_path(path: str) -> str:
    """Expand a leading home shorthand and return an absolute path.

    Only the first segment is examined: ``~`` maps to the current user's
    home, ``~name`` to ``name``'s home. The remaining segments are kept
    as given and the result is normalized.

    Args:
        path: Path as written by the caller.

    Returns:
        Absolute filesystem path.

    Raises:
        IdentityLookupError: If the referenced user does not exist.
        PathNormalizationError: If the path cannot be made absolute.
    """
    if "\0" in path:
        msg = f"Cannot normalize path {path!r}: embedded null byte"
        raise PathNormalizationError(msg)
    if not path.startswith(HOME_MARKER):
        return _absolute(path)

    segments = path.split("/")
    segments[0] = _home_for(segments[0])
    return _absolute("/".join(segments))
