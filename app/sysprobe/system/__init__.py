"""System resource inspectors.

This module exports the file and service inspectors, the context
that builds them, and the errors they raise.
"""

from sysprobe.system.checksum import HashAlgorithm, file_digest
from sysprobe.system.context import System
from sysprobe.system.dbus import SystemdBus, UnitProperty, UnitPropertySource
from sysprobe.system.errors import (
    IdentityLookupError,
    IdentityNotFoundError,
    IPCQueryError,
    PathNormalizationError,
    ProbeError,
)
from sysprobe.system.file import File, LocalFile
from sysprobe.system.identity import IdentityResolver, lookup_group_name, lookup_user_name
from sysprobe.system.realpath import expand_path
from sysprobe.system.service import DbusService, Service, SystemctlService

__all__ = [
    "DbusService",
    "File",
    "HashAlgorithm",
    "IPCQueryError",
    "IdentityLookupError",
    "IdentityNotFoundError",
    "IdentityResolver",
    "LocalFile",
    "PathNormalizationError",
    "ProbeError",
    "Service",
    "System",
    "SystemctlService",
    "SystemdBus",
    "UnitProperty",
    "UnitPropertySource",
    "expand_path",
    "file_digest",
    "lookup_group_name",
    "lookup_user_name",
]
