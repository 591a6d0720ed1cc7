"""Process-wide inspection context.

:class:`System` owns the resources shared between inspected resources
(the systemd bus connection, the identity resolver) and builds
:class:`~sysprobe.system.file.File` and
:class:`~sysprobe.system.service.Service` instances wired to them.
"""

from __future__ import annotations

import logging
from types import TracebackType

from sysprobe.core.config import ProbeConfig
from sysprobe.system.dbus import SystemdBus
from sysprobe.system.file import File, LocalFile
from sysprobe.system.identity import IdentityResolver
from sysprobe.system.service import DbusService, Service, SystemctlService

logger = logging.getLogger(__name__)


class System:
    """Factory and owner of shared inspection resources.

    The bus connection is opened on first use and stays open until
    :meth:`close`. Services created here borrow it.

    Args:
        config: Probe configuration. Defaults to ``ProbeConfig()``.
        bus: An already open bus to use instead of opening one. It is
            still closed by :meth:`close`.

    Example:
        >>> with System() as system:
        ...     system.new_file("/etc/hostname").mode()
        ...     system.new_service("sshd").enabled()
        '0644'
        True
    """

    def __init__(self, config: ProbeConfig | None = None, *, bus: SystemdBus | None = None) -> None:
        self._config = config or ProbeConfig()
        self._bus = bus
        self._identity = IdentityResolver(
            command=self._config.getent_command,
            timeout=self._config.getent_timeout,
        )

    @property
    def config(self) -> ProbeConfig:
        """Return the active configuration."""
        return self._config

    @property
    def dbus(self) -> SystemdBus:
        """Return the systemd bus connection, opening it on first access.

        Raises:
            OSError: If the bus cannot be reached.
        """
        if self._bus is None:
            self._bus = SystemdBus.open(self._config.bus)
        return self._bus

    def new_file(self, path: str) -> File:
        """Create a file inspector for a path."""
        return LocalFile(path, identity=self._identity, chunk_size=self._config.chunk_size)

    def new_service(self, name: str) -> Service:
        """Create a service inspector using the configured backend.

        Raises:
            OSError: If the dbus backend is selected and the bus cannot be reached.
        """
        if self._config.service_backend == "systemctl":
            return SystemctlService(name)
        return DbusService(name, self.dbus)

    def close(self) -> None:
        """Close the bus connection if one was opened."""
        if self._bus is not None:
            logger.debug("Closing bus connection")
            self._bus.close()
            self._bus = None

    def __enter__(self) -> System:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
