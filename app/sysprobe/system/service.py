"""Systemd service inspection.

A :class:`Service` reports whether a unit is enabled and whether it is
running. Every call asks the service manager again; nothing is cached.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from sysprobe.system.dbus import UnitPropertySource
from sysprobe.system.errors import IPCQueryError
from sysprobe.utils.shell import run_command

logger = logging.getLogger(__name__)

UNIT_SUFFIX = ".service"

UNIT_FILE_STATE = "UnitFileState"
ACTIVE_STATE = "ActiveState"

ENABLED_STATE = "enabled"
ACTIVE_STATE_VALUE = "active"


def unquote_state(text: str) -> str:
    """Strip surrounding double quotes from a textual property value."""
    return text.strip('"')


class Service(ABC):
    """Capability set of an inspectable service.

    Args:
        name: Unit name without the ``.service`` suffix.
    """

    def __init__(self, name: str) -> None:
        if not name:
            msg = "Service name cannot be empty"
            raise ValueError(msg)
        self._name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    @property
    def name(self) -> str:
        """Return the service name."""
        return self._name

    @property
    def unit(self) -> str:
        """Return the full unit name."""
        return self._name + UNIT_SUFFIX

    @abstractmethod
    def enabled(self) -> bool:
        """Return True if the unit file state is "enabled".

        Raises:
            IPCQueryError: If the service manager cannot be queried.
        """

    @abstractmethod
    def running(self) -> bool:
        """Return True if the unit's active state is "active".

        Raises:
            IPCQueryError: If the service manager cannot be queried.
        """


class DbusService(Service):
    """Service queried over a shared D-Bus connection.

    The connection is borrowed: it is neither opened nor closed here.

    Args:
        name: Unit name without the ``.service`` suffix.
        connection: Source of unit properties, usually a
            :class:`~sysprobe.system.dbus.SystemdBus`.

    Example:
        >>> with System() as system:
        ...     DbusService("sshd", system.dbus).running()
        True
    """

    def __init__(self, name: str, connection: UnitPropertySource) -> None:
        super().__init__(name)
        self._connection = connection

    def _state(self, property_name: str) -> str:
        prop = self._connection.get_unit_property(self.unit, property_name)
        return unquote_state(prop.text)

    def enabled(self) -> bool:
        return self._state(UNIT_FILE_STATE) == ENABLED_STATE

    def running(self) -> bool:
        return self._state(ACTIVE_STATE) == ACTIVE_STATE_VALUE


class SystemctlService(Service):
    """Service queried through the ``systemctl`` command.

    For hosts where the manager's bus socket is not reachable (e.g.
    containers with only the systemctl client available).

    ``systemctl is-enabled`` and ``is-active`` exit non-zero for every
    state other than the positive one, so the printed state decides and
    the exit status is only used when nothing was printed.

    Args:
        name: Unit name without the ``.service`` suffix.
        command: systemctl executable.
        timeout: Seconds to wait for each invocation.
    """

    def __init__(self, name: str, *, command: str = "systemctl", timeout: float = 10.0) -> None:
        super().__init__(name)
        self._command = command
        self._timeout = timeout

    def _state(self, verb: str, property_name: str) -> str:
        args = [self._command, verb, self.unit]
        try:
            result = run_command(args, timeout=self._timeout, errors="surrogateescape")
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            msg = f"Failed to get {property_name} of {self.unit}: {e}"
            raise IPCQueryError(msg, unit=self.unit, property_name=property_name) from e

        state = unquote_state(result.stdout.strip().split("\n", 1)[0].strip())
        if not state:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            msg = f"Failed to get {property_name} of {self.unit}: {detail}"
            raise IPCQueryError(msg, unit=self.unit, property_name=property_name)

        logger.debug("%s %s: %s", verb, self.unit, state)
        return state

    def enabled(self) -> bool:
        return self._state("is-enabled", UNIT_FILE_STATE) == ENABLED_STATE

    def running(self) -> bool:
        return self._state("is-active", ACTIVE_STATE) == ACTIVE_STATE_VALUE
