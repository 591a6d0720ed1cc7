"""Systemd manager access over D-Bus.

Reads unit properties through ``org.freedesktop.DBus.Properties.Get``
on the unit's object path. The connection is blocking; each property
read is one round-trip.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Literal, Protocol

from jeepney import DBusAddress
from jeepney.io.blocking import DBusConnection, open_dbus_connection
from jeepney.wrappers import DBusErrorResponse, Properties, unwrap_msg

from sysprobe.system.errors import IPCQueryError

logger = logging.getLogger(__name__)

BusType = Literal["system", "user"]

SYSTEMD_BUS_NAME = "org.freedesktop.systemd1"
UNIT_PATH_PREFIX = "/org/freedesktop/systemd1/unit/"
UNIT_INTERFACE = "org.freedesktop.systemd1.Unit"

_JEEPNEY_BUS: dict[BusType, str] = {
    "system": "SYSTEM",
    "user": "SESSION",
}

# D-Bus signatures printed as quoted strings by busctl
_STRING_SIGNATURES = frozenset({"s", "o", "g"})


@dataclass(frozen=True, slots=True)
class UnitProperty:
    """A unit property value as returned by the bus.

    Attributes:
        name: Property name (e.g. "ActiveState").
        signature: D-Bus type signature of the value.
        value: Decoded value.
    """

    name: str
    signature: str
    value: object

    @property
    def text(self) -> str:
        """Textual form in busctl notation (strings are double-quoted)."""
        if self.signature in _STRING_SIGNATURES:
            return f'"{self.value}"'
        if self.signature == "b":
            return "true" if self.value else "false"
        return str(self.value)

    def __str__(self) -> str:
        return self.text


class UnitPropertySource(Protocol):
    """Anything that can read a property of a named unit."""

    def get_unit_property(self, unit: str, name: str) -> UnitProperty: ...


def bus_label_escape(label: str) -> str:
    """Escape a string for use as one D-Bus object path element.

    Follows systemd's ``bus_label_escape``: ASCII letters are kept,
    digits are kept unless leading, every other byte becomes ``_xx``.

    Args:
        label: Raw label (e.g. a unit name).

    Returns:
        Escaped label; "_" for the empty string.
    """
    if not label:
        return "_"

    escaped: list[str] = []
    for i, byte in enumerate(label.encode()):
        char = chr(byte)
        if char.isascii() and (char.isalpha() or (char.isdigit() and i > 0)):
            escaped.append(char)
        else:
            escaped.append(f"_{byte:02x}")
    return "".join(escaped)


def unit_object_path(unit: str) -> str:
    """Return the systemd object path of a unit."""
    return UNIT_PATH_PREFIX + bus_label_escape(unit)


class SystemdBus:
    """Blocking connection to the systemd manager.

    Owned by a long-lived context (see :class:`~sysprobe.system.context.System`)
    and shared by every service inspected through it.

    Args:
        connection: An authenticated jeepney blocking connection.
        timeout: Seconds to wait for each reply, None to wait forever.

    Example:
        >>> bus = SystemdBus.open("system")
        >>> bus.get_unit_property("sshd.service", "ActiveState").text
        '"active"'
        >>> bus.close()
    """

    def __init__(self, connection: DBusConnection, *, timeout: float | None = None) -> None:
        self._connection = connection
        self._timeout = timeout
        # one request in flight per connection
        self._lock = threading.Lock()

    @classmethod
    def open(cls, bus: BusType = "system", *, timeout: float | None = None) -> "SystemdBus":
        """Connect to the system or user bus.

        Raises:
            OSError: If the bus socket cannot be reached or authentication fails.
        """
        logger.debug("Opening %s bus connection", bus)
        try:
            connection = open_dbus_connection(bus=_JEEPNEY_BUS[bus])
        except KeyError as e:
            # session bus address comes from the environment
            msg = f"No address known for the {bus} bus: {e}"
            raise ConnectionError(msg) from e
        return cls(connection, timeout=timeout)

    def get_unit_property(self, unit: str, name: str) -> UnitProperty:
        """Read one property of a unit.

        Args:
            unit: Full unit name (e.g. "sshd.service").
            name: Property name on ``org.freedesktop.systemd1.Unit``.

        Returns:
            The tagged property value.

        Raises:
            IPCQueryError: If the call fails or the bus returns an error.
        """
        address = DBusAddress(
            unit_object_path(unit),
            bus_name=SYSTEMD_BUS_NAME,
            interface=UNIT_INTERFACE,
        )
        message = Properties(address).get(name)
        try:
            with self._lock:
                reply = self._connection.send_and_get_reply(message, timeout=self._timeout)
            ((signature, value),) = unwrap_msg(reply)
        except DBusErrorResponse as e:
            msg = f"Failed to get {name} of {unit}: {e.name}: {' '.join(map(str, e.data))}"
            raise IPCQueryError(msg, unit=unit, property_name=name, error_name=e.name) from e
        except (OSError, ValueError) as e:
            msg = f"Failed to get {name} of {unit}: {e}"
            raise IPCQueryError(msg, unit=unit, property_name=name) from e

        return UnitProperty(name=name, signature=signature, value=value)

    def close(self) -> None:
        """Close the underlying connection."""
        self._connection.close()
