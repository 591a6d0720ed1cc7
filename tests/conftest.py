"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from pathlib import Path

import pytest
from sysprobe.system.dbus import UnitProperty
from sysprobe.system.errors import IPCQueryError


class FakeBus:
    """In-memory stand-in for a systemd bus connection.

    Properties are keyed by (unit, property name). Unknown keys fail the
    way a real bus does for units that cannot be loaded.
    """

    def __init__(self, properties: dict[tuple[str, str], str] | None = None) -> None:
        self.properties = dict(properties or {})
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def set_state(self, unit: str, name: str, value: str) -> None:
        self.properties[(unit, name)] = value

    def get_unit_property(self, unit: str, name: str) -> UnitProperty:
        self.calls.append((unit, name))
        if (unit, name) not in self.properties:
            msg = f"Unit {unit} not found."
            raise IPCQueryError(
                msg,
                unit=unit,
                property_name=name,
                error_name="org.freedesktop.systemd1.NoSuchUnit",
            )
        return UnitProperty(name=name, signature="s", value=self.properties[(unit, name)])

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_bus() -> FakeBus:
    """Bus with sshd enabled and running, nginx disabled and stopped."""
    return FakeBus(
        {
            ("sshd.service", "UnitFileState"): "enabled",
            ("sshd.service", "ActiveState"): "active",
            ("nginx.service", "UnitFileState"): "disabled",
            ("nginx.service", "ActiveState"): "inactive",
        }
    )


@pytest.fixture
def file_content() -> bytes:
    """Content written to the sample regular file."""
    return b"server_name example.org;\nlisten 80;\n"


@pytest.fixture
def sample_tree(tmp_path: Path, file_content: bytes) -> dict[str, Path]:
    """Create one entry of each common type under tmp_path.

    Returns:
        Mapping of entry kind to its path.
    """
    regular = tmp_path / "nginx.conf"
    regular.write_bytes(file_content)
    regular.chmod(0o644)

    directory = tmp_path / "conf.d"
    directory.mkdir()

    dir_link = tmp_path / "conf-link"
    dir_link.symlink_to(directory)

    file_link = tmp_path / "nginx.conf.link"
    file_link.symlink_to("nginx.conf")

    broken_link = tmp_path / "dangling"
    broken_link.symlink_to(tmp_path / "does-not-exist")

    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)

    return {
        "file": regular,
        "directory": directory,
        "dir_link": dir_link,
        "file_link": file_link,
        "broken_link": broken_link,
        "pipe": fifo,
    }
