"""Unit tests for the service CLI command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from sysprobe.cli.main import app
from sysprobe.utils.shell import CommandResult
from typer.testing import CliRunner

from tests.conftest import FakeBus

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config lookup at an empty directory."""
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


class TestServiceCommand:
    """Tests for sysprobe service command."""

    def test_json_running_service(self, fake_bus: FakeBus) -> None:
        """An enabled active service reports both as true."""
        with patch("sysprobe.system.context.SystemdBus.open", return_value=fake_bus):
            result = runner.invoke(app, ["service", "sshd", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["service"] == "sshd"
        assert data["attributes"] == {
            "enabled": {"value": True, "error": None},
            "running": {"value": True, "error": None},
        }

    def test_bus_closed_after_query(self, fake_bus: FakeBus) -> None:
        """The connection is released when the command finishes."""
        with patch("sysprobe.system.context.SystemdBus.open", return_value=fake_bus):
            runner.invoke(app, ["service", "nginx", "--format", "json"])

        assert fake_bus.closed is True

    def test_unknown_unit(self, fake_bus: FakeBus) -> None:
        """Query errors are reported per attribute."""
        with patch("sysprobe.system.context.SystemdBus.open", return_value=fake_bus):
            result = runner.invoke(app, ["service", "missing", "-f", "json"])

        assert result.exit_code == 0
        attributes = json.loads(result.stdout)["attributes"]
        assert attributes["enabled"]["value"] is False
        assert "missing.service" in attributes["enabled"]["error"]

    def test_table_output(self, fake_bus: FakeBus) -> None:
        """The default table lists both attributes."""
        with patch("sysprobe.system.context.SystemdBus.open", return_value=fake_bus):
            result = runner.invoke(app, ["service", "nginx"])

        assert result.exit_code == 0
        assert "enabled" in result.stdout
        assert "running" in result.stdout
        assert "false" in result.stdout

    def test_bus_unavailable(self) -> None:
        """Failing to reach the bus aborts the command."""
        with patch(
            "sysprobe.system.context.SystemdBus.open",
            side_effect=FileNotFoundError(2, "No such file or directory"),
        ):
            result = runner.invoke(app, ["service", "sshd"])

        assert result.exit_code == 1
        assert "Cannot connect to the service manager" in result.output

    def test_systemctl_backend(self, isolated_config: Path) -> None:
        """The configured backend is honored."""
        config_dir = isolated_config / "sysprobe"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text('service_backend = "systemctl"\n')

        with (
            patch(
                "sysprobe.system.service.run_command",
                side_effect=[
                    CommandResult(stdout="enabled\n", stderr="", returncode=0),
                    CommandResult(stdout="failed\n", stderr="", returncode=3),
                ],
            ) as mock_run,
            patch("sysprobe.system.context.SystemdBus.open") as mock_open,
        ):
            result = runner.invoke(app, ["service", "cron", "--format", "json"])

        assert result.exit_code == 0
        attributes = json.loads(result.stdout)["attributes"]
        assert attributes["enabled"]["value"] is True
        assert attributes["running"]["value"] is False
        assert mock_run.call_count == 2
        mock_open.assert_not_called()
