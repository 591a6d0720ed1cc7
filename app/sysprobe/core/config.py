"""Probe configuration.

Selects the service backend and tunes the helpers the inspectors
rely on. Configuration is stored in ~/.config/sysprobe/config.toml;
every key is optional.

Example config.toml:

    service_backend = "dbus"
    bus = "system"
    getent_command = "getent"
    getent_timeout = 10.0
    chunk_size = 65536
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sysprobe.core.paths import get_config_path

logger = logging.getLogger(__name__)

ServiceBackend = Literal["dbus", "systemctl"]
BusType = Literal["system", "user"]


class ProbeConfig(BaseModel):
    """Configuration for the system inspectors.

    Attributes:
        service_backend: How services are queried ("dbus" or "systemctl").
        bus: Bus the systemd manager is reached on ("system" or "user").
        getent_command: Directory-service command used as identity fallback.
        getent_timeout: Seconds to wait for the fallback command.
        chunk_size: Read size in bytes used when hashing file contents.
    """

    model_config = ConfigDict(extra="forbid")

    service_backend: Annotated[
        ServiceBackend,
        Field(description="Service query backend"),
    ] = "dbus"
    bus: Annotated[
        BusType,
        Field(description="Bus of the systemd manager"),
    ] = "system"
    getent_command: Annotated[
        str,
        Field(min_length=1, description="Identity fallback command"),
    ] = "getent"
    getent_timeout: Annotated[
        float,
        Field(gt=0, le=120, description="Fallback timeout in seconds (0-120]"),
    ] = 10.0
    chunk_size: Annotated[
        int,
        Field(ge=1024, le=16 * 1024 * 1024, description="Hash read size (1 KiB - 16 MiB)"),
    ] = 64 * 1024


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ProbeConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ProbeConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ProbeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> ProbeConfig:
    """Load configuration, falling back to defaults if no file exists.

    Parse and validation errors are not masked.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return ProbeConfig()


def save_config(config: ProbeConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ProbeConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        # os.replace() is atomic on POSIX
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
