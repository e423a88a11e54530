"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of OpenAtConfig to/from TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from openat.domain.config import InstanceConfig, OpenAtConfig, OutputConfig


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/openat/config.toml or ~/.config/openat/config.toml
    - Windows: %APPDATA%/openat/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "openat" / "config.toml"
        return Path.home() / ".config" / "openat" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "openat" / "config.toml"
        return Path.home() / ".config" / "openat" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to config.toml file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def merge_config_data(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two config dictionaries, with override values taking precedence.

    Merges at the section level: keys present in an override section replace
    the same keys of the base section, other base keys are kept.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary (takes precedence)

    Returns:
        Merged configuration dictionary
    """
    result: dict[str, Any] = {}

    for section in set(base.keys()) | set(override.keys()):
        base_section = base.get(section, {})
        override_section = override.get(section, {})

        if isinstance(base_section, dict) and isinstance(override_section, dict):
            result[section] = {**base_section, **override_section}
        elif section in override:
            result[section] = override_section
        else:
            result[section] = base_section

    return result


def config_data_to_config(data: dict[str, Any]) -> OpenAtConfig:
    """Convert raw config data dictionary to OpenAtConfig.

    Args:
        data: Dictionary with config sections

    Returns:
        OpenAtConfig instance

    Raises:
        ValueError: If a section has unknown keys or invalid values
    """
    sections = {"instance": InstanceConfig, "output": OutputConfig}
    built = {}
    for name, section_cls in sections.items():
        section_data = data.get(name, {})
        if not isinstance(section_data, dict):
            raise ValueError(f"[{name}] must be a table")
        try:
            built[name] = section_cls(**section_data)
        except TypeError as e:
            # Unknown keys
            raise ValueError(f"Invalid [{name}] section: {e}") from e

    return OpenAtConfig(**built)


def save_config(config: OpenAtConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Unset optional values are omitted since TOML has no null.

    Args:
        config: OpenAtConfig to save
        path: Destination path for config.toml
    """
    instance: dict[str, Any] = {"enabled": config.instance.enabled}
    if config.instance.socket_path is not None:
        instance["socket_path"] = config.instance.socket_path

    data: dict[str, Any] = {
        "instance": instance,
        "output": {"format": config.output.format},
    }

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)
