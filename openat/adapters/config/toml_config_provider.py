"""TOML-based configuration provider.

Config loading priority (highest to lowest):
1. Explicit file passed with --config
2. Global: ~/.config/openat/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path
from typing import Any

from openat.domain.config import OpenAtConfig
from openat.shared.config_io import (
    config_data_to_config,
    get_global_config_path,
    load_config_data,
    merge_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config if present
    2. Load the explicit config file if given
    3. Explicit values override global values (section-level merge)
    4. Missing values fall back to built-in defaults

    Gracefully handles missing or invalid configs with warnings.
    """

    def load(self, config_path: Path | None = None) -> OpenAtConfig:
        """Load configuration with global fallback.

        Args:
            config_path: Optional explicit config file

        Returns:
            OpenAtConfig instance with merged values or defaults
        """
        data: dict[str, Any] = {}

        global_path = get_global_config_path()
        if global_path.exists():
            data = self._apply(data, global_path, "global config")

        if config_path is not None:
            if config_path.exists():
                data = self._apply(data, config_path, "config")
            else:
                logger.warning("Config file %s does not exist. Ignoring it.", config_path)

        try:
            return config_data_to_config(data)
        except ValueError as e:
            logger.warning("Invalid configuration: %s. Using default configuration.", e)
            return OpenAtConfig.default()

    def _apply(self, data: dict[str, Any], path: Path, label: str) -> dict[str, Any]:
        try:
            loaded = load_config_data(path)
            # Each layer must be valid on its own
            config_data_to_config(loaded)
        except (FileNotFoundError, ValueError) as e:
            logger.warning("Failed to parse %s at %s: %s. Ignoring it.", label, path, e)
            return data

        logger.debug("Loaded %s from %s", label, path)
        return merge_config_data(data, loaded)
