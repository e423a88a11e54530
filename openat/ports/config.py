"""Configuration provider port.

Defines the interface for loading application configuration.
"""

from pathlib import Path
from typing import Protocol

from openat.domain.config import OpenAtConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, config_path: Path | None = None) -> OpenAtConfig:
        """Load configuration.

        Args:
            config_path: Optional explicit config file, overriding global values

        Returns:
            OpenAtConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config files are missing or invalid.
        """
        ...
