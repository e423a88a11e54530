"""Config domain models for openat.

Configuration is read from TOML files (see openat.shared.config_io) and
controls how resolved locations are printed and whether they are forwarded
to an already-running instance.
"""

from dataclasses import dataclass, field
from typing import Literal

OUTPUT_FORMATS: frozenset[str] = frozenset({"text", "json"})


@dataclass(frozen=True)
class InstanceConfig:
    """Configuration for reaching a running instance.

    Attributes:
        enabled: Forward opened paths to a running instance (default: True)
        socket_path: Explicit local socket path. When unset, the platform
                     default is used (see openat.adapters.instance.directory).

    Raises:
        ValueError: If enabled is not a boolean, or socket_path is not a
            non-empty string.
    """

    enabled: bool = True
    socket_path: str | None = None

    def __post_init__(self) -> None:
        """Validate instance config after initialization."""
        if not isinstance(self.enabled, bool):
            raise ValueError("enabled must be true or false")
        if self.socket_path is None:
            return
        if not isinstance(self.socket_path, str):
            raise ValueError("socket_path must be a string")
        if not self.socket_path.strip():
            raise ValueError("socket_path cannot be empty")


@dataclass(frozen=True)
class OutputConfig:
    """Configuration for printing resolved locations.

    Attributes:
        format: "text" prints one path[:line:column] per line, "json" prints
                a JSON array.

    Raises:
        ValueError: If format is not a known output format.
    """

    format: Literal["text", "json"] = "text"

    def __post_init__(self) -> None:
        """Validate output config after initialization."""
        if self.format not in OUTPUT_FORMATS:
            supported = ", ".join(sorted(OUTPUT_FORMATS))
            raise ValueError(
                f"Unknown output format '{self.format}'. Supported formats: {supported}"
            )


@dataclass(frozen=True)
class OpenAtConfig:
    """Complete openat configuration.

    Attributes:
        instance: Running-instance configuration
        output: Output formatting configuration
    """

    instance: InstanceConfig = field(default_factory=InstanceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def default() -> "OpenAtConfig":
        """Create a config with all default values."""
        return OpenAtConfig(instance=InstanceConfig(), output=OutputConfig())
