"""Factory classes for adapter instantiation.

This module centralizes the creation of the notifier, listener and config
provider, keeping the CLI layer free from direct adapter imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openat.adapters.instance.listener import InstanceListener, OpenPathsHandler
    from openat.core.notifier import InstanceNotifier
    from openat.domain.config import OpenAtConfig
    from openat.ports.config import ConfigProvider


class InstanceFactory:
    """Factory for objects that talk over the local channel.

    Args:
        config: OpenAtConfig with instance settings.
    """

    def __init__(self, config: OpenAtConfig) -> None:
        """Initialize factory with configuration.

        Args:
            config: Configuration containing instance settings.
        """
        self._config = config

    def create_socket_locator(self):
        """Create the socket locator honouring instance.socket_path.

        Returns:
            LocalSocketDirectory instance.
        """
        from openat.adapters.instance.directory import LocalSocketDirectory

        socket_path = self._config.instance.socket_path
        return LocalSocketDirectory(
            socket_path=Path(socket_path).expanduser() if socket_path else None
        )

    def create_notifier(self) -> InstanceNotifier:
        """Create a notifier using a Unix socket channel.

        Returns:
            InstanceNotifier instance.
        """
        from openat.adapters.instance.client import UnixSocketChannel
        from openat.core.notifier import InstanceNotifier

        return InstanceNotifier(
            locator=self.create_socket_locator(),
            channel=UnixSocketChannel(),
        )

    def create_listener(
        self,
        socket_path: Path,
        handler: OpenPathsHandler,
        max_messages: int | None = None,
    ) -> InstanceListener:
        """Create a listener bound to socket_path.

        Args:
            socket_path: Socket to listen on.
            handler: Called with each received OpenPaths payload.
            max_messages: Stop after this many notifications (None = never).

        Returns:
            InstanceListener instance.
        """
        from openat.adapters.instance.listener import InstanceListener

        return InstanceListener(
            socket_path=socket_path,
            handler=handler,
            max_messages=max_messages,
        )


class ConfigFactory:
    """Factory for creating configuration-related instances."""

    def create_config_provider(self) -> ConfigProvider:
        """Create a TomlConfigProvider instance.

        Returns:
            TomlConfigProvider instance.
        """
        from openat.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()
