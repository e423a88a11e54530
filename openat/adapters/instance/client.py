"""Unix socket channel to a running instance.

Implements the InstanceChannel port. Connect and write are blocking, with no
timeout and no retry: a single failure is final.
"""

import contextlib
import logging
import socket
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from openat.adapters.instance.protocol import Notification, ProtocolError, send_message
from openat.ports.instance import ConnectFailedError, WriteFailedError

logger = logging.getLogger(__name__)

NO_INSTANCE_HINT = "Start a new instance instead, or run 'openat listen' to receive paths"


class SocketConnection:
    """Open connection that sends notifications over a socket."""

    def __init__(self, sock: socket.socket, socket_path: Path):
        self._sock = sock
        self.socket_path = socket_path

    def notify(self, method: str, params: dict[str, Any]) -> None:
        """Send a notification.

        Args:
            method: Notification method name.
            params: Notification parameters.

        Raises:
            WriteFailedError: If the message cannot be written.
        """
        try:
            send_message(self._sock, Notification(method=method, params=params))
        except ProtocolError as e:
            raise WriteFailedError(
                f"Could not send to running instance at {self.socket_path}: {e}",
                hint=NO_INSTANCE_HINT,
            ) from e
        logger.debug(f"Sent {method} to {self.socket_path}")


class UnixSocketChannel:
    """InstanceChannel backed by a Unix domain socket."""

    @contextmanager
    def connect(self, address: Path) -> Iterator[SocketConnection]:
        """Connect to the instance listening at address.

        Args:
            address: Local socket path.

        Yields:
            Open connection, closed on exit.

        Raises:
            ConnectFailedError: If no listener is present.
        """
        if not hasattr(socket, "AF_UNIX"):
            raise ConnectFailedError(
                "Local sockets are not supported on this platform",
                hint=NO_INSTANCE_HINT,
            )

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            try:
                sock.connect(str(address))
            except OSError as e:
                # FileNotFoundError / ConnectionRefusedError: nobody listening
                raise ConnectFailedError(
                    f"No running instance at {address}: {e}",
                    hint=NO_INSTANCE_HINT,
                ) from e

            logger.debug(f"Connected to {address}")
            yield SocketConnection(sock, address)
        finally:
            with contextlib.suppress(OSError):
                sock.close()
