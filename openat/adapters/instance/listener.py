"""Listener for the receiving side of the local channel.

The listener:
1. Binds the local Unix socket (removing a stale one left by a dead listener)
2. Accepts one connection at a time and reads one notification from it,
   giving each client at most read_timeout seconds
3. Hands OpenPaths payloads to a callback
4. Stops on SIGINT/SIGTERM, on stop(), or after max_messages notifications
"""

import logging
import os
import signal
import socket
import stat
from collections.abc import Callable
from pathlib import Path

from openat.adapters.instance.protocol import (
    Notification,
    ProtocolError,
    receive_message,
)
from openat.domain.location import OpenPaths
from openat.ports.instance import OPEN_PATHS_METHOD, SocketInUseError

logger = logging.getLogger(__name__)

OpenPathsHandler = Callable[[OpenPaths], None]


def open_paths_from_notification(notification: Notification) -> OpenPaths:
    """Decode the parameters of an OpenPaths notification.

    Raises:
        ProtocolError: If folders or files is not a list of strings.
    """
    decoded = {}
    for key in ("folders", "files"):
        value = notification.params.get(key, [])
        if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
            raise ProtocolError(f"OpenPaths '{key}' must be a list of strings")
        decoded[key] = [Path(p) for p in value]
    return OpenPaths(folders=decoded["folders"], files=decoded["files"])


class InstanceListener:
    """Accepts OpenPaths notifications on a local socket."""

    def __init__(
        self,
        socket_path: Path,
        handler: OpenPathsHandler,
        max_messages: int | None = None,
        poll_interval: float = 1.0,
        read_timeout: float = 5.0,
    ):
        """Initialize listener.

        Args:
            socket_path: Path to Unix socket
            handler: Called with each received OpenPaths payload
            max_messages: Stop after this many notifications (None = never)
            poll_interval: Seconds between checks of the running flag
            read_timeout: Seconds a client has to send its whole message
        """
        self.socket_path = socket_path
        self.handler = handler
        self.max_messages = max_messages
        self.poll_interval = poll_interval
        self.read_timeout = read_timeout

        self.server_socket: socket.socket | None = None
        self.running = False
        self.messages_received = 0
        self._bound_inode: tuple[int, int] | None = None

    def setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""

        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down...")
            self.running = False

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)

    def _inode(self) -> tuple[int, int] | None:
        try:
            st = os.lstat(self.socket_path)
        except FileNotFoundError:
            return None
        return st.st_dev, st.st_ino

    def remove_stale_socket(self) -> None:
        """Remove a socket file left behind by a listener that is gone.

        Raises:
            SocketInUseError: If the path is not a socket, or another
                instance is still listening on it.
        """
        try:
            mode = os.lstat(self.socket_path).st_mode
        except FileNotFoundError:
            return

        if not stat.S_ISSOCK(mode):
            raise SocketInUseError(
                f"{self.socket_path} exists and is not a socket",
                hint="Choose another path with OPENAT_SOCKET or instance.socket_path",
            )

        peer = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            peer.connect(str(self.socket_path))
        except ConnectionRefusedError:
            logger.warning(f"Removing stale socket: {self.socket_path}")
            self.socket_path.unlink(missing_ok=True)
            return
        except FileNotFoundError:
            return
        finally:
            peer.close()

        raise SocketInUseError(
            f"An instance is already listening on {self.socket_path}",
            hint="Stop the other listener first, or send paths to it with 'openat open'",
        )

    def create_socket(self) -> None:
        """Create and bind Unix socket.

        Raises:
            SocketInUseError: If the socket path cannot be taken over.
        """
        self.remove_stale_socket()
        self.socket_path.parent.mkdir(parents=True, exist_ok=True)

        self.server_socket = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.server_socket.bind(str(self.socket_path))
        self._bound_inode = self._inode()
        self.server_socket.listen(5)
        self.server_socket.settimeout(self.poll_interval)

        logger.info(f"Listening on {self.socket_path}")

    def handle_notification(self, notification: Notification) -> None:
        """Dispatch a single notification.

        Unknown methods are logged and ignored.
        """
        if notification.method != OPEN_PATHS_METHOD:
            logger.warning(f"Ignoring unknown notification: {notification.method}")
            return

        open_paths = open_paths_from_notification(notification)
        self.messages_received += 1
        self.handler(open_paths)

    def handle_client(self, client_socket: socket.socket) -> None:
        """Handle a single client connection.

        Args:
            client_socket: Connected client socket
        """
        try:
            notification = receive_message(client_socket, timeout=self.read_timeout)
            logger.debug(f"Received notification: {notification.method}")
            self.handle_notification(notification)
        except ProtocolError as e:
            logger.error(f"Protocol error: {e}")
        finally:
            client_socket.close()

    def _reached_limit(self) -> bool:
        return self.max_messages is not None and self.messages_received >= self.max_messages

    def serve_forever(self) -> None:
        """Main accept loop."""
        logger.info("Listener started")
        self.running = True

        while self.running and not self._reached_limit():
            try:
                client_socket, _ = self.server_socket.accept()
            except TimeoutError:
                continue
            except OSError as e:
                if self.running:
                    logger.error(f"Accept failed: {e}")
                break
            self.handle_client(client_socket)

        logger.info("Listener stopped")

    def stop(self) -> None:
        """Ask the accept loop to exit after its current poll."""
        self.running = False

    def cleanup(self) -> None:
        """Close the socket and remove its file.

        The file is only removed while it is still the one this listener
        bound; a socket that has since been replaced is left alone.
        """
        if self.server_socket:
            self.server_socket.close()
            self.server_socket = None

        if self._bound_inode is not None and self._inode() == self._bound_inode:
            self.socket_path.unlink(missing_ok=True)
            logger.info(f"Cleaned up socket: {self.socket_path}")
        elif self._bound_inode is not None:
            logger.warning(f"Socket {self.socket_path} was replaced, leaving it in place")
        self._bound_inode = None

    def run(self, install_signal_handlers: bool = True) -> None:
        """Bind, serve until stopped, then clean up.

        Args:
            install_signal_handlers: Install SIGINT/SIGTERM handlers. Only
                possible from the main thread.
        """
        try:
            if install_signal_handlers:
                self.setup_signal_handlers()
            self.create_socket()
            self.serve_forever()
        finally:
            self.cleanup()
