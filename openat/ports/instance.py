"""Port interface for talking to an already-running instance.

Defines the capabilities the notifier needs (locating the local channel,
connecting to it, sending one notification) and the errors they raise.
"""

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, Protocol

OPEN_PATHS_METHOD = "OpenPaths"


class InstanceUnreachableError(Exception):
    """Base exception for failing to reach a running instance.

    Callers handle this single type; the subclasses say which step failed.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ChannelUnavailableError(InstanceUnreachableError):
    """Raised when no local channel address can be determined."""

    pass


class ConnectFailedError(InstanceUnreachableError):
    """Raised when nothing is listening at the local channel address."""

    pass


class WriteFailedError(InstanceUnreachableError):
    """Raised when sending the notification fails after connecting."""

    pass


class SocketInUseError(Exception):
    """Raised when the listen address cannot be taken over.

    Either another instance is already listening there, or the path exists
    and is not a socket.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class SocketLocator(Protocol):
    """Protocol for resolving the local channel address."""

    def local_socket(self) -> Path | None:
        """Get the local socket path.

        Returns:
            Socket path, or None if no address can be determined.
        """
        ...


class InstanceConnection(Protocol):
    """An open connection to a running instance."""

    def notify(self, method: str, params: dict[str, Any]) -> None:
        """Send a one-way notification.

        Args:
            method: Notification method name (e.g., "OpenPaths").
            params: Notification parameters.

        Raises:
            WriteFailedError: If the message cannot be written.
        """
        ...


class InstanceChannel(Protocol):
    """Protocol for opening connections to a running instance."""

    def connect(self, address: Path) -> AbstractContextManager[InstanceConnection]:
        """Connect to the instance listening at address.

        Args:
            address: Local socket path.

        Returns:
            Context manager yielding an open connection, closed on exit.

        Raises:
            ConnectFailedError: If no listener is present.
        """
        ...
