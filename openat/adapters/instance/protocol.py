"""JSON notification protocol for talking to a running instance.

Newline-delimited JSON over a Unix socket, one message per connection.
Notifications carry no id and get no reply.
"""

import json
import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

MAX_MESSAGE_SIZE = 1024 * 1024


class ProtocolError(Exception):
    """Base exception for protocol errors."""

    pass


class Notification:
    """One-way JSON-RPC-style notification."""

    def __init__(self, method: str, params: dict[str, Any]):
        """Create a notification.

        Args:
            method: Method name (e.g., "OpenPaths")
            params: Method parameters
        """
        self.method = method
        self.params = params

    def to_json(self) -> str:
        """Serialize to JSON string with newline."""
        data = {"method": self.method, "params": self.params}
        return json.dumps(data) + "\n"

    @classmethod
    def from_json(cls, line: str) -> "Notification":
        """Deserialize from JSON string.

        Args:
            line: JSON string (with or without newline)

        Returns:
            Notification object

        Raises:
            ProtocolError: If JSON is invalid or missing required fields
        """
        try:
            data = json.loads(line.strip())
        except json.JSONDecodeError as e:
            raise ProtocolError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ProtocolError("Notification must be a JSON object")

        if "method" not in data:
            raise ProtocolError("Notification missing 'method' field")

        params = data.get("params", {})
        if not isinstance(params, dict):
            raise ProtocolError("Notification 'params' must be a JSON object")

        return cls(method=data["method"], params=params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Notification):
            return NotImplemented
        return self.method == other.method and self.params == other.params

    def __repr__(self) -> str:
        return f"Notification(method={self.method!r}, params={self.params!r})"


def send_message(sock, message: Notification) -> None:
    """Send a message over a socket.

    Args:
        sock: Socket to send on
        message: Notification to send

    Raises:
        ProtocolError: If send fails
    """
    try:
        data = message.to_json().encode("utf-8")
        sock.sendall(data)
    except (OSError, TypeError, ValueError) as e:
        # TypeError/ValueError: params not JSON-serializable
        raise ProtocolError(f"Failed to send message: {e}") from e


def receive_message(
    sock,
    timeout: float | None = None,
    max_size: int = MAX_MESSAGE_SIZE,
) -> Notification:
    """Receive a message from a socket.

    Reads until the first newline. Data after the first delimiter is
    discarded with a warning since the protocol carries one message per
    connection.

    Args:
        sock: Socket to receive from
        timeout: Seconds allowed for the whole message (None = no limit)
        max_size: Maximum number of bytes read before the delimiter

    Returns:
        Received notification

    Raises:
        ProtocolError: If receive fails, times out, exceeds max_size, or
            the message is invalid
    """
    deadline = time.monotonic() + timeout if timeout is not None else None
    try:
        buffer = b""
        while b"\n" not in buffer:
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise ProtocolError("Timed out waiting for message")
                sock.settimeout(remaining)

            chunk = sock.recv(4096)
            if not chunk:
                raise ProtocolError("Connection closed")
            buffer += chunk

            if len(buffer) > max_size and b"\n" not in buffer:
                raise ProtocolError(f"Message exceeds {max_size} bytes")

        parts = buffer.split(b"\n", 1)
        message_bytes = parts[0]

        if len(parts) > 1 and parts[1]:
            remaining_bytes = len(parts[1])
            logger.warning(
                f"Received {remaining_bytes} bytes after first message delimiter. "
                "Protocol expects one message per connection. Data may be lost."
            )

        line = message_bytes.decode("utf-8")
        return Notification.from_json(line)
    except ProtocolError:
        raise
    except TimeoutError as e:
        raise ProtocolError("Timed out waiting for message") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ProtocolError(f"Failed to receive message: {e}") from e
