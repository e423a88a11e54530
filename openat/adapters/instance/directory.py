"""Local socket address resolution.

Resolution order:
1. Explicit socket path (from config)
2. $OPENAT_SOCKET
3. $XDG_RUNTIME_DIR/openat/local.sock
4. Windows: %LOCALAPPDATA%/openat/local.sock
5. ~/.local/share/openat/local.sock
"""

import logging
import os
import platform
from pathlib import Path

logger = logging.getLogger(__name__)

SOCKET_ENV_VAR = "OPENAT_SOCKET"
SOCKET_NAME = "local.sock"


def get_default_socket_path() -> Path | None:
    """Get the platform default path of the local socket.

    Returns:
        Socket path (may not exist), or None if no home directory can be
        determined.
    """
    env_socket = os.environ.get(SOCKET_ENV_VAR, "")
    if env_socket:
        return Path(env_socket)

    runtime_dir = os.environ.get("XDG_RUNTIME_DIR", "")
    if runtime_dir:
        return Path(runtime_dir) / "openat" / SOCKET_NAME

    if platform.system() == "Windows":
        local_appdata = os.environ.get("LOCALAPPDATA", "")
        if local_appdata:
            return Path(local_appdata) / "openat" / SOCKET_NAME

    try:
        home = Path.home()
    except RuntimeError as e:
        logger.warning(f"Cannot determine home directory: {e}")
        return None
    return home / ".local" / "share" / "openat" / SOCKET_NAME


class LocalSocketDirectory:
    """SocketLocator that honours an explicit path, then platform defaults."""

    def __init__(self, socket_path: Path | None = None):
        """Initialize locator.

        Args:
            socket_path: Explicit socket path, overriding platform defaults.
        """
        self.socket_path = socket_path

    def local_socket(self) -> Path | None:
        """Get the local socket path.

        Returns:
            Socket path, or None if no address can be determined.
        """
        if self.socket_path is not None:
            return self.socket_path
        return get_default_socket_path()
