"""Local file system adapter.

Implements the PathInspector port using the standard library pathlib.
This is the default adapter for filesystem kind checks.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """Local file system implementation using pathlib.

    Any OSError raised while checking a path (permission denied, name too
    long, invalid characters on the platform) is reported as "does not exist".
    """

    def is_file(self, path: Path) -> bool:
        """Check if path names an existing regular file.

        Args:
            path: Path to check.

        Returns:
            True if path is an existing file, False otherwise.
        """
        try:
            return path.is_file()
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte
            logger.debug(f"Treating {path!r} as missing: {e}")
            return False

    def is_dir(self, path: Path) -> bool:
        """Check if path names an existing directory.

        Args:
            path: Path to check.

        Returns:
            True if path is an existing directory, False otherwise.
        """
        try:
            return path.is_dir()
        except (OSError, ValueError) as e:
            logger.debug(f"Treating {path!r} as missing: {e}")
            return False
