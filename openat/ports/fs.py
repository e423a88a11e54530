"""File System port interface.

Defines the filesystem queries the resolver and notifier depend on, so they
can be tested against a fake filesystem.
"""

from pathlib import Path
from typing import Protocol


class PathInspector(Protocol):
    """Protocol for read-only filesystem kind checks."""

    def is_file(self, path: Path) -> bool:
        """Check if path names an existing regular file.

        Args:
            path: Path to check.

        Returns:
            True if path is an existing file. Errors during the check
            count as "does not exist".
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if path names an existing directory.

        Args:
            path: Path to check.

        Returns:
            True if path is an existing directory. Errors during the check
            count as "does not exist".
        """
        ...
