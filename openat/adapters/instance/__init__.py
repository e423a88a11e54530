"""Local-channel communication with a running instance.

Architecture:
- directory.py: Local socket address resolution
- protocol.py: Newline-delimited JSON notification codec
- client.py: Unix socket channel (implements InstanceChannel)
- listener.py: Receiving side that accepts OpenPaths notifications
"""

from openat.adapters.instance.client import UnixSocketChannel
from openat.adapters.instance.directory import LocalSocketDirectory

__all__ = ["LocalSocketDirectory", "UnixSocketChannel"]
