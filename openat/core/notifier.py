"""Forwarding resolved locations to an already-running instance.

Sends a single OpenPaths notification over the local channel. There is no
reply, no timeout and no retry; any failure surfaces as an
InstanceUnreachableError subclass and the caller decides what to do next
(usually: start a new instance).
"""

import logging
from collections.abc import Iterable

from openat.adapters.fs.local import LocalFileSystem
from openat.domain.location import Location, OpenPaths
from openat.ports.fs import PathInspector
from openat.ports.instance import (
    OPEN_PATHS_METHOD,
    ChannelUnavailableError,
    InstanceChannel,
    InstanceUnreachableError,
    SocketLocator,
)

logger = logging.getLogger(__name__)


def classify_locations(locations: Iterable[Location], fs: PathInspector) -> OpenPaths:
    """Split locations into directories and files.

    Locations that are neither (for example deleted since resolution) are
    dropped. Positions are not carried over.

    Args:
        locations: Resolved locations.
        fs: Filesystem used for kind checks.

    Returns:
        OpenPaths with absolute paths, in input order.
    """
    open_paths = OpenPaths()
    for location in locations:
        if fs.is_dir(location.path):
            open_paths.folders.append(location.path.absolute())
        elif fs.is_file(location.path):
            open_paths.files.append(location.path.absolute())
        else:
            logger.debug(f"Dropping {location.path}: neither a file nor a directory")
    return open_paths


class InstanceNotifier:
    """Sends resolved locations to an already-running instance."""

    def __init__(
        self,
        locator: SocketLocator,
        channel: InstanceChannel,
        fs: PathInspector | None = None,
    ):
        """Initialize notifier.

        Args:
            locator: Resolves the local channel address.
            channel: Opens connections to the running instance.
            fs: Filesystem used for kind checks (default: local disk).
        """
        self._locator = locator
        self._channel = channel
        self._fs = fs or LocalFileSystem()

    def notify(self, locations: Iterable[Location]) -> OpenPaths:
        """Send one OpenPaths notification for the given locations.

        Args:
            locations: Resolved locations.

        Returns:
            The folders and files that were sent.

        Raises:
            ChannelUnavailableError: If no local channel address is known.
            ConnectFailedError: If no instance is listening.
            WriteFailedError: If sending fails after connecting.
        """
        address = self._locator.local_socket()
        if address is None:
            raise ChannelUnavailableError(
                "Cannot determine the local socket address",
                hint="Set OPENAT_SOCKET or instance.socket_path in the config file",
            )

        try:
            with self._channel.connect(address) as connection:
                open_paths = classify_locations(locations, self._fs)
                connection.notify(OPEN_PATHS_METHOD, open_paths.to_params())
        except InstanceUnreachableError as e:
            logger.warning(f"Could not reach running instance: {e.message}")
            raise

        logger.info(
            f"Sent {len(open_paths.folders)} folder(s) and "
            f"{len(open_paths.files)} file(s) to {address}"
        )
        return open_paths


def notify_existing_instance(
    locations: Iterable[Location],
    locator: SocketLocator,
    channel: InstanceChannel,
    fs: PathInspector | None = None,
) -> OpenPaths:
    """Send locations to an already-running instance.

    See InstanceNotifier.notify.
    """
    return InstanceNotifier(locator, channel, fs).notify(locations)
