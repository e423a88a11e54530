"""Turning a list of command-line arguments into Locations."""

import logging
from collections.abc import Iterable

from openat.core.plus_line import parse_plus_line
from openat.core.resolver import PathResolver
from openat.domain.exceptions import DanglingLineArgumentError
from openat.domain.location import Location

logger = logging.getLogger(__name__)


def collect_locations(
    arguments: Iterable[str], resolver: PathResolver | None = None
) -> list[Location]:
    """Resolve every path argument, applying '+LINE' tokens.

    A '+LINE' token applies to the next path argument (column 1) unless that
    argument carries its own ':LINE' suffix. Duplicates are kept in order.

    Args:
        arguments: Raw arguments, e.g. ["+10", "main.py", "lib.rs:4:2"].
        resolver: Resolver to use (default: local filesystem).

    Returns:
        One Location per path argument.

    Raises:
        DanglingLineArgumentError: If a '+LINE' token is not followed by a path.
    """
    resolver = resolver or PathResolver()
    locations: list[Location] = []
    pending_line: int | None = None

    for argument in arguments:
        line = parse_plus_line(argument)
        if line is not None:
            if pending_line is not None:
                logger.debug(f"'+{pending_line}' overridden by '+{line}'")
            pending_line = line
            continue

        location = resolver.resolve(argument)
        if pending_line is not None and not location.has_position:
            location = location.with_line(pending_line)
        pending_line = None
        locations.append(location)

    if pending_line is not None:
        raise DanglingLineArgumentError(
            f"'+{pending_line}' is not followed by a path",
            hint="Put '+LINE' before the file it applies to, e.g. 'openat open +10 main.py'",
        )
    return locations
