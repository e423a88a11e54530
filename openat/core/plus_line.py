"""Parser for the editor-style '+LINE' argument.

Editors such as vim accept a standalone '+42' argument meaning "open at
line 42". The value applies to the path argument that follows it.
"""

import re

_PLUS_LINE = re.compile(r"\+([0-9]+)")


def parse_plus_line(token: str) -> int | None:
    """Parse a '+LINE' token.

    Args:
        token: A single command-line argument.

    Returns:
        The line number, or None if token is not of the form '+DIGITS'.
    """
    match = _PLUS_LINE.fullmatch(token)
    if match is None:
        return None
    return int(match.group(1))
