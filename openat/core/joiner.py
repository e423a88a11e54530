"""Segment joining used to rebuild candidate paths.

When a ':LINE' or ':LINE:COLUMN' suffix is stripped from a filename, the
remaining colon-separated tokens are put back together with these helpers.
"""

from collections.abc import Iterable


def join_segments(segments: Iterable[str], separator: str) -> str:
    """Concatenate segments, writing separator after every segment.

    The separator follows the last segment too; callers that want a plain
    join trim it once (see join_prefix).

    Args:
        segments: Segments in the order they should appear.
        separator: Separator written after each segment.

    Returns:
        Joined string, or "" when there are no segments.

    Example:
        join_segments(["a", "b"], ":") == "a:b:"
    """
    buffer: list[str] = []
    for segment in segments:
        buffer.append(segment)
        buffer.append(separator)
    return "".join(buffer)


def join_prefix(segments: Iterable[str], separator: str) -> str:
    """Join segments with separator and no trailing separator.

    Args:
        segments: Segments in the order they should appear.
        separator: Separator placed between segments.

    Returns:
        Joined string, or "" when there are no segments.
    """
    joined = join_segments(segments, separator)
    if separator and joined.endswith(separator):
        return joined[: -len(separator)]
    return joined
