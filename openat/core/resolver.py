"""Resolution of 'PATH[:LINE[:COLUMN]]' command-line arguments.

The grammar is ambiguous: colons are legal in filenames and a trailing digit
group may be part of the name. Existence on disk decides. Each argument
expands into an ordered list of candidates, each a (path, position) pair;
the first candidate that names an existing file wins. When none does, the
argument is taken as a literal filename with no position.

Example, with only "Cargo.toml" on disk:
    "Cargo.toml:55"          -> Cargo.toml, line 55, column 1
    "Cargo.toml:55:3"        -> Cargo.toml, line 55, column 3
    "Cargo.toml:12:623:352"  -> Cargo.toml:12:623:352, no position
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path, PurePath

from openat.adapters.fs.local import LocalFileSystem
from openat.core.joiner import join_prefix
from openat.domain.location import LineCol, Location
from openat.ports.fs import PathInspector

logger = logging.getLogger(__name__)

SUFFIX_SEPARATOR = ":"

_NUMERIC = re.compile(r"[0-9]+")


def is_numeric_token(token: str) -> bool:
    """Check if token is a non-negative decimal integer (ASCII digits only)."""
    return _NUMERIC.fullmatch(token) is not None


@dataclass(frozen=True)
class Candidate:
    """One interpretation of a raw argument.

    Attributes:
        path: Path that must exist as a file for this interpretation to hold.
        line_col: Position implied by the stripped suffix, if any.
    """

    path: Path
    line_col: LineCol | None = None

    def to_location(self) -> Location:
        return Location(path=self.path, line_col=self.line_col)


def split_final_component(raw: str) -> tuple[Path, str] | None:
    """Split raw into a normalized directory prefix and its final component.

    The prefix is normalized lexically, so "./a/../Cargo.toml" splits into
    (Path("."), "Cargo.toml").

    Args:
        raw: Raw path argument.

    Returns:
        (prefix, final component), or None if the last segment is not an
        ordinary name (a root, "." or "..").
    """
    pure = PurePath(raw)
    final = pure.name
    if final in ("", ".", ".."):
        return None
    prefix = Path(os.path.normpath(pure.parent))
    return prefix, final


class PathResolver:
    """Resolves raw path arguments into Locations using the filesystem."""

    def __init__(self, fs: PathInspector | None = None) -> None:
        """Initialize resolver.

        Args:
            fs: Filesystem used for existence checks (default: local disk).
        """
        self._fs = fs or LocalFileSystem()

    def candidates(self, raw: str) -> list[Candidate]:
        """List the interpretations of raw in priority order.

        The first entry is always raw itself taken verbatim. Position
        candidates only appear when the final component ends in ':DIGITS';
        only the two rightmost colon-separated tokens are ever read as a
        position.

        Args:
            raw: Raw path argument.

        Returns:
            Candidates, highest priority first.
        """
        ordered = [Candidate(Path(raw))]

        split = split_final_component(raw)
        if split is None:
            return ordered
        prefix, final = split

        tokens = final.split(SUFFIX_SEPARATOR)
        if len(tokens) < 2 or not is_numeric_token(tokens[-1]):
            return ordered

        last = int(tokens[-1])
        if is_numeric_token(tokens[-2]):
            self._append_stripped(
                ordered, prefix, tokens[:-2], LineCol(line=int(tokens[-2]), column=last)
            )
        self._append_stripped(ordered, prefix, tokens[:-1], LineCol(line=last, column=1))
        literal = Candidate(prefix / final)
        if literal not in ordered:
            ordered.append(literal)
        return ordered

    def _append_stripped(
        self,
        ordered: list[Candidate],
        prefix: Path,
        tokens: list[str],
        line_col: LineCol,
    ) -> None:
        stem = join_prefix(tokens, SUFFIX_SEPARATOR)
        # ":55" has nothing left to name a file
        if stem:
            ordered.append(Candidate(prefix / stem, line_col))

    def fallback(self, raw: str) -> Location:
        """Location used when no candidate exists on disk.

        Args:
            raw: Raw path argument.

        Returns:
            The full final component (all colons kept) under the normalized
            prefix with no position, or raw unchanged if it has no ordinary
            final component.
        """
        split = split_final_component(raw)
        if split is None:
            return Location.from_path(raw)
        prefix, final = split
        return Location.from_path(prefix / final)

    def resolve(self, raw: str) -> Location:
        """Resolve a raw argument into a Location.

        Never raises: filesystem errors count as "file does not exist" and
        malformed suffixes fall back to a literal filename.

        Args:
            raw: Raw path argument, e.g. "src/main.py:10:4".

        Returns:
            Resolved Location.
        """
        for candidate in self.candidates(raw):
            if self._fs.is_file(candidate.path):
                logger.debug(
                    f"Resolved {raw!r} to {candidate.path} "
                    f"(position: {candidate.line_col})"
                )
                return candidate.to_location()

        location = self.fallback(raw)
        logger.debug(f"No candidate for {raw!r} exists, using {location.path}")
        return location


def resolve_location(raw: str, fs: PathInspector | None = None) -> Location:
    """Resolve a raw 'PATH[:LINE[:COLUMN]]' argument.

    Args:
        raw: Raw path argument.
        fs: Filesystem used for existence checks (default: local disk).

    Returns:
        Resolved Location.
    """
    return PathResolver(fs).resolve(raw)
