"""Location value objects.

A Location is what a single command-line path argument resolves to: a
filesystem path plus an optional line/column position.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class LineCol:
    """A line/column position inside a file.

    Values are kept as parsed. Zero is accepted and no upper bound is
    checked against the file's content.

    Attributes:
        line: Line number.
        column: Column number.
    """

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Location:
    """Resolved filesystem path with an optional position.

    Attributes:
        path: File or directory path, absolute or relative. May contain colons.
        line_col: Position inside the file, or None for "no specific position".
    """

    path: Path
    line_col: LineCol | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "Location":
        """Create a location with no position."""
        return cls(path=Path(path))

    @classmethod
    def from_path_and_position(
        cls, path: str | Path, line: int, column: int
    ) -> "Location":
        """Create a location pointing at a line and column.

        Args:
            path: File path.
            line: Line number.
            column: Column number.

        Returns:
            Location with a position.
        """
        return cls(path=Path(path), line_col=LineCol(line=line, column=column))

    @property
    def has_position(self) -> bool:
        return self.line_col is not None

    @property
    def line(self) -> int | None:
        return self.line_col.line if self.line_col else None

    @property
    def column(self) -> int | None:
        return self.line_col.column if self.line_col else None

    def with_line(self, line: int, column: int = 1) -> "Location":
        """Return a copy of this location pointing at the given line."""
        return Location.from_path_and_position(self.path, line, column)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {"path": str(self.path), "line": self.line, "column": self.column}

    def __str__(self) -> str:
        if self.line_col is None:
            return str(self.path)
        return f"{self.path}:{self.line_col}"


@dataclass
class OpenPaths:
    """Paths to open in a running instance, split by kind.

    Attributes:
        folders: Directory paths.
        files: File paths.
    """

    folders: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.folders) + len(self.files)

    def to_params(self) -> dict[str, list[str]]:
        """Serialize as OpenPaths notification parameters."""
        return {
            "folders": [str(p) for p in self.folders],
            "files": [str(p) for p in self.files],
        }
