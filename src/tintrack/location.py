"""Line/character positions and ranges.

Provides the Position and Range value types used by every other module.
Coordinates are 0-indexed: the first character of a document is
``Position(0, 0)``.

Thread Safety:
Position and Range are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from tintrack.errors import InvalidRangeError


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A point in a document, ordered lexicographically by (line, character).

    Attributes:
        line: Line number (0-indexed)
        character: Character offset within the line (0-indexed)

    Examples:
        >>> Position(1, 4) < Position(2, 0)
        True
        >>> Position(1, 4).translate(character_delta=-2)
        Position(line=1, character=2)

    """

    line: int
    character: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.character < 0:
            raise InvalidRangeError(f"negative position ({self.line}, {self.character})")

    def __str__(self) -> str:
        return f"{self.line}:{self.character}"

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> Position:
        """Return a new position moved by the given deltas."""
        return Position(self.line + line_delta, self.character + character_delta)


@dataclass(frozen=True, slots=True)
class Range:
    """A half-open region of a document between two positions.

    A Range is only meaningful for the document version it was computed
    against; after an edit it must be carried forward with
    :func:`tintrack.transform.transform_range`.

    Attributes:
        start: First position covered
        end: Position just past the region (``start <= end``)

    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRangeError(f"range start {self.start} is after end {self.end}")

    def __str__(self) -> str:
        return f"[{self.start}-{self.end}]"

    @classmethod
    def from_coords(
        cls, start_line: int, start_character: int, end_line: int, end_character: int
    ) -> Range:
        """Create a range from four integer coordinates."""
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    @classmethod
    def empty(cls, position: Position) -> Range:
        """Create a zero-length range at ``position``."""
        return cls(position, position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def contains(self, position: Position) -> bool:
        """True if ``position`` lies inside the range (end excluded)."""
        return self.start <= position < self.end
