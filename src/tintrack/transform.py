"""Carry ranges forward through text replacements.

When the user types, every range computed against the previous document
version goes stale. Rather than waiting for a classifier to re-scan, this
module moves each stored range through the replacement geometrically:

1. An edit that starts at or after the range leaves it untouched.
2. An edit that starts at or before the range either deletes it (when the
   removed text covers it) or trims its head and shifts what is left.
3. An edit that starts inside the range stretches or shrinks its tail.

No document text is needed, only the three positions that describe a
replacement.

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

from collections.abc import Iterable, Sequence

from tintrack.edits import Change
from tintrack.errors import InvalidChangeError
from tintrack.location import Position, Range


def text_end(text: str, start: Position) -> Position:
    """Position where ``text`` ends when typed starting at ``start``.

    Line breaks are ``\\n``; a ``\\r\\n`` pair counts as one break.

    Example:
        >>> text_end("ab", Position(2, 0))
        Position(line=2, character=2)
        >>> text_end("a\\nbcd", Position(2, 7))
        Position(line=3, character=3)

    """
    breaks = text.count("\n")
    if breaks == 0:
        return Position(start.line, start.character + len(text))
    return Position(start.line + breaks, len(text) - text.rfind("\n") - 1)


def transform_range(
    rng: Range,
    removed_start: Position,
    removed_end: Position,
    inserted_end: Position,
) -> Range | None:
    """Map ``rng`` through a single replacement.

    Args:
        rng: Range in the coordinate space before the replacement.
        removed_start: Start of the replaced text (also where insertion begins).
        removed_end: End of the replaced text, in the old coordinate space.
        inserted_end: End of the inserted text, in the new coordinate space.

    Returns:
        The range in the new coordinate space, or None when the replacement
        removed every character of it.

    Raises:
        InvalidChangeError: If the removed region or the insertion is inverted.

    """
    if removed_end < removed_start:
        raise InvalidChangeError(f"removed region {removed_start}-{removed_end} is inverted")
    if inserted_end < removed_start:
        raise InvalidChangeError(f"insertion ends at {inserted_end} before {removed_start}")

    # Replacement entirely after the range
    if removed_start >= rng.end:
        return rng

    if removed_start <= rng.start:
        # Removed text covers the whole range
        if removed_end >= rng.end:
            return None

        # Removal eats the head of the range; only the tail survives
        if removed_end >= rng.start:
            rng = Range(removed_end, rng.end)

        rng = _shift_after_remove(rng, removed_start, removed_end)
        return _shift_after_insert(rng, removed_start, inserted_end)

    # Replacement starts strictly inside the range.

    # Tail consumed: the range now ends where the insertion ends
    if removed_end >= rng.end:
        return Range(rng.start, inserted_end)

    # Surviving tail sits on the last removed line: append its characters
    if removed_end.line == rng.end.line:
        return Range(
            rng.start,
            Position(
                inserted_end.line,
                inserted_end.character + (rng.end.character - removed_end.character),
            ),
        )

    # Surviving tail is on a later line; only its line number moves
    removed_lines = removed_end.line - removed_start.line
    added_lines = inserted_end.line - removed_start.line
    return Range(rng.start, rng.end.translate(line_delta=added_lines - removed_lines))


def _shift_after_remove(rng: Range, removed_start: Position, removed_end: Position) -> Range:
    """Pull a range that starts at/after ``removed_end`` back to ``removed_start``."""
    line_delta = removed_start.line - removed_end.line
    start_delta = 0
    end_delta = 0
    if rng.start.line == removed_end.line:
        start_delta = removed_start.character - removed_end.character
        if rng.end.line == removed_end.line:
            end_delta = start_delta
    return Range(
        rng.start.translate(line_delta, start_delta),
        rng.end.translate(line_delta, end_delta),
    )


def _shift_after_insert(rng: Range, insert_start: Position, insert_end: Position) -> Range:
    """Push a range that starts at/after ``insert_start`` past the inserted text.

    A boundary on the insertion line keeps its distance from the insertion
    point and is re-anchored at ``insert_end``. For a single-line insertion
    that is a shift by the inserted length; for a multi-line one the
    characters before the insertion point stay on the first line.
    """
    added_lines = insert_end.line - insert_start.line
    start = rng.start.translate(line_delta=added_lines)
    end = rng.end.translate(line_delta=added_lines)
    if rng.start.line == insert_start.line:
        offset = insert_end.character - insert_start.character
        start = start.translate(character_delta=offset)
        if rng.end.line == insert_start.line:
            end = end.translate(character_delta=offset)
    return Range(start, end)


def apply_change(ranges: Sequence[Range], change: Change) -> list[Range]:
    """Map every range through one change, dropping deleted ones."""
    start = change.removed_range.start
    removed_end = change.removed_range.end
    inserted_end = text_end(change.inserted_text, start)
    result: list[Range] = []
    for rng in ranges:
        moved = transform_range(rng, start, removed_end, inserted_end)
        if moved is not None:
            result.append(moved)
    return result


def transform_ranges(ranges: Sequence[Range], changes: Iterable[Change]) -> list[Range]:
    """Map ranges through a sequence of changes applied one after another.

    Each change is expressed in the coordinate space produced by the
    previous one, matching how an editor reports a multi-cursor edit.

    Returns:
        New list of surviving ranges in their original order. An empty
        input returns an empty list without looking at the changes.

    """
    result = list(ranges)
    if not result:
        return result
    for change in changes:
        result = apply_change(result, change)
        if not result:
            break
    return result


__all__ = [
    "apply_change",
    "text_end",
    "transform_range",
    "transform_ranges",
]
