"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from tintrack.edits import Change
from tintrack.location import Position, Range
from tintrack.tokens import CATEGORY_COUNT, Category


@pytest.fixture
def large_classification() -> dict[Category, list[Range]]:
    """Ranges for a ~5000 line document, spread over every category."""
    by_category: dict[Category, list[Range]] = {c: [] for c in Category}
    for line in range(5000):
        for column in range(0, 80, 8):
            category = Category((line + column) % CATEGORY_COUNT)
            by_category[category].append(Range.from_coords(line, column, line, column + 5))
    return by_category


@pytest.fixture
def typing_burst() -> list[list[Change]]:
    """Fifty single-character insertions near the top, as when typing."""
    return [[Change.insert(Position(10, i), "x")] for i in range(50)]


@pytest.fixture
def line_insertions() -> list[list[Change]]:
    """Twenty newlines inserted at the top of the document."""
    return [[Change.insert(Position(0, 0), "\n")] for _ in range(20)]
