"""Per-pass storage of classified ranges.

Each classification pass keeps its own snapshot of Category -> ranges,
along with the two version counters the reconciler needs:

- ``applied_version``: the document version the stored ranges describe
- ``last_received_version``: the newest version the classifier reported

The semantic pass additionally owns the inactive-region ranges (code
disabled by preprocessor branches), which carry no category.

Thread Safety:
Not thread-safe. One store belongs to one document and is only touched
from that document's task queue.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

from tintrack.location import Range
from tintrack.tokens import Category
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


class Pass(Enum):
    """The two independent classification producers."""

    SYNTACTIC = "syntactic"
    SEMANTIC = "semantic"


@dataclass(slots=True)
class PassState:
    """Ranges and version counters for one classification pass."""

    ranges: dict[Category, list[Range]] = field(default_factory=dict)
    applied_version: int = 0
    last_received_version: int = 0


class TokenRangeStore:
    """Category -> ranges for both passes, plus semantic inactive regions."""

    __slots__ = ("_passes", "inactive_ranges")

    def __init__(self) -> None:
        self._passes: dict[Pass, PassState] = {p: PassState() for p in Pass}
        self.inactive_ranges: list[Range] = []

    def state(self, pass_: Pass) -> PassState:
        return self._passes[pass_]

    def ranges(self, pass_: Pass, category: Category) -> list[Range]:
        """Ranges of ``category`` for ``pass_`` (empty list if none)."""
        return self._passes[pass_].ranges.get(category, [])

    def set_ranges(self, pass_: Pass, category: Category, ranges: Iterable[Range]) -> None:
        self._passes[pass_].ranges[category] = list(ranges)

    def replace_pass(
        self,
        pass_: Pass,
        ranges_by_category: Mapping[Category, Iterable[Range]],
        inactive: Iterable[Range] | None = None,
    ) -> None:
        """Overwrite every category of ``pass_`` with a fresh snapshot.

        Categories missing from the mapping end up with no ranges. For the
        semantic pass the inactive regions are replaced as well (cleared
        when ``inactive`` is None).
        """
        snapshot: dict[Category, list[Range]] = {}
        for key, ranges in ranges_by_category.items():
            category = Category.lookup(key)
            if category is None:
                logger.debug("ignoring ranges for unknown category %r", key)
                continue
            snapshot[category] = list(ranges)
        self._passes[pass_].ranges = snapshot
        if pass_ is Pass.SEMANTIC:
            self.inactive_ranges = list(inactive) if inactive is not None else []

    def merged(self, category: Category) -> list[Range]:
        """Syntactic ranges followed by semantic ranges for ``category``."""
        syntactic = self.ranges(Pass.SYNTACTIC, category)
        semantic = self.ranges(Pass.SEMANTIC, category)
        if not semantic:
            return list(syntactic)
        if not syntactic:
            return list(semantic)
        return syntactic + semantic

    def categories_with_ranges(self) -> Iterator[Category]:
        """Categories that have at least one range in either pass, in ordinal order."""
        for category in Category:
            if self.ranges(Pass.SYNTACTIC, category) or self.ranges(Pass.SEMANTIC, category):
                yield category

    def range_count(self, pass_: Pass | None = None) -> int:
        """Total stored ranges for one pass, or for both when ``pass_`` is None."""
        passes = (pass_,) if pass_ is not None else tuple(Pass)
        return sum(
            len(ranges) for p in passes for ranges in self._passes[p].ranges.values()
        )


__all__ = [
    "Pass",
    "PassState",
    "TokenRangeStore",
]
