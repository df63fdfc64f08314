"""Versioned record of document edits.

Edits are kept until both classification passes have moved past them, so
either pass can replay the edits it has not yet seen against ranges it
received for an older document version.

Thread Safety:
Change and Edit are frozen. EditLog is mutable and owned by one document;
callers serialize access through the document's task queue.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from tintrack.errors import VersionOrderError
from tintrack.location import Position, Range
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Change:
    """A single text replacement.

    An empty ``removed_range`` is a pure insertion; an empty
    ``inserted_text`` is a pure deletion.

    Attributes:
        removed_range: Region replaced, in the coordinates before this change
        inserted_text: Text typed at ``removed_range.start``

    """

    removed_range: Range
    inserted_text: str = ""

    @classmethod
    def insert(cls, at: Position, text: str) -> Change:
        """Create a pure insertion at ``at``."""
        return cls(Range.empty(at), text)

    @classmethod
    def delete(cls, removed: Range) -> Change:
        """Create a pure deletion of ``removed``."""
        return cls(removed, "")


@dataclass(frozen=True, slots=True)
class Edit:
    """All changes that produced one document version.

    Changes are applied in order, each against the coordinate space left
    by the previous one.

    """

    version: int
    changes: tuple[Change, ...]


class EditLog:
    """Ordered log of edits with strictly increasing versions."""

    __slots__ = ("_edits",)

    def __init__(self) -> None:
        self._edits: list[Edit] = []

    def __len__(self) -> int:
        return len(self._edits)

    def __iter__(self) -> Iterator[Edit]:
        return iter(self._edits)

    def __repr__(self) -> str:
        return f"EditLog(versions={[e.version for e in self._edits]})"

    @property
    def latest_version(self) -> int | None:
        """Version of the newest recorded edit, or None if the log is empty."""
        return self._edits[-1].version if self._edits else None

    def record(self, changes: Iterable[Change], version: int) -> Edit:
        """Append the changes that produced ``version``.

        Raises:
            VersionOrderError: If ``version`` is not greater than the last
                recorded version.

        """
        latest = self.latest_version
        if latest is not None and version <= latest:
            raise VersionOrderError(version, latest)
        edit = Edit(version=version, changes=tuple(changes))
        self._edits.append(edit)
        logger.debug("recorded edit v%d (%d changes)", version, len(edit.changes))
        return edit

    def pending(self, after_version: int) -> Iterator[Edit]:
        """Yield edits newer than ``after_version``, oldest first."""
        for edit in self._edits:
            if edit.version > after_version:
                yield edit

    def purge_through(self, version: int) -> int:
        """Drop every edit with a version <= ``version``.

        Returns:
            Number of edits removed.

        """
        index = 0
        for index, edit in enumerate(self._edits):
            if edit.version > version:
                break
        else:
            index = len(self._edits)
        if index:
            del self._edits[:index]
            logger.debug("purged %d edits through v%d", index, version)
        return index


__all__ = [
    "Change",
    "Edit",
    "EditLog",
]
