"""Replay pending edits against each pass's stored ranges.

The two classification passes report at their own pace, so at any moment
each one may describe a different, older version of the document. The
reconciler brings each pass up to date independently by replaying the
edits it has not yet seen, and prunes edits that neither pass can need
again.

Example:
    >>> log = EditLog()
    >>> store = TokenRangeStore()
    >>> reconciler = VersionReconciler(log, store)
    >>> reconciler.replace(Pass.SYNTACTIC, {Category.COMMENT: [r]}, version=1)
    >>> log.record([Change.insert(Position(0, 0), "x")], version=2)
    >>> reconciler.reconcile(Pass.SYNTACTIC)
    1

Thread Safety:
    Not thread-safe. Owned by one document and driven from its task queue.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tintrack.edits import EditLog
from tintrack.location import Range
from tintrack.store import Pass, TokenRangeStore
from tintrack.tokens import Category
from tintrack.transform import transform_ranges
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


class VersionReconciler:
    """Keeps a TokenRangeStore in step with an EditLog."""

    __slots__ = ("_log", "_store")

    def __init__(self, log: EditLog, store: TokenRangeStore) -> None:
        self._log = log
        self._store = store

    @property
    def log(self) -> EditLog:
        return self._log

    @property
    def store(self) -> TokenRangeStore:
        return self._store

    def applied_version(self, pass_: Pass) -> int:
        return self._store.state(pass_).applied_version

    def last_received_version(self, pass_: Pass) -> int:
        return self._store.state(pass_).last_received_version

    def reconcile(self, pass_: Pass) -> int:
        """Apply every edit newer than the pass's applied version.

        Edits are consumed oldest first; within an edit, changes are applied
        in order. Ranges that an edit deletes entirely are dropped.

        Returns:
            Number of edits consumed (0 when already caught up).

        """
        state = self._store.state(pass_)
        consumed = 0
        for edit in self._log.pending(state.applied_version):
            for category, ranges in state.ranges.items():
                if ranges:
                    state.ranges[category] = transform_ranges(ranges, edit.changes)
            if pass_ is Pass.SEMANTIC and self._store.inactive_ranges:
                self._store.inactive_ranges = transform_ranges(
                    self._store.inactive_ranges, edit.changes
                )
            state.applied_version = edit.version
            consumed += 1
        if consumed:
            logger.debug(
                "%s ranges moved through %d edits to v%d",
                pass_.value,
                consumed,
                state.applied_version,
            )
        return consumed

    def reconcile_all(self) -> int:
        """Reconcile both passes; returns the total edits consumed."""
        return sum(self.reconcile(p) for p in Pass)

    def record_classification_received(self, pass_: Pass, version: int) -> None:
        """Note that the classifier for ``pass_`` reported ``version``."""
        state = self._store.state(pass_)
        state.last_received_version = max(state.last_received_version, version)

    def purge(self) -> int:
        """Drop edits at or below the oldest last-received version.

        No pass will be handed a snapshot older than its last received
        version, so those edits can never be replayed again.

        Returns:
            Number of edits removed.

        """
        floor = min(self.last_received_version(p) for p in Pass)
        return self._log.purge_through(floor)

    def replace(
        self,
        pass_: Pass,
        ranges_by_category: Mapping[Category, Iterable[Range]],
        version: int,
        inactive: Iterable[Range] | None = None,
    ) -> bool:
        """Install a fresh classification snapshot computed at ``version``.

        The ranges are stored as-is; the classifier produced them against
        exactly that version. Edits newer than ``version`` are picked up by
        the next :meth:`reconcile`.

        A snapshot older than one already received for the same pass is
        dropped, since the edits it would need may already be purged.

        Returns:
            True if the snapshot was installed.

        """
        state = self._store.state(pass_)
        if version < state.last_received_version:
            logger.debug(
                "dropping %s snapshot v%d, already received v%d",
                pass_.value,
                version,
                state.last_received_version,
            )
            return False
        self._store.replace_pass(pass_, ranges_by_category, inactive)
        state.applied_version = version
        self.record_classification_received(pass_, version)
        return True


__all__ = ["VersionReconciler"]
