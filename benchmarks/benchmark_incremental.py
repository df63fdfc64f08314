"""Benchmark reconciling a late classification against pending edits.

Compares replaying a burst of edits over every stored range (what happens
when a slow pass reports an old version) with the cost of one transform per
edit.

Run with:
    pytest benchmarks/benchmark_incremental.py -v --benchmark-only
"""

import pytest

from tintrack.edits import EditLog
from tintrack.reconcile import VersionReconciler
from tintrack.store import Pass, TokenRangeStore
from tintrack.transform import transform_ranges


def _reconciler(classification, edits) -> VersionReconciler:
    log = EditLog()
    for version, changes in enumerate(edits, start=1):
        log.record(changes, version)
    rec = VersionReconciler(log, TokenRangeStore())
    rec.replace(Pass.SEMANTIC, classification, version=0)
    return rec


@pytest.mark.benchmark(group="reconcile")
def test_benchmark_reconcile_typing_burst(benchmark, large_classification, typing_burst):
    """Replay 50 same-line insertions over ~50k ranges."""

    def reconcile():
        _reconciler(large_classification, typing_burst).reconcile(Pass.SEMANTIC)

    benchmark(reconcile)


@pytest.mark.benchmark(group="reconcile")
def test_benchmark_reconcile_line_insertions(benchmark, large_classification, line_insertions):
    """Replay 20 line insertions, which move every range."""

    def reconcile():
        _reconciler(large_classification, line_insertions).reconcile(Pass.SEMANTIC)

    benchmark(reconcile)


@pytest.mark.benchmark(group="transform")
def test_benchmark_transform_one_category(benchmark, large_classification, typing_burst):
    """Baseline: transform a single category's ranges through the burst."""
    ranges = next(iter(large_classification.values()))
    changes = [change for batch in typing_burst for change in batch]

    benchmark(transform_ranges, ranges, changes)
