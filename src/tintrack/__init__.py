"""
tintrack — Incremental token-range tracking for editor colorization

Keeps classified token ranges (comments, keywords, types, ...) in the right
place while a document is edited, reconciles a fast syntactic pass and a
slower semantic pass that report out of order, and swaps render handles
without a visible gap. Zero runtime dependencies.

Quick Start:
    >>> from tintrack import Change, Position, Range, transform_ranges
    >>> r = Range.from_coords(2, 5, 2, 10)
    >>> transform_ranges([r], [Change(Range.from_coords(2, 0, 2, 3), "ab")])
    [Range(start=Position(line=2, character=4), end=Position(line=2, character=9))]

Per-document state:
    >>> from tintrack import ColorizationRegistry, Category
    >>> registry = ColorizationRegistry(sink, styles=resolver)
    >>> state = registry.open("file:///main.cpp")
    >>> state.on_syntactic_result("file:///main.cpp", {Category.KEYWORD: ranges}, 1)
    >>> state.on_document_edited(changes, 2)

The rendering sink, the style resolver and settings retrieval are supplied
by the host; see tintrack.protocols and tintrack.style.
"""

from tintrack.config import (
    ColorizationConfig,
    GrammarSwitch,
    PaintPriority,
    config_context,
    get_config,
    reset_config,
    set_config,
    update_grammars,
)
from tintrack.edits import Change, Edit, EditLog
from tintrack.errors import (
    InvalidChangeError,
    InvalidRangeError,
    PayloadError,
    QueueClosedError,
    TintrackError,
    VersionOrderError,
)
from tintrack.location import Position, Range
from tintrack.presentation import HandleSet, PresentationCoordinator
from tintrack.protocols import RenderSink, View
from tintrack.reconcile import VersionReconciler
from tintrack.scheduler import SerialTaskQueue
from tintrack.serialization import (
    SemanticResult,
    SyntacticResult,
    edit_from_dict,
    semantic_result_from_dict,
    syntactic_result_from_dict,
)
from tintrack.state import ColorizationRegistry, ColorizationState
from tintrack.store import Pass, TokenRangeStore
from tintrack.style import (
    RenderOptions,
    StaticStyleResolver,
    StyleResolver,
    ThemeStyle,
    render_options_for,
)
from tintrack.tokens import CATEGORY_COUNT, Category
from tintrack.transform import text_end, transform_range, transform_ranges

__version__ = "0.1.0"

__all__ = [
    # Core types
    "CATEGORY_COUNT",
    "Category",
    "Change",
    "Edit",
    "Position",
    "Range",
    # Range transform
    "text_end",
    "transform_range",
    "transform_ranges",
    # Reconciliation
    "EditLog",
    "Pass",
    "TokenRangeStore",
    "VersionReconciler",
    # Presentation
    "HandleSet",
    "PresentationCoordinator",
    "RenderOptions",
    "RenderSink",
    "StaticStyleResolver",
    "StyleResolver",
    "ThemeStyle",
    "View",
    "render_options_for",
    # Documents
    "ColorizationRegistry",
    "ColorizationState",
    "SerialTaskQueue",
    # Configuration
    "ColorizationConfig",
    "GrammarSwitch",
    "PaintPriority",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
    "update_grammars",
    # Payloads
    "SemanticResult",
    "SyntacticResult",
    "edit_from_dict",
    "semantic_result_from_dict",
    "syntactic_result_from_dict",
    # Errors
    "InvalidChangeError",
    "InvalidRangeError",
    "PayloadError",
    "QueueClosedError",
    "TintrackError",
    "VersionOrderError",
]
