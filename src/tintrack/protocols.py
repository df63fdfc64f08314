"""Protocols for tintrack.

Defines the contracts for the host's rendering sink and the views it
exposes. tintrack never paints anything itself; it only tells the sink
which handles to create, which ranges to put on them, and when to release
them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from tintrack.location import Range
from tintrack.style import RenderOptions


class View(Protocol):
    """A visible editor showing some document."""

    @property
    def uri(self) -> str:
        """URI of the document shown in this view."""
        ...


class RenderSink(Protocol):
    """Protocol for the host's painting primitive.

    Handles are opaque to tintrack. A handle stays valid until it is passed
    to :meth:`dispose_handle`; disposing is the only way to remove its
    ranges from every view.

    Thread Safety:
        Called only from the owning document's task queue.

    """

    def create_handle(self, options: RenderOptions) -> Any:
        """Create a render handle that paints ranges with ``options``."""
        ...

    def dispose_handle(self, handle: Any) -> None:
        """Release a handle and clear everything painted with it."""
        ...

    def apply_ranges(self, view: View, handle: Any, ranges: Sequence[Range]) -> None:
        """Replace the ranges painted with ``handle`` in ``view``."""
        ...

    def visible_views(self) -> Iterable[View]:
        """Views currently on screen, for any document."""
        ...
