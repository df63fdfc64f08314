"""Render handle lifecycle and painting for one document.

The only way to take painted ranges off the screen is to dispose the handle
they were painted with. Disposing before repainting leaves a frame with no
colors at all, which shows up as a flicker. So a rebuild always:

1. Sets the current handles aside.
2. Creates a complete new set from the current styles and configuration.
3. Paints every known range on the new handles in every visible view.
4. Disposes the handles set aside in step 1.

Thread Safety:
    Not thread-safe. Owned by one document and driven from its task queue.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from tintrack.config import ColorizationConfig, PaintPriority
from tintrack.protocols import RenderSink, View
from tintrack.store import TokenRangeStore
from tintrack.style import (
    StyleResolver,
    inactive_region_options,
    render_options_for,
    resolve_safely,
)
from tintrack.tokens import Category
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class HandleSet:
    """Handles for one generation of styles: one per category plus inactive."""

    categories: dict[Category, Any] = field(default_factory=dict)
    inactive: Any = None

    def __bool__(self) -> bool:
        return bool(self.categories) or self.inactive is not None

    def __len__(self) -> int:
        return len(self.categories) + (self.inactive is not None)


class PresentationCoordinator:
    """Paints a TokenRangeStore through a RenderSink without visible gaps."""

    __slots__ = ("_sink", "_store", "_styles", "_handles", "config")

    def __init__(
        self,
        sink: RenderSink,
        store: TokenRangeStore,
        styles: StyleResolver,
        config: ColorizationConfig | None = None,
    ) -> None:
        self._sink = sink
        self._store = store
        self._styles = styles
        self._handles = HandleSet()
        self.config = config or ColorizationConfig()

    @property
    def handles(self) -> HandleSet:
        return self._handles

    @property
    def styles(self) -> StyleResolver:
        return self._styles

    @styles.setter
    def styles(self, resolver: StyleResolver) -> None:
        self._styles = resolver

    def views_for(self, uri: str) -> list[View]:
        """Visible views showing the document at ``uri``."""
        return [view for view in self._sink.visible_views() if view.uri == uri]

    def refresh(self, view: View) -> None:
        """Paint the current merged ranges on ``view`` with the existing handles."""
        # Empty lists clear ranges an edit removed since the last paint
        if self.config.colorization_active:
            for category, handle in self._handles.categories.items():
                self._sink.apply_ranges(view, handle, self._store.merged(category))

        # Opacity dims overlapping handles whatever their creation order
        if self.config.dim_inactive_regions and self._handles.inactive is not None:
            self._sink.apply_ranges(view, self._handles.inactive, self._store.inactive_ranges)

    def rebuild(self, views: Iterable[View]) -> None:
        """Swap in a fresh set of handles and repaint ``views`` on them."""
        retired = self._handles
        self._handles = self._create_handles()
        count = 0
        for view in views:
            self.refresh(view)
            count += 1
        logger.debug(
            "created %d handles, painted %d views, retiring %d handles",
            len(self._handles),
            count,
            len(retired),
        )
        self._dispose(retired)

    def dispose(self) -> None:
        """Release every handle. Safe to call any number of times."""
        retired = self._handles
        self._handles = HandleSet()
        self._dispose(retired)

    def _create_handles(self) -> HandleSet:
        config = self.config
        handles = HandleSet()
        if config.colorization_active:
            if config.paint_priority is PaintPriority.FIRST_CREATED:
                order: Iterable[Category] = reversed(Category)
            else:
                order = Category
            for category in order:
                options = render_options_for(resolve_safely(self._styles, category))
                if options is not None:
                    handles.categories[category] = self._sink.create_handle(options)
        if config.dim_inactive_regions:
            handles.inactive = self._sink.create_handle(
                inactive_region_options(
                    config.inactive_region_opacity,
                    config.inactive_region_background,
                    config.inactive_region_foreground,
                )
            )
        return handles

    def _dispose(self, handles: HandleSet) -> None:
        if handles.inactive is not None:
            self._sink.dispose_handle(handles.inactive)
        for handle in handles.categories.values():
            self._sink.dispose_handle(handle)
        handles.categories.clear()
        handles.inactive = None


__all__ = ["HandleSet", "PresentationCoordinator"]
