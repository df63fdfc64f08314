"""Per-document colorization state and the registry of open documents.

ColorizationState ties together one document's edit log, range store,
reconciler and presentation coordinator, and funnels every public operation
through that document's SerialTaskQueue. Each operation returns a future
that resolves when the operation has run.

Example:
    registry = ColorizationRegistry(sink, styles=resolver)
    state = registry.open("file:///a.cpp")

    state.on_syntactic_result("file:///a.cpp", {Category.KEYWORD: [r]}, version=1)
    state.on_document_edited([Change.insert(Position(0, 0), "int ")], version=2)
    await state.on_semantic_result("file:///a.cpp", {}, inactive, version=2)

    await registry.close("file:///a.cpp")

"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping

from tintrack.config import ColorizationConfig, ConfigProvider, get_config
from tintrack.edits import Change, EditLog
from tintrack.location import Range
from tintrack.presentation import PresentationCoordinator
from tintrack.protocols import RenderSink, View
from tintrack.reconcile import VersionReconciler
from tintrack.scheduler import SerialTaskQueue
from tintrack.store import Pass, TokenRangeStore
from tintrack.style import StaticStyleResolver, StyleResolver
from tintrack.tokens import Category
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)

StyleLoader = Callable[[], "StyleResolver | Awaitable[StyleResolver]"]


class ColorizationState:
    """Everything tintrack tracks for one open document."""

    def __init__(
        self,
        uri: str,
        sink: RenderSink,
        *,
        styles: StyleResolver | None = None,
        config: ColorizationConfig | None = None,
        config_provider: ConfigProvider | None = None,
    ) -> None:
        self.uri = uri
        self._config_provider = config_provider
        self._log = EditLog()
        self._store = TokenRangeStore()
        self._reconciler = VersionReconciler(self._log, self._store)
        self._presentation = PresentationCoordinator(
            sink,
            self._store,
            styles or StaticStyleResolver(),
            config or (config_provider or get_config)(),
        )
        self._queue = SerialTaskQueue(name=uri)

    def __repr__(self) -> str:
        return f"ColorizationState({self.uri!r}, pending_edits={len(self._log)})"

    @property
    def edit_log(self) -> EditLog:
        return self._log

    @property
    def store(self) -> TokenRangeStore:
        return self._store

    @property
    def reconciler(self) -> VersionReconciler:
        return self._reconciler

    @property
    def presentation(self) -> PresentationCoordinator:
        return self._presentation

    @property
    def queue(self) -> SerialTaskQueue:
        return self._queue

    @property
    def config(self) -> ColorizationConfig:
        return self._presentation.config

    # ------------------------------------------------------------------
    # Operations (all serialized)
    # ------------------------------------------------------------------

    def on_document_edited(self, changes: Iterable[Change], version: int) -> asyncio.Future[None]:
        """Record an edit, move both passes through it, repaint visible views."""
        changes = tuple(changes)

        def run() -> None:
            self._log.record(changes, version)
            self._reconciler.reconcile_all()
            for view in self._presentation.views_for(self.uri):
                self._presentation.refresh(view)

        return self._queue.submit(run)

    def on_syntactic_result(
        self,
        uri: str,
        ranges_by_category: Mapping[Category, Iterable[Range]],
        version: int,
    ) -> asyncio.Future[None]:
        """Install a syntactic snapshot computed at ``version`` and repaint."""
        return self._queue.submit(
            lambda: self._update_ranges(uri, Pass.SYNTACTIC, ranges_by_category, version)
        )

    def on_semantic_result(
        self,
        uri: str,
        ranges_by_category: Mapping[Category, Iterable[Range]],
        inactive_ranges: Iterable[Range],
        version: int,
    ) -> asyncio.Future[None]:
        """Install a semantic snapshot (with inactive regions) and repaint."""
        return self._queue.submit(
            lambda: self._update_ranges(
                uri, Pass.SEMANTIC, ranges_by_category, version, inactive_ranges
            )
        )

    def refresh(self, view: View) -> asyncio.Future[None]:
        """Repaint an already-visible view, e.g. after it scrolled or gained focus."""

        def run() -> None:
            self._reconciler.reconcile_all()
            self._presentation.refresh(view)

        return self._queue.submit(run)

    def on_settings_changed(
        self, config: ColorizationConfig | None = None
    ) -> asyncio.Future[None]:
        """Adopt new configuration and rebuild handles.

        With no explicit ``config`` the configured provider is consulted when
        the task runs; without a provider, the context config at call time
        is used.
        """
        captured = config
        if captured is None and self._config_provider is None:
            captured = get_config()

        def run() -> None:
            if captured is not None:
                self._presentation.config = captured
            elif self._config_provider is not None:
                self._presentation.config = self._config_provider()
            self._reconciler.reconcile_all()
            self._presentation.rebuild(self._presentation.views_for(self.uri))

        return self._queue.submit(run)

    def reload_styles(self, loader: StyleLoader) -> asyncio.Future[None]:
        """Load a new style resolver (may suspend) and rebuild handles.

        A loader that fails leaves the document unstyled rather than
        failing the operation.
        """

        async def run() -> None:
            try:
                loaded = loader()
                resolver = await loaded if inspect.isawaitable(loaded) else loaded
            except Exception:
                logger.warning(
                    "style loading failed for %s; using no styles", self.uri, exc_info=True
                )
                resolver = StaticStyleResolver()
            self._presentation.styles = resolver
            self._reconciler.reconcile_all()
            self._presentation.rebuild(self._presentation.views_for(self.uri))

        return self._queue.submit(run)

    async def close(self) -> None:
        """Release all render handles and stop the queue."""
        try:
            if not self._queue.closed:
                await self._queue.submit(self._presentation.dispose)
        finally:
            self._presentation.dispose()
            await self._queue.close()

    def _update_ranges(
        self,
        uri: str,
        pass_: Pass,
        ranges_by_category: Mapping[Category, Iterable[Range]],
        version: int,
        inactive: Iterable[Range] | None = None,
    ) -> None:
        self._reconciler.replace(pass_, ranges_by_category, version, inactive)
        self._reconciler.reconcile_all()
        self._reconciler.purge()
        self._presentation.rebuild(self._presentation.views_for(uri))


class ColorizationRegistry:
    """Open documents by URI, each with its own ColorizationState."""

    __slots__ = ("_sink", "_styles", "_config_provider", "_states")

    def __init__(
        self,
        sink: RenderSink,
        *,
        styles: StyleResolver | None = None,
        config_provider: ConfigProvider | None = None,
    ) -> None:
        self._sink = sink
        self._styles = styles
        self._config_provider = config_provider
        self._states: dict[str, ColorizationState] = {}

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, uri: object) -> bool:
        return uri in self._states

    def open(self, uri: str) -> ColorizationState:
        """Return the state for ``uri``, creating it on first use."""
        state = self._states.get(uri)
        if state is None:
            state = ColorizationState(
                uri,
                self._sink,
                styles=self._styles,
                config_provider=self._config_provider,
            )
            self._states[uri] = state
            logger.debug("opened colorization state for %s", uri)
        return state

    def get(self, uri: str) -> ColorizationState | None:
        return self._states.get(uri)

    async def close(self, uri: str) -> None:
        """Dispose and forget the state for ``uri``; unknown URIs are ignored."""
        state = self._states.pop(uri, None)
        if state is not None:
            await state.close()
            logger.debug("closed colorization state for %s", uri)

    async def dispose_all(self) -> None:
        """Close every open document."""
        for uri in list(self._states):
            await self.close(uri)


__all__ = [
    "ColorizationRegistry",
    "ColorizationState",
    "StyleLoader",
]
