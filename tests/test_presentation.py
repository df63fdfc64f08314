"""Tests for handle lifecycle and painting."""

from conftest import FakeView, RecordingSink

from tintrack.config import ColorizationConfig, PaintPriority
from tintrack.location import Range
from tintrack.presentation import PresentationCoordinator
from tintrack.store import Pass, TokenRangeStore
from tintrack.style import StaticStyleResolver, ThemeStyle
from tintrack.tokens import CATEGORY_COUNT, Category


def _r(line: int, sc: int, ec: int) -> Range:
    return Range.from_coords(line, sc, line, ec)


def _coordinator(
    sink: RecordingSink,
    styles: StaticStyleResolver,
    store: TokenRangeStore | None = None,
    **config: object,
) -> PresentationCoordinator:
    return PresentationCoordinator(
        sink,
        store or TokenRangeStore(),
        styles,
        ColorizationConfig(**config),  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Handle creation
# ---------------------------------------------------------------------------


class TestHandleCreation:
    def test_one_handle_per_styled_category_plus_inactive(self, sink, styles) -> None:
        pc = _coordinator(sink, styles)
        pc.rebuild([])
        assert len(pc.handles.categories) == CATEGORY_COUNT
        assert pc.handles.inactive is not None
        assert len(sink.created()) == CATEGORY_COUNT + 1

    def test_first_created_priority_uses_reverse_ordinal_order(self, sink, styles) -> None:
        pc = _coordinator(sink, styles)
        pc.rebuild([])
        assert list(pc.handles.categories) == list(reversed(Category))
        assert sink.created() == [*pc.handles.categories.values(), pc.handles.inactive]

    def test_last_created_priority_uses_ordinal_order(self, sink, styles) -> None:
        pc = _coordinator(sink, styles, paint_priority=PaintPriority.LAST_CREATED)
        pc.rebuild([])
        assert list(pc.handles.categories) == list(Category)

    def test_unstyled_categories_get_no_handle(self, sink) -> None:
        comment = ThemeStyle(foreground="#6a9955")
        resolver = StaticStyleResolver(overrides={Category.COMMENT: comment})
        pc = _coordinator(sink, resolver)
        pc.rebuild([])
        assert list(pc.handles.categories) == [Category.COMMENT]
        assert pc.handles.categories[Category.COMMENT].options.color == "#6a9955"

    def test_inactive_handle_uses_configured_opacity(self, sink, styles) -> None:
        pc = _coordinator(sink, styles, inactive_region_opacity=0.3)
        pc.rebuild([])
        assert pc.handles.inactive.options.opacity == 0.3

    def test_colorization_inactive_creates_only_inactive_handle(self, sink, styles) -> None:
        pc = _coordinator(sink, styles, default_engine_active=False)
        pc.rebuild([])
        assert not pc.handles.categories
        assert len(sink.created()) == 1

    def test_dimming_disabled_creates_no_inactive_handle(self, sink, styles) -> None:
        pc = _coordinator(sink, styles, dim_inactive_regions=False)
        pc.rebuild([])
        assert pc.handles.inactive is None

    def test_nothing_enabled_creates_nothing(self, sink, styles) -> None:
        pc = _coordinator(sink, styles, enhanced_colorization=False, dim_inactive_regions=False)
        pc.rebuild([])
        assert not pc.handles
        assert sink.events == []


# ---------------------------------------------------------------------------
# Painting
# ---------------------------------------------------------------------------


class TestRefresh:
    def test_paints_merged_ranges_and_inactive(self, sink, styles, view) -> None:
        store = TokenRangeStore()
        store.set_ranges(Pass.SYNTACTIC, Category.KEYWORD, [_r(0, 0, 3)])
        store.set_ranges(Pass.SEMANTIC, Category.KEYWORD, [_r(1, 0, 3)])
        store.inactive_ranges = [Range.from_coords(4, 0, 6, 0)]
        pc = _coordinator(sink, styles, store)
        pc.rebuild([])
        sink.clear()

        pc.refresh(view)

        keyword = pc.handles.categories[Category.KEYWORD]
        assert sink.last_applied(keyword, view) == [_r(0, 0, 3), _r(1, 0, 3)]
        assert sink.applied()[-1] == (view, pc.handles.inactive, [Range.from_coords(4, 0, 6, 0)])

    def test_repaints_every_handle_even_when_empty(self, sink, styles, view) -> None:
        store = TokenRangeStore()
        store.set_ranges(Pass.SEMANTIC, Category.TYPE, [_r(2, 0, 5)])
        pc = _coordinator(sink, styles, store, dim_inactive_regions=False)
        pc.rebuild([])
        sink.clear()

        pc.refresh(view)

        painted = {handle: ranges for _, handle, ranges in sink.applied()}
        assert set(painted) == set(pc.handles.categories.values())
        assert painted[pc.handles.categories[Category.TYPE]] == [_r(2, 0, 5)]
        assert painted[pc.handles.categories[Category.COMMENT]] == []

    def test_category_emptied_since_last_paint_is_cleared(self, sink, styles, view) -> None:
        store = TokenRangeStore()
        store.set_ranges(Pass.SYNTACTIC, Category.COMMENT, [_r(0, 0, 5)])
        pc = _coordinator(sink, styles, store)
        pc.rebuild([view])
        comment = pc.handles.categories[Category.COMMENT]
        assert sink.last_applied(comment, view) == [_r(0, 0, 5)]

        store.set_ranges(Pass.SYNTACTIC, Category.COMMENT, [])
        pc.refresh(view)

        assert sink.last_applied(comment, view) == []

    def test_colorization_inactive_paints_only_inactive(self, sink, styles, view) -> None:
        store = TokenRangeStore()
        store.set_ranges(Pass.SEMANTIC, Category.TYPE, [_r(2, 0, 5)])
        pc = _coordinator(sink, styles, store, enhanced_colorization=False)
        pc.rebuild([view])
        assert [handle for _, handle, _ in sink.applied()] == [pc.handles.inactive]

    def test_views_for_filters_by_uri(self, sink, styles, view) -> None:
        sink.views.append(FakeView(view.uri, name="split"))
        pc = _coordinator(sink, styles)
        assert pc.views_for(view.uri) == [view, FakeView(view.uri, name="split")]
        assert pc.views_for("file:///closed.cpp") == []


# ---------------------------------------------------------------------------
# Rebuild ordering and disposal
# ---------------------------------------------------------------------------


class TestRebuild:
    def test_repaints_before_disposing_old_handles(self, sink, styles, view) -> None:
        store = TokenRangeStore()
        store.set_ranges(Pass.SYNTACTIC, Category.COMMENT, [_r(0, 0, 9)])
        pc = _coordinator(sink, styles, store)
        pc.rebuild([view])
        old = set(sink.live)
        sink.clear()

        pc.rebuild([view])

        kinds = [e[0] for e in sink.events]
        last_paint = max(i for i, k in enumerate(kinds) if k in ("create", "apply"))
        first_dispose = kinds.index("dispose")
        assert last_paint < first_dispose
        assert set(sink.disposed()) == old
        assert sink.live.isdisjoint(old)

    def test_paints_every_given_view(self, sink, styles, view) -> None:
        store = TokenRangeStore()
        store.set_ranges(Pass.SYNTACTIC, Category.COMMENT, [_r(0, 0, 9)])
        split = FakeView(view.uri, name="split")
        pc = _coordinator(sink, styles, store, dim_inactive_regions=False)
        pc.rebuild([view, split])
        painted = [v for v, _, _ in sink.applied()]
        assert painted == [view] * CATEGORY_COUNT + [split] * CATEGORY_COUNT

    def test_new_styles_take_effect_on_rebuild(self, sink, styles) -> None:
        pc = _coordinator(sink, styles)
        pc.rebuild([])
        pc.styles = StaticStyleResolver(default=ThemeStyle(foreground="#ffffff"))
        pc.rebuild([])
        assert pc.handles.categories[Category.TYPE].options.color == "#ffffff"

    def test_dispose_is_idempotent(self, sink, styles) -> None:
        pc = _coordinator(sink, styles)
        pc.rebuild([])
        pc.dispose()
        pc.dispose()
        assert sink.live == set()
        assert len(sink.disposed()) == CATEGORY_COUNT + 1
        assert not pc.handles
