"""Tests for theme styles and render options."""

import logging

import pytest

from tintrack.style import (
    RenderOptions,
    StaticStyleResolver,
    ThemeStyle,
    build_style_table,
    inactive_region_options,
    render_options_for,
    resolve_safely,
)
from tintrack.tokens import CATEGORY_COUNT, Category


class TestThemeStyle:
    def test_default_is_empty(self) -> None:
        assert ThemeStyle().is_empty
        assert not ThemeStyle(font_style="bold").is_empty

    def test_with_settings_overrides(self) -> None:
        base = ThemeStyle(foreground="#111", font_style="bold")
        style = base.with_settings({"foreground": "#222", "background": "#333"})
        assert style == ThemeStyle("#222", "#333", "bold")
        assert base.foreground == "#111"

    def test_background_matching_editor_ignored(self) -> None:
        style = ThemeStyle().with_settings({"background": "#1e1e1e"}, editor_background="#1e1e1e")
        assert style.background is None

    def test_empty_font_style_clears_inherited(self) -> None:
        style = ThemeStyle(font_style="italic").with_settings({"fontStyle": ""})
        assert style.font_style is None

    def test_malformed_settings_fall_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="tintrack.style"):
            style = ThemeStyle(foreground="#111").with_settings({"foreground": 12, "fontStyle": []})
        assert style == ThemeStyle(foreground="#111")
        assert "foreground" in caplog.text


class TestResolvers:
    def test_style_table_entries_are_independent(self) -> None:
        table = build_style_table(ThemeStyle(foreground="#fff"))
        assert len(table) == CATEGORY_COUNT
        assert all(s == ThemeStyle(foreground="#fff") for s in table)
        assert len({id(s) for s in table}) == CATEGORY_COUNT

    def test_static_resolver_overrides(self) -> None:
        resolver = StaticStyleResolver(
            default=ThemeStyle(foreground="#ddd"),
            overrides={Category.COMMENT: ThemeStyle(foreground="#6a9955", font_style="italic")},
        )
        assert resolver.resolve(Category.COMMENT).font_style == "italic"
        assert resolver.resolve(Category.KEYWORD) == ThemeStyle(foreground="#ddd")

    def test_static_resolver_default_is_unstyled(self) -> None:
        assert StaticStyleResolver().resolve(Category.TYPE).is_empty

    def test_resolve_safely_swallows_resolver_failure(self) -> None:
        class Broken:
            def resolve(self, category: Category) -> ThemeStyle:
                raise KeyError(category)

        assert resolve_safely(Broken(), Category.TYPE) == ThemeStyle()

    def test_resolve_safely_rejects_wrong_type(self) -> None:
        class Untyped:
            def resolve(self, category: Category) -> dict:
                return {"foreground": "#fff"}

        assert resolve_safely(Untyped(), Category.TYPE) == ThemeStyle()  # type: ignore[arg-type]


class TestRenderOptions:
    def test_empty_style_has_no_options(self) -> None:
        assert render_options_for(ThemeStyle()) is None

    def test_colors(self) -> None:
        options = render_options_for(ThemeStyle(foreground="#fff", background="#000"))
        assert options == RenderOptions(color="#fff", background_color="#000")

    def test_font_style_parts(self) -> None:
        options = render_options_for(ThemeStyle(font_style="bold italic underline"))
        assert options is not None
        assert options.font_style == "italic"
        assert options.font_weight == "bold"
        assert options.text_decoration == "underline"
        assert options.color is None

    def test_unknown_font_style_parts_ignored(self) -> None:
        options = render_options_for(ThemeStyle(font_style="strikethrough"))
        assert options == RenderOptions()

    def test_inactive_region_options(self) -> None:
        options = inactive_region_options(0.4, background="#222")
        assert options.opacity == 0.4
        assert options.background_color == "#222"
        assert options.color is None
