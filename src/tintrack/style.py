"""Style resolution protocol and render options for tintrack.

tintrack does not decide what a category looks like. A StyleResolver,
supplied by the host (usually backed by the active color theme), maps each
Category to a ThemeStyle. This module defines that contract, a trivial
resolver for hosts without themes, and the translation from a style into
the RenderOptions a rendering sink receives when a handle is created.

Usage:
    from tintrack.style import StaticStyleResolver, ThemeStyle

    resolver = StaticStyleResolver(
        default=ThemeStyle(foreground="#d4d4d4"),
        overrides={Category.COMMENT: ThemeStyle(foreground="#6a9955", font_style="italic")},
    )
    resolver.resolve(Category.COMMENT).font_style
    # 'italic'

Malformed style data never raises: fields of the wrong type are dropped
with a warning and the category falls back to "no override".
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Protocol

from tintrack.tokens import Category
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ThemeStyle:
    """Resolved look of one category. None means "inherit / no override".

    Attributes:
        foreground: Text color (e.g. ``"#569cd6"``)
        background: Background color
        font_style: Space-separated subset of ``italic bold underline``

    """

    foreground: str | None = None
    background: str | None = None
    font_style: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.foreground or self.background or self.font_style)

    def with_settings(
        self, settings: Mapping[str, Any], *, editor_background: str | None = None
    ) -> ThemeStyle:
        """Layer a theme rule's ``settings`` record on top of this style.

        Follows theme cascade rules: a present color overrides, a background
        equal to the editor background is ignored, and an empty
        ``fontStyle`` string clears an inherited font style.
        """
        foreground = self.foreground
        background = self.background
        font_style = self.font_style

        value = _string_field(settings, "foreground")
        if value:
            foreground = value
        value = _string_field(settings, "background")
        if value and value != editor_background:
            background = value
        value = _string_field(settings, "fontStyle")
        if value:
            font_style = value
        elif value == "":
            font_style = None
        return ThemeStyle(foreground, background, font_style)


def _string_field(settings: Mapping[str, Any], key: str) -> str | None:
    value = settings.get(key)
    if value is None or isinstance(value, str):
        return value
    logger.warning("ignoring non-string %s %r in style settings", key, value)
    return None


class StyleResolver(Protocol):
    """Protocol for style resolvers.

    Implementations are usually backed by the active color theme plus user
    overrides; tintrack only consumes the result.
    """

    def resolve(self, category: Category) -> ThemeStyle:
        """Return the style for ``category``.

        Contract:
            - MUST NOT raise; unknown or unstyled categories return ``ThemeStyle()``
        """
        ...


class StaticStyleResolver:
    """Resolver backed by a fixed table of per-category styles.

    Every category starts as its own copy of ``default``; ``overrides``
    replace individual entries.
    """

    __slots__ = ("_styles",)

    def __init__(
        self,
        default: ThemeStyle | None = None,
        overrides: Mapping[Category, ThemeStyle] | None = None,
    ) -> None:
        self._styles = build_style_table(default or ThemeStyle())
        for category, style in (overrides or {}).items():
            self._styles[category] = style

    def resolve(self, category: Category) -> ThemeStyle:
        return self._styles[category]


def build_style_table(default: ThemeStyle) -> list[ThemeStyle]:
    """One independent copy of ``default`` per category, indexed by ordinal."""
    return [replace(default) for _ in Category]


def resolve_safely(resolver: StyleResolver, category: Category) -> ThemeStyle:
    """Call ``resolver`` and fall back to an unstyled default on failure."""
    try:
        style = resolver.resolve(category)
    except Exception:
        logger.warning("style resolution failed for %s", category.name, exc_info=True)
        return ThemeStyle()
    if not isinstance(style, ThemeStyle):
        logger.warning("style resolver returned %r for %s", style, category.name)
        return ThemeStyle()
    return style


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """What a rendering sink needs to create one handle.

    Ranges painted with these options do not grow when text is typed at
    their edges (open/open range behavior); tintrack moves them itself.

    """

    color: str | None = None
    background_color: str | None = None
    font_style: str | None = None
    font_weight: str | None = None
    text_decoration: str | None = None
    opacity: float | None = None


def render_options_for(style: ThemeStyle) -> RenderOptions | None:
    """Translate a style into render options, or None for an empty style.

    Example:
        >>> render_options_for(ThemeStyle(foreground="#fff", font_style="bold italic"))
        RenderOptions(color='#fff', background_color=None, font_style='italic',
                      font_weight='bold', text_decoration=None, opacity=None)

    """
    if style.is_empty:
        return None
    font_style = font_weight = text_decoration = None
    for part in (style.font_style or "").split():
        match part:
            case "italic":
                font_style = "italic"
            case "bold":
                font_weight = "bold"
            case "underline":
                text_decoration = "underline"
            case _:
                pass
    return RenderOptions(
        color=style.foreground or None,
        background_color=style.background or None,
        font_style=font_style,
        font_weight=font_weight,
        text_decoration=text_decoration,
    )


def inactive_region_options(
    opacity: float, background: str | None = None, foreground: str | None = None
) -> RenderOptions:
    """Render options for dimmed inactive regions."""
    return RenderOptions(color=foreground, background_color=background, opacity=opacity)


__all__ = [
    "RenderOptions",
    "StaticStyleResolver",
    "StyleResolver",
    "ThemeStyle",
    "build_style_table",
    "inactive_region_options",
    "render_options_for",
    "resolve_safely",
]
