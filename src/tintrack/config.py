"""ContextVar-based colorization configuration for tintrack.

Provides context-local configuration using Python's ContextVars (PEP 567).
The host editor loads its settings, builds a ColorizationConfig, and either
installs it for the current context or hands a provider to each
ColorizationState.

Usage:
    # From raw settings (unknown keys ignored, bad values fall back)
    config = ColorizationConfig.from_dict({
        "enhancedColorization": "Enabled",
        "intelliSenseEngine": "Default",
        "dimInactiveRegions": True,
        "inactiveRegionOpacity": 0.4,
    })

    # Install for the current context
    with config_context(config):
        state = ColorizationState("file:///a.cpp", sink=sink)

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Protocol

from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


class PaintPriority(Enum):
    """How the rendering sink resolves overlapping handles.

    FIRST_CREATED: the handle created first is drawn on top, so handles are
    created from the highest category ordinal down to the lowest.
    LAST_CREATED: the handle created last is drawn on top, so handles are
    created in ordinal order.
    """

    FIRST_CREATED = "first_created"
    LAST_CREATED = "last_created"


@dataclass(frozen=True, slots=True)
class ColorizationConfig:
    """Immutable colorization configuration.

    Attributes:
        enhanced_colorization: Paint classified token categories
        default_engine_active: The analysis engine that produces
            classifications is the active one
        dim_inactive_regions: Dim code in disabled preprocessor branches
        inactive_region_opacity: Opacity applied to inactive regions (0..1)
        inactive_region_background: Background color for inactive regions
        inactive_region_foreground: Foreground color for inactive regions
        textmate_colorization: Keep the editor's built-in grammar
            tokenization enabled
        paint_priority: Overlap resolution rule of the rendering sink

    """

    enhanced_colorization: bool = True
    default_engine_active: bool = True
    dim_inactive_regions: bool = True
    inactive_region_opacity: float = 0.55
    inactive_region_background: str | None = None
    inactive_region_foreground: str | None = None
    textmate_colorization: bool = True
    paint_priority: PaintPriority = PaintPriority.FIRST_CREATED

    @property
    def colorization_active(self) -> bool:
        """True when token category handles should be created."""
        return self.enhanced_colorization and self.default_engine_active

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ColorizationConfig":
        """Create ColorizationConfig from a settings dictionary.

        Accepts either field names (``dim_inactive_regions``) or the editor's
        camelCase setting names (``dimInactiveRegions``). Enum-like settings
        such as ``enhancedColorization: "Enabled"`` and
        ``intelliSenseEngine: "Default"`` are translated to booleans.

        Unknown keys are silently ignored. Values of the wrong type fall
        back to the field default and log a warning.

        Example:
            >>> config = ColorizationConfig.from_dict({
            ...     "enhancedColorization": "Disabled",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.enhanced_colorization
            False

        """
        valid_fields = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, raw in config_dict.items():
            name, value = _translate_setting(key, raw)
            if name not in valid_fields:
                continue
            coerced = _coerce(name, value)
            if coerced is _INVALID:
                logger.warning("ignoring invalid value %r for setting %r", raw, key)
                continue
            values[name] = coerced
        return cls(**values)


_INVALID = object()

_SETTING_ALIASES: dict[str, str] = {
    "enhancedColorization": "enhanced_colorization",
    "intelliSenseEngine": "default_engine_active",
    "dimInactiveRegions": "dim_inactive_regions",
    "inactiveRegionOpacity": "inactive_region_opacity",
    "inactiveRegionBackgroundColor": "inactive_region_background",
    "inactiveRegionForegroundColor": "inactive_region_foreground",
    "textMateColorization": "textmate_colorization",
    "paintPriority": "paint_priority",
}

_ENABLED_SETTINGS = {"enhanced_colorization", "textmate_colorization"}


def _translate_setting(key: str, raw: Any) -> tuple[str, Any]:
    name = _SETTING_ALIASES.get(key, key)
    if name in _ENABLED_SETTINGS and isinstance(raw, str):
        return name, raw.lower() == "enabled"
    if name == "default_engine_active" and isinstance(raw, str):
        return name, raw.lower() == "default"
    return name, raw


def _coerce(name: str, value: Any) -> Any:
    if name == "inactive_region_opacity":
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return _INVALID
        try:
            opacity = float(value)
        except ValueError:
            return _INVALID
        return opacity if 0.0 <= opacity <= 1.0 else _INVALID
    if name in ("inactive_region_background", "inactive_region_foreground"):
        if value is None or isinstance(value, str):
            return value or None
        return _INVALID
    if name == "paint_priority":
        try:
            return PaintPriority(value)
        except ValueError:
            return _INVALID
    return value if isinstance(value, bool) else _INVALID


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ColorizationConfig = ColorizationConfig()

_colorization_config: ContextVar[ColorizationConfig] = ContextVar(
    "colorization_config",
    default=_DEFAULT_CONFIG,
)

ConfigProvider = Callable[[], ColorizationConfig]


def get_config() -> ColorizationConfig:
    """Get the colorization configuration for the current context."""
    return _colorization_config.get()


def set_config(config: ColorizationConfig) -> None:
    """Set colorization configuration for the current context."""
    _colorization_config.set(config)


def reset_config() -> None:
    """Reset to the default configuration."""
    _colorization_config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: ColorizationConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    """
    previous = _colorization_config.get()
    _colorization_config.set(config)
    try:
        yield
    finally:
        _colorization_config.set(previous)


class GrammarSwitch(Protocol):
    """Host hook that turns the editor's built-in grammar tokenization on or off."""

    def use_standard_grammars(self) -> None: ...

    def use_empty_grammars(self) -> None: ...


def update_grammars(config: ColorizationConfig, switch: GrammarSwitch) -> None:
    """Enable or disable built-in grammar tokenization to match ``config``."""
    if config.textmate_colorization:
        switch.use_standard_grammars()
    else:
        switch.use_empty_grammars()


__all__ = [
    "ColorizationConfig",
    "ConfigProvider",
    "GrammarSwitch",
    "PaintPriority",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
    "update_grammars",
]
