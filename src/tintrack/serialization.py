"""Event payload decoding — JSON-compatible dicts to typed inputs.

Editors and language servers deliver edits and classification results as
JSON. This module turns those payloads into Change, Edit and result
objects, and turns positions and ranges back into dicts for logging and
debugging.

Accepted shapes:
    position:  {"line": 2, "character": 5}
    range:     {"start": <position>, "end": <position>}
    change:    {"range": <range>, "text": "ab"}
               (also "removedRange" / "insertedText")
    edit:      {"version": 4, "changes": [<change>, ...]}
    syntactic: {"uri": "...", "version": 3, "rangesByCategory": <by-category>}
    semantic:  same plus "inactiveRanges": [<range>, ...]

``<by-category>`` is a list indexed by category ordinal, or a dict keyed by
ordinal or category name. Unknown categories are dropped.

Example:
    from tintrack.serialization import edit_from_dict

    edit = edit_from_dict({
        "version": 2,
        "changes": [{"range": {"start": {"line": 0, "character": 0},
                               "end": {"line": 0, "character": 3}},
                     "text": "ab"}],
    })

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tintrack.edits import Change, Edit
from tintrack.errors import InvalidRangeError, PayloadError
from tintrack.location import Position, Range
from tintrack.tokens import Category
from tintrack.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SyntacticResult:
    """Ranges from the syntactic pass for one document version."""

    uri: str
    ranges_by_category: dict[Category, list[Range]]
    version: int


@dataclass(frozen=True, slots=True)
class SemanticResult:
    """Ranges from the semantic pass, plus inactive regions."""

    uri: str
    ranges_by_category: dict[Category, list[Range]]
    inactive_ranges: list[Range]
    version: int


def position_to_dict(position: Position) -> dict[str, int]:
    return {"line": position.line, "character": position.character}


def range_to_dict(rng: Range) -> dict[str, Any]:
    return {"start": position_to_dict(rng.start), "end": position_to_dict(rng.end)}


def position_from_dict(data: Any) -> Position:
    """Decode ``{"line", "character"}`` into a Position."""
    if not isinstance(data, Mapping):
        raise PayloadError("position", f"expected an object, got {type(data).__name__}")
    line = _require_int(data, "line", "position")
    character = _require_int(data, "character", "position")
    try:
        return Position(line, character)
    except InvalidRangeError as exc:
        raise PayloadError("position", str(exc)) from exc


def range_from_dict(data: Any) -> Range:
    """Decode ``{"start", "end"}`` into a Range."""
    if not isinstance(data, Mapping):
        raise PayloadError("range", f"expected an object, got {type(data).__name__}")
    if "start" not in data or "end" not in data:
        raise PayloadError("range", "missing 'start' or 'end'")
    start = position_from_dict(data["start"])
    end = position_from_dict(data["end"])
    try:
        return Range(start, end)
    except InvalidRangeError as exc:
        raise PayloadError("range", str(exc)) from exc


def change_from_dict(data: Any) -> Change:
    """Decode one content change."""
    if not isinstance(data, Mapping):
        raise PayloadError("change", f"expected an object, got {type(data).__name__}")
    raw_range = data.get("range", data.get("removedRange"))
    if raw_range is None:
        raise PayloadError("change", "missing 'range'")
    text = data.get("text", data.get("insertedText", ""))
    if not isinstance(text, str):
        raise PayloadError("change", f"'text' must be a string, got {type(text).__name__}")
    return Change(range_from_dict(raw_range), text)


def edit_from_dict(data: Any) -> Edit:
    """Decode an edit event: a version and its ordered changes."""
    if not isinstance(data, Mapping):
        raise PayloadError("edit", f"expected an object, got {type(data).__name__}")
    version = _require_int(data, "version", "edit")
    changes = data.get("changes", [])
    if not isinstance(changes, list):
        raise PayloadError("edit", "'changes' must be a list")
    return Edit(version=version, changes=tuple(change_from_dict(c) for c in changes))


def edit_to_dict(edit: Edit) -> dict[str, Any]:
    return {
        "version": edit.version,
        "changes": [
            {"range": range_to_dict(c.removed_range), "text": c.inserted_text}
            for c in edit.changes
        ],
    }


def ranges_by_category_from_dict(data: Any) -> dict[Category, list[Range]]:
    """Decode per-category ranges from a list (by ordinal) or a dict."""
    if data is None:
        return {}
    if isinstance(data, list):
        items: list[tuple[Any, Any]] = list(enumerate(data))
    elif isinstance(data, Mapping):
        items = list(data.items())
    else:
        raise PayloadError("ranges", f"expected a list or object, got {type(data).__name__}")

    result: dict[Category, list[Range]] = {}
    for key, ranges in items:
        category = Category.lookup(int(key) if isinstance(key, str) and key.isdigit() else key)
        if category is None:
            logger.debug("dropping ranges for unknown category %r", key)
            continue
        if not ranges:
            continue
        result[category] = _range_list(ranges)
    return result


def syntactic_result_from_dict(data: Any) -> SyntacticResult:
    """Decode a syntactic classification result."""
    if not isinstance(data, Mapping):
        raise PayloadError("syntactic", f"expected an object, got {type(data).__name__}")
    return SyntacticResult(
        uri=_require_str(data, "uri", "syntactic"),
        ranges_by_category=ranges_by_category_from_dict(_ranges_field(data)),
        version=_require_int(data, "version", "syntactic"),
    )


def semantic_result_from_dict(data: Any) -> SemanticResult:
    """Decode a semantic classification result."""
    if not isinstance(data, Mapping):
        raise PayloadError("semantic", f"expected an object, got {type(data).__name__}")
    inactive = data.get("inactiveRanges", data.get("inactive_ranges", []))
    return SemanticResult(
        uri=_require_str(data, "uri", "semantic"),
        ranges_by_category=ranges_by_category_from_dict(_ranges_field(data)),
        inactive_ranges=_range_list(inactive or []),
        version=_require_int(data, "version", "semantic"),
    )


_DECODERS = {
    "edit": edit_from_dict,
    "syntactic": syntactic_result_from_dict,
    "semantic": semantic_result_from_dict,
    "range": range_from_dict,
    "position": position_from_dict,
}


def from_json(data: str, kind: str) -> Any:
    """Decode a JSON payload of the given ``kind``.

    Args:
        data: JSON text.
        kind: One of ``"edit"``, ``"syntactic"``, ``"semantic"``,
            ``"range"``, ``"position"``.

    Raises:
        PayloadError: If the JSON is invalid or does not match ``kind``.
        ValueError: If ``kind`` is unknown.

    """
    decoder = _DECODERS.get(kind)
    if decoder is None:
        msg = f"Unknown payload kind: {kind!r}"
        raise ValueError(msg)
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        raise PayloadError(kind, f"invalid JSON ({exc.msg})") from exc
    return decoder(raw)


def to_json(edit: Edit, *, indent: int | None = None) -> str:
    """Serialize an Edit to JSON (sorted keys, deterministic)."""
    return json.dumps(edit_to_dict(edit), sort_keys=True, indent=indent)


def _ranges_field(data: Mapping[str, Any]) -> Any:
    return data.get("rangesByCategory", data.get("ranges_by_category"))


def _range_list(data: Any) -> list[Range]:
    if not isinstance(data, list):
        raise PayloadError("ranges", f"expected a list, got {type(data).__name__}")
    return [range_from_dict(item) for item in data]


def _require_int(data: Mapping[str, Any], key: str, kind: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(kind, f"'{key}' must be an integer, got {value!r}")
    return value


def _require_str(data: Mapping[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise PayloadError(kind, f"'{key}' must be a string, got {value!r}")
    return value


__all__ = [
    "SemanticResult",
    "SyntacticResult",
    "change_from_dict",
    "edit_from_dict",
    "edit_to_dict",
    "from_json",
    "position_from_dict",
    "position_to_dict",
    "range_from_dict",
    "range_to_dict",
    "ranges_by_category_from_dict",
    "semantic_result_from_dict",
    "syntactic_result_from_dict",
    "to_json",
]
