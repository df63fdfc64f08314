"""Shared fixtures: a rendering sink that records every call."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from tintrack.location import Range
from tintrack.style import RenderOptions, StaticStyleResolver, ThemeStyle


@dataclass(frozen=True)
class FakeView:
    uri: str
    name: str = "main"


@dataclass(frozen=True)
class FakeHandle:
    id: int
    options: RenderOptions = field(compare=False)


class RecordingSink:
    """RenderSink that keeps a log of create/apply/dispose calls."""

    def __init__(self, views: Sequence[FakeView] = ()) -> None:
        self.views = list(views)
        self.events: list[tuple[Any, ...]] = []
        self.live: set[FakeHandle] = set()
        self._ids = itertools.count(1)

    def create_handle(self, options: RenderOptions) -> FakeHandle:
        handle = FakeHandle(next(self._ids), options)
        self.live.add(handle)
        self.events.append(("create", handle))
        return handle

    def dispose_handle(self, handle: FakeHandle) -> None:
        assert handle in self.live, f"{handle} disposed twice or never created"
        self.live.remove(handle)
        self.events.append(("dispose", handle))

    def apply_ranges(self, view: FakeView, handle: FakeHandle, ranges: Sequence[Range]) -> None:
        assert handle in self.live, f"{handle} used after dispose"
        self.events.append(("apply", view, handle, list(ranges)))

    def visible_views(self) -> list[FakeView]:
        return list(self.views)

    # Helpers for assertions

    def created(self) -> list[FakeHandle]:
        return [e[1] for e in self.events if e[0] == "create"]

    def disposed(self) -> list[FakeHandle]:
        return [e[1] for e in self.events if e[0] == "dispose"]

    def applied(self) -> list[tuple[FakeView, FakeHandle, list[Range]]]:
        return [(e[1], e[2], e[3]) for e in self.events if e[0] == "apply"]

    def last_applied(self, handle: FakeHandle, view: FakeView | None = None) -> list[Range] | None:
        for event in reversed(self.events):
            if event[0] == "apply" and event[2] == handle and (view is None or event[1] == view):
                return event[3]
        return None

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def view() -> FakeView:
    return FakeView("file:///main.cpp")


@pytest.fixture
def sink(view: FakeView) -> RecordingSink:
    return RecordingSink([view, FakeView("file:///other.cpp")])


@pytest.fixture
def styles() -> StaticStyleResolver:
    """Every category styled, so every category gets a handle."""
    return StaticStyleResolver(default=ThemeStyle(foreground="#d4d4d4"))
