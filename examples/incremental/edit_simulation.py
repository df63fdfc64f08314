"""Keep colors in place while typing, then catch up a late semantic pass."""

import asyncio

from tintrack import (
    Category,
    Change,
    ColorizationRegistry,
    Position,
    Range,
    StaticStyleResolver,
    ThemeStyle,
)

URI = "file:///demo.cpp"


class PrintingSink:
    """Render sink that prints what an editor would paint."""

    def __init__(self) -> None:
        self._next = 0

    def create_handle(self, options):
        self._next += 1
        return self._next

    def dispose_handle(self, handle):
        pass

    def apply_ranges(self, view, handle, ranges):
        if ranges:
            print(f"  handle {handle:>2}: {', '.join(str(r) for r in ranges)}")

    def visible_views(self):
        return [view]


class DemoView:
    uri = URI


view = DemoView()


async def main() -> None:
    styles = StaticStyleResolver(
        overrides={
            Category.KEYWORD: ThemeStyle(foreground="#569cd6"),
            Category.TYPE: ThemeStyle(foreground="#4ec9b0"),
        }
    )
    registry = ColorizationRegistry(PrintingSink(), styles=styles)
    state = registry.open(URI)

    print("syntactic pass at v1: 'int' keyword on line 2")
    await state.on_syntactic_result(URI, {Category.KEYWORD: [Range.from_coords(2, 0, 2, 3)]}, 1)

    print("v2: user inserts a blank line at the top")
    await state.on_document_edited([Change.insert(Position(0, 0), "\n")], 2)

    # Computed against v1, so it still says line 2
    print("semantic pass reports v1 late: 'Widget' type on line 2")
    await state.on_semantic_result(URI, {Category.TYPE: [Range.from_coords(2, 4, 2, 10)]}, [], 1)

    print("pending edits:", [edit.version for edit in state.edit_log])
    await registry.dispose_all()


asyncio.run(main())
