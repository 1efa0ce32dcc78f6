from __future__ import annotations

import typing

from rich import style as rich_style

from chordpad import errors
from chordpad.buffer.base import Buffer, StyledChars
from chordpad.buffer.line import Line
from chordpad.keymap.registry import KeymapRegistry
from chordpad.tui.lib.geometry import Position, Size
from chordpad.tui.lib.input import base as input_base
from chordpad.tui.lib.screen import DEFAULT_TAB_WIDTH, REVERSE_STYLE, Printer, ScreenWriter


Region = typing.Tuple[typing.Tuple[int, int], typing.Tuple[int, int]]


def _highlight(
    chars: StyledChars, first: int, last: int | None
) -> typing.Iterator[typing.Tuple[str, rich_style.Style]]:
    for i, (ch, style) in enumerate(chars):
        if i >= first and (last is None or i <= last):
            style = style + REVERSE_STYLE
        yield ch, style


class Window:
    """A view on a buffer: caret, scroll origin, size and highlight region.

    Screen columns always go through the window's ``Printer`` so tabs are
    expanded the same way for drawing, caret placement and mouse clicks.
    """

    def __init__(
        self,
        buffer: Buffer,
        keymaps: KeymapRegistry | None = None,
        tab_size: int = DEFAULT_TAB_WIDTH,
    ) -> None:
        if tab_size < 1:
            raise ValueError("tab_size must be at least 1")
        self._buffer = buffer
        self._keymaps = keymaps if keymaps is not None else KeymapRegistry()
        self.matcher = self._keymaps.get(buffer.kind)
        self._l = 0
        self._c = 0
        self._top_line = 0
        self._left_col = 0
        self._tab_size = tab_size
        self._width = 0
        self._height = 0
        self._highlight_start: tuple[int, int] | None = None
        self._highlight_end: tuple[int, int] | None = None
        self._dragging = False

    # General

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def keymaps(self) -> KeymapRegistry:
        return self._keymaps

    @property
    def tab_size(self) -> int:
        return self._tab_size

    @property
    def top_line(self) -> int:
        return self._top_line

    @property
    def left_col(self) -> int:
        return self._left_col

    @property
    def size(self) -> Size:
        return Size(self._width, self._height)

    def cursor_pos(self) -> tuple[int, int]:
        return self._l, self._c

    def cursor_line(self) -> int:
        return self._l

    def current_line(self) -> Line:
        return self._buffer.get_line(self._l, self._c)

    def handle_event(self, evt: input_base.InputEvent) -> typing.Any:
        if isinstance(evt, (input_base.KeyEvent, input_base.CharEvent)):
            self.reset_highlight_region()
        return self._keymaps.dispatch(self.matcher, evt)

    def _printer(self) -> Printer:
        return Printer(tab_width=self._tab_size, offset=self._left_col)

    # Movement

    def move_cursor(self, dl: int, dc: int) -> None:
        self._l, self._c = self._buffer.advance_pos(self._l, self._c, dl, dc)

    def move_cursor_to(self, x: int, y: int) -> None:
        self._l, self._c = self.get_line_col(x, y)

    def get_line_col(self, x: int, y: int) -> tuple[int, int]:
        """Buffer position under the screen cell ``(x, y)`` of this window."""
        l = min(max(y + self._top_line, 0), self._buffer.line_count() - 1)
        line = self._buffer.get_line(l, 0)
        return self._buffer.advance_pos(l, self._printer().line_index(line, x), 0, 0)

    def move_cursor_to_line_start(self) -> None:
        self._l, self._c = self._buffer.advance_pos(self._l, 0, 0, 0)

    def move_cursor_to_line_end(self) -> None:
        line = self._buffer.get_line(self._l, self._c)
        self._l, self._c = self._buffer.advance_pos(self._l, len(line), 0, 0)

    def move_cursor_to_end(self) -> None:
        self._l, self._c = self._buffer.end_pos()

    def page_down(self, n: int) -> None:
        """Scroll by ``n`` pages (up when negative), carrying the caret along."""
        if n == 0:
            return
        dl = n * max(self._height - 2, 1)
        last = self._buffer.line_count() - 1
        self._top_line = min(max(self._top_line + dl, 0), last)
        self.move_cursor(dl, 0)
        self._keep_cursor_visible()

    def scroll_down(self, n: int) -> None:
        if n <= 0:
            return
        self._top_line = min(self._top_line + n, self._buffer.line_count() - 1)
        if self._l < self._top_line:
            self.move_cursor(self._top_line - self._l, 0)

    def scroll_up(self, n: int) -> None:
        if n <= 0:
            return
        self._top_line = max(self._top_line - n, 0)
        bottom = self._top_line + self._height - 1
        if self._height > 0 and self._l > bottom:
            self.move_cursor(bottom - self._l, 0)

    def _keep_cursor_visible(self) -> None:
        if self._l < self._top_line:
            self.move_cursor(self._top_line - self._l, 0)
        elif self._height > 0 and self._l > self._top_line + self._height - 1:
            self.move_cursor(self._top_line + self._height - 1 - self._l, 0)

    # Highlight region

    def start_highlight_region(self, x: int, y: int) -> None:
        self._highlight_start = self.get_line_col(x, y)
        self._highlight_end = None
        self._dragging = True

    def move_highlight_region(self, x: int, y: int) -> None:
        if not self._dragging:
            return
        self._highlight_end = self.get_line_col(x, y)

    def stop_highlight_region(self, x: int, y: int) -> bool:
        """End a drag; ``False`` (and no region) when it was just a click."""
        self._dragging = False
        if self._highlight_start is None:
            return False
        self._highlight_end = self.get_line_col(x, y)
        if self._highlight_end == self._highlight_start:
            self.reset_highlight_region()
            return False
        return True

    def reset_highlight_region(self) -> None:
        self._highlight_start = None
        self._highlight_end = None
        self._dragging = False

    def highlight_region(self) -> Region | None:
        """The active region in document order, or ``None``."""
        start, end = self._highlight_start, self._highlight_end
        if start is None or end is None:
            return None
        if end < start:
            start, end = end, start
        return start, end

    def get_highlighted_string(self) -> str:
        region = self.highlight_region()
        if region is None:
            raise errors.NoHighlightRegion()
        (l0, c0), (l1, c1) = region
        return self._buffer.string_from_region(l0, c0, l1, c1)

    # Editing

    def insert_char(self, ch: str) -> None:
        self._buffer.insert_char(ch, self._l, self._c)
        self._c += 1

    def delete_char(self) -> bool:
        """Delete the character before the caret, joining lines at a line start."""
        if self._l == 0 and self._c == 0:
            return False
        l, c = self._buffer.advance_pos(self._l, self._c, 0, -1)
        if l == self._l:
            self._buffer.delete_char_at(l, c)
        else:
            self._buffer.merge_line_with_previous(self._l)
        self._l, self._c = l, c
        return True

    def split_line(self, move: bool) -> None:
        self._buffer.split_line(self._l, self._c)
        if move:
            self._l, self._c = self._buffer.advance_pos(self._l + 1, 0, 0, 0)

    def paste_string(self, text: str) -> None:
        self._l, self._c = self._buffer.insert_string(text, self._l, self._c)

    # Drawing

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height

    def focus_cursor(self, screen_size: Size) -> None:
        """Snap the scroll origin just enough to bring the caret into view."""
        self._l, self._c = self._buffer.nearest_pos(self._l, self._c)
        if screen_size.w <= 0 or screen_size.h <= 0:
            return
        line = self._buffer.get_line(self._l, self._c)
        x = self._printer().line_col(line, self._c)
        if x < 0:
            self._left_col += x
        elif x >= screen_size.w:
            self._left_col += x - screen_size.w + 1
        y = self._l - self._top_line
        if y < 0:
            self._top_line = self._l
        elif y >= screen_size.h:
            self._top_line = self._l - screen_size.h + 1

    def styled_line_iter(self, l: int, c: int) -> StyledChars:
        chars = self._buffer.styled_line_iter(l, c)
        region = self.highlight_region()
        if region is None:
            return chars
        (first_l, first_c), (last_l, last_c) = region
        if l < first_l or l > last_l:
            return chars
        first = first_c - c if l == first_l else 0
        last = last_c - c if l == last_l else None
        return _highlight(chars, first, last)

    def draw(self, screen: ScreenWriter) -> None:
        rows = min(screen.size().h, self._buffer.line_count() - self._top_line)
        printer = self._printer()
        for y in range(max(rows, 0)):
            printer.print(screen, Position(0, y), self.styled_line_iter(y + self._top_line, 0))

    def draw_cursor(self, screen: ScreenWriter) -> None:
        line = self._buffer.get_line(self._l, self._c)
        screen.reverse_cell_style(
            Position(self._printer().line_col(line, self._c), self._l - self._top_line)
        )
