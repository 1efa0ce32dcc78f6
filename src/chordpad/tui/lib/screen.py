from __future__ import annotations

import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass

from rich import console as rich_console
from rich import segment as rich_segment
from rich import style as rich_style

from chordpad.tui.lib import controls as tui_controls
from chordpad.tui.lib.geometry import Position, Rectangle, Size


Lines = typing.List[typing.List[rich_segment.Segment]]
StyledChars = typing.Iterable[typing.Tuple[str, rich_style.Style]]

BLANK_STYLE: typing.Final[rich_style.Style] = rich_style.Style()
REVERSE_STYLE: typing.Final[rich_style.Style] = rich_style.Style(reverse=True)
DEFAULT_TAB_WIDTH: typing.Final[int] = 4


def next_col(col: int, ch: str, tab_width: int) -> int:
    if ch == "\t":
        return (col // tab_width + 1) * tab_width
    return col + 1


def line_col(chars: typing.Iterable[str], idx: int, tab_width: int) -> int:
    """Screen column (from the start of the line) of character index ``idx``."""
    col = 0
    for i, ch in enumerate(chars):
        if i >= idx:
            break
        col = next_col(col, ch, tab_width)
    return col


def line_index(chars: typing.Iterable[str], target_col: int, tab_width: int) -> int:
    """Inverse of ``line_col``: the first index whose span ends past ``target_col``."""
    col = 0
    count = 0
    for i, ch in enumerate(chars):
        col = next_col(col, ch, tab_width)
        if col > target_col:
            return i
        count = i + 1
    return count


class ScreenWriter(ABC):
    @abstractmethod
    def size(self) -> Size:
        raise NotImplementedError

    @abstractmethod
    def set_cell(self, p: Position, ch: str, style: rich_style.Style) -> None:
        raise NotImplementedError

    @abstractmethod
    def reverse_cell_style(self, p: Position) -> None:
        raise NotImplementedError

    @abstractmethod
    def sub_region(self, rect: Rectangle) -> ScreenWriter:
        raise NotImplementedError


@dataclass
class Cell:
    char: str = " "
    style: rich_style.Style = BLANK_STYLE


class CellScreen(ScreenWriter):
    """In-memory grid of styled cells, flushed to a rich console in one go."""

    def __init__(self, width: int, height: int) -> None:
        self._size = Size(width, height)
        self._cells: list[list[Cell]] = []
        self.fill(" ")

    def size(self) -> Size:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = Size(width, height)
        self.fill(" ")

    def fill(self, ch: str, style: rich_style.Style = BLANK_STYLE) -> None:
        self._cells = [
            [Cell(ch, style) for _ in range(self._size.w)] for _ in range(self._size.h)
        ]

    def cell(self, p: Position) -> Cell:
        return self._cells[p.y][p.x]

    def set_cell(self, p: Position, ch: str, style: rich_style.Style) -> None:
        if self._size.contains(p):
            self._cells[p.y][p.x] = Cell(ch, style)

    def reverse_cell_style(self, p: Position) -> None:
        if self._size.contains(p):
            cell = self._cells[p.y][p.x]
            self._cells[p.y][p.x] = Cell(cell.char, cell.style + REVERSE_STYLE)

    def sub_region(self, rect: Rectangle) -> ScreenWriter:
        return SubScreen(self, rect.intersect(Rectangle(Position(), self._size)))

    def row_text(self, y: int) -> str:
        return "".join(cell.char for cell in self._cells[y])

    def render_lines(self) -> Lines:
        lines: Lines = []
        for row in self._cells:
            segments: list[rich_segment.Segment] = []
            run: list[str] = []
            run_style: rich_style.Style | None = None
            for cell in row:
                if run and cell.style != run_style:
                    segments.append(rich_segment.Segment("".join(run), run_style))
                    run = []
                run.append(cell.char)
                run_style = cell.style
            if run:
                segments.append(rich_segment.Segment("".join(run), run_style))
            lines.append(segments)
        return lines

    def show(self, console: rich_console.Console) -> None:
        lines = self.render_lines()
        batched: list[rich_segment.Segment] = []
        for i, line in enumerate(lines):
            if i > 0:
                batched.append(rich_segment.Segment.line())
            batched.extend(line)
        console.control(
            tui_controls.CustomControl.sync_update_start(),
            tui_controls.CustomControl.hide_cursor(),
            tui_controls.CustomControl.cursor_home(),
        )
        if batched:
            console.print(rich_segment.Segments(batched), end="")
        console.control(tui_controls.CustomControl.sync_update_end())


class SubScreen(ScreenWriter):
    """Clipped view of a parent screen; writes outside the region are dropped."""

    def __init__(self, screen: CellScreen, rect: Rectangle) -> None:
        self._screen = screen
        self._rect = rect

    @property
    def rect(self) -> Rectangle:
        return self._rect

    def size(self) -> Size:
        return self._rect.size

    def set_cell(self, p: Position, ch: str, style: rich_style.Style) -> None:
        if self._rect.size.contains(p):
            self._screen.set_cell(p.move_by(self._rect.position), ch, style)

    def reverse_cell_style(self, p: Position) -> None:
        if self._rect.size.contains(p):
            self._screen.reverse_cell_style(p.move_by(self._rect.position))

    def sub_region(self, rect: Rectangle) -> ScreenWriter:
        absolute = Rectangle(rect.position.move_by(self._rect.position), rect.size)
        return SubScreen(self._screen, absolute.intersect(self._rect))


@dataclass(frozen=True)
class Printer:
    """Prints styled characters with tab expansion and horizontal scroll."""

    tab_width: int = DEFAULT_TAB_WIDTH
    offset: int = 0

    def line_col(self, chars: typing.Iterable[str], idx: int) -> int:
        return line_col(chars, idx, self.tab_width) - self.offset

    def line_index(self, chars: typing.Iterable[str], target_col: int) -> int:
        return line_index(chars, target_col + self.offset, self.tab_width)

    def print(self, screen: ScreenWriter, p: Position, chars: StyledChars) -> None:
        sz = screen.size()
        if p.y < 0 or p.y >= sz.h:
            return
        col = 0
        for ch, style in chars:
            end = next_col(col, ch, self.tab_width)
            glyph = " " if ch == "\t" else ch
            for x in range(col, end):
                screen_x = x - self.offset
                if screen_x >= 0:
                    screen.set_cell(p.move_by_x(screen_x), glyph, style)
            col = end
            if p.x + col - self.offset >= sz.w:
                return
