from __future__ import annotations

import io

import pytest
from rich import console as rich_console
from rich import style as rich_style

from chordpad.tui.lib.geometry import Position, Rectangle, Size
from chordpad.tui.lib.screen import (
    REVERSE_STYLE,
    CellScreen,
    Printer,
    line_col,
    line_index,
)


def _plain(text: str) -> list[tuple[str, rich_style.Style]]:
    return [(ch, rich_style.Style()) for ch in text]


def test_line_col_expands_tabs_to_next_stop() -> None:
    chars = list("a\tb")
    assert line_col(chars, 0, 4) == 0
    assert line_col(chars, 1, 4) == 1
    assert line_col(chars, 2, 4) == 4
    assert line_col(chars, 3, 4) == 5


def test_line_index_maps_columns_inside_tab_to_tab() -> None:
    chars = list("a\tb")
    assert line_index(chars, 0, 4) == 0
    assert line_index(chars, 1, 4) == 1
    assert line_index(chars, 3, 4) == 1
    assert line_index(chars, 4, 4) == 2
    assert line_index(chars, 99, 4) == 3


@pytest.mark.parametrize("tab_width", [1, 2, 4, 8])
def test_line_index_inverts_line_col(tab_width: int) -> None:
    chars = list("\tab\t\tc d\t")
    for idx in range(len(chars) + 1):
        assert line_index(chars, line_col(chars, idx, tab_width), tab_width) == idx


def test_cell_screen_set_and_reverse() -> None:
    screen = CellScreen(3, 2)
    screen.set_cell(Position(1, 0), "x", rich_style.Style(bold=True))
    screen.set_cell(Position(5, 5), "y", rich_style.Style())
    assert screen.row_text(0) == " x "
    screen.reverse_cell_style(Position(1, 0))
    cell = screen.cell(Position(1, 0))
    assert cell.char == "x"
    assert cell.style.bold
    assert cell.style.reverse


def test_sub_region_translates_and_clips() -> None:
    screen = CellScreen(6, 3)
    sub = screen.sub_region(Rectangle(Position(2, 1), Size(3, 1)))
    assert sub.size() == Size(3, 1)
    for x, ch in enumerate("abcdef"):
        sub.set_cell(Position(x, 0), ch, rich_style.Style())
    sub.set_cell(Position(0, 1), "z", rich_style.Style())
    assert screen.row_text(0) == "      "
    assert screen.row_text(1) == "  abc "
    assert screen.row_text(2) == "      "


def test_sub_region_is_clipped_to_parent() -> None:
    screen = CellScreen(4, 4)
    sub = screen.sub_region(Rectangle(Position(2, 2), Size(10, 10)))
    assert sub.size() == Size(2, 2)
    nested = sub.sub_region(Rectangle(Position(1, 1), Size(5, 5)))
    assert nested.size() == Size(1, 1)
    nested.set_cell(Position(0, 0), "q", rich_style.Style())
    assert screen.row_text(3) == "   q"


def test_printer_expands_tabs_with_tab_style() -> None:
    screen = CellScreen(8, 1)
    bold = rich_style.Style(bold=True)
    Printer(tab_width=4).print(screen, Position(), [("a", bold), ("\t", bold), ("b", bold)])
    assert screen.row_text(0) == "a   b   "
    assert screen.cell(Position(2, 0)).style == bold


def test_printer_applies_horizontal_offset() -> None:
    screen = CellScreen(3, 1)
    printer = Printer(tab_width=4, offset=2)
    printer.print(screen, Position(), _plain("abcdef"))
    assert screen.row_text(0) == "cde"
    assert printer.line_col(list("abcdef"), 2) == 0
    assert printer.line_index(list("abcdef"), 0) == 2


def test_printer_stops_at_screen_width() -> None:
    screen = CellScreen(2, 1)
    Printer().print(screen, Position(), _plain("abcdef"))
    assert screen.row_text(0) == "ab"


def test_render_lines_groups_equal_styles() -> None:
    screen = CellScreen(4, 1)
    screen.set_cell(Position(0, 0), "a", rich_style.Style())
    screen.set_cell(Position(1, 0), "b", rich_style.Style())
    screen.set_cell(Position(2, 0), "c", REVERSE_STYLE)
    lines = screen.render_lines()
    assert len(lines) == 1
    assert [segment.text for segment in lines[0]] == ["ab", "c", " "]


def test_show_writes_screen_to_console() -> None:
    output = io.StringIO()
    console = rich_console.Console(file=output, force_terminal=True, color_system=None, width=10)
    screen = CellScreen(3, 2)
    Printer().print(screen, Position(), _plain("hi"))
    Printer().print(screen, Position(0, 1), _plain("yo"))
    screen.show(console)
    text = output.getvalue()
    assert "hi " in text
    assert "yo " in text
    assert "\x1b[?2026h" in text
    assert "\x1b[?2026l" in text


def test_resize_clears_cells() -> None:
    screen = CellScreen(2, 1)
    screen.set_cell(Position(0, 0), "x", rich_style.Style())
    screen.resize(3, 2)
    assert screen.size() == Size(3, 2)
    assert screen.row_text(0) == "   "
