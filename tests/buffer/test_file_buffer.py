from __future__ import annotations

import pytest
from rich import style as rich_style

from chordpad import errors
from chordpad.buffer import BufferKind, FileBuffer, Line, LogBuffer, split_line_breaks
from chordpad.buffer.base import DEFAULT_STYLE


def _texts(buffer: FileBuffer) -> list[str]:
    return [str(line) for line in buffer.lines()]


def test_new_buffer_has_one_empty_line() -> None:
    buffer = FileBuffer()
    assert buffer.line_count() == 1
    assert _texts(buffer) == [""]
    assert buffer.kind == BufferKind.PLAIN
    assert buffer.end_pos() == (0, 0)


def test_split_line_breaks_handles_all_spellings() -> None:
    assert split_line_breaks("a\r\nb\n\rc\rd\ne") == ["a", "b", "c", "d", "e"]
    assert split_line_breaks("abc") == ["abc"]


def test_buffer_copies_incoming_lines() -> None:
    source = Line.from_string("abc")
    buffer = FileBuffer([source])
    source.insert_char("z", 0)
    assert _texts(buffer) == ["abc"]
    buffer.append_line(source)
    source.delete_at(0)
    assert _texts(buffer) == ["abc", "zabc"]


def test_get_line_errors() -> None:
    buffer = FileBuffer.from_text("abc\nde")
    assert str(buffer.get_line(1, 2)) == "de"
    with pytest.raises(errors.OutOfRange):
        buffer.get_line(2, 0)
    with pytest.raises(errors.OutOfRange):
        buffer.get_line(-1, 0)
    with pytest.raises(errors.LineTooShort):
        buffer.get_line(1, 3)


def test_insert_char_then_delete_char_restores() -> None:
    buffer = FileBuffer.from_text("abc")
    buffer.insert_char("x", 0, 1)
    assert _texts(buffer) == ["axbc"]
    buffer.delete_char_at(0, 1)
    assert _texts(buffer) == ["abc"]


def test_failed_edit_leaves_buffer_unchanged() -> None:
    buffer = FileBuffer.from_text("abc\nde")
    with pytest.raises(errors.LineTooShort):
        buffer.insert_char("x", 1, 5)
    with pytest.raises(errors.OutOfRange):
        buffer.insert_string("x\ny", 4, 0)
    with pytest.raises(errors.OutOfRange):
        buffer.merge_line_with_previous(0)
    assert _texts(buffer) == ["abc", "de"]


def test_delete_char_at_line_end_is_noop() -> None:
    buffer = FileBuffer.from_text("abc")
    buffer.delete_char_at(0, 3)
    assert _texts(buffer) == ["abc"]


def test_delete_char_on_empty_line_removes_it() -> None:
    buffer = FileBuffer.from_text("a\n\nb")
    buffer.delete_char_at(1, 0)
    assert _texts(buffer) == ["a", "b"]


def test_delete_char_never_removes_last_line() -> None:
    buffer = FileBuffer()
    buffer.delete_char_at(0, 0)
    assert buffer.line_count() == 1


def test_delete_line() -> None:
    buffer = FileBuffer.from_text("a\nb\nc")
    buffer.delete_line(1)
    assert _texts(buffer) == ["a", "c"]
    with pytest.raises(errors.OutOfRange):
        buffer.delete_line(2)


def test_delete_only_line_clears_it() -> None:
    buffer = FileBuffer.from_text("abc")
    buffer.delete_line(0)
    assert _texts(buffer) == [""]


def test_insert_line() -> None:
    buffer = FileBuffer.from_text("a\nc")
    buffer.insert_line(1, Line.from_string("b"))
    buffer.insert_line(3, Line.from_string("d"))
    assert _texts(buffer) == ["a", "b", "c", "d"]
    with pytest.raises(errors.OutOfRange):
        buffer.insert_line(6, Line())


def test_split_then_merge_restores_line() -> None:
    buffer = FileBuffer.from_text("hello world")
    buffer.split_line(0, 5)
    assert _texts(buffer) == ["hello", " world"]
    buffer.merge_line_with_previous(1)
    assert _texts(buffer) == ["hello world"]


def test_split_line_at_edges() -> None:
    buffer = FileBuffer.from_text("ab")
    buffer.split_line(0, 2)
    buffer.split_line(0, 0)
    assert _texts(buffer) == ["", "ab", ""]


def test_insert_string_multiline_returns_caret() -> None:
    buffer = FileBuffer.from_text("ad")
    pos = buffer.insert_string("b\r\nxy\nc", 0, 1)
    assert _texts(buffer) == ["ab", "xy", "cd"]
    assert pos == (2, 1)


def test_insert_string_single_line() -> None:
    buffer = FileBuffer.from_text("ad")
    assert buffer.insert_string("bc", 0, 1) == (0, 3)
    assert _texts(buffer) == ["abcd"]


def test_advance_pos_crosses_line_breaks() -> None:
    buffer = FileBuffer.from_text("abc\nde")
    assert buffer.advance_pos(0, 3, 0, 1) == (1, 0)
    assert buffer.advance_pos(1, 0, 0, -1) == (0, 3)


def test_advance_pos_round_trip() -> None:
    buffer = FileBuffer.from_text("abc\n\nde\tf\ng")
    for l, line in enumerate(buffer.lines()):
        for c in range(len(line) + 1):
            if (l, c) == buffer.end_pos():
                continue
            forward = buffer.advance_pos(l, c, 0, 1)
            assert buffer.advance_pos(forward[0], forward[1], 0, -1) == (l, c)


def test_advance_pos_clamps_at_document_edges() -> None:
    buffer = FileBuffer.from_text("abc\nde")
    assert buffer.advance_pos(0, 0, 0, -1) == (0, 0)
    assert buffer.advance_pos(0, 1, -1, 0) == (0, 0)
    assert buffer.advance_pos(1, 2, 0, 1) == (1, 2)
    assert buffer.advance_pos(1, 1, 3, 0) == (1, 2)
    assert buffer.advance_pos(-2, 0, 0, 0) == (0, 0)
    assert buffer.advance_pos(9, 0, 0, 0) == (1, 2)


def test_advance_pos_vertical_clamps_column() -> None:
    buffer = FileBuffer.from_text("abcdef\nde")
    assert buffer.advance_pos(0, 5, 1, 0) == (1, 2)
    assert buffer.advance_pos(1, 2, -1, 0) == (0, 2)


def test_nearest_pos() -> None:
    buffer = FileBuffer.from_text("abc\nde")
    assert buffer.nearest_pos(5, 9) == (1, 2)
    assert buffer.nearest_pos(-1, -1) == (0, 0)
    assert buffer.nearest_pos(0, 2) == (0, 2)


def test_string_from_region_inclusive_and_swapped() -> None:
    buffer = FileBuffer.from_text("hello\nbig\nworld")
    assert buffer.string_from_region(0, 1, 0, 3) == "ell"
    assert buffer.string_from_region(0, 3, 2, 1) == "lo\nbig\nwo"
    assert buffer.string_from_region(2, 1, 0, 3) == "lo\nbig\nwo"
    assert buffer.string_from_region(0, 0, 0, 5) == "hello"


def test_string_from_region_out_of_range() -> None:
    buffer = FileBuffer.from_text("abc")
    with pytest.raises(errors.OutOfRange):
        buffer.string_from_region(0, 0, 3, 0)


def test_styled_line_iter_uses_line_meta_style() -> None:
    bold = rich_style.Style(bold=True)
    buffer = FileBuffer([Line.from_string("ab", meta=bold), Line.from_string("cd")])
    assert list(buffer.styled_line_iter(0, 1)) == [("b", bold)]
    assert list(buffer.styled_line_iter(1, 0)) == [("c", DEFAULT_STYLE), ("d", DEFAULT_STYLE)]
    with pytest.raises(errors.OutOfRange):
        buffer.styled_line_iter(2, 0)


def test_text_and_truncate() -> None:
    buffer = FileBuffer.from_text("a\nb\nc")
    assert buffer.text() == "a\nb\nc"
    buffer.truncate(1)
    assert buffer.text() == "a"
    buffer.truncate(0)
    assert buffer.line_count() == 1


def test_log_buffer_appends_messages() -> None:
    buffer = LogBuffer()
    assert buffer.read_only
    assert buffer.kind == BufferKind.LOG
    buffer.append_message("first")
    buffer.append_message("second\nthird")
    assert _texts(buffer) == ["first", "second", "third"]
