from __future__ import annotations

import re
import typing

from rich import style as rich_style

from chordpad import errors
from chordpad.buffer.base import DEFAULT_STYLE, Buffer, BufferKind, StyledChars
from chordpad.buffer.line import Line


# Two-character spellings first so "\r\n" is a single break.
LINE_BREAK_PATTERN: typing.Final[re.Pattern[str]] = re.compile(r"\r\n|\n\r|\r|\n")


def split_line_breaks(text: str) -> list[str]:
    return LINE_BREAK_PATTERN.split(text)


class FileBuffer(Buffer):
    """Plain text buffer holding the lines of one document.

    The buffer owns its lines: lines passed in are copied, and lines handed out
    by ``get_line`` must not be mutated or kept across edits (``copy()`` them).
    """

    def __init__(
        self,
        lines: typing.Iterable[Line] | None = None,
        filename: str | None = None,
        read_only: bool = False,
    ) -> None:
        self._lines: list[Line] = [line.copy() for line in lines or []]
        if not self._lines:
            self._lines = [Line()]
        self.filename = filename
        self.read_only = read_only

    @classmethod
    def from_text(cls, text: str, filename: str | None = None) -> FileBuffer:
        return cls(
            [Line.from_string(part) for part in split_line_breaks(text)],
            filename=filename,
        )

    @property
    def kind(self) -> str:
        return BufferKind.PLAIN

    def line_count(self) -> int:
        return len(self._lines)

    def lines(self) -> typing.Sequence[Line]:
        return tuple(self._lines)

    def get_line(self, l: int, c: int) -> Line:
        if l < 0 or l >= len(self._lines):
            raise errors.OutOfRange(f"line {l} out of range")
        line = self._lines[l]
        if c > len(line):
            raise errors.LineTooShort(f"line {l} has no column {c}")
        return line

    def insert_char(self, ch: str, l: int, c: int) -> None:
        line = self.get_line(l, c)
        line.insert_char(ch, c)

    def delete_char_at(self, l: int, c: int) -> None:
        line = self.get_line(l, c)
        if len(line) == 0:
            if len(self._lines) > 1:
                del self._lines[l]
            return
        line.delete_at(c)

    def insert_string(self, text: str, l: int, c: int) -> tuple[int, int]:
        self.get_line(l, c)
        for i, part in enumerate(split_line_breaks(text)):
            if i > 0:
                self.split_line(l, c)
                l, c = l + 1, 0
            self._lines[l].insert_string(part, c)
            c += len(part)
        return l, c

    def insert_line(self, l: int, line: Line) -> None:
        if l < 0 or l > len(self._lines):
            raise errors.OutOfRange(f"cannot insert line at {l}")
        self._lines.insert(l, line.copy())

    def append_line(self, line: Line) -> None:
        self._lines.append(line.copy())

    def delete_line(self, l: int) -> None:
        if l < 0 or l >= len(self._lines):
            raise errors.OutOfRange(f"line {l} out of range")
        if len(self._lines) == 1:
            self._lines[0] = Line(meta=self._lines[0].meta)
            return
        del self._lines[l]

    def truncate(self, count: int) -> None:
        del self._lines[max(count, 1):]

    def merge_line_with_previous(self, l: int) -> None:
        if l < 1 or l >= len(self._lines):
            raise errors.OutOfRange(f"cannot merge line {l} with previous")
        self._lines[l - 1].merge_with(self._lines[l])
        del self._lines[l]

    def split_line(self, l: int, c: int) -> None:
        line = self.get_line(l, c)
        left, right = line.split_at(c)
        self._lines[l] = left
        self._lines.insert(l + 1, right)

    def advance_pos(self, l: int, c: int, dl: int, dc: int) -> tuple[int, int]:
        if l < 0:
            return 0, 0
        if l >= len(self._lines):
            return self.end_pos()
        # Walk the column delta through the document as one stream where each
        # line break takes up a single column.
        c += dc
        while c < 0 and l > 0:
            l -= 1
            c += len(self._lines[l]) + 1
        if c < 0:
            return 0, 0
        while l < len(self._lines) and c > len(self._lines[l]):
            c -= len(self._lines[l]) + 1
            l += 1
        if l >= len(self._lines):
            return self.end_pos()
        l += dl
        if l < 0:
            return 0, 0
        if l >= len(self._lines):
            return self.end_pos()
        return l, min(c, len(self._lines[l]))

    def nearest_pos(self, l: int, c: int) -> tuple[int, int]:
        l = min(max(l, 0), len(self._lines) - 1)
        c = min(max(c, 0), len(self._lines[l]))
        return l, c

    def end_pos(self) -> tuple[int, int]:
        last = len(self._lines) - 1
        return last, len(self._lines[last])

    def string_from_region(self, l0: int, c0: int, l1: int, c1: int) -> str:
        if l1 < l0 or (l0 == l1 and c1 < c0):
            l0, c0, l1, c1 = l1, c1, l0, c0
        self.get_line(l0, c0)
        self.get_line(l1, 0)
        parts: list[str] = []
        for l in range(l0, l1 + 1):
            chars = self._lines[l].chars
            if l == l1 and c1 < len(chars):
                chars = chars[: c1 + 1]
            if l == l0:
                chars = chars[c0:]
            parts.append("".join(chars))
        return "\n".join(parts)

    def styled_line_iter(self, l: int, c: int) -> StyledChars:
        line = self.get_line(l, 0)
        style = line.meta if isinstance(line.meta, rich_style.Style) else DEFAULT_STYLE
        return ((ch, style) for ch in line.iter(c))


class LogBuffer(FileBuffer):
    """Read-only buffer collecting log messages."""

    def __init__(self, lines: typing.Iterable[Line] | None = None) -> None:
        super().__init__(lines, filename=None, read_only=True)

    @property
    def kind(self) -> str:
        return BufferKind.LOG

    def append_message(self, message: str) -> None:
        parts = split_line_breaks(message)
        if len(self._lines) == 1 and len(self._lines[0]) == 0:
            self._lines[0] = Line.from_string(parts.pop(0))
        for part in parts:
            self.append_line(Line.from_string(part))
