from __future__ import annotations

import typing
from abc import ABC, abstractmethod

from rich import style as rich_style

from chordpad.buffer.line import Line


DEFAULT_STYLE: typing.Final[rich_style.Style] = rich_style.Style()

StyledChars = typing.Iterator[typing.Tuple[str, rich_style.Style]]


class BufferKind:
    PLAIN: typing.Final[str] = "plain"
    LOG: typing.Final[str] = "log"


class Buffer(ABC):
    """Line store interface shared by every kind of buffer.

    Positions are ``(line, col)`` pairs with ``0 <= line < line_count()`` and
    ``0 <= col <= len(line)``; a buffer always holds at least one line.
    """

    filename: str | None = None
    read_only: bool = False

    @property
    @abstractmethod
    def kind(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def line_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def lines(self) -> typing.Sequence[Line]:
        raise NotImplementedError

    @abstractmethod
    def get_line(self, l: int, c: int) -> Line:
        raise NotImplementedError

    @abstractmethod
    def insert_char(self, ch: str, l: int, c: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_char_at(self, l: int, c: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def insert_string(self, text: str, l: int, c: int) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def insert_line(self, l: int, line: Line) -> None:
        raise NotImplementedError

    @abstractmethod
    def append_line(self, line: Line) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_line(self, l: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def merge_line_with_previous(self, l: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def split_line(self, l: int, c: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def advance_pos(self, l: int, c: int, dl: int, dc: int) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def end_pos(self) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def nearest_pos(self, l: int, c: int) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def string_from_region(self, l0: int, c0: int, l1: int, c1: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def styled_line_iter(self, l: int, c: int) -> StyledChars:
        raise NotImplementedError

    def text(self) -> str:
        return "\n".join(str(line) for line in self.lines())
