from __future__ import annotations

import typing
from dataclasses import dataclass, field


@dataclass
class Line:
    """A line of text held as a list of code points.

    ``meta`` is owned by whoever creates the line (for instance a per-line
    rich style); edits keep it, and both halves of a split inherit it.
    """

    chars: list[str] = field(default_factory=list)
    meta: typing.Any = None

    @classmethod
    def from_string(cls, text: str, meta: typing.Any = None) -> Line:
        return cls(chars=list(text), meta=meta)

    def __len__(self) -> int:
        return len(self.chars)

    def __str__(self) -> str:
        return "".join(self.chars)

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self.chars)

    def copy(self) -> Line:
        return Line(chars=list(self.chars), meta=self.meta)

    def iter(self, c: int = 0) -> typing.Iterator[str]:
        for i in range(max(c, 0), len(self.chars)):
            yield self.chars[i]

    def insert_char(self, ch: str, c: int) -> None:
        if c < 0 or c > len(self.chars):
            return
        self.chars.insert(c, ch)

    def insert_string(self, text: str, c: int) -> None:
        if c < 0 or c > len(self.chars):
            return
        self.chars[c:c] = list(text)

    def delete_at(self, c: int) -> None:
        if c < 0 or c >= len(self.chars):
            return
        del self.chars[c]

    def split_at(self, c: int) -> tuple[Line, Line]:
        c = min(max(c, 0), len(self.chars))
        left = Line(chars=self.chars[:c], meta=self.meta)
        right = Line(chars=self.chars[c:], meta=self.meta)
        return left, right

    def merge_with(self, other: Line) -> None:
        self.chars.extend(other.chars)
