from __future__ import annotations

import typing

from rich import control as rich_control
from rich import segment as rich_segment

SYNC_UPDATE_START: typing.Final[str] = "\x1b[?2026h"
SYNC_UPDATE_END: typing.Final[str] = "\x1b[?2026l"
CURSOR_HOME: typing.Final[str] = "\x1b[H"
HIDE_CURSOR: typing.Final[str] = "\x1b[?25l"
SHOW_CURSOR: typing.Final[str] = "\x1b[?25h"


class CustomControl(rich_control.Control):
    __slots__ = ("segment",)

    def __init__(self, text: str) -> None:
        self.segment = rich_segment.Segment(text)

    @classmethod
    def sync_update_start(cls) -> "CustomControl":
        return cls(SYNC_UPDATE_START)

    @classmethod
    def sync_update_end(cls) -> "CustomControl":
        return cls(SYNC_UPDATE_END)

    @classmethod
    def cursor_home(cls) -> "CustomControl":
        return cls(CURSOR_HOME)

    @classmethod
    def hide_cursor(cls) -> "CustomControl":
        return cls(HIDE_CURSOR)

    @classmethod
    def show_cursor(cls) -> "CustomControl":
        return cls(SHOW_CURSOR)
