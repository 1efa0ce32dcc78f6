from __future__ import annotations

import collections
import enum
import typing
from dataclasses import dataclass

from chordpad.tui.lib.geometry import Position, Size


class EventCategory(str, enum.Enum):
    NONE = "None"
    CHARACTER = "Character"
    KEY = "Key"
    MOUSE = "Mouse"
    RESIZE = "Resize"
    PASTE = "Paste"


class Modifiers(enum.IntFlag):
    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    META = 8


class MouseButtons(enum.IntFlag):
    NONE = 0
    BUTTON1 = 1
    BUTTON2 = 2
    BUTTON3 = 4
    WHEEL_UP = 8
    WHEEL_DOWN = 16
    WHEEL_LEFT = 32
    WHEEL_RIGHT = 64


_BUTTON_NAMES: typing.Final[tuple[tuple[MouseButtons, str], ...]] = (
    (MouseButtons.BUTTON1, "Button1"),
    (MouseButtons.BUTTON2, "Button2"),
    (MouseButtons.BUTTON3, "Button3"),
    (MouseButtons.WHEEL_UP, "WheelUp"),
    (MouseButtons.WHEEL_DOWN, "WheelDown"),
    (MouseButtons.WHEEL_LEFT, "WheelLeft"),
    (MouseButtons.WHEEL_RIGHT, "WheelRight"),
)

# Applied in this order, each one prepended, so "Alt+Ctrl-V" reads outside-in.
_MODIFIER_PREFIXES: typing.Final[tuple[tuple[Modifiers, str], ...]] = (
    (Modifiers.CTRL, "Ctrl-"),
    (Modifiers.META, "Meta+"),
    (Modifiers.ALT, "Alt+"),
    (Modifiers.SHIFT, "Shift+"),
)

EVENT_FIELDS: typing.Final[frozenset[str]] = frozenset(
    {"Char", "Key", "Modifiers", "Position", "Buttons", "Size", "Text"}
)


def button_name(buttons: MouseButtons) -> str:
    for flag, name in _BUTTON_NAMES:
        if buttons & flag:
            return name
    return ""


def add_prefix(name: str, prefix: str) -> str:
    if name.startswith(prefix):
        return name
    return prefix + name


class _EventBase:
    category: typing.ClassVar[EventCategory] = EventCategory.NONE
    modifiers: Modifiers = Modifiers.NONE

    def base_name(self) -> str:
        return ""

    @property
    def name(self) -> str:
        name = self.base_name()
        for flag, prefix in _MODIFIER_PREFIXES:
            if self.modifiers & flag:
                name = add_prefix(name, prefix)
        return name

    def field(self, name: str) -> typing.Any:
        return None


@dataclass(frozen=True)
class NoEvent(_EventBase):
    pass


@dataclass(frozen=True)
class CharEvent(_EventBase):
    char: str
    modifiers: Modifiers = Modifiers.NONE

    category: typing.ClassVar[EventCategory] = EventCategory.CHARACTER

    def base_name(self) -> str:
        if self.char == " ":
            return "Space"
        return self.char

    def field(self, name: str) -> typing.Any:
        if name == "Char":
            return self.char
        if name == "Modifiers":
            return self.modifiers
        return None


@dataclass(frozen=True)
class KeyEvent(_EventBase):
    key: str
    modifiers: Modifiers = Modifiers.NONE

    category: typing.ClassVar[EventCategory] = EventCategory.KEY

    def base_name(self) -> str:
        return self.key

    def field(self, name: str) -> typing.Any:
        if name == "Key":
            return self.key
        if name == "Modifiers":
            return self.modifiers
        return None


@dataclass(frozen=True)
class MouseEvent(_EventBase):
    x: int
    y: int
    buttons: MouseButtons = MouseButtons.NONE
    pressed: MouseButtons = MouseButtons.NONE
    released: MouseButtons = MouseButtons.NONE
    modifiers: Modifiers = Modifiers.NONE

    category: typing.ClassVar[EventCategory] = EventCategory.MOUSE

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @property
    def is_move(self) -> bool:
        return not self.pressed and not self.released

    def base_name(self) -> str:
        if self.pressed:
            return "MousePress-" + button_name(self.pressed)
        if self.released:
            return "MouseRelease-" + button_name(self.released)
        return "MouseMove"

    def field(self, name: str) -> typing.Any:
        if name == "Position":
            return self.position
        if name == "Buttons":
            return self.buttons
        if name == "Modifiers":
            return self.modifiers
        return None


@dataclass(frozen=True)
class ResizeEvent(_EventBase):
    width: int
    height: int

    category: typing.ClassVar[EventCategory] = EventCategory.RESIZE

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def base_name(self) -> str:
        return "Resize"

    def field(self, name: str) -> typing.Any:
        if name == "Size":
            return self.size
        return None


@dataclass(frozen=True)
class PasteEvent(_EventBase):
    text: str

    category: typing.ClassVar[EventCategory] = EventCategory.PASTE

    def base_name(self) -> str:
        return "Paste"

    def field(self, name: str) -> typing.Any:
        if name == "Text":
            return self.text
        return None


InputEvent = typing.Union[NoEvent, CharEvent, KeyEvent, MouseEvent, ResizeEvent, PasteEvent]


class InputSource(typing.Protocol):
    def read_event(self) -> InputEvent:
        ...


class QueueInputSource:
    """Input source replaying queued events, then reporting ``NoEvent``."""

    def __init__(self, events: typing.Iterable[InputEvent] = ()) -> None:
        self._events: collections.deque[InputEvent] = collections.deque(events)

    def push(self, event: InputEvent) -> None:
        self._events.append(event)

    def pending(self) -> int:
        return len(self._events)

    def read_event(self) -> InputEvent:
        if not self._events:
            return NoEvent()
        return self._events.popleft()
