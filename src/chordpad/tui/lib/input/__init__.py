from __future__ import annotations

from . import base as _base

EventCategory = _base.EventCategory
Modifiers = _base.Modifiers
MouseButtons = _base.MouseButtons
NoEvent = _base.NoEvent
CharEvent = _base.CharEvent
KeyEvent = _base.KeyEvent
MouseEvent = _base.MouseEvent
ResizeEvent = _base.ResizeEvent
PasteEvent = _base.PasteEvent
InputEvent = _base.InputEvent
InputSource = _base.InputSource
QueueInputSource = _base.QueueInputSource
