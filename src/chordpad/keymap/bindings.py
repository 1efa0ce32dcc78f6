from __future__ import annotations

import typing

from chordpad import errors
from chordpad.actions import ActionKind, ActionRegistry, make_factory, script_factory
from chordpad.keymap.matcher import ActionFactory, ChordMatcher
from chordpad.keymap.registry import GLOBAL_SCOPE, KeymapRegistry
from chordpad.logger import logger

if typing.TYPE_CHECKING:
    from chordpad.settings.models import BindingSpec


DefaultBinding = typing.Tuple[str, ActionKind, typing.Tuple[typing.Any, ...]]

DEFAULT_BINDINGS: typing.Final[tuple[DefaultBinding, ...]] = (
    ("Character.Char", ActionKind.INSERT_CHAR, ()),
    ("Tab", ActionKind.INSERT_CHAR, ("\t",)),
    ("Left", ActionKind.CURSOR_LEFT, ()),
    ("Ctrl-B", ActionKind.CURSOR_LEFT, ()),
    ("Right", ActionKind.CURSOR_RIGHT, ()),
    ("Ctrl-F", ActionKind.CURSOR_RIGHT, ()),
    ("Up", ActionKind.CURSOR_UP, ()),
    ("Ctrl-P", ActionKind.CURSOR_UP, ()),
    ("Down", ActionKind.CURSOR_DOWN, ()),
    ("Ctrl-N", ActionKind.CURSOR_DOWN, ()),
    ("Backspace", ActionKind.DELETE_PREV_CHAR, ()),
    # Sent by most terminals on macOS.
    ("Backspace2", ActionKind.DELETE_PREV_CHAR, ()),
    ("Enter", ActionKind.CARRIAGE_RETURN, ()),
    ("Home", ActionKind.LINE_START, ()),
    ("Ctrl-A", ActionKind.LINE_START, ()),
    ("End", ActionKind.LINE_END, ()),
    ("Ctrl-E", ActionKind.LINE_END, ()),
    ("PgDn", ActionKind.PAGE_DOWN, ()),
    ("Ctrl-V", ActionKind.PAGE_DOWN, ()),
    ("PgUp", ActionKind.PAGE_UP, ()),
    ("Alt+Ctrl-V", ActionKind.PAGE_UP, ()),
    ("Resize.Size", ActionKind.RESIZE, ()),
    ("MousePress-Button1.Position", ActionKind.MOUSE_DOWN, ()),
    ("MouseMove.Position", ActionKind.MOUSE_DRAG, ()),
    ("MouseRelease-Button1.Position", ActionKind.MOUSE_UP, ()),
    ("MousePress-WheelDown", ActionKind.SCROLL_DOWN, ()),
    ("MousePress-WheelUp", ActionKind.SCROLL_UP, ()),
    ("Paste.Text", ActionKind.PASTE, ()),
    ("Ctrl-X Ctrl-S", ActionKind.SAVE, ()),
    ("Ctrl-X Ctrl-L", ActionKind.SWITCH_WINDOW, ()),
    ("Ctrl-C", ActionKind.QUIT, ()),
)


def register_defaults(matcher: ChordMatcher) -> None:
    for seq, kind, args in DEFAULT_BINDINGS:
        try:
            matcher.register_action(seq, make_factory(kind, *args))
        except errors.ActionConflict as exc:
            logger.warning("unable to register binding", seq=seq, err=exc.message)


def resolve_factory(
    action: str, args: typing.Sequence[typing.Any], registry: ActionRegistry
) -> ActionFactory:
    if action in ActionKind._value2member_map_:
        return make_factory(ActionKind(action), *args)
    if action not in registry:
        # Scripts may be registered after the bindings are read; the name is
        # looked up again when the action runs.
        logger.info("binding refers to unregistered action", action=action)
    return script_factory(action, *args)


def bind(
    keymaps: KeymapRegistry,
    kind: str,
    keys: str,
    action: str,
    args: typing.Sequence[typing.Any],
    registry: ActionRegistry,
) -> bool:
    """Register one binding; conflicts are logged and reported as ``False``."""
    factory = resolve_factory(action, args, registry)
    try:
        keymaps.get(kind).register_action(keys, factory)
    except errors.ActionConflict as exc:
        logger.warning("unable to register binding", kind=kind, seq=keys, err=exc.message)
        return False
    except ValueError as exc:
        logger.warning("invalid binding", kind=kind, seq=keys, err=str(exc))
        return False
    return True


def apply_bindings(
    keymaps: KeymapRegistry,
    bindings: typing.Mapping[str, typing.Sequence[BindingSpec]],
    registry: ActionRegistry,
) -> None:
    for kind, specs in bindings.items():
        for spec in specs:
            bind(keymaps, kind or GLOBAL_SCOPE, spec.keys, spec.action, spec.args, registry)
