from __future__ import annotations

import enum
import typing
from dataclasses import dataclass

from chordpad import errors
from chordpad.logger import logger
from chordpad.persistence import files as persistence_files
from chordpad.tui.lib.geometry import Position, Size

if typing.TYPE_CHECKING:
    from chordpad.app import App
    from chordpad.window import Window


class ActionKind(str, enum.Enum):
    INSERT_CHAR = "insert_char"
    CURSOR_LEFT = "cursor_left"
    CURSOR_RIGHT = "cursor_right"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    DELETE_PREV_CHAR = "delete_prev_char"
    CARRIAGE_RETURN = "carriage_return"
    LINE_START = "line_start"
    LINE_END = "line_end"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    SCROLL_DOWN = "scroll_down"
    SCROLL_UP = "scroll_up"
    RESIZE = "resize"
    MOUSE_DOWN = "mouse_down"
    MOUSE_DRAG = "mouse_drag"
    MOUSE_UP = "mouse_up"
    PASTE = "paste"
    SAVE = "save"
    QUIT = "quit"
    SWITCH_WINDOW = "switch_window"
    SCRIPT = "script"


@dataclass(frozen=True)
class Action:
    """An editing action: what to do and the arguments captured for it."""

    kind: ActionKind
    args: tuple[typing.Any, ...] = ()


# A scripted action factory receives the window and the positional arguments
# and returns the procedure to run.
ScriptFactory = typing.Callable[["Window", typing.List[typing.Any]], typing.Callable[[], None]]


class ActionRegistry:
    """Named action factories supplied from outside the core (user scripts)."""

    def __init__(self) -> None:
        self._factories: dict[str, ScriptFactory] = {}

    def register(self, name: str, factory: ScriptFactory) -> None:
        if name in ActionKind._value2member_map_:
            raise ValueError(f"Action name {name!r} shadows a built-in action")
        self._factories[name] = factory

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def get(self, name: str) -> ScriptFactory | None:
        return self._factories.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def names(self) -> list[str]:
        return sorted(self._factories)


def make_factory(
    kind: ActionKind, *static_args: typing.Any
) -> typing.Callable[[typing.List[typing.Any]], Action]:
    """Factory building ``Action(kind, static_args + extracted_fields)``."""

    def factory(fields: typing.List[typing.Any]) -> Action:
        return Action(kind, tuple(static_args) + tuple(fields))

    return factory


def script_factory(
    name: str, *static_args: typing.Any
) -> typing.Callable[[typing.List[typing.Any]], Action]:
    return make_factory(ActionKind.SCRIPT, name, *static_args)


def _insert_char(window: Window, app: App, ch: str) -> None:
    window.insert_char(ch)


def _cursor_left(window: Window, app: App) -> None:
    window.move_cursor(0, -1)


def _cursor_right(window: Window, app: App) -> None:
    window.move_cursor(0, 1)


def _cursor_up(window: Window, app: App) -> None:
    window.move_cursor(-1, 0)


def _cursor_down(window: Window, app: App) -> None:
    window.move_cursor(1, 0)


def _delete_prev_char(window: Window, app: App) -> None:
    window.delete_char()


def _carriage_return(window: Window, app: App) -> None:
    window.split_line(move=True)


def _line_start(window: Window, app: App) -> None:
    window.move_cursor_to_line_start()


def _line_end(window: Window, app: App) -> None:
    window.move_cursor_to_line_end()


def _page_down(window: Window, app: App) -> None:
    window.page_down(1)


def _page_up(window: Window, app: App) -> None:
    window.page_down(-1)


def _scroll_down(window: Window, app: App) -> None:
    window.scroll_down(app.settings.scroll_lines)


def _scroll_up(window: Window, app: App) -> None:
    window.scroll_up(app.settings.scroll_lines)


def _resize(window: Window, app: App, size: Size) -> None:
    app.resize(size.w, size.h)


def _mouse_down(window: Window, app: App, pos: Position) -> None:
    window.start_highlight_region(pos.x, pos.y)


def _mouse_drag(window: Window, app: App, pos: Position) -> None:
    window.move_highlight_region(pos.x, pos.y)


def _mouse_up(window: Window, app: App, pos: Position) -> None:
    if not window.stop_highlight_region(pos.x, pos.y):
        window.move_cursor_to(pos.x, pos.y)
        return
    app.copy_to_clipboard(window.get_highlighted_string())


def _paste(window: Window, app: App, text: str) -> None:
    window.paste_string(text)


def _save(window: Window, app: App) -> None:
    buffer = window.buffer
    try:
        persistence_files.save_buffer(buffer, backup_suffix=app.settings.backup_suffix)
    except (OSError, ValueError) as exc:
        logger.error("save failed", filename=buffer.filename, err=str(exc))
        app.set_status(f"save failed: {exc}")
        return
    app.set_status(f"saved {buffer.filename}")


def _quit(window: Window, app: App) -> None:
    app.quit()


def _switch_window(window: Window, app: App) -> None:
    app.switch_window()


def _script(window: Window, app: App, name: str, *args: typing.Any) -> None:
    factory = app.action_registry.get(name)
    if factory is None:
        logger.error("unknown scripted action", name=name)
        app.set_status(f"unknown action: {name}")
        return
    try:
        factory(window, list(args))()
    except errors.EditorError:
        raise
    except Exception as exc:
        logger.error("scripted action failed", name=name, err=str(exc))
        app.set_status(f"{name} failed: {exc}")


_HANDLERS: typing.Final[dict[ActionKind, typing.Callable[..., None]]] = {
    ActionKind.INSERT_CHAR: _insert_char,
    ActionKind.CURSOR_LEFT: _cursor_left,
    ActionKind.CURSOR_RIGHT: _cursor_right,
    ActionKind.CURSOR_UP: _cursor_up,
    ActionKind.CURSOR_DOWN: _cursor_down,
    ActionKind.DELETE_PREV_CHAR: _delete_prev_char,
    ActionKind.CARRIAGE_RETURN: _carriage_return,
    ActionKind.LINE_START: _line_start,
    ActionKind.LINE_END: _line_end,
    ActionKind.PAGE_DOWN: _page_down,
    ActionKind.PAGE_UP: _page_up,
    ActionKind.SCROLL_DOWN: _scroll_down,
    ActionKind.SCROLL_UP: _scroll_up,
    ActionKind.RESIZE: _resize,
    ActionKind.MOUSE_DOWN: _mouse_down,
    ActionKind.MOUSE_DRAG: _mouse_drag,
    ActionKind.MOUSE_UP: _mouse_up,
    ActionKind.PASTE: _paste,
    ActionKind.SAVE: _save,
    ActionKind.QUIT: _quit,
    ActionKind.SWITCH_WINDOW: _switch_window,
    ActionKind.SCRIPT: _script,
}


def execute_action(action: Action, window: Window, app: App) -> None:
    """Run ``action`` against ``window``. Editor errors propagate to the caller."""
    handler = _HANDLERS.get(action.kind)
    if handler is None:
        raise errors.EditorError(f"no handler for action {action.kind.value}")
    logger.debug("execute action", kind=action.kind.value, args=action.args)
    handler(window, app, *action.args)
