from __future__ import annotations

import typing

from rich import console as rich_console
from rich import style as rich_style

from chordpad import errors
from chordpad import logger as chordpad_logger
from chordpad.actions import Action, ActionRegistry, execute_action
from chordpad.buffer.file_buffer import FileBuffer, LogBuffer
from chordpad.keymap import bindings as keymap_bindings
from chordpad.keymap.registry import KeymapRegistry
from chordpad.logger import LogManager, LogRecordEntry, logger
from chordpad.persistence import files as persistence_files
from chordpad.settings.loader import load_settings
from chordpad.settings.models import Settings
from chordpad.tui.lib import controls as tui_controls
from chordpad.tui.lib.geometry import Position, Rectangle, Size
from chordpad.tui.lib.input import base as input_base
from chordpad.tui.lib.screen import CellScreen, Printer
from chordpad.window import Window


STATUS_STYLE: typing.Final[rich_style.Style] = rich_style.Style(reverse=True)


class App:
    """Top level editor state: the windows, the keymaps and the event loop.

    The last screen row is the status line; the focused window gets the rest.
    Log records are mirrored into a read-only log window reachable with
    ``switch_window``.
    """

    def __init__(
        self,
        window: Window,
        settings: Settings | None = None,
        action_registry: ActionRegistry | None = None,
        log_manager: LogManager | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.action_registry = (
            action_registry if action_registry is not None else ActionRegistry()
        )
        self.keymaps: KeymapRegistry = window.keymaps
        keymap_bindings.register_defaults(self.keymaps.global_matcher)
        keymap_bindings.apply_bindings(
            self.keymaps, self.settings.bindings, self.action_registry
        )

        self.log_buffer = LogBuffer()
        self.log_window = Window(self.log_buffer, self.keymaps, tab_size=window.tab_size)
        self._windows: list[Window] = [window, self.log_window]
        self._focused = 0

        self.clipboard = ""
        self._status = ""
        self._running = False
        self._screen_size = Size()

        self._log_manager = (
            log_manager if log_manager is not None else chordpad_logger.get_log_manager()
        )
        if self._log_manager is not None:
            for entry in self._log_manager.get_records():
                self._append_log(entry)
            self._log_manager.subscribe(self._append_log)

    @property
    def window(self) -> Window:
        return self._windows[self._focused]

    @property
    def windows(self) -> list[Window]:
        return list(self._windows)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def status(self) -> str:
        return self._status

    @property
    def screen_size(self) -> Size:
        return self._screen_size

    def close(self) -> None:
        if self._log_manager is not None:
            self._log_manager.unsubscribe(self._append_log)

    def _append_log(self, entry: LogRecordEntry) -> None:
        self.log_buffer.append_message(f"{entry.level_name} {entry.message}")

    # Commands used by actions

    def set_status(self, message: str) -> None:
        self._status = message

    def copy_to_clipboard(self, text: str) -> None:
        self.clipboard = text
        logger.debug("copied to clipboard", length=len(text))

    def quit(self) -> None:
        self._running = False

    def switch_window(self) -> None:
        self.window.reset_highlight_region()
        self._focused = (self._focused + 1) % len(self._windows)
        self.keymaps.reset()
        self.resize(self._screen_size.w, self._screen_size.h)

    def resize(self, width: int, height: int) -> None:
        self._screen_size = Size(width, height)
        self.window.resize(width, max(height - 1, 0))

    def bind(
        self,
        kind: str,
        keys: str,
        action: str,
        args: typing.Sequence[typing.Any] = (),
    ) -> bool:
        return keymap_bindings.bind(
            self.keymaps, kind, keys, action, args, self.action_registry
        )

    # Event loop

    def handle_event(self, evt: input_base.InputEvent) -> Action | None:
        """Feed one event through the focused window's keymaps and run the result."""
        if isinstance(evt, input_base.NoEvent):
            return None
        window = self.window
        try:
            action = window.handle_event(evt)
        except errors.NoTransition as exc:
            logger.info("unbound event", event_name=exc.event_name)
            return None
        if action is None:
            return None
        if not isinstance(action, Action):
            logger.warning("binding produced a non-action value", value=repr(action))
            return None
        self.set_status("")
        try:
            execute_action(action, window, self)
        except errors.EditorError as exc:
            logger.error("action failed", kind=action.kind.value, err=exc.message)
            self.set_status(exc.message)
        return action

    def status_text(self) -> str:
        buffer = self.window.buffer
        name = buffer.filename or f"[{buffer.kind}]"
        l, c = self.window.cursor_pos()
        text = f"{name}  {l + 1}:{c + 1}"
        if self._status:
            text = f"{text}  {self._status}"
        return text

    def draw(self, screen: CellScreen) -> None:
        screen.fill(" ")
        sz = screen.size()
        if sz.h <= 0 or sz.w <= 0:
            return
        body = screen.sub_region(Rectangle(Position(), Size(sz.w, sz.h - 1)))
        window = self.window
        window.focus_cursor(body.size())
        window.draw(body)
        window.draw_cursor(body)
        status = screen.sub_region(Rectangle(Position(0, sz.h - 1), Size(sz.w, 1)))
        text = self.status_text().ljust(sz.w)
        Printer().print(status, Position(), ((ch, STATUS_STYLE) for ch in text))

    def run(
        self,
        input_source: input_base.InputSource,
        screen: CellScreen,
        console: rich_console.Console,
    ) -> None:
        """Read, dispatch and redraw until a quit action stops the loop.

        A ``NoEvent`` from the source means it is exhausted and also ends the loop.
        """
        self._running = True
        sz = screen.size()
        self.resize(sz.w, sz.h)
        logger.info("editor started", filename=self.window.buffer.filename)
        try:
            while self._running:
                self.draw(screen)
                screen.show(console)
                evt = input_source.read_event()
                if isinstance(evt, input_base.NoEvent):
                    break
                if isinstance(evt, input_base.ResizeEvent):
                    screen.resize(evt.width, evt.height)
                self.handle_event(evt)
        finally:
            self._running = False
            console.control(tui_controls.CustomControl.show_cursor())
            logger.info("editor stopped")


def open_app(
    path: str | None = None,
    settings: Settings | None = None,
    action_registry: ActionRegistry | None = None,
    settings_path: str | None = None,
) -> App:
    """Set up logging and build an ``App`` editing ``path`` (a scratch buffer if ``None``).

    ``settings_path`` is read with ``load_settings`` when no ``settings`` are given.
    """
    if settings is None:
        settings = load_settings(settings_path) if settings_path is not None else Settings()
    log_manager = chordpad_logger.init_log_manager(max_entries=settings.log_max_entries)
    chordpad_logger.set_log_level(settings.log_level.value)
    buffer = persistence_files.load_buffer(path) if path is not None else FileBuffer()
    window = Window(buffer, KeymapRegistry(), tab_size=settings.tab_width)
    return App(
        window,
        settings=settings,
        action_registry=action_registry,
        log_manager=log_manager,
    )
