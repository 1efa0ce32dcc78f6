from __future__ import annotations

import typing

from chordpad import errors
from chordpad.keymap.matcher import ChordMatcher
from chordpad.tui.lib.input import base as input_base


GLOBAL_SCOPE: typing.Final[str] = "app"


class KeymapRegistry:
    """Chord matchers per binding scope: one global, one per buffer kind.

    Owned by the application and handed to each window, which looks up the
    matcher for its buffer kind when it is created.
    """

    def __init__(self) -> None:
        self._matchers: dict[str, ChordMatcher] = {GLOBAL_SCOPE: ChordMatcher(GLOBAL_SCOPE)}

    @property
    def global_matcher(self) -> ChordMatcher:
        return self._matchers[GLOBAL_SCOPE]

    def get(self, kind: str) -> ChordMatcher:
        matcher = self._matchers.get(kind)
        if matcher is None:
            matcher = ChordMatcher(kind)
            self._matchers[kind] = matcher
        return matcher

    def kinds(self) -> list[str]:
        return list(self._matchers)

    def reset(self) -> None:
        for matcher in self._matchers.values():
            matcher.reset()

    def dispatch(
        self, local: ChordMatcher, evt: input_base.InputEvent
    ) -> typing.Any:
        """Try ``local`` first, then the global matcher if ``local`` has no transition.

        A pointer move that ``local`` discarded (``None`` while still at its
        root) is also offered to the global matcher. Whenever an action comes
        out, both matchers go back to their root so a partial chord in the
        other one cannot linger.
        """
        global_matcher = self.global_matcher
        try:
            action = local.handle_event(evt)
        except errors.NoTransition:
            if local is global_matcher:
                raise
            action = global_matcher.handle_event(evt)
        else:
            if action is None and local is not global_matcher and local.at_root:
                action = global_matcher.handle_event(evt)
        if action is not None:
            local.reset()
            global_matcher.reset()
        return action
