from __future__ import annotations

import typing
from dataclasses import dataclass, field

from chordpad import errors
from chordpad.logger import logger
from chordpad.tui.lib.input import base as input_base


ActionFactory = typing.Callable[[typing.List[typing.Any]], typing.Any]


@dataclass(frozen=True)
class ChordToken:
    event: str
    fields: tuple[str, ...] = ()


def parse_sequence(seq: str) -> list[ChordToken]:
    """Parse ``"Ctrl-X Ctrl-S"`` or ``"MousePress-Button1.Position"`` into tokens."""
    tokens: list[ChordToken] = []
    for raw in seq.split():
        event, *fields = raw.split(".")
        if not event:
            raise ValueError(f"Empty event name in sequence {seq!r}")
        for name in fields:
            if name not in input_base.EVENT_FIELDS:
                raise ValueError(f"Unknown event field {name!r} in sequence {seq!r}")
        tokens.append(ChordToken(event=event, fields=tuple(fields)))
    if not tokens:
        raise ValueError("Empty event sequence")
    return tokens


@dataclass(eq=False)
class _State:
    path: str
    fields: tuple[str, ...] = ()
    factory: ActionFactory | None = None
    transitions: dict[str, _State] = field(default_factory=dict)


class ChordMatcher:
    """Matches sequences of input events against registered chords.

    Chords live in a trie keyed by event name; every bound chord is a leaf, so a
    completed chord never has to wait for a possible longer one. There is no
    timeout: a partial chord is kept until an event completes or breaks it.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._root = _State(path="")
        self._current = self._root
        self._args: list[typing.Any] = []
        self._consumed = 0

    @property
    def at_root(self) -> bool:
        return self._current is self._root

    @property
    def state_path(self) -> str:
        return self._current.path

    @property
    def consumed(self) -> int:
        return self._consumed

    def reset(self) -> None:
        self._current = self._root
        self._args = []
        self._consumed = 0

    def register_action(self, seq: str, factory: ActionFactory) -> None:
        tokens = parse_sequence(seq)

        # Validate the whole sequence before touching the trie.
        state: _State | None = self._root
        for token in tokens:
            if state is None:
                break
            if state.factory is not None:
                raise errors.ActionConflict(seq, f"{state.path.strip()!r} is already bound")
            child = state.transitions.get(token.event)
            if child is not None and child.transitions and child.fields != token.fields:
                raise errors.ActionConflict(
                    seq, f"{token.event!r} already extracts {child.fields!r}"
                )
            state = child
        if state is not None and state.transitions:
            raise errors.ActionConflict(seq, "sequence is a prefix of a longer binding")

        state = self._root
        for token in tokens:
            child = state.transitions.get(token.event)
            if child is None:
                child = _State(path=f"{state.path} {token.event}".strip())
                state.transitions[token.event] = child
            child.fields = token.fields
            state = child
        if state.factory is not None:
            logger.debug("rebinding chord", matcher=self.name, seq=seq)
        state.factory = factory

    def is_bound(self, seq: str) -> bool:
        state: _State | None = self._root
        for token in parse_sequence(seq):
            if state is None:
                return False
            state = state.transitions.get(token.event)
        return state is not None and state.factory is not None

    def handle_event(self, evt: input_base.InputEvent) -> typing.Any:
        """Advance on ``evt``; return the action when a chord completes.

        Returns ``None`` while a chord is in progress. Raises ``NoTransition``
        (after resetting to the root state) when ``evt`` does not fit.
        """
        name = evt.name
        transition = name
        child = self._current.transitions.get(transition)
        if child is None:
            transition = evt.category.value
            child = self._current.transitions.get(transition)
        if child is None:
            if isinstance(evt, input_base.MouseEvent) and evt.is_move:
                return None
            self.reset()
            raise errors.NoTransition(name)

        logger.debug(
            "chord transition", matcher=self.name, transition=transition, state=child.path
        )
        self._current = child
        self._consumed += 1
        self._args.extend(evt.field(f) for f in child.fields)
        if child.factory is None:
            return None
        action = child.factory(list(self._args))
        self.reset()
        logger.debug("chord complete", matcher=self.name, chord=child.path)
        return action
