from __future__ import annotations

import typing

import pytest

from chordpad import errors
from chordpad.keymap.registry import GLOBAL_SCOPE, KeymapRegistry
from chordpad.tui.lib.input import base as input_base

CTRL = input_base.Modifiers.CTRL


def _tag(tag: str) -> typing.Callable[[list[typing.Any]], str]:
    return lambda fields: tag


def test_get_creates_matchers_per_kind() -> None:
    keymaps = KeymapRegistry()
    plain = keymaps.get("plain")
    assert keymaps.get("plain") is plain
    assert keymaps.get(GLOBAL_SCOPE) is keymaps.global_matcher
    assert set(keymaps.kinds()) == {GLOBAL_SCOPE, "plain"}


def test_local_matcher_wins() -> None:
    keymaps = KeymapRegistry()
    keymaps.global_matcher.register_action("Enter", _tag("global"))
    local = keymaps.get("plain")
    local.register_action("Enter", _tag("local"))
    assert keymaps.dispatch(local, input_base.KeyEvent("Enter")) == "local"


def test_falls_back_to_global_on_no_transition() -> None:
    keymaps = KeymapRegistry()
    keymaps.global_matcher.register_action("Ctrl-X Ctrl-S", _tag("save"))
    local = keymaps.get("log")
    local.register_action("q", _tag("close"))
    assert keymaps.dispatch(local, input_base.KeyEvent("X", CTRL)) is None
    assert keymaps.dispatch(local, input_base.KeyEvent("S", CTRL)) == "save"
    assert keymaps.global_matcher.at_root


def test_action_resets_both_matchers() -> None:
    keymaps = KeymapRegistry()
    keymaps.global_matcher.register_action("Ctrl-X Ctrl-S", _tag("save"))
    local = keymaps.get("plain")
    local.register_action("a b", _tag("ab"))
    local.register_action("Enter", _tag("enter"))

    keymaps.dispatch(local, input_base.KeyEvent("X", CTRL))
    assert not keymaps.global_matcher.at_root
    assert keymaps.dispatch(local, input_base.KeyEvent("Enter")) == "enter"
    assert keymaps.global_matcher.at_root
    assert local.at_root


def test_unmatched_in_both_raises() -> None:
    keymaps = KeymapRegistry()
    local = keymaps.get("plain")
    with pytest.raises(errors.NoTransition):
        keymaps.dispatch(local, input_base.KeyEvent("F5"))
    with pytest.raises(errors.NoTransition):
        keymaps.dispatch(keymaps.global_matcher, input_base.KeyEvent("F5"))


def test_reset_all() -> None:
    keymaps = KeymapRegistry()
    keymaps.global_matcher.register_action("a b", _tag("ab"))
    keymaps.dispatch(keymaps.get("plain"), input_base.CharEvent("a"))
    keymaps.reset()
    assert keymaps.global_matcher.at_root


def test_move_discarded_locally_reaches_global() -> None:
    keymaps = KeymapRegistry()
    keymaps.global_matcher.register_action("MouseMove.Position", lambda fields: fields)
    local = keymaps.get("plain")
    move = input_base.MouseEvent(4, 0, buttons=input_base.MouseButtons.BUTTON1)
    assert keymaps.dispatch(local, move) == [move.position]


def test_move_during_local_chord_stays_local() -> None:
    keymaps = KeymapRegistry()
    keymaps.global_matcher.register_action("MouseMove", _tag("global move"))
    local = keymaps.get("plain")
    local.register_action("a b", _tag("ab"))
    keymaps.dispatch(local, input_base.CharEvent("a"))
    assert keymaps.dispatch(local, input_base.MouseEvent(1, 1)) is None
    assert keymaps.dispatch(local, input_base.CharEvent("b")) == "ab"
