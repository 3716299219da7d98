import threading

import pytest

from radiochat.keyboard import KeyboardSettings
from radiochat.keyhandler import KeyHandler
from radiochat.keys import KeyCommand, Language


@pytest.fixture
def handler_env():
    chars = []
    commands = []
    handler = KeyHandler(KeyboardSettings(), chars.append, commands.append)
    return handler, chars, commands


def test_default_language_is_russian(handler_env):
    handler, _, _ = handler_env
    assert handler.lang is Language.RUSSIAN


def test_plain_key_types_symbol(handler_env):
    handler, chars, commands = handler_env
    handler.on_key_down(1)
    assert chars == [0xD0B9]
    assert commands == []


def test_enter_key_gives_command(handler_env):
    handler, chars, commands = handler_env
    handler.on_key_down(38)
    assert commands == [KeyCommand.ENTER]
    assert chars == []


def test_fn_with_key_types_alt_symbol(handler_env):
    handler, chars, commands = handler_env
    handler.on_key_down(2)
    handler.on_key_down(1)
    handler.on_key_up(2)
    assert chars == [ord("1")]
    assert commands == []


def test_fn_alone_gives_escape(handler_env):
    handler, chars, commands = handler_env
    handler.on_key_down(2)
    handler.on_key_up(2)
    assert commands == [KeyCommand.ESCAPE]
    assert chars == []


def test_fn_with_alt_command(handler_env):
    handler, _, commands = handler_env
    handler.on_key_down(2)
    handler.on_key_down(39)
    assert commands == [KeyCommand.BACKSPACE]


def test_fn_enter_switches_language(handler_env):
    handler, chars, commands = handler_env
    handler.on_key_down(2)
    handler.on_key_down(38)
    handler.on_key_up(2)
    assert handler.lang is Language.ENGLISH
    assert commands == [KeyCommand.CHANGE_LANG]
    handler.on_key_down(1)
    assert chars == [ord("q")]


def test_language_switch_wraps_around(handler_env):
    handler, _, _ = handler_env
    for _ in range(len(Language)):
        handler.on_key_down(2)
        handler.on_key_down(38)
        handler.on_key_up(2)
    assert handler.lang is Language.RUSSIAN


def test_english_setting():
    handler = KeyHandler(KeyboardSettings(lang=Language.ENGLISH), lambda s: None, lambda c: None)
    assert handler.lang is Language.ENGLISH


class FakeKeyboard:
    def __init__(self):
        self.checks = 0
        self.checked = threading.Event()

    def check(self):
        self.checks += 1
        self.checked.set()


def test_start_polls_until_stopped(handler_env):
    handler, _, _ = handler_env
    keyboard = FakeKeyboard()
    handler.start(keyboard)
    assert keyboard.checked.wait(2.0)
    handler.stop()
    count = keyboard.checks
    assert count > 0
    assert keyboard.checks == count


def test_start_twice_raises(handler_env):
    handler, _, _ = handler_env
    handler.start(FakeKeyboard())
    try:
        with pytest.raises(RuntimeError):
            handler.start(FakeKeyboard())
    finally:
        handler.stop()