"""Turns key presses into typed symbols and keyboard commands."""

from __future__ import annotations

import threading
from typing import Callable

from .keyboard import Keyboard, KeyboardSettings
from .keymap import KeyMap, key_map_for
from .keys import KeyCommand, Language, key_command_name, language_name
from .logger import Logger
from .utils import (
    DEBUG_MODE,
    KEY_CODE_BACKSPACE,
    KEY_CODE_DOWN,
    KEY_CODE_ENTER,
    KEY_CODE_FN,
    KEY_CODE_LEFT,
    KEY_CODE_RIGHT,
    KEY_CODE_UP,
    symbol_to_str,
)

_POLL_INTERVAL = 0.005

_SYMBOL_COMMANDS = {
    KEY_CODE_BACKSPACE: KeyCommand.BACKSPACE,
    KEY_CODE_ENTER: KeyCommand.ENTER,
    KEY_CODE_LEFT: KeyCommand.LEFT,
    KEY_CODE_RIGHT: KeyCommand.RIGHT,
    KEY_CODE_UP: KeyCommand.UP,
    KEY_CODE_DOWN: KeyCommand.DOWN,
    KEY_CODE_FN: KeyCommand.ESCAPE,
}


class KeyHandler:
    """Handles the FN modifier, language switching and command keys."""

    def __init__(
        self,
        settings: KeyboardSettings,
        on_char: Callable[[int], None],
        on_command: Callable[[KeyCommand], None],
    ) -> None:
        self._log = Logger.instance()
        self._log.info("-- Initialize keyboard --")
        self._on_char = on_char
        self._on_command = on_command
        self._fn_key = settings.fn_key
        self._enter_key = settings.enter_key
        self._fn_pressed = False
        self._fn_handled = False
        self._key_map: KeyMap = self._set_language(settings.lang)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._log.info("FN key %d Enter key %d", self._fn_key, self._enter_key)

    def on_key_down(self, key_num: int) -> None:
        self._log.info("Button down: %d", key_num)
        if key_num == self._fn_key:
            self._fn_pressed = True
            self._fn_handled = False
        elif self._fn_pressed and key_num == self._enter_key:
            self._switch_lang()
            self._fn_handled = True
        elif self._fn_pressed:
            self._handle_symbol(self._key_map.alt_symbol(key_num))
            self._fn_handled = True
        else:
            self._handle_symbol(self._key_map.symbol(key_num))
            self._fn_handled = False

    def on_key_up(self, key_num: int) -> None:
        self._log.info("Button up: %d", key_num)
        if key_num == self._fn_key:
            self._fn_pressed = False
            if not self._fn_handled:
                self._handle_command(KeyCommand.ESCAPE)

    @property
    def lang(self) -> Language:
        return self._key_map.lang

    def start(self, keyboard: Keyboard) -> None:
        """Poll ``keyboard`` in a background thread until ``stop``."""
        if self._thread is not None:
            raise RuntimeError("key handler already started")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._poll, args=(keyboard,), name="KeyHandler", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _poll(self, keyboard: Keyboard) -> None:
        while not self._stop.is_set():
            keyboard.check()
            self._stop.wait(_POLL_INTERVAL)

    def _handle_symbol(self, symbol: int) -> None:
        if symbol == 0:
            return
        command = _SYMBOL_COMMANDS.get(symbol)
        if command is not None:
            self._handle_command(command)
            return
        if DEBUG_MODE:
            self._log.info("char: '%s' (0x%04X)", symbol_to_str(symbol), symbol)
        self._on_char(symbol)

    def _handle_command(self, cmd: KeyCommand) -> None:
        self._log.info("handleCommand: %s", key_command_name(cmd))
        self._on_command(cmd)

    def _switch_lang(self) -> None:
        next_lang = (int(self._key_map.lang) + 1) % len(Language)
        self._key_map = self._set_language(Language(next_lang))
        self._on_command(KeyCommand.CHANGE_LANG)

    def _set_language(self, lang: Language | int) -> KeyMap:
        self._log.info("Set language to %s", language_name(lang))
        return key_map_for(lang)