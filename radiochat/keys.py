"""Keyboard commands, input languages and key states."""

from __future__ import annotations

from enum import Enum, IntEnum


class KeyCommand(Enum):
    CHANGE_LANG = 0
    ENTER = 1
    BACKSPACE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ESCAPE = 7


class Language(IntEnum):
    RUSSIAN = 0
    ENGLISH = 1


class KeyState(Enum):
    PRESS = 0
    RELEASE = 1


_COMMAND_NAMES = {
    KeyCommand.BACKSPACE: "Backspace",
    KeyCommand.ENTER: "Enter",
    KeyCommand.LEFT: "Left",
    KeyCommand.RIGHT: "Right",
    KeyCommand.UP: "Up",
    KeyCommand.DOWN: "Down",
    KeyCommand.ESCAPE: "Escape",
}

_LANGUAGE_NAMES = {
    Language.RUSSIAN: "Russian",
    Language.ENGLISH: "English",
}


def key_command_name(cmd: KeyCommand) -> str:
    """Display name of a command; commands without one give ``Unknown``."""
    return _COMMAND_NAMES.get(cmd, "Unknown")


def language_name(lang: Language | int) -> str:
    """Display name of a language; unknown values give ``Unknown``."""
    try:
        return _LANGUAGE_NAMES[Language(lang)]
    except ValueError:
        return "Unknown"