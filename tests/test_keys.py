import pytest

from radiochat.keys import KeyCommand, Language, key_command_name, language_name


@pytest.mark.parametrize(
    "cmd, name",
    [
        (KeyCommand.BACKSPACE, "Backspace"),
        (KeyCommand.ENTER, "Enter"),
        (KeyCommand.LEFT, "Left"),
        (KeyCommand.RIGHT, "Right"),
        (KeyCommand.UP, "Up"),
        (KeyCommand.DOWN, "Down"),
        (KeyCommand.ESCAPE, "Escape"),
    ],
)
def test_key_command_names(cmd, name):
    assert key_command_name(cmd) == name


def test_change_lang_has_no_name():
    assert key_command_name(KeyCommand.CHANGE_LANG) == "Unknown"


def test_language_names():
    assert language_name(Language.RUSSIAN) == "Russian"
    assert language_name(Language.ENGLISH) == "English"


def test_language_name_accepts_plain_int():
    assert language_name(int(Language.ENGLISH)) == "English"


def test_unknown_language_value():
    assert language_name(len(Language) + 3) == "Unknown"


def test_language_values_are_consecutive_from_zero():
    names = [language_name(value) for value in range(len(Language))]
    assert names == ["Russian", "English"]