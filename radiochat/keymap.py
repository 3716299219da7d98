"""Mapping of raw key numbers to symbols for each input language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .keys import Language
from .utils import (
    KEY_CODE_BACKSPACE,
    KEY_CODE_DOWN,
    KEY_CODE_ENTER,
    KEY_CODE_FN,
    KEY_CODE_LEFT,
    KEY_CODE_RIGHT,
    KEY_CODE_UP,
)


@dataclass(frozen=True)
class KeyInfo:
    """The symbol of a key and its symbol while the FN key is held."""

    symbol: int = 0
    alt_symbol: int = 0


class KeyMap:
    """Symbols of raw key numbers for one language."""

    def __init__(self, lang: Language, keys: Mapping[int, KeyInfo]) -> None:
        self._lang = Language(lang)
        self._keys = dict(keys)

    def symbol(self, raw: int) -> int:
        """The key's symbol, or 0 for key 0 and unmapped keys."""
        info = self._keys.get(raw) if raw else None
        return info.symbol if info else 0

    def alt_symbol(self, raw: int) -> int:
        """The key's FN symbol, or 0 for key 0 and unmapped keys."""
        info = self._keys.get(raw) if raw else None
        return info.alt_symbol if info else 0

    @property
    def lang(self) -> Language:
        return self._lang

    def keys(self) -> list[int]:
        """The mapped raw key numbers in ascending order."""
        return sorted(self._keys)


def _k(symbol: int | str, alt: int | str) -> KeyInfo:
    def code(value: int | str) -> int:
        return ord(value) if isinstance(value, str) else value

    return KeyInfo(code(symbol), code(alt))


# Raw key layout:
# [01] [07] [03] [10] [14] [12] [23] [19] [25] [31] [27] [39]
#    [ 8] [ 5] [09] [15] [11] [18] [22] [20] [32] [29] [40]
# [02] [06] [ 4] [16] [13] [17] [24] [21] [26] [30] [28] [38]

_ENGLISH_KEYS = {
    1: _k("q", "1"),
    7: _k("w", "2"),
    3: _k("e", "3"),
    10: _k("r", "4"),
    14: _k("t", "5"),
    12: _k("y", "6"),
    23: _k("u", "7"),
    19: _k("i", "8"),
    25: _k("o", "9"),
    31: _k("p", "0"),
    27: _k("(", "-"),
    39: _k(")", KEY_CODE_BACKSPACE),
    8: _k("a", '"'),
    5: _k("s", ":"),
    9: _k("d", "~"),
    15: _k("f", "/"),
    11: _k("g", "%"),
    18: _k("h", "@"),
    22: _k("j", "="),
    20: _k("k", "|"),
    32: _k("l", "\\"),
    29: _k(";", KEY_CODE_UP),
    40: _k("'", "+"),
    2: _k(KEY_CODE_FN, KEY_CODE_FN),
    6: _k("z", KEY_CODE_LEFT),
    4: _k("x", KEY_CODE_RIGHT),
    16: _k("c", "?"),
    13: _k("v", "#"),
    17: _k("b", "&"),
    24: _k("n", "!"),
    21: _k("m", "*"),
    26: _k(",", "<"),
    30: _k(".", ">"),
    28: _k(" ", KEY_CODE_DOWN),
    38: _k(KEY_CODE_ENTER, KEY_CODE_ENTER),
}

# Russian letters are their UTF-8 bytes packed into 16 bits.
_RUSSIAN_KEYS = {
    1: _k(0xD0B9, "1"),    # й
    7: _k(0xD186, "2"),    # ц
    3: _k(0xD183, "3"),    # у
    10: _k(0xD0BA, "4"),   # к
    14: _k(0xD0B5, "5"),   # е
    12: _k(0xD0BD, "6"),   # н
    23: _k(0xD0B3, "7"),   # г
    19: _k(0xD188, "8"),   # ш
    25: _k(0xD189, "9"),   # щ
    31: _k(0xD0B7, "0"),   # з
    27: _k(0xD185, "-"),   # х
    39: _k(0xD18A, KEY_CODE_BACKSPACE),  # ъ
    8: _k(0xD184, '"'),    # ф
    5: _k(0xD18B, ":"),    # ы
    9: _k(0xD0B2, "~"),    # в
    15: _k(0xD0B0, "/"),   # а
    11: _k(0xD0BF, "%"),   # п
    18: _k(0xD180, "@"),   # р
    22: _k(0xD0BE, "="),   # о
    20: _k(0xD0BB, "|"),   # л
    32: _k(0xD0B4, "\\"),  # д
    29: _k(0xD0B6, KEY_CODE_UP),  # ж
    40: _k(0xD18D, "+"),   # э
    2: _k(KEY_CODE_FN, KEY_CODE_FN),
    6: _k(0xD18F, KEY_CODE_LEFT),   # я
    4: _k(0xD187, KEY_CODE_RIGHT),  # ч
    16: _k(0xD181, "?"),   # с
    13: _k(0xD0BC, "#"),   # м
    17: _k(0xD0B8, "&"),   # и
    24: _k(0xD182, "!"),   # т
    21: _k(0xD18C, "*"),   # ь
    26: _k(0xD0B1, ","),   # б
    30: _k(0xD18E, "."),   # ю
    28: _k(" ", KEY_CODE_DOWN),
    38: _k(KEY_CODE_ENTER, KEY_CODE_ENTER),
}


def english_key_map() -> KeyMap:
    return KeyMap(Language.ENGLISH, _ENGLISH_KEYS)


def russian_key_map() -> KeyMap:
    return KeyMap(Language.RUSSIAN, _RUSSIAN_KEYS)


def key_map_for(lang: Language | int) -> KeyMap:
    """The key map of a language; anything but English gives the Russian map."""
    if lang == Language.ENGLISH:
        return english_key_map()
    return russian_key_map()