"""Key matrix scanning over chained shift registers."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Callable, Iterable

from .keys import KeyState, Language
from .logger import Logger

_MAX_PRESSED = 3


@dataclass
class KeyboardPins:
    sh_ld: int = 16
    qh: int = 13
    clk: int = 14


@dataclass
class KeyboardSettings:
    pins: KeyboardPins = field(default_factory=KeyboardPins)
    lang: Language = Language.RUSSIAN
    max_key_num: int = 40
    fn_key: int = 2
    enter_key: int = 38
    count_registers: int = 5


def pressed_keys(registers: Iterable[int]) -> list[int]:
    """Key numbers held down, at most three, from register bytes.

    A cleared bit is a pressed key; bits are read least significant first
    and keys are numbered from 1 across all registers.
    """
    pressed: list[int] = []
    bit_num = 0
    for value in registers:
        for bit in range(8):
            bit_num += 1
            if value & (1 << bit):
                continue
            if len(pressed) == _MAX_PRESSED:
                return pressed
            pressed.append(bit_num)
    return pressed


class Keyboard:
    """Reports key presses and releases between successive scans."""

    def __init__(
        self,
        settings: KeyboardSettings,
        read_registers: Callable[[], Iterable[int]],
        on_key_down: Callable[[int], None],
        on_key_up: Callable[[int], None],
    ) -> None:
        self._settings = settings
        self._read_registers = read_registers
        self._on_key_down = on_key_down
        self._on_key_up = on_key_up
        self._states = {key: KeyState.RELEASE for key in range(1, settings.max_key_num + 1)}
        log = Logger.instance()
        log.debug(
            "SH %d CLK %d QH %d",
            settings.pins.sh_ld, settings.pins.clk, settings.pins.qh,
        )
        log.debug("maxKeyNum %d countRegisters %d", settings.max_key_num, settings.count_registers)

    def check(self) -> None:
        """Scan once and call back for every key whose state changed."""
        registers = islice(self._read_registers(), self._settings.count_registers)
        pressed = set(pressed_keys(registers))
        for key in range(1, self._settings.max_key_num + 1):
            current = KeyState.PRESS if key in pressed else KeyState.RELEASE
            if self._states[key] != current:
                self._states[key] = current
                if current is KeyState.PRESS:
                    self._on_key_down(key)
                else:
                    self._on_key_up(key)

    def state(self, key_num: int) -> KeyState:
        return self._states.get(key_num, KeyState.RELEASE)