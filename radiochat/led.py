"""A blinking status LED."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .logger import Logger


@dataclass
class LedSettings:
    pin_on: int = 21
    interval: int = 1000  # milliseconds


class LedIndicator:
    """Toggles the LED pin once per interval when checked."""

    def __init__(
        self,
        settings: LedSettings,
        write_pin: Callable[[int, bool], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        log = Logger.instance()
        log.info("--- Init led indicator ---")
        log.debug("Pin led on %d", settings.pin_on)
        self._settings = settings
        self._write_pin = write_pin
        self._clock = clock
        self._write_pin(settings.pin_on, False)
        self._state = False
        self._next_switch = clock() + settings.interval / 1000

    def check(self) -> None:
        """Toggle the LED if the interval has passed."""
        now = self._clock()
        if now < self._next_switch:
            return
        self._next_switch = now + self._settings.interval / 1000
        self._state = not self._state
        self._write_pin(self._settings.pin_on, self._state)

    @property
    def state(self) -> bool:
        return self._state