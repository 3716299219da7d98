"""Battery voltage measured through an ADC."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .logger import Logger


@dataclass
class BatterySettings:
    pin_voltage: int = 35
    max_battery_voltage: float = 8.4
    max_adc: float = 4095.0
    c_factor: float = -0.4
    check_interval: int = 1000  # milliseconds


class Battery:
    """Samples the battery voltage at most once per check interval."""

    def __init__(
        self,
        settings: BatterySettings,
        read_adc: Callable[[int], float],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        log = Logger.instance()
        log.info("-- Initialize battery --")
        self._settings = settings
        self._read_adc = read_adc
        self._clock = clock
        self._voltage = 0.0
        log.debug(
            "Pin voltage: %d Max Voltage: %.2f Check interval %d Correction factor %.2f",
            settings.pin_voltage, settings.max_battery_voltage,
            settings.check_interval, settings.c_factor,
        )
        self._next_check = clock()
        self.check()
        log.info("Voltage: %.2f", self._voltage)

    def check(self) -> None:
        """Take a new reading if the check interval has passed."""
        now = self._clock()
        if now < self._next_check:
            return
        self._next_check = now + self._settings.check_interval / 1000
        adc = float(self._read_adc(self._settings.pin_voltage))
        s = self._settings
        self._voltage = adc * s.max_battery_voltage / s.max_adc + s.c_factor

    @property
    def voltage(self) -> float:
        return self._voltage