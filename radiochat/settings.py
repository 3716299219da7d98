"""Device settings loaded from the settings file, with built-in defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TypeVar

from .battery import BatterySettings
from .contacts import ContactsSettings
from .inifile import IniFile
from .keyboard import KeyboardSettings
from .keys import Language
from .led import LedSettings
from .logger import Logger, LoggerSettings, LogTraceLevel
from .radio import RadioSettings
from .sound import SoundSettings

_E = TypeVar("_E", bound=Enum)


@dataclass
class DisplayPins:
    rs: int = 2
    r_w: int = 15
    e: int = 4
    rst: int = 255
    bla: int = 17


@dataclass
class DisplaySettings:
    pins: DisplayPins = field(default_factory=DisplayPins)
    brightness_level: int = 255


@dataclass
class UISettings:
    text_height: int = 9
    carriage_char: str = "|"
    carriage_show_time: int = 700  # milliseconds


def _enum_or_raw(enum_cls: type[_E], value: int) -> _E | int:
    try:
        return enum_cls(value)
    except ValueError:
        return value


class Settings:
    """Reads each group of settings from its section of the settings file."""

    def __init__(self, filename: str | Path) -> None:
        self.filename = Path(filename)
        self._log = Logger.instance()

    def _ini(self) -> IniFile:
        ini = IniFile()
        try:
            ini.open(self.filename)
        except OSError:
            pass
        return ini

    def logger(self) -> LoggerSettings:
        self._log.info("Loading logger settings")
        res = LoggerSettings()
        ini = self._ini()
        s = "Logger"
        res.level = _enum_or_raw(LogTraceLevel, ini.get_value(s, "level", int(res.level)))
        res.log_to_serial = ini.get_value(s, "Log to serial", res.log_to_serial)
        res.log_to_file = ini.get_value(s, "Log to file", res.log_to_file)
        res.log_path = ini.get_value(s, "path", res.log_path)
        res.max_count_lines = ini.get_value(s, "Max count lines", res.max_count_lines)
        res.max_count_logs = ini.get_value(s, "Max count logs", res.max_count_logs)
        res.max_message_size = ini.get_value(s, "Max message size", res.max_message_size)
        return res

    def keyboard(self) -> KeyboardSettings:
        self._log.info("Loading keyboard settings")
        res = KeyboardSettings()
        ini = self._ini()
        s = "Keyboard"
        res.count_registers = ini.get_value(s, "Count registers", res.count_registers)
        res.enter_key = ini.get_value(s, "Enter key code", res.enter_key)
        res.fn_key = ini.get_value(s, "FN key code", res.fn_key)
        res.lang = _enum_or_raw(Language, ini.get_value(s, "Language", int(res.lang)))
        res.max_key_num = ini.get_value(s, "Max count keys", res.max_key_num)
        res.pins.clk = ini.get_value(s, "Pin CLK", res.pins.clk)
        res.pins.qh = ini.get_value(s, "Pin QH", res.pins.qh)
        res.pins.sh_ld = ini.get_value(s, "Pin SH/LD", res.pins.sh_ld)
        return res

    def display(self) -> DisplaySettings:
        self._log.info("Loading display settings")
        res = DisplaySettings()
        ini = self._ini()
        s = "Display"
        res.brightness_level = ini.get_value(s, "Brightness", res.brightness_level)
        res.pins.rs = ini.get_value(s, "Pin RS", res.pins.rs)
        res.pins.r_w = ini.get_value(s, "Pin R/W", res.pins.r_w)
        res.pins.e = ini.get_value(s, "Pin E", res.pins.e)
        res.pins.rst = ini.get_value(s, "Pin RST", res.pins.rst)
        res.pins.bla = ini.get_value(s, "Pin BLA", res.pins.bla)
        return res

    def ui(self) -> UISettings:
        self._log.info("Loading UI settings")
        res = UISettings()
        ini = self._ini()
        s = "UI"
        code = ini.get_value(s, "Carriage char", ord(res.carriage_char))
        res.carriage_char = chr(code & 0xFF)
        res.carriage_show_time = ini.get_value(s, "Carriage show time", res.carriage_show_time)
        res.text_height = ini.get_value(s, "Text line height", res.text_height)
        return res

    def radio(self) -> RadioSettings:
        self._log.info("Loading radio settings")
        res = RadioSettings()
        ini = self._ini()
        s = "Radio"
        res.self_address = ini.get_value(s, "Address", res.self_address)
        res.channel = ini.get_value(s, "Channel", res.channel)
        res.pins.aux = ini.get_value(s, "Pin AUX", res.pins.aux)
        res.pins.m0 = ini.get_value(s, "Pin M0", res.pins.m0)
        res.pins.m1 = ini.get_value(s, "Pin M1", res.pins.m1)
        res.pins.rx = ini.get_value(s, "Pin RX", res.pins.rx)
        res.pins.tx = ini.get_value(s, "Pin TX", res.pins.tx)
        res.uart.baudrate = ini.get_value(s, "Uart baudrate", res.uart.baudrate)
        res.uart.parity = ini.get_value(s, "Uart parity", res.uart.parity)
        res.uart.timeout_ms = ini.get_value(s, "Uart timeout ms", res.uart.timeout_ms)
        return res

    def led(self) -> LedSettings:
        self._log.info("Loading led indicator settings")
        res = LedSettings()
        ini = self._ini()
        s = "Led indicator"
        res.interval = ini.get_value(s, "Blink interval", res.interval)
        res.pin_on = ini.get_value(s, "Pin on", res.pin_on)
        return res

    def sound(self) -> SoundSettings:
        self._log.info("Loading sound settings")
        res = SoundSettings()
        ini = self._ini()
        s = "Sound"
        res.tempo = ini.get_value(s, "Tempo", res.tempo)
        res.pin_io = ini.get_value(s, "Pin IO", res.pin_io)
        return res

    def battery(self) -> BatterySettings:
        self._log.info("Loading battery settings")
        res = BatterySettings()
        ini = self._ini()
        s = "Battery"
        res.max_adc = ini.get_value(s, "Max ADC", res.max_adc)
        res.max_battery_voltage = ini.get_value(s, "Max battery voltage", res.max_battery_voltage)
        res.pin_voltage = ini.get_value(s, "Pin votage", res.pin_voltage)
        res.check_interval = ini.get_value(s, "Check interval", res.check_interval)
        res.c_factor = ini.get_value(s, "Correction factor", res.c_factor)
        return res

    def contacts(self) -> ContactsSettings:
        self._log.info("Loading contacts")
        res = ContactsSettings()
        ini = self._ini()
        s = "Contacts"
        res.path = ini.get_value(s, "Path", res.path)
        res.filename = ini.get_value(s, "File name", res.filename)
        return res