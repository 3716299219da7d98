"""Register layout and value names of the LoRa radio module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

BROADCAST_ADDRESS = 0xFFFF

_INVALID = "Invalid"
_ENABLED = "Enabled"
_DISABLED = "Disabled"


class ProgramCommand(IntEnum):
    UNDEF = 0
    WRITE_CFG_PWR_DWN_SAVE = 0xC0
    READ_CONFIGURATION = 0xC1
    RETURNED_COMMAND = 0xC1
    WRITE_CFG_PWR_DWN_LOSE = 0xC2
    SPECIAL_WIFI_CONF_COMMAND = 0xCF
    WRONG_FORMAT = 0xFF


class RegisterAddress(IntEnum):
    REG_ADDRESS_CFG = 0x00
    REG_ADDRESS_SPED = 0x03
    REG_ADDRESS_TRANS_MODE = 0x04
    REG_ADDRESS_CHANNEL = 0x05
    REG_ADDRESS_OPTION = 0x06
    REG_ADDRESS_CRYPT = 0x07
    REG_ADDRESS_PID = 0x80


class PacketLength(IntEnum):
    PL_UNDEF = 0
    PL_CONFIGURATION = 0x09
    PL_SPED = 0x01
    PL_OPTION = 0x01
    PL_TRANSMISSION_MODE = 0x01
    PL_CHANNEL = 0x01
    PL_CRYPT = 0x02
    PL_PID = 7


class Mode(Enum):
    UNDEFINED = 0
    TRANSFER = 1
    CONFIGURATION = 2
    WOR = 3
    SLEEP = 4


class UartParity(IntEnum):
    MODE_00_8N1 = 0b00
    MODE_01_8O1 = 0b01
    MODE_10_8E1 = 0b10
    MODE_11_8N1 = 0b11


class UartBpsType(IntEnum):
    E1200 = 0b000
    E2400 = 0b001
    E4800 = 0b010
    E9600 = 0b011
    E19200 = 0b100
    E38400 = 0b101
    E57600 = 0b110
    E115200 = 0b111


class AirDataRate(IntEnum):
    E03 = 0b000
    E12 = 0b001
    E24 = 0b010
    E48 = 0b011
    E96 = 0b100
    E192 = 0b101
    E384 = 0b110
    E625 = 0b111


class SubPacketSetting(IntEnum):
    E240 = 0b00
    E128 = 0b01
    E064 = 0b10
    E032 = 0b11


class WorPeriod(IntEnum):
    E500 = 0b000
    E1000 = 0b001
    E1500 = 0b010
    E2000 = 0b011
    E2500 = 0b100
    E3000 = 0b101
    E3500 = 0b110
    E4000 = 0b111


class TransmissionPower(IntEnum):
    E30 = 0b00
    E27 = 0b01
    E24 = 0b10
    E21 = 0b11


def _bits(value: int, shift: int, width: int) -> int:
    return (value >> shift) & ((1 << width) - 1)


def _put(value: int, shift: int, width: int) -> int:
    return (int(value) & ((1 << width) - 1)) << shift


@dataclass
class Speed:
    """The SPED register: air rate (bits 0-2), parity (3-4), baud rate (5-7)."""

    air_data_rate: int = 0
    uart_parity: int = 0
    uart_baud_rate: int = 0

    @classmethod
    def from_byte(cls, value: int) -> Speed:
        return cls(_bits(value, 0, 3), _bits(value, 3, 2), _bits(value, 5, 3))

    def to_byte(self) -> int:
        return (
            _put(self.air_data_rate, 0, 3)
            | _put(self.uart_parity, 3, 2)
            | _put(self.uart_baud_rate, 5, 3)
        )


@dataclass
class TransmissionMode:
    """The transmission mode register, WOR period in the low three bits."""

    wor_period: int = 0
    wor_transceiver_control: int = 0
    enable_lbt: int = 0
    enable_repeater: int = 0
    fixed_transmission: int = 0
    enable_rssi: int = 0

    @classmethod
    def from_byte(cls, value: int) -> TransmissionMode:
        return cls(
            _bits(value, 0, 3),
            _bits(value, 3, 1),
            _bits(value, 4, 1),
            _bits(value, 5, 1),
            _bits(value, 6, 1),
            _bits(value, 7, 1),
        )

    def to_byte(self) -> int:
        return (
            _put(self.wor_period, 0, 3)
            | _put(self.wor_transceiver_control, 3, 1)
            | _put(self.enable_lbt, 4, 1)
            | _put(self.enable_repeater, 5, 1)
            | _put(self.fixed_transmission, 6, 1)
            | _put(self.enable_rssi, 7, 1)
        )


@dataclass
class Option:
    """The option register: power (bits 0-1), noise RSSI (5), sub-packet (6-7)."""

    transmission_power: int = 0
    reserve: int = 0
    rssi_ambient_noise: int = 0
    sub_packet_setting: int = 0

    @classmethod
    def from_byte(cls, value: int) -> Option:
        return cls(_bits(value, 0, 2), _bits(value, 2, 3), _bits(value, 5, 1), _bits(value, 6, 2))

    def to_byte(self) -> int:
        return (
            _put(self.transmission_power, 0, 2)
            | _put(self.reserve, 2, 3)
            | _put(self.rssi_ambient_noise, 5, 1)
            | _put(self.sub_packet_setting, 6, 2)
        )


@dataclass
class Configuration:
    """The module configuration block as read from and written to the radio."""

    SIZE = 12

    command: int = ProgramCommand.UNDEF
    address: int = RegisterAddress.REG_ADDRESS_CFG
    length: int = PacketLength.PL_UNDEF
    addh: int = 0
    addl: int = 0
    netid: int = 0
    speed: Speed = field(default_factory=Speed)
    option: Option = field(default_factory=Option)
    chan: int = 0
    trans_mode: TransmissionMode = field(default_factory=TransmissionMode)
    crypt_h: int = 0
    crypt_l: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> Configuration:
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"configuration needs {cls.SIZE} bytes, got {len(data)}")
        return cls(
            command=data[0],
            address=data[1],
            length=data[2],
            addh=data[3],
            addl=data[4],
            netid=data[5],
            speed=Speed.from_byte(data[6]),
            option=Option.from_byte(data[7]),
            chan=data[8],
            trans_mode=TransmissionMode.from_byte(data[9]),
            crypt_h=data[10],
            crypt_l=data[11],
        )

    def to_bytes(self) -> bytes:
        return bytes([
            int(self.command),
            int(self.address),
            int(self.length),
            self.addh,
            self.addl,
            self.netid,
            self.speed.to_byte(),
            self.option.to_byte(),
            self.chan,
            self.trans_mode.to_byte(),
            self.crypt_h,
            self.crypt_l,
        ])

    @property
    def device_address(self) -> int:
        return get_address(self.addh, self.addl)

    @device_address.setter
    def device_address(self, addr: int) -> None:
        self.addh = addr_high(addr)
        self.addl = addr_low(addr)


def get_address(high: int, low: int) -> int:
    return ((high & 0xFF) << 8) | (low & 0xFF)


def addr_high(addr: int) -> int:
    return (addr >> 8) & 0xFF


def addr_low(addr: int) -> int:
    return addr & 0xFF


_MODE_NAMES = {
    Mode.UNDEFINED: "Undefined",
    Mode.TRANSFER: "Transfer",
    Mode.WOR: "WOR",
    Mode.CONFIGURATION: "Configuration",
    Mode.SLEEP: "Sleep",
}

_PARITY = {0b00: "8N1", 0b01: "8O1", 0b10: "8E1", 0b11: "8N1"}
_BPS = {
    0b000: "1200 bps", 0b001: "2400 bps", 0b010: "4800 bps", 0b011: "9600 bps",
    0b100: "19200 bps", 0b101: "38400 bps", 0b110: "57600 bps", 0b111: "115200 bps",
}
_AIR_RATE = {
    0b000: "0.3kbps", 0b001: "1.2kbps", 0b010: "2.4kbps", 0b011: "4.8kbps",
    0b100: "9.6kbps", 0b101: "19.2kbps", 0b110: "38.4kbps", 0b111: "62.5kbps",
}
_SUB_PACK = {0b00: "240 bytes", 0b01: "128 bytes", 0b10: "64 bytes", 0b11: "32 bytes"}
_WOR_PERIOD = {
    0b000: "500 ms", 0b001: "1000 ms", 0b010: "1500 ms", 0b011: "2000 ms",
    0b100: "2500 ms", 0b101: "3000 ms", 0b110: "3500 ms", 0b111: "4000 ms",
}
_WOR_CONTROL = {1: "Transmitter", 0: "Receiver"}
_ON_OFF = {1: _ENABLED, 0: _DISABLED}
_FIXED = {0: "Transparent", 1: "Fixed"}
_POWER = {0b00: "30 dBm", 0b01: "27 dBm", 0b10: "24 dBm", 0b11: "21 dBm"}


def mode_name(mode: Mode) -> str:
    return _MODE_NAMES.get(mode, _INVALID)


def channel_str(channel: int) -> str:
    return f"{channel + 410}.125 MHz"


def parity_str(parity: int) -> str:
    return _PARITY.get(int(parity), _INVALID)


def bps_type_str(bps_type: int) -> str:
    return _BPS.get(int(bps_type), _INVALID)


def air_rate_str(air_rate: int) -> str:
    return _AIR_RATE.get(int(air_rate), _INVALID)


def sub_pack_str(sub_pack: int) -> str:
    return _SUB_PACK.get(int(sub_pack), _INVALID)


def rssi_noise_str(value: int) -> str:
    return _ON_OFF.get(int(value), _INVALID)


def wor_period_str(period: int) -> str:
    return _WOR_PERIOD.get(int(period), _INVALID)


def wor_control_str(control: int) -> str:
    return _WOR_CONTROL.get(int(control), _INVALID)


def lbt_enable_str(value: int) -> str:
    return _ON_OFF.get(int(value), _INVALID)


def rssi_enable_str(value: int) -> str:
    return _ON_OFF.get(int(value), _INVALID)


def repeater_enable_str(value: int) -> str:
    return _ON_OFF.get(int(value), _INVALID)


def fixed_transmission_str(value: int) -> str:
    return _FIXED.get(int(value), _INVALID)


def transmission_power_str(power: int) -> str:
    return _POWER.get(int(power), _INVALID)