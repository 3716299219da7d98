"""Chat protocol over a LoRa radio module driven through a serial port."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Protocol

from .logger import Logger, LogTraceLevel
from .lora import (
    BROADCAST_ADDRESS,
    Configuration,
    Mode,
    PacketLength,
    ProgramCommand,
    RegisterAddress,
    SubPacketSetting,
    addr_high,
    addr_low,
    air_rate_str,
    bps_type_str,
    channel_str,
    fixed_transmission_str,
    get_address,
    lbt_enable_str,
    mode_name,
    parity_str,
    repeater_enable_str,
    rssi_enable_str,
    rssi_noise_str,
    sub_pack_str,
    transmission_power_str,
    wor_control_str,
    wor_period_str,
)
from .utils import DEVICE_ADDRESS

# Serial configuration word for 8 data bits, no parity, one stop bit.
SERIAL_8N1 = 0x800001C

_MAX_TEXT_SIZE = 0xFFFF
_MODE_SETTLE = 0.040
_READY_SETTLE = 0.020
_TRACE_WIDTH = 16

# Levels of the (M1, M0) pins for each mode.
_MODE_PINS = {
    Mode.TRANSFER: (False, False),
    Mode.CONFIGURATION: (True, False),
    Mode.WOR: (False, True),
    Mode.SLEEP: (True, True),
}


class RadioCommand(IntEnum):
    MESSAGE_NEW = 0
    MESSAGE_DELIVERED = 1
    PING = 2
    PING_DELIVERED = 3


_COMMAND_NAMES = {
    RadioCommand.MESSAGE_NEW: "MessageNew",
    RadioCommand.MESSAGE_DELIVERED: "MessageDelivered",
    RadioCommand.PING: "Ping",
    RadioCommand.PING_DELIVERED: "PingDelivered",
}


def command_name(cmd: RadioCommand | int) -> str:
    """Display name of a radio command; unknown values give ``Unknown``."""
    try:
        return _COMMAND_NAMES[RadioCommand(cmd)]
    except ValueError:
        return "Unknown"


@dataclass
class RadioPins:
    aux: int = 32
    m0: int = 27
    m1: int = 26
    rx: int = 25
    tx: int = 33


@dataclass
class UartSettings:
    baudrate: int = 9600
    timeout_ms: int = 1000
    parity: int = SERIAL_8N1


@dataclass
class RadioSettings:
    pins: RadioPins = field(default_factory=RadioPins)
    channel: int = 23
    self_address: int = DEVICE_ADDRESS
    uart: UartSettings = field(default_factory=UartSettings)
    sub_packet_size: int = SubPacketSetting.E240


class RadioError(Exception):
    """The radio module did not answer or answered wrongly."""


class SerialPort(Protocol):
    in_waiting: int

    def read(self, size: int) -> bytes: ...

    def write(self, data: bytes) -> int: ...


class Gpio(Protocol):
    def read(self, pin: int) -> bool: ...

    def write(self, pin: int, value: bool) -> None: ...


class Radio:
    """Sends and receives chat messages and pings through the radio module."""

    def __init__(
        self,
        settings: RadioSettings,
        port: SerialPort,
        gpio: Gpio,
        on_new_message: Callable[[int, int, str], None],
        on_message_delivered: Callable[[int, int], None],
        on_ping_done: Callable[[int, int], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings
        self._port = port
        self._gpio = gpio
        self._on_new_message = on_new_message
        self._on_message_delivered = on_message_delivered
        self._on_ping_done = on_ping_done
        self._clock = clock
        self._log = Logger.instance()
        self._mode = Mode.UNDEFINED
        self._is_init = False
        self._last_message_id = 0
        self._start_ping: dict[int, int] = {}

    def init(self) -> None:
        """Bring the module to the configured channel, address and sub-packet size."""
        s = self._settings
        log = self._log
        log.info("-- Initialize radio module --")
        log.debug(
            "RX %d TX %d AUX %d M0 %d M1 %d",
            s.pins.rx, s.pins.tx, s.pins.aux, s.pins.m0, s.pins.m1,
        )
        log.info("channel %d self address %d", s.channel, s.self_address)
        log.debug(
            "baud rate %d timeout %d parity %d",
            s.uart.baudrate, s.uart.timeout_ms, s.uart.parity,
        )
        self._is_init = False

        log.info("Wait device is ready")
        self._wait_ready()

        try:
            config = self._get_configuration()
        except RadioError:
            log.error("Can't get radio configuration")
            raise
        self._trace_config(config)

        if s.channel != config.chan:
            self.set_channel(s.channel)
        if s.self_address != config.device_address:
            self.set_address(s.self_address)
        if s.sub_packet_size != config.option.sub_packet_setting:
            self.set_sub_packet_size(s.sub_packet_size)

        self._set_mode(Mode.TRANSFER)
        self._is_init = True

    @property
    def is_init(self) -> bool:
        return self._is_init

    def set_channel(self, channel: int) -> None:
        self._log.info("Set channel %d", channel)

        def setter(config: Configuration) -> None:
            config.chan = channel

        self._configure(setter, "Can't set channel")

    def set_address(self, address: int) -> None:
        self._log.info("Set address %d", address)

        def setter(config: Configuration) -> None:
            config.device_address = address

        self._configure(setter, "Can't set address")

    def set_sub_packet_size(self, size: int) -> None:
        self._log.info("Set sub packet size %s", sub_pack_str(size))

        def setter(config: Configuration) -> None:
            config.option.sub_packet_setting = int(size)

        self._configure(setter, "Can't sub packet size")

    def send_text(self, text: str, address: int = BROADCAST_ADDRESS) -> int:
        """Send a text message and return its message id (wraps at 256)."""
        payload = text.encode("utf-8")[:_MAX_TEXT_SIZE]
        self._log.info("Send text '%s' to %d. Size %d", text, address, len(payload))
        self._last_message_id = (self._last_message_id + 1) & 0xFF
        msg_id = self._last_message_id
        size = len(payload)
        data = (
            self._header(address, RadioCommand.MESSAGE_NEW)
            + bytes([msg_id, addr_high(size), addr_low(size)])
            + payload
        )
        self._write(data)
        return msg_id

    def ping(self, address: int) -> None:
        """Send a ping; the answer is reported through ``on_ping_done``."""
        self._send_ping(address)
        self._start_ping[address] = self._millis()

    def check(self) -> None:
        """Handle one incoming packet if the port has data waiting."""
        if not self._port.in_waiting:
            return
        log = self._log
        try:
            sender_bytes = self._read(2, wait_ready=False)
        except RadioError:
            log.error("Radio: Can't read sender address")
            return
        sender = get_address(sender_bytes[0], sender_bytes[1])
        log.debug("Radio: Sender address %d", sender)

        try:
            raw_cmd = self._read(1, wait_ready=False)[0]
        except RadioError:
            log.error("Radio: Can't read cmd")
            return
        log.debug("Radio: command %s", command_name(raw_cmd))

        try:
            cmd = RadioCommand(raw_cmd)
        except ValueError:
            log.error("Radio: Unknown command %d", raw_cmd)
            return

        try:
            self._dispatch(sender, cmd)
        except RadioError as exc:
            log.error("Radio: %s", exc)

    def _dispatch(self, sender: int, cmd: RadioCommand) -> None:
        if cmd is RadioCommand.MESSAGE_NEW:
            msg_id, text = self._receive_text()
            if msg_id > 0:
                self._send_delivered(sender, msg_id)
                self._on_new_message(sender, msg_id, text)
        elif cmd is RadioCommand.MESSAGE_DELIVERED:
            msg_id = self._read(1)[0]
            self._log.info("Radio: delivered %d", msg_id)
            self._on_message_delivered(sender, msg_id)
        elif cmd is RadioCommand.PING:
            self._send_ping_delivered(sender)
        elif cmd is RadioCommand.PING_DELIVERED:
            delay = self._millis() - self._start_ping.get(sender, 0)
            self._log.info("Radio: ping delivered from %d delay %d", sender, delay)
            self._on_ping_done(sender, delay)

    def _receive_text(self) -> tuple[int, str]:
        head = self._read(3, wait_ready=False)
        msg_id = head[0]
        length = get_address(head[1], head[2])
        self._log.debug("Receive msg_id %d msg_len %d", msg_id, length)
        body = self._read(length)
        text = body.decode("utf-8", errors="replace")
        self._log.info("Receive '%s' msg_id %d size %d", text, msg_id, length)
        return msg_id, text

    def _send_delivered(self, sender: int, msg_id: int) -> None:
        self._log.info("Send status delivered msgID %d to %d", msg_id, sender)
        data = self._header(sender, RadioCommand.MESSAGE_DELIVERED) + bytes([msg_id])
        try:
            self._write(data)
        except RadioError:
            self._log.error("Can't send delivered status")

    def _send_ping(self, dest: int) -> None:
        self._log.info("Send ping to %d", dest)
        try:
            self._write(self._header(dest, RadioCommand.PING))
        except RadioError:
            self._log.error("Can't send ping")
            raise

    def _send_ping_delivered(self, sender: int) -> None:
        self._log.info("Send ping delivered to %d", sender)
        try:
            self._write(self._header(sender, RadioCommand.PING_DELIVERED))
        except RadioError:
            self._log.error("Can't send ping delivered")

    def _header(self, dest: int, command: RadioCommand) -> bytes:
        own = self._settings.self_address
        return bytes([
            addr_high(dest),
            addr_low(dest),
            self._settings.channel & 0xFF,
            addr_high(own),
            addr_low(own),
            int(command),
        ])

    def _configure(self, setter: Callable[[Configuration], None], failure: str) -> None:
        try:
            self._set_configuration(setter)
        except RadioError:
            self._log.error(failure)
            raise

    def _set_configuration(self, setter: Callable[[Configuration], None]) -> None:
        prev_mode = self._mode
        try:
            self._set_mode(Mode.CONFIGURATION)
            config = self._get_configuration()
            config.command = ProgramCommand.WRITE_CFG_PWR_DWN_SAVE
            config.address = RegisterAddress.REG_ADDRESS_CFG
            config.length = PacketLength.PL_CONFIGURATION
            setter(config)
            self._write(config.to_bytes())
            reply = Configuration.from_bytes(self._read(Configuration.SIZE))
            self._check_header(reply)
        finally:
            self._set_mode(prev_mode)

    def _get_configuration(self) -> Configuration:
        self._log.info("Get configuration")
        prev_mode = self._mode
        try:
            self._set_mode(Mode.CONFIGURATION)
            self._log.info("Write command")
            command = bytes([
                ProgramCommand.READ_CONFIGURATION,
                RegisterAddress.REG_ADDRESS_CFG,
                PacketLength.PL_CONFIGURATION,
            ])
            try:
                self._write(command)
            except RadioError:
                self._log.error("Can't write command")
                raise
            config = Configuration.from_bytes(self._read(Configuration.SIZE))
            self._check_header(config)
            return config
        finally:
            self._set_mode(prev_mode)

    def _check_header(self, config: Configuration) -> None:
        if config.command == ProgramCommand.WRONG_FORMAT:
            self._log.error("Wrong format")
            raise RadioError("wrong format")
        expected = (
            ProgramCommand.RETURNED_COMMAND,
            RegisterAddress.REG_ADDRESS_CFG,
            PacketLength.PL_CONFIGURATION,
        )
        if (config.command, config.address, config.length) != expected:
            self._log.error("Head is not recognized")
            raise RadioError("head is not recognized")

    def _set_mode(self, mode: Mode) -> None:
        if mode is Mode.UNDEFINED or mode is self._mode:
            return
        self._log.info("Set radio mode: %s", mode_name(mode))
        m1, m0 = _MODE_PINS[mode]
        self._gpio.write(self._settings.pins.m1, m1)
        self._gpio.write(self._settings.pins.m0, m0)
        time.sleep(_MODE_SETTLE)
        try:
            self._wait_ready()
        except RadioError:
            self._log.error("Can't wait status of set mode")
            raise
        finally:
            self._mode = mode

    def _millis(self) -> int:
        return int(self._clock() * 1000)

    def _is_ready(self) -> bool:
        return bool(self._gpio.read(self._settings.pins.aux))

    def _wait_ready(self) -> None:
        deadline = self._millis() + self._settings.uart.timeout_ms
        ready = self._is_ready()
        while not ready and self._millis() < deadline:
            time.sleep(0)
            ready = self._is_ready()
        if not ready:
            self._log.error("Timeout of wait AUX ready")
            raise RadioError("timeout waiting for AUX ready")
        time.sleep(_READY_SETTLE)

    def _write(self, data: bytes) -> None:
        data = bytes(data)
        self._trace_traffic("-->", data)
        written = self._port.write(data)
        if written != len(data):
            self._log.error("Wrong size of write data: %s", written)
            raise RadioError(f"wrote {written} of {len(data)} bytes")
        self._wait_ready()

    def _read(self, size: int, wait_ready: bool = True) -> bytes:
        data = bytes(self._port.read(size))
        if len(data) != size:
            self._log.error("Wrong length of receive. Need %d actual %d", size, len(data))
            raise RadioError(f"received {len(data)} of {size} bytes")
        if wait_ready:
            try:
                self._wait_ready()
            except RadioError:
                self._log.error("Can't wait status of read bytes")
                raise
        return data

    def _trace_traffic(self, direction: str, data: bytes) -> None:
        if not data:
            self._log.debug("%s NO_DATA!", direction)
            return
        if self._log.log_level != LogTraceLevel.DEBUG:
            return
        for start in range(0, len(data), _TRACE_WIDTH):
            chunk = data[start:start + _TRACE_WIDTH]
            self._log.debug("%s %s", direction, "".join(f"{b:02X} " for b in chunk))

    def _trace_config(self, config: Configuration) -> None:
        debug = self._log.debug
        debug(
            "HEAD: %02X %02X %02X",
            int(config.command), int(config.address), int(config.length),
        )
        debug("AddH : %02X", config.addh)
        debug("AddL : %02X", config.addl)
        debug("NetID: %02X", config.netid)
        debug("Channel: %s", channel_str(config.chan))
        debug("UART parity: %s", parity_str(config.speed.uart_parity))
        debug("UART baud rate: %s", bps_type_str(config.speed.uart_baud_rate))
        debug("Air data rate: %s", air_rate_str(config.speed.air_data_rate))
        debug("Subpacket size: %s", sub_pack_str(config.option.sub_packet_setting))
        debug("Transmission power: %s", transmission_power_str(config.option.transmission_power))
        debug("RSSI ambient noise: %s", rssi_noise_str(config.option.rssi_ambient_noise))
        debug("WOR period: %s", wor_period_str(config.trans_mode.wor_period))
        debug("WOR control: %s", wor_control_str(config.trans_mode.wor_transceiver_control))
        debug("LBT: %s", lbt_enable_str(config.trans_mode.enable_lbt))
        debug("RSSI: %s", rssi_enable_str(config.trans_mode.enable_rssi))
        debug("Repeater mode: %s", repeater_enable_str(config.trans_mode.enable_repeater))
        debug("Fixed mode: %s", fixed_transmission_str(config.trans_mode.fixed_transmission))