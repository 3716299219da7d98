import time

import pytest

from radiochat.lora import Configuration
from radiochat.radio import (
    Radio,
    RadioCommand,
    RadioError,
    RadioSettings,
    command_name,
)

READ_CONFIG = bytes([0xC1, 0x00, 0x09])


class FakeModule:
    """A serial port that answers like the radio module."""

    def __init__(self, chan=23, address=2, reply_command=0xC1, short_write=False):
        config = Configuration(chan=chan)
        config.device_address = address
        self.config = config
        self.reply_command = reply_command
        self.short_write = short_write
        self.rx = bytearray()
        self.written = []

    @property
    def in_waiting(self):
        return len(self.rx)

    def read(self, size):
        out = bytes(self.rx[:size])
        del self.rx[:size]
        return out

    def write(self, data):
        data = bytes(data)
        self.written.append(data)
        if data == READ_CONFIG:
            reply = Configuration.from_bytes(self.config.to_bytes())
            reply.command, reply.address, reply.length = 0xC1, 0x00, 0x09
            self.rx.extend(reply.to_bytes())
        elif len(data) == Configuration.SIZE and data[0] == 0xC0:
            new = Configuration.from_bytes(data)
            new.command = self.reply_command
            if self.reply_command == 0xC1:
                self.config = Configuration.from_bytes(new.to_bytes())
            self.rx.extend(new.to_bytes())
        return len(data) - 1 if self.short_write else len(data)


class FakeGpio:
    def __init__(self, ready=True):
        self.ready = ready
        self.pins = {}

    def read(self, pin):
        return self.ready

    def write(self, pin, value):
        self.pins[pin] = value


class ManualClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class StepClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        self.now += 0.5
        return self.now


class Recorder:
    def __init__(self):
        self.messages = []
        self.delivered = []
        self.pings = []


def make_radio(module=None, gpio=None, clock=time.monotonic, settings=None):
    module = module or FakeModule()
    gpio = gpio or FakeGpio()
    rec = Recorder()
    radio = Radio(
        settings or RadioSettings(),
        module,
        gpio,
        lambda s, i, t: rec.messages.append((s, i, t)),
        lambda a, i: rec.delivered.append((a, i)),
        lambda a, d: rec.pings.append((a, d)),
        clock,
    )
    return radio, module, gpio, rec


def test_command_names():
    assert command_name(RadioCommand.MESSAGE_NEW) == "MessageNew"
    assert command_name(RadioCommand.MESSAGE_DELIVERED) == "MessageDelivered"
    assert command_name(RadioCommand.PING) == "Ping"
    assert command_name(RadioCommand.PING_DELIVERED) == "PingDelivered"
    assert command_name(9) == "Unknown"


def test_settings_defaults():
    settings = RadioSettings()
    assert settings.channel == 23
    assert settings.self_address == 2
    assert settings.uart.baudrate == 9600
    assert settings.uart.timeout_ms == 1000
    assert settings.pins.aux == 32


def test_send_text_wire_format_and_ids():
    radio, module, _, _ = make_radio()
    assert radio.send_text("hi", 0x0102) == 1
    assert module.written[-1] == bytes([0x01, 0x02, 23, 0x00, 0x02, 0x00, 1, 0x00, 0x02]) + b"hi"
    assert radio.send_text("hi", 0x0102) == 2


def test_send_text_broadcast_by_default():
    radio, module, _, _ = make_radio()
    radio.send_text("x")
    assert module.written[-1][:2] == bytes([0xFF, 0xFF])


def test_send_text_short_write_raises():
    radio, _, _, _ = make_radio(module=FakeModule(short_write=True))
    with pytest.raises(RadioError):
        radio.send_text("hello", 5)


def test_ping_writes_header():
    radio, module, _, _ = make_radio()
    radio.ping(5)
    assert module.written[-1] == bytes([0x00, 0x05, 23, 0x00, 0x02, int(RadioCommand.PING)])


def test_check_new_message_acknowledges_and_reports():
    radio, module, _, rec = make_radio()
    module.rx.extend(bytes([0x00, 0x05, 0x00, 7, 0x00, 0x03]) + b"abc")
    radio.check()
    assert rec.messages == [(5, 7, "abc")]
    assert module.written[-1] == bytes([0x00, 0x05, 23, 0x00, 0x02, 0x01, 7])


def test_text_round_trip_between_radios():
    sender, sender_port, _, _ = make_radio()
    receiver, receiver_port, _, rec = make_radio()
    msg_id = sender.send_text("привет", 3)
    receiver_port.rx.extend(sender_port.written[-1][3:])
    receiver.check()
    assert rec.messages == [(2, msg_id, "привет")]


def test_check_delivered():
    radio, module, _, rec = make_radio()
    module.rx.extend(bytes([0x00, 0x05, 0x01, 9]))
    radio.check()
    assert rec.delivered == [(5, 9)]


def test_check_ping_answers():
    radio, module, _, _ = make_radio()
    module.rx.extend(bytes([0x00, 0x05, 0x02]))
    radio.check()
    assert module.written == [bytes([0x00, 0x05, 23, 0x00, 0x02, 0x03])]


def test_check_ping_delivered_reports_delay():
    clock = ManualClock(1.0)
    radio, module, _, rec = make_radio(clock=clock)
    radio.ping(5)
    clock.now = 1.25
    module.rx.extend(bytes([0x00, 0x05, 0x03]))
    radio.check()
    assert rec.pings == [(5, 250)]


def test_check_unknown_command_is_ignored():
    radio, module, _, rec = make_radio()
    module.rx.extend(bytes([0x00, 0x05, 0x09]))
    radio.check()
    assert (rec.messages, rec.delivered, rec.pings, module.written) == ([], [], [], [])


def test_check_short_packet_is_dropped():
    radio, module, _, rec = make_radio()
    module.rx.extend(bytes([0x00]))
    radio.check()
    assert rec.messages == [] and module.written == []
    assert module.in_waiting == 0


def test_check_without_data_does_nothing():
    radio, module, _, rec = make_radio()
    radio.check()
    assert module.written == [] and rec.messages == []


def test_init_with_matching_configuration():
    radio, module, gpio, _ = make_radio()
    radio.init()
    assert radio.is_init
    assert all(w[0] != 0xC0 for w in module.written)
    settings = RadioSettings()
    assert gpio.pins[settings.pins.m0] is False
    assert gpio.pins[settings.pins.m1] is False


def test_init_writes_channel_and_address():
    radio, module, _, _ = make_radio(module=FakeModule(chan=10, address=0))
    radio.init()
    assert radio.is_init
    assert module.config.chan == 23
    assert module.config.device_address == 2


def test_init_timeout_when_module_not_ready():
    radio, _, _, _ = make_radio(gpio=FakeGpio(ready=False), clock=StepClock())
    with pytest.raises(RadioError):
        radio.init()
    assert not radio.is_init


def test_set_channel_wrong_format():
    radio, _, _, _ = make_radio(module=FakeModule(reply_command=0xFF))
    with pytest.raises(RadioError):
        radio.set_channel(5)


def test_set_address_updates_module():
    radio, module, _, _ = make_radio()
    radio.set_address(0x1234)
    assert module.config.device_address == 0x1234
    assert module.config.chan == 23