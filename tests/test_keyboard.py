from radiochat.keyboard import Keyboard, KeyboardSettings, pressed_keys
from radiochat.keys import KeyState


def encode(keys, count=5):
    registers = [0xFF] * count
    for key in keys:
        registers[(key - 1) // 8] &= ~(1 << ((key - 1) % 8)) & 0xFF
    return registers


def test_no_keys_pressed():
    assert pressed_keys([0xFF] * 5) == []


def test_first_bit_is_key_one():
    assert pressed_keys([0xFE]) == [1]


def test_round_trip_up_to_three_keys():
    for keys in ([3], [8, 9], [1, 20, 40], [17, 2]):
        assert pressed_keys(encode(keys)) == sorted(keys)


def test_only_first_three_keys_reported():
    keys = [4, 11, 25, 33, 38]
    assert pressed_keys(encode(keys)) == keys[:3]


def test_initial_state_is_released():
    keyboard = Keyboard(KeyboardSettings(), lambda: encode([]), lambda key: None, lambda key: None)
    assert keyboard.state(5) is KeyState.RELEASE
    assert keyboard.state(200) is KeyState.RELEASE


def test_press_and_release_callbacks():
    registers = [encode([])]
    downs, ups = [], []
    keyboard = Keyboard(KeyboardSettings(), lambda: registers[0], downs.append, ups.append)

    registers[0] = encode([5])
    keyboard.check()
    assert downs == [5]
    assert keyboard.state(5) is KeyState.PRESS

    keyboard.check()
    assert downs == [5]

    registers[0] = encode([])
    keyboard.check()
    assert ups == [5]
    assert keyboard.state(5) is KeyState.RELEASE


def test_callbacks_in_key_order():
    registers = [encode([30, 2])]
    downs, ups = [], []
    keyboard = Keyboard(KeyboardSettings(), lambda: registers[0], downs.append, ups.append)
    keyboard.check()
    assert downs == [2, 30]
    registers[0] = encode([2])
    keyboard.check()
    assert ups == [30]


def test_keys_above_max_ignored():
    settings = KeyboardSettings(max_key_num=8)
    downs = []
    keyboard = Keyboard(
        settings, lambda: encode([9], settings.count_registers), downs.append, lambda key: None
    )
    keyboard.check()
    assert downs == []
    assert keyboard.state(9) is KeyState.RELEASE


def test_extra_registers_are_not_read():
    settings = KeyboardSettings(count_registers=1)
    downs = []
    keyboard = Keyboard(settings, lambda: [0xFF, 0xFE], downs.append, lambda key: None)
    keyboard.check()
    assert downs == []