# radiochat

`radiochat` holds the logic of a small handheld messenger that sends text over
LoRa radio modules. Nothing in it touches hardware directly. GPIO pins, the
serial port, ADC readings, tone output, the screen and clocks are passed in as
plain callables or objects, so the whole stack runs, and is tested, on an
ordinary computer. It needs nothing beyond the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `radiochat.utils` | Key codes and device constants; `symbol_to_str`, `pop_back_char`, `utf8_len`, `split_utf8`, `bits_to_str`, `bool_to_str`, `datetime_str`, `file_exists`, `read_file`, `write_file` |
| `radiochat.inifile` | `IniFile`: sections of `name=value` parameters, typed reads by the type of the default, saved with sections in sorted order |
| `radiochat.logger` | `Logger` (with `Logger.instance()`), `LoggerSettings`, `LogTraceLevel`: time-stamped lines to a stream and optionally to a log file |
| `radiochat.keys` | `KeyCommand`, `Language`, `KeyState`, `key_command_name`, `language_name` |
| `radiochat.keymap` | `KeyMap`, `KeyInfo`, `english_key_map()`, `russian_key_map()`, `key_map_for(lang)` |
| `radiochat.keyboard` | `Keyboard`, `KeyboardSettings`, `KeyboardPins`, `pressed_keys`: turns shift-register bytes into key down / key up callbacks |
| `radiochat.keyhandler` | `KeyHandler`: FN layer, language switching with FN+Enter, symbols and commands; `start(keyboard)` polls in a thread until `stop()` |
| `radiochat.contacts` | `Contact`, `ContactsSettings`, `ContactsManager` |
| `radiochat.battery` | `Battery`, `BatterySettings`: voltage from an ADC callback, sampled at most once per interval |
| `radiochat.led` | `LedIndicator`, `LedSettings`: toggles a pin once per interval |
| `radiochat.lora` | `Configuration.from_bytes` / `to_bytes`, the register enums and readable names of every field |
| `radiochat.radio` | `Radio`, `RadioSettings`, `RadioCommand`, `RadioError`: configures the module and runs the chat protocol (text, delivery receipts, ping) |
| `radiochat.melody`, `radiochat.sound` | Built-in melodies (`get_melody`) and `Sound`, which plays one melody at a time in a thread |
| `radiochat.settings` | `Settings`: builds each settings object from its INI section, falling back to defaults |
| `radiochat.messages` | Typed queue messages and the thread-safe `MessageQueue` |
| `radiochat.ui_base`, `radiochat.pages`, `radiochat.ui` | `UIContext`, `UIPage`, `BaseMenu`; `MainPage`, `ChatSelectPage`, `IncomingMessagePage`, `TypingMessagePage`; and `UI`, which creates pages and routes input to the current one |
| `radiochat.app` | `RadioChat`: pushes device events onto the queue, applies them to the UI and sound, and runs the main loop step |

## Examples

Splitting a received message into display lines of at most 21 characters:

```python
from radiochat.utils import split_utf8

lines = split_utf8("Привет, это проверка связи", 21)
assert all(len(line) <= 21 for line in lines)
```

Reading and writing settings:

```python
from radiochat.inifile import IniFile

ini = IniFile()
ini.open("config.ini")
channel = ini.get_value("Radio", "Channel", 23)
ini.set_value("Radio", "Channel", 18)
ini.save()
```

Decoding a 12-byte configuration block read back from a LoRa module:

```python
from radiochat import lora

cfg = lora.Configuration.from_bytes(raw_bytes)
print(cfg.device_address, lora.channel_str(cfg.chan))
```

Looking up what a key produces:

```python
from radiochat.keymap import english_key_map

keys = english_key_map()
print(keys.symbol(1), keys.alt_symbol(1))  # codes of "q" and "1"
```

## What you supply

- `Radio` takes a serial port object with `in_waiting`, `read(size)` and
  `write(data)` (the shape of a pyserial port) and a GPIO object with
  `read(pin)` and `write(pin, value)`.
- `Keyboard` takes a callable returning the shift-register bytes.
- `Battery` takes an ADC callable, `LedIndicator` a pin writer, and `Sound`
  `tone(pin, frequency, duration_ms)` and `no_tone(pin)` callables.
- `UI` takes a `UIContext` whose display has `clear()`, `draw_str(x, y, text)`,
  `draw_button_full_width(x, y, text)`, `flush()`, and `width`, `height` and
  `max_char_width`.

## What it does not do

- There is no command to run and no ready-made device program: you wire the
  parts together with your own hardware objects.
- It has no screen driver, serial port or GPIO implementation of its own.
- `ContactsManager` starts empty and does not load or store contacts.
- The main menu items for contacts, settings and logs only ask the UI to show
  those pages; `UI` has no pages for them and ignores the request.

## Running the tests

Install the `test` extra, then run `pytest` from the project directory.