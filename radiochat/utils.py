"""Text, file and time helpers shared across the device software."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterator, TypeVar

DEBUG_MODE = True
FIRMWARE_VERSION = 0x0001
DEVICE_ADDRESS = 2
SERIAL_SPEED = 9600
STORAGE_DIR = "RadioChat"
SETTINGS_FILENAME = "config.json"
LOGGER_DEF_MSG_SIZE = 1024

KEY_CODE_FN = 0x0001
KEY_CODE_ENTER = 0x000A
KEY_CODE_LEFT = 0x2190
KEY_CODE_UP = 0x2191
KEY_CODE_RIGHT = 0x2192
KEY_CODE_DOWN = 0x2193
KEY_CODE_BACKSPACE = 0x0008

_TextT = TypeVar("_TextT", str, bytes)


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def symbol_to_str(symbol: int) -> str:
    """Turn a key symbol (UTF-8 bytes packed into 16 bits) into text."""
    if symbol <= 0xFF:
        raw = bytes([symbol & 0xFF])
    else:
        raw = (symbol & 0xFFFF).to_bytes(2, "big")
    raw = raw.split(b"\0", 1)[0]
    return raw.decode("utf-8", errors="replace")


def pop_back_char(text: _TextT) -> _TextT:
    """Return the text without its last character.

    For bytes the trailing UTF-8 sequence is removed; bytes made only of
    continuation bytes are returned unchanged.
    """
    if isinstance(text, bytes):
        lead = next(
            (pos for pos in range(len(text) - 1, -1, -1) if not _is_continuation(text[pos])),
            None,
        )
        return text if lead is None else text[:lead]
    return text[:-1]


def utf8_len(text: str | bytes) -> int:
    """Number of characters in the text; bytes are read as UTF-8 up to a NUL."""
    if isinstance(text, bytes):
        return sum(1 for byte in text.split(b"\0", 1)[0] if not _is_continuation(byte))
    return len(text)


def bool_to_str(value: bool) -> str:
    return "true" if value else "false"


def datetime_str() -> str:
    """Local date and time as ``YYYY-MM-DD HH:MM:SS``."""
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())


def bits_to_str(value: int) -> str:
    """The eight low bits of ``value`` as ``0``/``1``, least significant first."""
    return "".join("1" if value & (1 << bit) else "0" for bit in range(8))


def _char_size(lead: int) -> int:
    if lead & 0x80 == 0:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 0


def _utf8_chars(data: bytes) -> Iterator[bytes]:
    pos = 0
    while pos < len(data):
        size = _char_size(data[pos])
        if size == 0:
            return
        yield data[pos:pos + size]
        pos += size


def split_utf8(text: _TextT, max_length: int) -> list[_TextT]:
    """Split text into chunks of at most ``max_length`` characters.

    Bytes are split on UTF-8 character boundaries; splitting stops at the
    first invalid lead byte.
    """
    chars = _utf8_chars(text) if isinstance(text, bytes) else iter(text)
    empty = text[:0]
    chunks: list[_TextT] = []
    current: list[_TextT] = []
    for char in chars:
        if len(current) >= max_length:
            chunks.append(empty.join(current))
            current = []
        current.append(char)
    if current:
        chunks.append(empty.join(current))
    return chunks


def file_exists(path: str | Path) -> bool:
    return Path(path).exists()


def read_file(path: str | Path) -> str:
    """Read a whole text file; errors are logged and re-raised."""
    from .logger import Logger

    log = Logger.instance()
    log.info("Read file %s", path)
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError:
        log.error("Failed to open file for reading (%s)", path)
        raise


def write_file(path: str | Path, content: str) -> None:
    """Replace a file's content; errors are logged and re-raised."""
    from .logger import Logger

    log = Logger.instance()
    log.info("Write to file %s", path)
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError:
        log.error("Failed to open file for writing (%s)", path)
        raise