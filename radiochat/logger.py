"""Leveled logger writing to a serial-like stream and to log files."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import ClassVar, TextIO

from .utils import (
    DEBUG_MODE,
    LOGGER_DEF_MSG_SIZE,
    STORAGE_DIR,
    bool_to_str,
    datetime_str,
)

_DATETIME_ROOM = 25


class LogTraceLevel(IntEnum):
    NONE = 0
    ERROR = 1
    INFO = 2
    DEBUG = 3


@dataclass
class LoggerSettings:
    level: LogTraceLevel = LogTraceLevel.DEBUG if DEBUG_MODE else LogTraceLevel.ERROR
    log_to_serial: bool = DEBUG_MODE
    log_to_file: bool = not DEBUG_MODE
    log_path: str = "logs"
    max_count_logs: int = 10
    max_count_lines: int = 2000
    max_message_size: int = 256


class Logger:
    """Timestamped log lines, dropped until serial output or ``init`` is done."""

    _instance: ClassVar[Logger | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, stream: TextIO | None = None, storage_dir: str | Path = STORAGE_DIR) -> None:
        self._stream = stream
        self._storage_dir = Path(storage_dir)
        self._settings = LoggerSettings()
        self._is_init = False
        self._serial_is_init = False
        self._line_size = LOGGER_DEF_MSG_SIZE
        self._lock = threading.Lock()
        self._file: TextIO | None = None

    @classmethod
    def instance(cls) -> Logger:
        """The process-wide logger."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @property
    def _output(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def init_serial_logging(self) -> None:
        if not self._serial_is_init:
            self._output.write("\nSerial initialized\n")
            self._serial_is_init = True

    def init(self, settings: LoggerSettings) -> None:
        self._settings = settings
        path = self._path()

        if settings.level != LogTraceLevel.NONE:
            self._line_size = settings.max_message_size + _DATETIME_ROOM
            if settings.log_to_serial:
                self.init_serial_logging()
            if settings.log_to_file:
                self._create_file()

        self.info("settings.level         : %d", int(settings.level))
        self.info("settings.logToSerial   : %s", bool_to_str(settings.log_to_serial))
        self.info("settings.logPath       : %s", path)
        self.info("settings.maxCountLines : %d", settings.max_count_lines)
        self.info("settings.maxCountLogs  : %d", settings.max_count_logs)
        self.info("settings.maxMessageSize: %d", settings.max_message_size)

        self._is_init = True

    def log(self, level: LogTraceLevel, fmt: str, *args) -> None:
        """Write ``fmt % args`` if ``level`` passes the configured level."""
        if not self._is_init and not self._serial_is_init:
            return
        if level > self._settings.level:
            return
        message = fmt % args if args else fmt
        with self._lock:
            prefix = datetime_str() + " "
            room = max(self._line_size - len(prefix) - 1, 0)
            line = f"{prefix}{message[:room]}\n"
            if self._settings.log_to_serial:
                self._output.write(line)
            if self._file is not None:
                self._file.write(line)
                self._file.flush()

    def error(self, fmt: str, *args) -> None:
        self.log(LogTraceLevel.ERROR, fmt, *args)

    def info(self, fmt: str, *args) -> None:
        self.log(LogTraceLevel.INFO, fmt, *args)

    def debug(self, fmt: str, *args) -> None:
        self.log(LogTraceLevel.DEBUG, fmt, *args)

    @property
    def log_level(self) -> LogTraceLevel:
        return self._settings.level

    def _path(self) -> Path:
        return self._storage_dir / self._settings.log_path

    def _create_file(self) -> None:
        path = self._path()
        stamp = datetime_str().translate(str.maketrans("", "", ":-. "))
        filename = path / f"{stamp}.log"
        try:
            path.mkdir(parents=True, exist_ok=True)
            handle = filename.open("w", encoding="utf-8")
        except OSError:
            self.error("Can't create log file '%s'", filename)
            return
        self.debug("Created log file '%s'", filename)
        if self._file is not None:
            self._file.close()
        self._file = handle