"""A small INI file store keeping parameters in file order."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .utils import file_exists, read_file, write_file

_SPACE = " \t\n\v\f\r"
_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOAT = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


@dataclass
class _Parameter:
    name: str
    value: str


class IniFile:
    """Sections of ``name=value`` parameters read from and saved to a file."""

    def __init__(self) -> None:
        self._filename: Path | None = None
        self._content: dict[str, list[_Parameter]] = {}

    def open(self, filename: str | Path) -> None:
        """Bind the store to a file and load it if it exists."""
        self._filename = Path(filename)
        if file_exists(self._filename):
            self._read_content()

    def save(self) -> None:
        if self._filename is None:
            raise ValueError("no file opened")
        lines = []
        for section in sorted(self._content):
            lines.append(f"[{section}]\n")
            lines.extend(f"{p.name}={p.value}\n" for p in self._content[section])
        write_file(self._filename, "".join(lines))

    def get_value(self, section: str, parameter: str, default):
        """Return the parameter converted to the type of ``default``.

        Missing parameters and values that do not parse give ``default``.
        """
        param = self._find(section, parameter)
        if param is None:
            return default
        value = param.value
        if isinstance(default, bool):
            return value.lower() == "true"
        if isinstance(default, int):
            match = _INT.match(value)
            return int(match.group(1)) if match else default
        if isinstance(default, float):
            match = _FLOAT.match(value)
            return float(match.group(1)) if match else default
        if isinstance(default, str):
            return value
        raise TypeError(f"unsupported value type: {type(default).__name__}")

    def set_value(self, section: str, parameter: str, value) -> None:
        if isinstance(value, bool):
            text = "True" if value else "False"
        elif isinstance(value, int):
            text = str(int(value))
        elif isinstance(value, float):
            text = f"{value:f}"
        else:
            text = str(value)
        param = self._find(section, parameter)
        if param is None:
            self._content.setdefault(section, []).append(_Parameter(parameter, text))
        else:
            param.value = text

    def parameter_exists(self, section: str, parameter: str) -> bool:
        return self._find(section, parameter) is not None

    def _read_content(self) -> None:
        section = ""
        for line in read_file(self._filename).split("\n"):
            if line.startswith("["):
                name = self._section_name(line)
                if name:
                    section = name
            elif line and section:
                self._parse_parameter(section, line)

    @staticmethod
    def _section_name(line: str) -> str:
        pos = line.rfind("]")
        if pos < 0:
            return ""
        return line[1:pos].strip(_SPACE)

    def _parse_parameter(self, section: str, line: str) -> None:
        pos = line.rfind("=")
        if pos < 1:
            return
        name = line[:pos].strip(_SPACE)
        value = line[pos + 1:].lstrip(_SPACE)
        self._content.setdefault(section, []).append(_Parameter(name, value))

    def _find(self, section: str, parameter: str) -> _Parameter | None:
        return next(
            (p for p in self._content.get(section, ()) if p.name == parameter),
            None,
        )