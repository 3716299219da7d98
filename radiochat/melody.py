"""Note frequencies and the melodies the device can play."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

NOTES: dict[str, int] = {
    "B0": 31, "C1": 33, "CS1": 35, "D1": 37, "DS1": 39, "E1": 41, "F1": 44,
    "FS1": 46, "G1": 49, "GS1": 52, "A1": 55, "AS1": 58, "B1": 62,
    "C2": 65, "CS2": 69, "D2": 73, "DS2": 78, "E2": 82, "F2": 87, "FS2": 93,
    "G2": 98, "GS2": 104, "A2": 110, "AS2": 117, "B2": 123,
    "C3": 131, "CS3": 139, "D3": 147, "DS3": 156, "E3": 165, "F3": 175,
    "FS3": 185, "G3": 196, "GS3": 208, "A3": 220, "AS3": 233, "B3": 247,
    "C4": 262, "CS4": 277, "D4": 294, "DS4": 311, "E4": 330, "F4": 349,
    "FS4": 370, "G4": 392, "GS4": 415, "A4": 440, "AS4": 466, "B4": 494,
    "C5": 523, "CS5": 554, "D5": 587, "DS5": 622, "E5": 659, "F5": 698,
    "FS5": 740, "G5": 784, "GS5": 831, "A5": 880, "AS5": 932, "B5": 988,
    "C6": 1047, "CS6": 1109, "D6": 1175, "DS6": 1245, "E6": 1319, "F6": 1397,
    "FS6": 1480, "G6": 1568, "GS6": 1661, "A6": 1760, "AS6": 1865, "B6": 1976,
    "C7": 2093, "CS7": 2217, "D7": 2349, "DS7": 2489, "E7": 2637, "F7": 2794,
    "FS7": 2960, "G7": 3136, "GS7": 3322, "A7": 3520, "AS7": 3729, "B7": 3951,
    "C8": 4186, "CS8": 4435, "D8": 4699, "DS8": 4978,
}


class MelodyName(IntEnum):
    UNDEFINED = 0
    PACKMAN = 1
    NOKIA = 2
    ACCEPT = 3
    PACKMAN_SHORT = 4


@dataclass(frozen=True)
class Step:
    """One note: frequency in Hz and note value (negative for dotted notes)."""

    frequency: int
    duration: int


@dataclass(frozen=True)
class Melody:
    name: MelodyName
    title: str
    steps: tuple[Step, ...]


def _steps(*notes: tuple[str, int]) -> tuple[Step, ...]:
    return tuple(Step(NOTES[note], duration) for note, duration in notes)


_PACKMAN_SHORT_STEPS = _steps(("B4", 16), ("B5", 16), ("FS5", 16), ("DS5", 16))

_MELODIES = {
    MelodyName.PACKMAN: Melody(
        MelodyName.PACKMAN,
        "Packman",
        _PACKMAN_SHORT_STEPS + _steps(
            ("B5", 32), ("FS5", -16), ("DS5", 8), ("C5", 16),
            ("C6", 16), ("G6", 16), ("E6", 16), ("C6", 32), ("G6", -16), ("E6", 8),
            ("B4", 16), ("B5", 16), ("FS5", 16), ("DS5", 16), ("B5", 32),
            ("FS5", -16), ("DS5", 8), ("DS5", 32), ("E5", 32), ("F5", 32),
            ("F5", 32), ("FS5", 32), ("G5", 32), ("G5", 32), ("GS5", 32), ("A5", 16), ("B5", 8),
        ),
    ),
    MelodyName.PACKMAN_SHORT: Melody(MelodyName.PACKMAN_SHORT, "PackmanShort", _PACKMAN_SHORT_STEPS),
    MelodyName.NOKIA: Melody(
        MelodyName.NOKIA,
        "Nokia",
        _steps(
            ("E5", 8), ("D5", 8), ("FS4", 4), ("GS4", 4),
            ("CS5", 8), ("B4", 8), ("D4", 4), ("E4", 4),
            ("B4", 8), ("A4", 8), ("CS4", 4), ("E4", 4),
            ("A4", 2),
        ),
    ),
    MelodyName.ACCEPT: Melody(
        MelodyName.ACCEPT,
        "accept",
        _steps(("GS5", 32), ("A5", 16), ("B5", 8)),
    ),
}


def get_melody(name: MelodyName | int) -> Melody:
    """The melody of a name; unknown names give the Packman melody."""
    try:
        return _MELODIES[MelodyName(name)]
    except (ValueError, KeyError):
        return _MELODIES[MelodyName.PACKMAN]