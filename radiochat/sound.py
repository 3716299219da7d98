"""Playing melodies on a buzzer in a background thread."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from .logger import Logger
from .melody import MelodyName, get_melody


@dataclass
class SoundSettings:
    pin_io: int = 22
    tempo: int = 108
    enable: bool = True


def note_duration(duration: int, wholenote: int) -> int:
    """Length of a note in milliseconds; negative values are dotted notes."""
    if duration > 0:
        return wholenote // duration
    if duration < 0:
        return int((wholenote // abs(duration)) * 1.5)
    return 0


class Sound:
    """Plays one melody at a time through tone callbacks."""

    def __init__(
        self,
        settings: SoundSettings,
        tone: Callable[[int, int, int], None],
        no_tone: Callable[[int], None],
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._log = Logger.instance()
        self._log.info("-- Initialize sound --")
        self._log.info("io pin: %d", settings.pin_io)
        self._log.info("tempo: %d", settings.tempo)
        self._settings = settings
        self._tone = tone
        self._no_tone = no_tone
        self._sleep = sleep
        self._wholenote = (60000 * 4) // settings.tempo
        self._lock = threading.Lock()
        self._playing = False
        self._thread: threading.Thread | None = None

    def play(self, name: MelodyName) -> bool:
        """Start playing a melody; returns False if disabled or already playing."""
        with self._lock:
            if not self._settings.enable or self._playing:
                return False
            self._playing = True
            self._thread = threading.Thread(
                target=self._play, args=(name,), name="PlaySound", daemon=True
            )
            self._thread.start()
        return True

    @property
    def is_playing(self) -> bool:
        return self._playing

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the current melody to end; True if nothing is playing."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return not self._playing

    def _play(self, name: MelodyName) -> None:
        try:
            melody = get_melody(name)
            self._log.debug("Play melody: %s", melody.title)
            pin = self._settings.pin_io
            for index, step in enumerate(melody.steps):
                self._log.debug("Play note %d: %d %d", index, step.frequency, step.duration)
                length = note_duration(step.duration, self._wholenote)
                # The note sounds for 90% of its length, the rest is a pause.
                self._tone(pin, step.frequency, int(length * 0.9))
                self._sleep(length / 1000)
                self._no_tone(pin)
        finally:
            self._playing = False