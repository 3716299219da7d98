"""The application: queues events from the devices and applies them to the UI."""

from __future__ import annotations

import queue
import threading
from typing import Callable, Iterable

from .keys import KeyCommand
from .logger import Logger
from .melody import MelodyName
from .messages import (
    AcceptMessage,
    DeliveryMessage,
    KeyboardCommand,
    MessageQueue,
    PingDone,
    QueueMessage,
    ShowPage,
    TypingChar,
    TypingMessage,
)
from .uipagetype import UIPageType

_WORKER_POLL = 0.1


class RadioChat:
    """Serialises device events through a queue handled by a worker thread."""

    def __init__(self, sound=None, pollers: Iterable[Callable[[], None]] = ()) -> None:
        self._log = Logger.instance()
        self._sound = sound
        self._pollers = list(pollers)
        self._ui = None
        self._queue = MessageQueue()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def attach_ui(self, ui) -> None:
        self._ui = ui

    def _require_ui(self):
        if self._ui is None:
            raise RuntimeError("no UI attached")
        return self._ui

    def _play(self, name: MelodyName) -> None:
        if self._sound is not None:
            self._sound.play(name)

    def process(self, message: QueueMessage) -> None:
        """Apply one queued message."""
        match message:
            case AcceptMessage(address=address, msg_id=msg_id, text=text):
                self._log.info("Accept message %d from %d: %s", msg_id, address, text)
                self._play(MelodyName.PACKMAN_SHORT)
                self._require_ui().show_incoming_message(text, address)
            case DeliveryMessage(address=address, msg_id=msg_id):
                self._log.info("Delivered message %d to %d", msg_id, address)
                self._play(MelodyName.ACCEPT)
            case KeyboardCommand(command=command):
                self._require_ui().on_key_command(command)
            case PingDone():
                pass
            case TypingChar(code=code):
                self._require_ui().on_char(code)
            case ShowPage(page_type=page_type):
                self._require_ui().set_current_page(page_type)
            case TypingMessage(address=address):
                self._require_ui().show_typing_message(address)

    def check_queue(self, timeout: float | None = None) -> bool:
        """Process the next message; False if none arrived within ``timeout``."""
        try:
            message = self._queue.get(timeout=timeout)
        except queue.Empty:
            return False
        self.process(message)
        return True

    def push_typing_char(self, code: int) -> None:
        self._queue.put(TypingChar(code))

    def push_keyboard_command(self, cmd: KeyCommand) -> None:
        self._queue.put(KeyboardCommand(cmd))

    def push_accept_message(self, sender: int, msg_id: int, text: str) -> None:
        self._queue.put(AcceptMessage(sender, msg_id, text))

    def push_delivery_message(self, address: int, msg_id: int) -> None:
        self._queue.put(DeliveryMessage(address, msg_id))

    def push_ping_done(self, address: int, delay: int) -> None:
        self._queue.put(PingDone(address, delay))

    def push_show_page(self, page_type: UIPageType) -> None:
        self._queue.put(ShowPage(page_type))

    def push_typing_message(self, address: int) -> None:
        self._queue.put(TypingMessage(address))

    def start(self) -> None:
        """Start the queue worker and play the start-up melody."""
        if self._thread is not None:
            raise RuntimeError("already started")
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="QueueCheck", daemon=True)
        self._thread.start()
        self._play(MelodyName.NOKIA)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.check_queue(timeout=_WORKER_POLL)
            except Exception as exc:  # keep the worker alive on a bad message
                self._log.error("Queue message failed: %s", exc)

    def loop(self) -> None:
        """One pass of the main loop: poll the devices, then redraw."""
        for poll in self._pollers:
            poll()
        if self._ui is not None:
            self._ui.draw()