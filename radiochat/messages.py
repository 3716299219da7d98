"""Messages passed to the application's worker and their thread-safe queue."""

from __future__ import annotations

import queue
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .keys import KeyCommand
from .uipagetype import UIPageType


class QueueMessageType(Enum):
    TYPING_CHAR = 0
    KEYBOARD_COMMAND = 1
    ACCEPT_MESSAGE = 2
    DELIVERY_MESSAGE = 3
    PING_DONE = 4
    SHOW_PAGE = 5
    TYPING_MESSAGE = 6


@dataclass(frozen=True)
class QueueMessage:
    """Base of all queued messages; ``message_type`` tells them apart."""

    message_type: ClassVar[QueueMessageType]


@dataclass(frozen=True)
class TypingChar(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.TYPING_CHAR
    code: int


@dataclass(frozen=True)
class KeyboardCommand(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.KEYBOARD_COMMAND
    command: KeyCommand


@dataclass(frozen=True)
class AcceptMessage(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.ACCEPT_MESSAGE
    address: int
    msg_id: int
    text: str


@dataclass(frozen=True)
class DeliveryMessage(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.DELIVERY_MESSAGE
    address: int
    msg_id: int


@dataclass(frozen=True)
class PingDone(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.PING_DONE
    address: int
    delay: int


@dataclass(frozen=True)
class ShowPage(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.SHOW_PAGE
    page_type: UIPageType


@dataclass(frozen=True)
class TypingMessage(QueueMessage):
    message_type: ClassVar[QueueMessageType] = QueueMessageType.TYPING_MESSAGE
    address: int


class MessageQueue:
    """An unbounded FIFO of messages shared between threads."""

    def __init__(self) -> None:
        self._queue: queue.Queue[QueueMessage] = queue.Queue()

    def put(self, message: QueueMessage) -> None:
        self._queue.put(message)

    def get(self, timeout: float | None = None) -> QueueMessage:
        """Take the oldest message, waiting for one to arrive.

        Raises ``queue.Empty`` if ``timeout`` seconds pass without one.
        """
        return self._queue.get(timeout=timeout)

    def __len__(self) -> int:
        return self._queue.qsize()