"""The pages of the user interface: main menu, chat selection and messages."""

from __future__ import annotations

import threading
import time
from typing import Callable

from .keys import KeyCommand
from .lora import BROADCAST_ADDRESS
from .radio import RadioError
from .ui_base import BaseMenu, ItemType, UIContext, UIPage
from .uipagetype import UIPageType
from .utils import split_utf8, symbol_to_str

_MAIN_ITEM_PAGES = {
    1: UIPageType.CHAT_SELECT,
    2: UIPageType.CONTACTS,
    3: UIPageType.SETTINGS,
    4: UIPageType.LOGS,
}


def _battery_voltage(battery) -> float:
    voltage = battery.voltage
    return voltage() if callable(voltage) else voltage


class MainPage(BaseMenu):
    """The top menu, showing the battery voltage in its first item."""

    def __init__(self, context: UIContext) -> None:
        super().__init__(UIPageType.MAIN, UIPageType.NONE, context)
        self.add_item(ItemType.REAL, "Батарея")
        for caption in ("Чат", "Контакты", "Настройки", "Журнал", "Заметки", "Перезагрузить"):
            self.add_item_simple(caption)
        self._prev_voltage = 0.0
        self._prev_voltage_str = ""

    def draw(self) -> None:
        self._update_battery_voltage()
        super().draw()

    def _update_battery_voltage(self) -> None:
        voltage = _battery_voltage(self.ctx.battery)
        if voltage == self._prev_voltage:
            return
        self._prev_voltage = voltage
        text = f"{voltage:.1f}v"
        if text != self._prev_voltage_str:
            self._prev_voltage_str = text
            self.set_item_value(0, text)

    def on_item_click(self, index: int) -> None:
        self._log.debug("UIPageMain::onItemClick %d", index)
        page = _MAIN_ITEM_PAGES.get(index)
        if page is not None:
            self.ctx.set_current_page(page)


class ChatSelectPage(BaseMenu):
    """Choice between the shared chat, a new contact and known contacts."""

    def __init__(self, parent: UIPageType, context: UIContext) -> None:
        super().__init__(UIPageType.CHAT_SELECT, parent, context)
        self.add_item_simple("Общий")
        self.add_item_simple("Новый контакт")
        self.add_item_simple("-----------------------")
        for contact in context.contacts_manager.contacts:
            self.add_item(ItemType.NUMBER, contact.name, str(contact.address))

    def on_item_click(self, index: int) -> None:
        if index == 0:
            self.ctx.show_page_typing_message(BROADCAST_ADDRESS)


class IncomingMessagePage(UIPage):
    """Shows a received message wrapped to the screen width."""

    def __init__(self, parent: UIPageType, context: UIContext) -> None:
        super().__init__(UIPageType.INCOMING_MESSAGE, parent, context)
        self._lines: list[str] = []
        self._address = 0

    def draw(self) -> None:
        display = self.ctx.display
        display.draw_str(0, 0, f"Сообщение от {self._address}")
        y = self.ctx.text_height
        for line in self._lines:
            display.draw_str(0, y, line)
            y += self.ctx.text_height

    def set_message(self, message: str, address: int) -> None:
        self._lines = list(split_utf8(message, self.ctx.max_str_len))
        self._address = address

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)


class TypingMessagePage(UIPage):
    """Editor for an outgoing message with a blinking carriage."""

    def __init__(
        self,
        parent: UIPageType,
        context: UIContext,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(UIPageType.TYPING_MESSAGE, parent, context)
        self._clock = clock
        self._lock = threading.RLock()
        self._address = 0
        self._carriage_char = context.ui_settings.carriage_char
        self._carriage_visible = False
        self._carriage_show_time = context.ui_settings.carriage_show_time / 1000
        self._next_carriage_show = float("-inf")
        self._lines: list[str] = [""]

    def draw(self) -> None:
        with self._lock:
            now = self._clock()
            if now > self._next_carriage_show:
                self._next_carriage_show = now + self._carriage_show_time
                self._carriage_visible = not self._carriage_visible
            y = 0
            last = len(self._lines) - 1
            for index, line in enumerate(self._lines):
                if self._carriage_visible and index == last:
                    self.ctx.display.draw_str(0, y, line + self._carriage_char)
                else:
                    self.ctx.display.draw_str(0, y, line)
                    y += self.ctx.text_height

    def on_char(self, symbol: int) -> None:
        with self._lock:
            current = self._lines[-1]
            length = len(current)
            if length < self.ctx.max_str_len:
                self._lines[-1] = current + symbol_to_str(symbol)
            if length + 1 >= self.ctx.max_str_len and len(self._lines) < self.ctx.max_count_lines:
                self._lines.append("")
            self._next_carriage_show = self._clock() + self._carriage_show_time
            self._carriage_visible = True

    def on_key_command(self, cmd: KeyCommand) -> None:
        if cmd is KeyCommand.BACKSPACE:
            with self._lock:
                self._lines[-1] = self._lines[-1][:-1]
                if not self._lines[-1] and len(self._lines) > 1:
                    self._lines.pop()
        elif cmd is KeyCommand.ENTER:
            message = self.message
            if not message:
                return
            try:
                self.ctx.radio.send_text(message, self._address)
            except RadioError as exc:
                self._log.error("Can't send message: %s", exc)
            self.reset_message()
        else:
            super().on_key_command(cmd)

    def set_address(self, address: int) -> None:
        self._address = address

    @property
    def address(self) -> int:
        return self._address

    @property
    def message(self) -> str:
        with self._lock:
            return "".join(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._lines)

    def reset_message(self) -> None:
        with self._lock:
            self._lines = [""]