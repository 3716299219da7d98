"""The user interface: owns the current page and routes input to it."""

from __future__ import annotations

import dataclasses
import threading

from .keys import KeyCommand
from .logger import Logger
from .pages import ChatSelectPage, IncomingMessagePage, MainPage, TypingMessagePage
from .ui_base import UIContext, UIPage
from .uipagetype import UIPageType


class UI:
    """Creates pages, switches between them and draws the current one."""

    def __init__(self, context: UIContext) -> None:
        self._log = Logger.instance()
        self._log.info("-- Initialize UI --")
        self._lock = threading.RLock()
        ctx = dataclasses.replace(context)
        display = ctx.display
        ctx.max_str_len = display.width // display.max_char_width
        ctx.text_height = ctx.ui_settings.text_height
        ctx.max_count_lines = display.height // ctx.text_height
        self._log.debug(
            "maxStrLen %d textHeight %d maxCountLines %d",
            ctx.max_str_len, ctx.text_height, ctx.max_count_lines,
        )
        self.ctx = ctx
        self._current: UIPage | None = None
        self.set_current_page(UIPageType.MAIN)

    def draw(self) -> None:
        with self._lock:
            self.ctx.display.clear()
            self._current.draw()
            self.ctx.display.flush()

    def on_char(self, symbol: int) -> None:
        with self._lock:
            self._current.on_char(symbol)

    def on_key_command(self, cmd: KeyCommand) -> None:
        with self._lock:
            self._current.on_key_command(cmd)

    def show_incoming_message(self, message: str, address: int) -> None:
        page = self.create_page(UIPageType.INCOMING_MESSAGE)
        page.set_message(message, address)
        self._set_page(page)

    def show_typing_message(self, address: int) -> None:
        page = self.create_page(UIPageType.TYPING_MESSAGE)
        page.set_address(address)
        self._set_page(page)

    def set_current_page(self, page_type: UIPageType) -> None:
        """Switch to a new page of the given type; unknown types are ignored."""
        page = self.create_page(page_type)
        if page is not None:
            self._set_page(page)

    def create_page(self, page_type: UIPageType) -> UIPage | None:
        """A new page of the given type, or None if the type has no page."""
        if page_type is UIPageType.MAIN:
            return MainPage(self.ctx)
        if page_type is UIPageType.INCOMING_MESSAGE:
            return IncomingMessagePage(UIPageType.MAIN, self.ctx)
        if page_type is UIPageType.CHAT_SELECT:
            return ChatSelectPage(UIPageType.MAIN, self.ctx)
        if page_type is UIPageType.TYPING_MESSAGE:
            return TypingMessagePage(UIPageType.CHAT_SELECT, self.ctx)
        self._log.error("Unknown page type %s", getattr(page_type, "value", page_type))
        return None

    @property
    def current_page(self) -> UIPage:
        with self._lock:
            return self._current

    def _set_page(self, page: UIPage) -> None:
        with self._lock:
            self._current = page