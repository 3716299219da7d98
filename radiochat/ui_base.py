"""Shared state of the user interface, the base page and the menu page."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Protocol

from .keys import KeyCommand
from .logger import Logger
from .settings import UISettings
from .uipagetype import UIPageType, page_type_name


class Display(Protocol):
    """What the pages need from the screen."""

    def clear(self) -> None: ...

    def draw_str(self, x: int, y: int, text: str) -> None: ...

    def draw_button_full_width(self, x: int, y: int, text: str) -> None: ...

    def flush(self) -> None: ...

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def max_char_width(self) -> int: ...


@dataclass
class UIContext:
    """Services and screen metrics shared by all pages."""

    ui_settings: UISettings = field(default_factory=UISettings)
    display: Any = None
    settings: Any = None
    battery: Any = None
    radio: Any = None
    contacts_manager: Any = None
    max_str_len: int = 0
    text_height: int = 0
    max_count_lines: int = 0
    set_current_page: Callable[[UIPageType], None] | None = None
    show_page_typing_message: Callable[[int], None] | None = None


class UIPage:
    """A screen page; Escape returns to the parent page."""

    def __init__(self, page_type: UIPageType, parent: UIPageType, context: UIContext) -> None:
        self._log = Logger.instance()
        self._type = page_type
        self._parent = parent
        self.ctx = context
        self._log.debug("Create page %s parent %s", page_type_name(page_type), page_type_name(parent))

    def draw(self) -> None:
        pass

    def on_char(self, symbol: int) -> None:
        pass

    def on_key_command(self, cmd: KeyCommand) -> None:
        if cmd is KeyCommand.ESCAPE and self._parent is not UIPageType.NONE:
            self._log.debug("onKeyCommand Return to %s", page_type_name(self._parent))
            self.ctx.set_current_page(self._parent)

    @property
    def page_type(self) -> UIPageType:
        return self._type


class ItemType(Enum):
    STRING = 0
    NUMBER = 1
    BOOL = 2
    REAL = 3


@dataclass
class MenuItem:
    item_type: ItemType
    caption: str
    value: str = ""


class BaseMenu(UIPage):
    """A scrolling list of items with one selected item."""

    def __init__(self, page_type: UIPageType, parent: UIPageType, context: UIContext) -> None:
        super().__init__(page_type, parent, context)
        self._items: list[MenuItem] = []
        self._offset = 0
        self._selected = 0

    def add_item(self, item_type: ItemType, caption: str, value: str = "") -> None:
        self._items.append(MenuItem(item_type, caption, value))

    def add_item_simple(self, caption: str) -> None:
        self._items.append(MenuItem(ItemType.STRING, caption, ""))

    def set_item_value(self, index: int, value: str) -> None:
        """Change an item's value; indexes past the end are ignored."""
        if 0 <= index < len(self._items):
            self._items[index].value = value

    def on_item_click(self, index: int) -> None:
        pass

    def draw(self) -> None:
        stop = min(len(self._items), self._offset + self.ctx.max_count_lines)
        y = 0
        for line, item in enumerate(self._items[self._offset:stop], start=self._offset):
            self._draw_item(y, item, line == self._selected)
            y += self.ctx.text_height

    def _draw_item(self, y: int, item: MenuItem, invert: bool) -> None:
        line = item.caption
        if item.value:
            line += ":\t" + item.value
        if invert:
            self.ctx.display.draw_button_full_width(0, y, line)
        else:
            self.ctx.display.draw_str(0, y, line)

    def on_key_command(self, cmd: KeyCommand) -> None:
        count = len(self._items)
        if cmd is KeyCommand.ENTER:
            if self._selected < count:
                self._log.debug("selected item %d", self._selected)
                self.on_item_click(self._selected)
        elif cmd is KeyCommand.UP:
            if count >= 2 and self._selected > 0:
                self._selected -= 1
                if self._offset > self._selected and self._offset > 0:
                    self._offset -= 1
        elif cmd is KeyCommand.DOWN:
            if count >= 2 and self._selected < count - 1:
                self._selected += 1
            if self._offset + self.ctx.max_count_lines <= self._selected:
                self._offset += 1
        else:
            super().on_key_command(cmd)

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    @property
    def selected(self) -> int:
        return self._selected

    @property
    def offset(self) -> int:
        return self._offset