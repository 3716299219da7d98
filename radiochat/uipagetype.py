"""Kinds of pages the user interface can show."""

from __future__ import annotations

from enum import Enum


class UIPageType(Enum):
    NONE = 0
    MAIN = 1
    CHAT_SELECT = 2
    TYPING_MESSAGE = 3
    SETTINGS = 4
    STATISTICS = 5
    MONITORING = 6
    INCOMING_MESSAGE = 7
    CONTACTS = 8
    LOGS = 9


_NAMES = {
    UIPageType.NONE: "None",
    UIPageType.MAIN: "Main",
    UIPageType.CHAT_SELECT: "ChatSelect",
    UIPageType.TYPING_MESSAGE: "TypingMessage",
    UIPageType.SETTINGS: "Settings",
    UIPageType.STATISTICS: "Statistics",
    UIPageType.MONITORING: "Monitoring",
    UIPageType.INCOMING_MESSAGE: "IncomingMessage",
    UIPageType.CONTACTS: "Contacts",
    UIPageType.LOGS: "Logs",
}


def page_type_name(page_type: UIPageType | int) -> str:
    """Display name of a page type; unknown values give ``Unknown``."""
    try:
        return _NAMES[UIPageType(page_type)]
    except ValueError:
        return "Unknown"