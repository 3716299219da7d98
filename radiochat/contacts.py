"""Contacts known to the device."""

from __future__ import annotations

from dataclasses import dataclass

from .logger import Logger


@dataclass(frozen=True)
class Contact:
    address: int
    name: str


@dataclass
class ContactsSettings:
    path: str = "Contacts"
    filename: str = "All Contacts.txt"


class ContactsManager:
    """Holds the contact list and where it is stored."""

    def __init__(self, settings: ContactsSettings) -> None:
        Logger.instance().info("-- Initialize contacts --")
        self.settings = settings
        self._contacts: list[Contact] = []

    @property
    def contacts(self) -> tuple[Contact, ...]:
        return tuple(self._contacts)