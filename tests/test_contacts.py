from radiochat.contacts import Contact, ContactsManager, ContactsSettings


def test_default_settings():
    settings = ContactsSettings()
    assert settings.path == "Contacts"
    assert settings.filename == "All Contacts.txt"


def test_manager_starts_empty():
    manager = ContactsManager(ContactsSettings())
    assert manager.contacts == ()


def test_manager_keeps_settings():
    settings = ContactsSettings(path="people", filename="list.txt")
    manager = ContactsManager(settings)
    assert manager.settings.filename == "list.txt"


def test_contact_equality():
    assert Contact(7, "Ann") == Contact(7, "Ann")
    assert Contact(7, "Ann") != Contact(8, "Ann")