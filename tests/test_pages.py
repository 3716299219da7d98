import pytest

from radiochat.contacts import Contact
from radiochat.keys import KeyCommand
from radiochat.lora import BROADCAST_ADDRESS
from radiochat.pages import ChatSelectPage, IncomingMessagePage, MainPage, TypingMessagePage
from radiochat.radio import RadioError
from radiochat.settings import UISettings
from radiochat.ui_base import ItemType, UIContext
from radiochat.uipagetype import UIPageType


class FakeDisplay:
    width = 128
    height = 64
    max_char_width = 6

    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def draw_str(self, x, y, text):
        self.calls.append(("str", x, y, text))

    def draw_button_full_width(self, x, y, text):
        self.calls.append(("button", x, y, text))

    def flush(self):
        self.calls.append(("flush",))


class FakeBattery:
    def __init__(self, voltage):
        self.voltage = voltage


class FakeRadio:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send_text(self, text, address):
        self.sent.append((text, address))
        if self.fail:
            raise RadioError("no answer")
        return 1


class FakeContacts:
    def __init__(self, contacts=()):
        self.contacts = tuple(contacts)


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def env():
    shown = []
    typing = []
    ctx = UIContext(
        ui_settings=UISettings(),
        display=FakeDisplay(),
        battery=FakeBattery(0.0),
        radio=FakeRadio(),
        contacts_manager=FakeContacts(),
        max_str_len=5,
        text_height=9,
        max_count_lines=3,
        set_current_page=shown.append,
        show_page_typing_message=typing.append,
    )
    return ctx, shown, typing


def test_main_page_items(env):
    ctx, _, _ = env
    page = MainPage(ctx)
    captions = [item.caption for item in page.items]
    assert captions[0] == "Батарея"
    assert captions[1] == "Чат"
    assert captions[-1] == "Перезагрузить"
    assert len(captions) == 7
    assert page.items[0].item_type is ItemType.REAL
    assert page.page_type is UIPageType.MAIN


def test_main_page_shows_voltage(env):
    ctx, _, _ = env
    ctx.battery = FakeBattery(7.84)
    page = MainPage(ctx)
    page.draw()
    assert page.items[0].value == "7.8v"
    assert ctx.display.calls[0] == ("button", 0, 0, "Батарея:\t7.8v")
    assert ctx.display.calls[1] == ("str", 0, 9, "Чат")


def test_main_page_zero_voltage_leaves_value_empty(env):
    ctx, _, _ = env
    page = MainPage(ctx)
    page.draw()
    assert page.items[0].value == ""


@pytest.mark.parametrize(
    "index, expected",
    [
        (1, UIPageType.CHAT_SELECT),
        (2, UIPageType.CONTACTS),
        (3, UIPageType.SETTINGS),
        (4, UIPageType.LOGS),
    ],
)
def test_main_page_navigation(env, index, expected):
    ctx, shown, _ = env
    page = MainPage(ctx)
    for _ in range(index):
        page.on_key_command(KeyCommand.DOWN)
    page.on_key_command(KeyCommand.ENTER)
    assert shown == [expected]


@pytest.mark.parametrize("index", [0, 5, 6])
def test_main_page_items_without_page(env, index):
    ctx, shown, _ = env
    MainPage(ctx).on_item_click(index)
    assert shown == []


def test_main_page_escape_has_no_parent(env):
    ctx, shown, _ = env
    MainPage(ctx).on_key_command(KeyCommand.ESCAPE)
    assert shown == []


def test_chat_select_items_and_contacts(env):
    ctx, _, _ = env
    ctx.contacts_manager = FakeContacts([Contact(5, "Bob")])
    page = ChatSelectPage(UIPageType.MAIN, ctx)
    assert [item.caption for item in page.items] == [
        "Общий", "Новый контакт", "-----------------------", "Bob",
    ]
    assert page.items[3].value == "5"
    assert page.items[3].item_type is ItemType.NUMBER


def test_chat_select_shared_chat_opens_broadcast(env):
    ctx, _, typing = env
    page = ChatSelectPage(UIPageType.MAIN, ctx)
    page.on_key_command(KeyCommand.ENTER)
    assert typing == [BROADCAST_ADDRESS]


def test_chat_select_escape_returns_to_parent(env):
    ctx, shown, typing = env
    page = ChatSelectPage(UIPageType.MAIN, ctx)
    page.on_item_click(1)
    page.on_key_command(KeyCommand.ESCAPE)
    assert typing == []
    assert shown == [UIPageType.MAIN]


def test_incoming_message_wraps_lines(env):
    ctx, _, _ = env
    page = IncomingMessagePage(UIPageType.MAIN, ctx)
    page.set_message("abcdefg", 7)
    assert page.lines == ("abcde", "fg")
    page.draw()
    assert ctx.display.calls == [
        ("str", 0, 0, "Сообщение от 7"),
        ("str", 0, 9, "abcde"),
        ("str", 0, 18, "fg"),
    ]


def test_incoming_message_cyrillic_round_trip(env):
    ctx, _, _ = env
    page = IncomingMessagePage(UIPageType.MAIN, ctx)
    page.set_message("приветмир", 1)
    assert "".join(page.lines) == "приветмир"
    assert all(len(line) <= ctx.max_str_len for line in page.lines)
    assert page.page_type is UIPageType.INCOMING_MESSAGE


def test_typing_collects_chars(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    for ch in "hi":
        page.on_char(ord(ch))
    assert page.message == "hi"


def test_typing_cyrillic_symbol(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    page.on_char(0xD0B9)
    assert page.message == "й"


def test_typing_fills_lines_up_to_limit(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    text = "abcdefghijklmnopq"
    for ch in text:
        page.on_char(ord(ch))
    assert len(page.lines) == ctx.max_count_lines
    assert all(len(line) <= ctx.max_str_len for line in page.lines)
    assert page.message == text[:15]


def test_typing_backspace_removes_empty_line(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    for ch in "abcde":
        page.on_char(ord(ch))
    assert page.lines == ("abcde", "")
    page.on_key_command(KeyCommand.BACKSPACE)
    assert page.lines == ("abcde",)
    page.on_key_command(KeyCommand.BACKSPACE)
    assert page.message == "abcd"


def test_typing_backspace_on_empty_message(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    page.on_key_command(KeyCommand.BACKSPACE)
    assert page.lines == ("",)


def test_typing_enter_sends_and_resets(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    page.set_address(9)
    for ch in "hi":
        page.on_char(ord(ch))
    page.on_key_command(KeyCommand.ENTER)
    assert ctx.radio.sent == [("hi", 9)]
    assert page.message == ""


def test_typing_enter_on_empty_sends_nothing(env):
    ctx, _, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    page.on_key_command(KeyCommand.ENTER)
    assert ctx.radio.sent == []


def test_typing_send_failure_still_resets(env):
    ctx, _, _ = env
    ctx.radio = FakeRadio(fail=True)
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    page.on_char(ord("x"))
    page.on_key_command(KeyCommand.ENTER)
    assert ctx.radio.sent == [("x", 0)]
    assert page.message == ""


def test_typing_carriage_blinks(env):
    ctx, _, _ = env
    clock = Clock()
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, clock)
    page.set_address(1)
    for ch in "ab":
        page.on_char(ord(ch))
    clock.now = 0.5
    page.draw()
    assert ctx.display.calls[-1] == ("str", 0, 0, "ab|")
    clock.now = 0.8
    page.draw()
    assert ctx.display.calls[-1] == ("str", 0, 0, "ab")
    page.on_char(ord("c"))
    page.draw()
    assert ctx.display.calls[-1] == ("str", 0, 0, "abc|")


def test_typing_escape_returns_to_parent(env):
    ctx, shown, _ = env
    page = TypingMessagePage(UIPageType.CHAT_SELECT, ctx, Clock())
    page.on_key_command(KeyCommand.ESCAPE)
    assert shown == [UIPageType.CHAT_SELECT]