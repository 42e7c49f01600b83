import os

import pytest

from menushell.keyboard import Keyboard, read_key
from menushell.scheduler import LoopScheduler
from menushell.terminal import KeyType


def reader(text):
    chars = iter(text)
    return lambda: next(chars, "")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", KeyType.EOF),
        ("\x04", KeyType.EOF),
        ("\x7f", KeyType.BACKSPACE),
        ("\n", KeyType.RET),
        ("\x1b[A", KeyType.UP),
        ("\x1b[B", KeyType.DOWN),
        ("\x1b[D", KeyType.LEFT),
        ("\x1b[C", KeyType.RIGHT),
        ("\x1b[F", KeyType.END),
        ("\x1b[H", KeyType.HOME),
        ("\x1b[3~", KeyType.CANC),
        ("\x1b[3x", KeyType.IGNORED),
        ("\x1b[Z", KeyType.IGNORED),
        ("\x1bO", KeyType.IGNORED),
    ],
)
def test_read_key_special(text, expected):
    assert read_key(reader(text))[0] is expected


def test_read_key_ascii_keeps_char():
    assert read_key(reader("q")) == (KeyType.ASCII, "q")


def test_read_key_consumes_one_key():
    read = reader("\x1b[Aa")
    assert read_key(read)[0] is KeyType.UP
    assert read_key(read) == (KeyType.ASCII, "a")


def test_keyboard_delivers_keys_through_scheduler():
    r, w = os.pipe()
    stream = os.fdopen(r, "rb")
    scheduler = LoopScheduler()
    keys = []
    keyboard = Keyboard(scheduler, stream)
    keyboard.register(lambda key, char: keys.append((key, char)))
    os.write(w, b"ab\n")
    with keyboard:
        for _ in range(3):
            assert scheduler.exec_one() is True
    os.close(w)
    stream.close()
    assert keys == [(KeyType.ASCII, "a"), (KeyType.ASCII, "b"), (KeyType.RET, " ")]


def test_keyboard_reports_end_of_input():
    r, w = os.pipe()
    stream = os.fdopen(r, "rb")
    scheduler = LoopScheduler()
    keys = []
    keyboard = Keyboard(scheduler, stream)
    keyboard.register(lambda key, char: keys.append(key))
    os.close(w)
    keyboard.start()
    assert scheduler.exec_one() is True
    keyboard.stop()
    stream.close()
    assert keys == [KeyType.EOF]


def test_every_handler_is_notified():
    r, w = os.pipe()
    stream = os.fdopen(r, "rb")
    scheduler = LoopScheduler()
    first, second = [], []
    keyboard = Keyboard(scheduler, stream)
    keyboard.register(lambda key, char: first.append(char))
    keyboard.register(lambda key, char: second.append(char))
    os.write(w, b"x")
    with keyboard:
        scheduler.exec_one()
        scheduler.exec_one()
    os.close(w)
    stream.close()
    assert first == ["x"]
    assert second == ["x"]


def test_stop_without_start_is_harmless():
    keyboard = Keyboard(LoopScheduler())
    keyboard.stop()
    keys = []
    keyboard.register(lambda key, char: keys.append(key))
    assert keys == []