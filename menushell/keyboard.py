"""Reading single key presses from a terminal and delivering them to a scheduler."""

from __future__ import annotations

import codecs
import os
import select
import sys
import threading
from typing import BinaryIO, Callable, Optional, TextIO, Union

from .scheduler import Scheduler
from .terminal import KeyType

try:
    import termios
except ImportError:  # not available on every platform
    termios = None

Key = tuple[KeyType, str]
KeyHandler = Callable[[KeyType, str], object]

_ARROWS = {
    "A": KeyType.UP,
    "B": KeyType.DOWN,
    "D": KeyType.LEFT,
    "C": KeyType.RIGHT,
    "F": KeyType.END,
    "H": KeyType.HOME,
}


def read_key(read_char: Callable[[], str]) -> Key:
    """Read one key using ``read_char``, which returns one character or "" at end of input."""
    ch = read_char()
    if ch == "" or ch == "\x04":
        return KeyType.EOF, " "
    if ch == "\x7f":
        return KeyType.BACKSPACE, " "
    if ch == "\n":
        return KeyType.RET, " "
    if ch == "\x1b":
        if read_char() != "[":
            return KeyType.IGNORED, " "
        code = read_char()
        if code == "3":
            if read_char() == "~":
                return KeyType.CANC, " "
            return KeyType.IGNORED, " "
        return _ARROWS.get(code, KeyType.IGNORED), " "
    return KeyType.ASCII, ch


class Keyboard:
    """Reads keys on a background thread and posts them to a scheduler.

    While started, a terminal input is switched to non-canonical mode
    without echo; it is restored by :meth:`stop`.
    """

    def __init__(self, scheduler: Scheduler,
                 stream: Optional[Union[TextIO, BinaryIO]] = None) -> None:
        self._scheduler = scheduler
        self._stream = stream if stream is not None else sys.stdin
        self._handlers: list[KeyHandler] = []
        self._thread: Optional[threading.Thread] = None
        self._wake_r: Optional[int] = None
        self._wake_w: Optional[int] = None
        self._saved_mode = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._at_end = False

    def register(self, handler: KeyHandler) -> None:
        """Call ``handler(key, char)`` on the scheduler for every key read."""
        self._handlers.append(handler)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._wake_r, self._wake_w = os.pipe()
        self._to_manual_mode()
        self._thread = threading.Thread(target=self._read_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._to_standard_mode()
        try:
            os.write(self._wake_w, b" ")
        except OSError:
            pass
        if self._thread is not threading.current_thread():
            self._thread.join()
        for fd in (self._wake_r, self._wake_w):
            try:
                os.close(fd)
            except OSError:
                pass
        self._thread = None
        self._wake_r = self._wake_w = None

    def __enter__(self) -> Keyboard:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _fd(self) -> int:
        return self._stream.fileno()

    def _to_manual_mode(self) -> None:
        if termios is None or not self._stream.isatty():
            return
        fd = self._fd()
        self._saved_mode = termios.tcgetattr(fd)
        mode = termios.tcgetattr(fd)
        mode[3] &= ~(termios.ICANON | termios.ECHO)
        termios.tcsetattr(fd, termios.TCSANOW, mode)

    def _to_standard_mode(self) -> None:
        if self._saved_mode is None:
            return
        termios.tcsetattr(self._fd(), termios.TCSANOW, self._saved_mode)
        self._saved_mode = None

    def _read_char(self) -> str:
        fd = self._fd()
        while True:
            data = os.read(fd, 1)
            if not data:
                self._at_end = True
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(data)
            if text:
                return text

    def _wait_input(self) -> bool:
        """Block until input is ready; return False if :meth:`stop` was called."""
        while True:
            ready, _, _ = select.select([self._fd(), self._wake_r], [], [])
            if self._wake_r in ready:
                return False
            if ready:
                return True

    def _notify(self, key: Key) -> None:
        for handler in list(self._handlers):
            self._scheduler.post(lambda h=handler: h(*key))

    def _read_loop(self) -> None:
        try:
            while self._wait_input():
                self._notify(read_key(self._read_char))
                if self._at_end:
                    return
        except (OSError, ValueError):
            return