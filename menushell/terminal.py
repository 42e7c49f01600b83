"""Line editing on a terminal that receives one key at a time."""

from __future__ import annotations

from enum import Enum, auto
from typing import TextIO


class Symbol(Enum):
    """What a key press means to the session."""

    NOTHING = auto()
    COMMAND = auto()
    UP = auto()
    DOWN = auto()
    TAB = auto()
    EOF = auto()


class KeyType(Enum):
    """The kinds of key the input device reports."""

    ASCII = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    BACKSPACE = auto()
    CANC = auto()
    HOME = auto()
    END = auto()
    RET = auto()
    EOF = auto()
    IGNORED = auto()


class Terminal:
    """Keeps the line being edited and echoes edits to ``out``."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._line = ""
        self._position = 0

    @property
    def line(self) -> str:
        return self._line

    @property
    def position(self) -> int:
        return self._position

    def _emit(self, text: str) -> None:
        self._out.write(text)
        flush = getattr(self._out, "flush", None)
        if flush is not None:
            flush()

    def reset_cursor(self) -> None:
        self._position = 0

    def set_line(self, new_line: str) -> None:
        """Replace the edited line, redrawing it."""
        self._emit("\b" * self._position + new_line)
        shorter_by = len(self._line) - len(new_line)
        if shorter_by > 0:
            self._emit(" " * shorter_by + "\b" * shorter_by)
        self._line = new_line
        self._position = len(new_line)

    def keypressed(self, key: KeyType, char: str = " ") -> tuple[Symbol, str]:
        """Apply a key press; return its meaning and, for commands, the line."""
        line, pos = self._line, self._position
        if key is KeyType.EOF:
            return Symbol.EOF, ""
        if key is KeyType.UP:
            return Symbol.UP, ""
        if key is KeyType.DOWN:
            return Symbol.DOWN, ""
        if key is KeyType.RET:
            self._out.write("\r\n")
            self._line = ""
            self._position = 0
            return Symbol.COMMAND, line
        if key is KeyType.ASCII and char == "\t":
            return Symbol.TAB, ""

        if key is KeyType.BACKSPACE and pos > 0:
            pos -= 1
            self._line = line[:pos] + line[pos + 1:]
            rest = self._line[pos:]
            self._emit("\b" + rest + " " + "\b" * (len(self._line) - pos + 1))
            self._position = pos
        elif key is KeyType.LEFT and pos > 0:
            self._emit("\b")
            self._position = pos - 1
        elif key is KeyType.RIGHT and pos < len(line):
            self._emit(line[pos])
            self._position = pos + 1
        elif key is KeyType.ASCII:
            rest = line[pos:]
            self._emit(char + rest + "\b" * len(rest))
            self._line = line[:pos] + char + rest
            self._position = pos + 1
        elif key is KeyType.CANC and pos < len(line):
            rest = line[pos + 1:]
            self._emit(rest + " " + "\b" * (len(line) - pos))
            self._line = line[:pos] + rest
        elif key is KeyType.END:
            self._emit(line[pos:])
            self._position = len(line)
        elif key is KeyType.HOME:
            self._emit("\b" * pos)
            self._position = 0
        return Symbol.NOTHING, ""