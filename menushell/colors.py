"""ANSI colour and style escapes for terminal output."""

from __future__ import annotations

import os
import sys
from enum import IntEnum
from typing import Mapping, Optional, TextIO, Union

_COLOR_TERMS = (
    "ansi", "color", "console", "cygwin", "gnome", "konsole", "kterm",
    "linux", "msys", "putty", "rxvt", "screen", "vt100", "xterm",
)


class Style(IntEnum):
    RESET = 0
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    RBLINK = 6
    REVERSED = 7
    CONCEAL = 8
    CROSSED = 9


class Fg(IntEnum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GRAY = 37
    RESET = 39


class Bg(IntEnum):
    BLACK = 40
    RED = 41
    GREEN = 42
    YELLOW = 43
    BLUE = 44
    MAGENTA = 45
    CYAN = 46
    GRAY = 47
    RESET = 49


class FgBright(IntEnum):
    BLACK = 90
    RED = 91
    GREEN = 92
    YELLOW = 93
    BLUE = 94
    MAGENTA = 95
    CYAN = 96
    GRAY = 97


class BgBright(IntEnum):
    BLACK = 100
    RED = 101
    GREEN = 102
    YELLOW = 103
    BLUE = 104
    MAGENTA = 105
    CYAN = 106
    GRAY = 107


ColorValue = Union[Style, Fg, Bg, FgBright, BgBright]


def supports_color(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Tell whether the terminal described by ``TERM`` understands colours."""
    if sys.platform == "win32":
        return True
    env = os.environ if environ is None else environ
    term = env.get("TERM")
    if term is None:
        return False
    return any(name in term for name in _COLOR_TERMS)


def is_terminal(stream: TextIO) -> bool:
    """Tell whether ``stream`` is the process's standard output or error on a tty."""
    standard = (sys.stdout, sys.__stdout__, sys.stderr, sys.__stderr__)
    if stream is None or not any(stream is s for s in standard):
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def escape(value: ColorValue) -> str:
    """Return the ANSI escape sequence selecting ``value``."""
    return f"\033[{int(value)}m"


def write_color(stream: TextIO, value: ColorValue, force: bool = False) -> bool:
    """Write the escape for ``value`` if colours apply; return whether it was written."""
    if force or (supports_color() and is_terminal(stream)):
        stream.write(escape(value))
        return True
    return False