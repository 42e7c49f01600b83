"""Splitting of a command line into words, honouring quotes and escapes."""

from __future__ import annotations

_QUOTES = "\"'"
_ESCAPABLE = "\"'\\"


def split_command_line(line: str) -> list[str]:
    """Split ``line`` into words.

    Words are separated by whitespace.  Text between single or double
    quotes forms one word, whitespace included; an opening quote also ends
    the word before it.  A backslash escapes a quote or another backslash;
    before any other character it is kept as it is.  Empty words, such as
    ``""``, are dropped.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None

    def finish() -> None:
        if current:
            tokens.append("".join(current))
            current.clear()

    chars = iter(line)
    for ch in chars:
        if ch == "\\":
            following = next(chars, None)
            if following is None:
                current.append("\\")
            elif following in _ESCAPABLE:
                current.append(following)
            else:
                current.append("\\" + following)
            continue
        if quote is not None:
            if ch == quote:
                finish()
                quote = None
            else:
                current.append(ch)
            continue
        if ch in _QUOTES:
            finish()
            quote = ch
        elif ch.isspace():
            finish()
        else:
            current.append(ch)
    finish()
    return tokens