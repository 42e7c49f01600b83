"""Turns key presses into session actions: commands, history and completion."""

from __future__ import annotations

import os

from .session import CliSession
from .terminal import KeyType, Symbol, Terminal


class InputHandler:
    """Edits a line on the session's terminal and acts on what the keys mean.

    Register :meth:`key_pressed` with an input device to drive it.
    """

    def __init__(self, session: CliSession) -> None:
        self._session = session
        self._terminal = Terminal(session.out)

    @property
    def line(self) -> str:
        """The line currently being edited."""
        return self._terminal.line

    def key_pressed(self, key: KeyType, char: str = " ") -> None:
        symbol, text = self._terminal.keypressed(key, char)
        self._handle(symbol, text)

    def _handle(self, symbol: Symbol, text: str) -> None:
        session = self._session
        terminal = self._terminal
        if symbol is Symbol.EOF:
            session.exit()
        elif symbol is Symbol.COMMAND:
            session.feed(text)
            session.prompt()
        elif symbol is Symbol.DOWN:
            terminal.set_line(session.next_cmd())
        elif symbol is Symbol.UP:
            terminal.set_line(session.previous_cmd(terminal.line))
        elif symbol is Symbol.TAB:
            self._complete()

    def _complete(self) -> None:
        session = self._session
        terminal = self._terminal
        line = terminal.line
        completions = session.get_completions(line)
        if not completions:
            return
        if len(completions) == 1:
            terminal.set_line(completions[0] + " ")
            return
        prefix = os.path.commonprefix(completions)
        if len(prefix) > len(line):
            terminal.set_line(prefix)
            return
        out = session.out
        out.write("\n")
        out.write("".join(f"\t{cmd}" for cmd in completions) + "\n")
        session.prompt()
        terminal.reset_cursor()
        terminal.set_line(line)