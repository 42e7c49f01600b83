"""Command history with browsing support, as used by interactive sessions."""

from __future__ import annotations

from collections import deque
from itertools import islice
from typing import Iterable, TextIO


class History:
    """A bounded history of commands, newest first.

    While inserting, new commands are pushed to the front.  Moving back
    with :meth:`previous` switches to browsing, where the line being
    edited is kept at the front and the cursor walks through older items.
    """

    def __init__(self, max_size: int) -> None:
        self._max_size = max_size
        self._buffer: deque[str] = deque()
        self._current = 0
        self._commands = 0
        self._browsing = False

    def new_command(self, item: str) -> None:
        """Record a command that has just been entered."""
        self._commands += 1
        self._current = 0
        if self._browsing:
            if len(self._buffer) > 1 and self._buffer[1] == item:
                # identical to the last command: drop the edit slot
                self._buffer.popleft()
            else:
                self._buffer[self._current] = item
        elif not self._buffer or self._buffer[0] != item:
            self._insert(item)
        self._browsing = False

    def previous(self, line: str) -> str:
        """Return the previous item, saving ``line`` as the current edit."""
        if not self._browsing:
            self._insert(line)
            self._browsing = True
            self._current = 1 if len(self._buffer) > 1 else 0
        else:
            self._buffer[self._current] = line
            if self._current != len(self._buffer) - 1:
                self._current += 1
        return self._buffer[self._current]

    def next(self) -> str:
        """Return the next (newer) item, or an empty string at the front."""
        if not self._buffer or self._current == 0:
            return ""
        self._current -= 1
        return self._buffer[self._current]

    def show(self, out: TextIO) -> None:
        """Write the whole history, newest first, to ``out``."""
        out.write("\n")
        for item in self._buffer:
            out.write(f"{item}\n")
        out.write("\n")
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def load_commands(self, cmds: Iterable[str]) -> None:
        """Load commands ordered from the oldest to the newest."""
        for cmd in cmds:
            self._insert(cmd)

    def get_commands(self) -> list[str]:
        """Return the commands issued in this session, oldest first."""
        start = 0
        count = min(self._commands, len(self._buffer))
        if self._browsing:
            start = 1
            count = min(self._commands, len(self._buffer) - 1)
        selected = list(islice(self._buffer, start, start + count))
        selected.reverse()
        return selected

    def _insert(self, item: str) -> None:
        self._buffer.appendleft(item)
        if len(self._buffer) > self._max_size:
            self._buffer.pop()