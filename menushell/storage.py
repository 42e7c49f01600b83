"""Policies for keeping the command history shared by all sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from os import PathLike
from pathlib import Path
from typing import Iterable, Union


class HistoryStorage(ABC):
    """Where the commands of closed sessions are kept."""

    @abstractmethod
    def store(self, cmds: Iterable[str]) -> None:
        """Append commands, ordered from the oldest to the newest."""

    @abstractmethod
    def commands(self) -> list[str]:
        """Return all stored commands, oldest first."""

    @abstractmethod
    def clear(self) -> None:
        """Forget every stored command."""


class VolatileHistoryStorage(HistoryStorage):
    """Keeps the history in memory for the lifetime of the object."""

    def __init__(self, max_size: int = 1000) -> None:
        self._max_size = max_size
        self._commands: deque[str] = deque()

    def store(self, cmds: Iterable[str]) -> None:
        self._commands.extend(cmds)
        while len(self._commands) > self._max_size:
            self._commands.popleft()

    def commands(self) -> list[str]:
        return list(self._commands)

    def clear(self) -> None:
        self._commands.clear()


class FileHistoryStorage(HistoryStorage):
    """Keeps the history in a text file, one command per line."""

    def __init__(self, path: Union[str, PathLike], max_size: int = 1000) -> None:
        self._path = Path(path)
        self._max_size = max_size

    def store(self, cmds: Iterable[str]) -> None:
        commands = self.commands()
        commands.extend(cmds)
        if len(commands) > self._max_size:
            commands = commands[len(commands) - self._max_size:]
        with self._path.open("w", encoding="utf-8", newline="") as f:
            f.writelines(f"{line}\n" for line in commands)

    def commands(self) -> list[str]:
        try:
            with self._path.open("r", encoding="utf-8", newline="") as f:
                text = f.read()
        except OSError:
            return []
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def clear(self) -> None:
        with self._path.open("w", encoding="utf-8"):
            pass