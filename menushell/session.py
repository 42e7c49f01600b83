"""The command line interface object and the sessions that talk to it."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TextIO

from .commands import Menu
from .history import History
from .storage import HistoryStorage, VolatileHistoryStorage
from .tokenizer import split_command_line

ExitAction = Callable[[TextIO], None]
ExceptionHandler = Callable[[TextIO, str, Exception], None]


def _flush(stream: TextIO) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


class BroadcastStream:
    """A text stream writing everything to every registered stream."""

    def __init__(self) -> None:
        self._streams: list[TextIO] = []

    def write(self, text: str) -> int:
        for stream in list(self._streams):
            stream.write(text)
        return len(text)

    def flush(self) -> None:
        for stream in list(self._streams):
            _flush(stream)

    def register(self, stream: TextIO) -> None:
        self._streams.append(stream)

    def unregister(self, stream: TextIO) -> None:
        self._streams = [s for s in self._streams if s is not stream]


_GLOBAL_OUT = BroadcastStream()


class Cli:
    """A command line interface: a root menu, a shared history and global actions."""

    def __init__(self, root_menu: Menu,
                 history_storage: Optional[HistoryStorage] = None) -> None:
        self._root_menu = root_menu
        self._storage = history_storage if history_storage is not None else VolatileHistoryStorage()
        self._exit_action: Optional[ExitAction] = None
        self._exception_handler: Optional[ExceptionHandler] = None

    def set_exit_action(self, action: Optional[ExitAction]) -> None:
        """Set the action run whenever any session gets the ``exit`` command."""
        self._exit_action = action

    def set_exception_handler(self, handler: Optional[ExceptionHandler]) -> None:
        """Set the handler called when a command raises an exception."""
        self._exception_handler = handler

    @staticmethod
    def cout() -> BroadcastStream:
        """Return the stream that writes on every open session."""
        return _GLOBAL_OUT

    def _on_exit(self, out: TextIO) -> None:
        if self._exit_action is not None:
            self._exit_action(out)

    def _on_exception(self, out: TextIO, cmd: str, exc: Exception) -> None:
        if self._exception_handler is not None:
            self._exception_handler(out, cmd, exc)
        else:
            out.write(f"{exc}\n")

    def _store_commands(self, cmds: Iterable[str]) -> None:
        self._storage.store(cmds)

    def _stored_commands(self) -> list[str]:
        return self._storage.commands()


class CliSession:
    """One conversation with a :class:`Cli`, writing on its own output stream."""

    def __init__(self, cli: Cli, out: TextIO, history_size: int = 100) -> None:
        self._cli = cli
        self._out = out
        self.current: Menu = cli._root_menu
        self._global_menu = Menu()
        self._exit_action: ExitAction = lambda stream: None
        self._history = History(history_size)
        self._exited = False

        self._history.load_commands(cli._stored_commands())
        Cli.cout().register(out)
        self._global_menu.insert("help", lambda stream: self.help(), "This help message")
        self._global_menu.insert("exit", lambda stream: self.exit(), "Quit the session")

    @property
    def out(self) -> TextIO:
        return self._out

    def __enter__(self) -> CliSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def feed(self, line: str) -> None:
        """Run one command line."""
        words = split_command_line(line)
        if not words:
            return
        self._history.new_command(line)
        try:
            found = self._global_menu.scan_cmds(words, self)
            if not found:
                found = self.current.scan_cmds(words, self)
            if not found:
                self._out.write(f"wrong command: {line}\n")
        except Exception as exc:  # noqa: BLE001 - reported to the user
            self._cli._on_exception(self._out, line, exc)

    def prompt(self) -> None:
        """Write the prompt of the current menu, unless the session has exited."""
        if self._exited:
            return
        self._out.write(f"{self.current.prompt()}> ")
        _flush(self._out)

    def help(self) -> None:
        self._out.write("Commands available:\n")
        self._global_menu.main_help(self._out)
        self.current.main_help(self._out)

    def exit(self) -> None:
        """Run the exit actions and hand this session's commands to the shared history."""
        self._exit_action(self._out)
        self._cli._on_exit(self._out)
        self._cli._store_commands(self._history.get_commands())
        self._exited = True

    def set_exit_action(self, action: ExitAction) -> None:
        self._exit_action = action

    def show_history(self) -> None:
        self._history.show(self._out)

    def previous_cmd(self, line: str) -> str:
        return self._history.previous(line)

    def next_cmd(self) -> str:
        return self._history.next()

    def get_completions(self, current_line: str) -> list[str]:
        """Return the sorted, distinct completions for ``current_line``."""
        line = current_line.lstrip()
        found = self._global_menu.get_completions(line)
        found.extend(self.current.get_completions(line))
        return sorted(set(found))

    def close(self) -> None:
        """Stop receiving output written to :meth:`Cli.cout`."""
        Cli.cout().unregister(self._out)