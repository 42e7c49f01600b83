"""Commands, menus and the handles used to enable, disable or remove them."""

from __future__ import annotations

import inspect
import re
import typing
import weakref
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, Sequence, TextIO

_INTEGER = re.compile(r"[+-]?[0-9]+")
_TRUE = {"true", "1"}
_FALSE = {"false", "0"}

_NAMED_TYPES: dict[str, Any] = {
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
    "list": list,
    "list[str]": list[str],
    "List[str]": list[str],
    "typing.List[str]": list[str],
}


def _is_string_list(tp: Any) -> bool:
    if tp is list:
        return True
    if typing.get_origin(tp) is list:
        args = typing.get_args(tp)
        return not args or args[0] is str
    return False


def type_name(tp: Any) -> str:
    """Return the placeholder shown in help for a parameter of type ``tp``."""
    if tp is bool:
        return "<bool>"
    if tp is int:
        return "<int>"
    if tp is float:
        return "<float>"
    if tp is str:
        return "<string>"
    if _is_string_list(tp):
        return "<list of strings>"
    return ""


def parse_argument(text: str, tp: Any) -> Any:
    """Convert one word of the command line to ``tp``; raise ValueError if it does not fit."""
    if tp is inspect.Parameter.empty or tp is str:
        return text
    if tp is bool:
        lowered = text.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"not a boolean: {text!r}")
    if tp is int:
        if not _INTEGER.fullmatch(text):
            raise ValueError(f"not an integer: {text!r}")
        return int(text)
    if tp is float:
        return float(text)
    if _is_string_list(tp):
        return [text]
    try:
        return tp(text)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"cannot convert {text!r}") from exc


class _CommandList(list):
    """A list of commands that can be referenced weakly."""


class Command(ABC):
    """Something the user can run by name."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._enabled = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    @abstractmethod
    def exec(self, cmd_line: Sequence[str], session: Any) -> bool:
        """Run the command if ``cmd_line`` matches it; return whether it did."""

    @abstractmethod
    def help(self, out: TextIO) -> None:
        """Write the help line of the command."""

    def get_completion_recursive(self, line: str) -> list[str]:
        """Return the completions this command offers for ``line``."""
        if not self._enabled:
            return []
        if self._name.startswith(line):
            return [self._name]
        return []


def _write_help(out: TextIO, name: str, placeholders: Iterable[str],
                param_desc: Sequence[str], description: str) -> None:
    parts = [f" - {name}"]
    if not param_desc:
        parts.extend(f" {p}" for p in placeholders)
    parts.extend(f" <{d}>" for d in param_desc)
    parts.append(f"\n\t{description}\n")
    out.write("".join(parts))


class FunctionCommand(Command):
    """A command calling a function with typed, fixed-count arguments."""

    def __init__(self, name: str, func: Callable[..., Any], description: str = "",
                 param_types: Sequence[Any] = (), param_desc: Sequence[str] = ()) -> None:
        super().__init__(name)
        self._func = func
        self._description = description
        self._param_types = tuple(param_types)
        self._param_desc = tuple(param_desc)

    def exec(self, cmd_line: Sequence[str], session: Any) -> bool:
        if not self.enabled:
            return False
        if len(cmd_line) != len(self._param_types) + 1:
            return False
        if cmd_line[0] != self.name:
            return False
        try:
            args = [parse_argument(text, tp)
                    for text, tp in zip(cmd_line[1:], self._param_types)]
        except ValueError:
            return False
        self._func(session.out, *args)
        return True

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        _write_help(out, self.name, map(type_name, self._param_types),
                    self._param_desc, self._description)


class FreeformCommand(Command):
    """A command receiving all the remaining words as a list."""

    def __init__(self, name: str, func: Callable[[TextIO, list[str]], Any],
                 description: str = "", param_desc: Sequence[str] = ()) -> None:
        super().__init__(name)
        self._func = func
        self._description = description
        self._param_desc = tuple(param_desc)

    def exec(self, cmd_line: Sequence[str], session: Any) -> bool:
        if not self.enabled:
            return False
        if not cmd_line or cmd_line[0] != self.name:
            return False
        self._func(session.out, list(cmd_line[1:]))
        return True

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        _write_help(out, self.name, [type_name(list[str])],
                    self._param_desc, self._description)


class CmdHandler:
    """A handle to a command inserted in a menu.

    It holds the command and its menu weakly: once either is gone the
    handle does nothing.
    """

    def __init__(self, command: Optional[Command] = None,
                 container: Optional[list] = None) -> None:
        self._command = weakref.ref(command) if command is not None else None
        self._container = self._weak_container(container)

    @staticmethod
    def _weak_container(container: Optional[list]) -> Optional[Callable[[], Optional[list]]]:
        if container is None:
            return None
        try:
            return weakref.ref(container)
        except TypeError:
            return lambda: container

    def _target(self) -> Optional[Command]:
        return self._command() if self._command is not None else None

    def enable(self) -> None:
        command = self._target()
        if command is not None:
            command.enable()

    def disable(self) -> None:
        command = self._target()
        if command is not None:
            command.disable()

    def remove(self) -> None:
        command = self._target()
        container = self._container() if self._container is not None else None
        if command is None or container is None:
            return
        for position, item in enumerate(container):
            if item is command:
                del container[position]
                return


def get_completions(cmds: Iterable[Command], current_line: str) -> list[str]:
    """Collect the completions of every command in ``cmds`` for ``current_line``."""
    return [c for cmd in cmds for c in cmd.get_completion_recursive(current_line)]


def _resolve_annotation(annotation: Any) -> Any:
    if isinstance(annotation, str):
        return _NAMED_TYPES.get(annotation.replace(" ", ""), annotation)
    return annotation


def _parameter_types(func: Callable[..., Any]) -> list[Any]:
    target: Any = func
    skip = 0
    if inspect.ismethod(func):
        target = func.__func__
        skip = 1
    elif not hasattr(func, "__code__") and callable(func):
        target = type(func).__call__
        skip = 1
    code = getattr(target, "__code__", None)
    if code is None:
        raise TypeError("a command handler must be a Python function or callable object")
    names = code.co_varnames[:code.co_argcount][skip:]
    if not names:
        raise TypeError("a command handler must take the output stream as first argument")
    annotations = getattr(target, "__annotations__", None) or {}
    return [_resolve_annotation(annotations.get(name, inspect.Parameter.empty))
            for name in names[1:]]


class Menu(Command):
    """A named group of commands, possibly nested in a parent menu."""

    def __init__(self, name: str = "", description: str = "(menu)") -> None:
        super().__init__(name)
        self._description = description
        self._parent: Optional[Menu] = None
        self._cmds: _CommandList = _CommandList()

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._cmds)

    def insert(self, name: str, func: Callable[..., Any], help: str = "",
               param_desc: Optional[Sequence[str]] = None) -> CmdHandler:
        """Add a command calling ``func(out, *args)``.

        Argument types come from the annotations of ``func``; unannotated
        parameters receive strings.  A single ``list[str]`` parameter makes
        the command take any number of words.
        """
        desc = list(param_desc or ())
        types = _parameter_types(func)
        if len(types) == 1 and _is_string_list(types[0]):
            command: Command = FreeformCommand(name, func, help, desc)
        else:
            command = FunctionCommand(name, func, help, types, desc)
        return self.add(command)

    def add(self, command: Command) -> CmdHandler:
        """Add a ready-made command or submenu."""
        if isinstance(command, Menu):
            command._parent = self
        self._cmds.append(command)
        return CmdHandler(command, self._cmds)

    def exec(self, cmd_line: Sequence[str], session: Any) -> bool:
        if not self.enabled:
            return False
        if cmd_line[0] != self.name:
            return False
        if len(cmd_line) == 1:
            session.current = self
            return True
        sub_line = list(cmd_line[1:])
        return any(cmd.exec(sub_line, session) for cmd in list(self._cmds))

    def scan_cmds(self, cmd_line: Sequence[str], session: Any) -> bool:
        """Run the first command matching ``cmd_line`` here or in the parent menu."""
        if not self.enabled:
            return False
        if any(cmd.exec(cmd_line, session) for cmd in list(self._cmds)):
            return True
        return self._parent is not None and self._parent.exec(cmd_line, session)

    def prompt(self) -> str:
        return self.name

    def main_help(self, out: TextIO) -> None:
        """Write the help of every command of this menu, then the parent's entry."""
        if not self.enabled:
            return
        for cmd in self._cmds:
            cmd.help(out)
        if self._parent is not None:
            self._parent.help(out)

    def help(self, out: TextIO) -> None:
        if not self.enabled:
            return
        out.write(f" - {self.name}\n\t{self._description}\n")

    def get_completions(self, current_line: str) -> list[str]:
        """Completions of the commands here, then those of the parent menu."""
        result = get_completions(self._cmds, current_line)
        if self._parent is not None:
            result.extend(self._parent.get_completion_recursive(current_line))
        return result

    def get_completion_recursive(self, line: str) -> list[str]:
        if line.startswith(self.name):
            rest = line[len(self.name):].lstrip()
            return [f"{self.name} {c}"
                    for cmd in self._cmds
                    for c in cmd.get_completion_recursive(rest)]
        return super().get_completion_recursive(line)