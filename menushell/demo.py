"""A demonstration shell with nested menus, typed commands and history."""

import argparse
import asyncio
import sys
from typing import Optional, Sequence, TextIO

from .asyncsession import AsyncCliSession
from .commands import CmdHandler, Menu
from .inputhandler import InputHandler
from .keyboard import Keyboard
from .scheduler import LoopScheduler
from .session import Cli, CliSession
from .storage import FileHistoryStorage, HistoryStorage, VolatileHistoryStorage


def _free_function(out: TextIO, x: int) -> None:
    out.write(f"{x}\n")
    out.flush()


def _build_sub_menu() -> Menu:
    sub_menu = Menu("sub")
    sub_menu.insert(
        "hello",
        lambda out: out.write("Hello, submenu world\n"),
        "Print hello world in the submenu",
    )
    sub_menu.insert(
        "demo",
        lambda out: out.write("This is a sample!\n"),
        "Print a demo string",
    )
    sub_sub_menu = Menu("subsub")
    sub_sub_menu.insert(
        "hello",
        lambda out: out.write("Hello, subsubmenu world\n"),
        "Print hello world in the sub-submenu",
    )
    sub_menu.add(sub_sub_menu)
    return sub_menu


def build_root_menu() -> Menu:
    """Build the demo's root menu with all its commands and submenus."""
    root = Menu("cli")
    handles: dict[str, CmdHandler] = {}

    root.insert(
        "free_function",
        _free_function,
        "Call a free function that echoes the parameter passed",
    )
    root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")

    def hello_everysession(out: TextIO) -> None:
        everyone = Cli.cout()
        everyone.write("Hello, everybody\n")
        everyone.flush()

    root.insert(
        "hello_everysession",
        hello_everysession,
        "Print hello everybody on all open sessions",
    )

    def answer(out: TextIO, x: int) -> None:
        out.write(f"The answer is: {x}\n")

    root.insert("answer", answer,
                "Print the answer to Life, the Universe and Everything")

    def file_cmd(out: TextIO, fd: int) -> None:
        out.write(f"file descriptor: {fd}\n")

    root.insert("file", file_cmd, "Print the file descriptor specified",
                ["file_descriptor"])

    def echo(out: TextIO, arg: str) -> None:
        out.write(f"{arg}\n")

    root.insert("echo", echo, "Print the string passed as parameter",
                ["string to echo"])

    def echo2(out: TextIO, arg1: str, arg2: str) -> None:
        out.write(f"{arg1} {arg2}\n")

    root.insert("echo", echo2, "Print the strings passed as parameter",
                ["first string to echo", "second string to echo"])

    def error(out: TextIO) -> None:
        raise RuntimeError("Error in cmd")

    root.insert("error", error, "Throw an exception in the command handler")

    def reverse(out: TextIO, arg: str) -> None:
        out.write(f"{arg[::-1]}\n")

    root.insert("reverse", reverse, "Print the reverse string", ["string_to_revert"])

    def add2(out: TextIO, x: int, y: int) -> None:
        out.write(f"{x} + {y} = {x + y}\n")

    root.insert("add", add2, "Print the sum of the two numbers",
                ["first_term", "second_term"])

    def add3(out: TextIO, x: int, y: int, z: int) -> None:
        out.write(f"{x} + {y} + {z} = {x + y + z}\n")

    root.insert("add", add3, "Print the sum of the three numbers")

    def sort_words(out: TextIO, data: list[str]) -> None:
        out.write("sorted list: " + "".join(f"{w} " for w in sorted(data)) + "\n")

    root.insert("sort", sort_words, "Alphabetically sort a list of words",
                ["list of strings separated by space"])

    def color(out: TextIO) -> None:
        out.write("Colors ON\n")
        handles["color"].disable()
        handles["nocolor"].enable()

    def nocolor(out: TextIO) -> None:
        out.write("Colors OFF\n")
        handles["color"].enable()
        handles["nocolor"].disable()

    handles["color"] = root.insert("color", color, "Enable colors in the cli")
    handles["nocolor"] = root.insert("nocolor", nocolor, "Disable colors in the cli")
    handles["nocolor"].disable()

    def removecmds(out: TextIO) -> None:
        handles["color"].remove()
        handles["nocolor"].remove()

    root.insert("removecmds", removecmds)

    root.add(_build_sub_menu())
    return root


def _report_exception(out: TextIO, cmd: str, exc: Exception) -> None:
    out.write(f"Exception caught in cli handler: {exc} handling command: {cmd}.\n")


def build_cli(history_path: Optional[str] = None) -> Cli:
    """Build the demo Cli; history goes to ``history_path`` if given, else to memory."""
    storage: HistoryStorage
    if history_path is None:
        storage = VolatileHistoryStorage()
    else:
        storage = FileHistoryStorage(history_path)
    cli = Cli(build_root_menu(), storage)
    cli.set_exit_action(lambda out: out.write("Goodbye and thanks for all the fish.\n"))
    cli.set_exception_handler(_report_exception)
    return cli


def _run_terminal(cli: Cli) -> None:
    scheduler = LoopScheduler()
    with CliSession(cli, sys.stdout, 200) as session:
        handler = InputHandler(session)

        def on_exit(out: TextIO) -> None:
            out.write("Closing App...\n")
            scheduler.stop()

        session.set_exit_action(on_exit)
        keyboard = Keyboard(scheduler)
        keyboard.register(handler.key_pressed)
        session.prompt()
        with keyboard:
            scheduler.run()


async def _run_async(cli: Cli) -> None:
    task = asyncio.current_task()
    with AsyncCliSession(cli) as session:

        def on_exit(out: TextIO) -> None:
            out.write("Closing App...\n")
            if task is not None:
                task.cancel()

        session.set_exit_action(on_exit)
        try:
            await session.run()
        except asyncio.CancelledError:
            pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demo shell on the standard input and output."""
    parser = argparse.ArgumentParser(prog="menushell-demo",
                                     description="Interactive menu shell demo.")
    parser.add_argument("--history", default=".cli",
                        help="file keeping the command history (default: .cli)")
    parser.add_argument("--volatile", action="store_true",
                        help="keep the history in memory only")
    parser.add_argument("--mode", choices=("terminal", "async"), default="terminal",
                        help="edit keys on the terminal, or read whole lines")
    args = parser.parse_args(argv)
    try:
        cli = build_cli(None if args.volatile else args.history)
        if args.mode == "async":
            asyncio.run(_run_async(cli))
        else:
            _run_terminal(cli)
        return 0
    except Exception as exc:  # noqa: BLE001 - reported to the user
        print(f"Exception caught in main: {exc}", file=sys.stderr)
        return 1