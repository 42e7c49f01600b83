# menushell

`menushell` is a small library for building interactive command shells
organised as a tree of menus. You register commands whose parameters carry
type annotations; a session splits each line into words, converts the
arguments, runs the matching command and writes its output to the session's
stream.

## What it offers

- **Menus and submenus** (`menushell.commands.Menu`). Typing a submenu's
  name enters it; `sub command args` runs a command of the submenu
  directly. From a submenu, the commands of the parent menu still match.
- **Typed arguments.** `Menu.insert(name, func, help, param_desc)` reads the
  annotations of `func(out, ...)`: `int`, `float`, `bool` and `str` are
  converted, unannotated parameters receive strings. When the words do not
  convert, or their number is wrong, the line is reported as
  `wrong command: <line>`. Several commands may share a name with different
  parameter counts.
- **Freeform commands.** A handler whose only parameter after `out` is
  annotated `list[str]` receives every remaining word as a list
  (`FreeformCommand`).
- **Quoting** (`menushell.tokenizer.split_command_line`): single or double
  quotes group words, a backslash escapes a quote or another backslash.
- **Built-in commands** in every session: `help` and `exit`.
- **Run-time control.** `Menu.insert` and `Menu.add` return a `CmdHandler`
  with `enable()`, `disable()` and `remove()`.
- **History** (`menushell.history.History`) with up/down browsing. When a
  session exits, its commands go to the `Cli`'s storage and later sessions
  start with them: `VolatileHistoryStorage` keeps them in memory,
  `FileHistoryStorage` in a text file, one command per line; both keep at
  most `max_size` commands (1000 by default).
- **Completion.** `CliSession.get_completions(line)` returns the sorted,
  distinct commands and submenu paths starting with `line`.
- **Broadcast output.** `Cli.cout()` returns a `BroadcastStream` writing to
  every open session.
- **Exit and error actions.** `Cli.set_exit_action`,
  `CliSession.set_exit_action` and `Cli.set_exception_handler`. Without a
  handler, an exception raised by a command is written to the session as its
  message.
- **Key-by-key line editing** for terminals: `menushell.terminal.Terminal`
  (cursor movement, backspace, delete, home, end),
  `menushell.inputhandler.InputHandler` (runs commands, browses the history,
  completes on Tab), `menushell.keyboard.Keyboard` (reads keys on a
  background thread and posts them to a scheduler) and
  `menushell.scheduler.LoopScheduler` (runs posted tasks on the thread that
  calls `run`, `exec_one` or `poll_one`).
- **Line-based async sessions.** `menushell.asyncsession.AsyncCliSession`
  prompts and feeds lines read from an `asyncio.StreamReader`, or from
  standard input when no reader is given.
- **ANSI colours** (`menushell.colors`): `Style`, `Fg`, `Bg`, `FgBright`,
  `BgBright`, `escape(value)` and `write_color(stream, value, force)`, which
  writes the escape only when forced or when `TERM` names a colour terminal
  and the stream is standard output or error on a tty.

## Installing

```
pip install .
```

The package has no run-time dependencies. For the tests:

```
pip install ".[test]"
pytest
```

## A first shell

```python
import sys

from menushell.commands import Menu
from menushell.session import Cli, CliSession

root = Menu("cli")
root.insert("hello", lambda out: out.write("Hello, world\n"), "Print hello world")


def add(out, x: int, y: int) -> None:
    out.write(f"{x} + {y} = {x + y}\n")


root.insert("add", add, "Print the sum of two numbers", ["first_term", "second_term"])

sub = Menu("sub")
sub.insert("demo", lambda out: out.write("This is a sample!\n"), "Print a demo string")
root.add(sub)

cli = Cli(root)
cli.set_exit_action(lambda out: out.write("Goodbye.\n"))

with CliSession(cli, sys.stdout) as session:
    session.prompt()
    for line in ["help", "add 2 3", "sub demo", "add two 3", "exit"]:
        session.feed(line)
        session.prompt()
```

`CliSession.close()` (also called when the `with` block ends) stops the
session's stream from receiving `Cli.cout()` output.

## History storage

```python
from menushell.commands import Menu
from menushell.session import Cli
from menushell.storage import FileHistoryStorage

cli = Cli(Menu("cli"), FileHistoryStorage(".cli_history", 1000))
```

Without a storage, `Cli` uses a `VolatileHistoryStorage`.

## Demo

The package installs a demo shell with a root menu, a submenu and a
sub-submenu, typed and freeform commands, commands that disable and remove
one another, and a persistent history:

```
menushell-demo
```

Options:

- `--history FILE` — history file (default `.cli`);
- `--volatile` — keep the history in memory only;
- `--mode terminal|async` — edit key by key on the terminal (default), or
  read whole lines asynchronously.

Type `help` to list the commands, press Tab to complete, use the arrow keys
to browse the history and `exit` to quit. The demo's `color` and `nocolor`
commands only print a message and switch which of the two is enabled; they
do not change the output's colours.

## What it does not do

- There is no network server: sessions run on local streams only, and
  nothing accepts remote (for example telnet) connections.
- There is no ready-made session that runs the commands of a file; feed the
  lines to a `CliSession` yourself.
- Sessions have no `history` command; `CliSession.show_history()` is there
  to call from your own command.
- Key-by-key input (`Keyboard`) relies on `select` over the input stream and
  on `termios` for raw mode, so it is meant for POSIX systems.