import io

import pytest

from menushell.commands import Menu
from menushell.session import BroadcastStream, Cli, CliSession


def user_input(cli, text):
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.prompt()
        for line in text.split("\n"):
            session.feed(line)
            session.prompt()
    return out.getvalue()


def first_prompt(text):
    return text[:text.find(">")]


def last_prompt(text):
    tail = text[text.rfind("\n") + 1:]
    return tail[:tail.rfind(">")]


def content(text):
    last_nl = text.rfind("\n")
    last_line = text[last_nl + 1:]
    body = text[:last_nl]
    pos = body.find(last_line)
    return body[pos + len(last_line):]


def int_cmd(out, par: int):
    out.write(f"{par}\n")


def string_cmd(out, par: str):
    out.write(f"{par}\n")


def float_cmd(out, par: float):
    out.write(f"{par}\n")


def make_basic_cli():
    root = Menu("cli")
    root.insert("int_cmd", int_cmd, "int_cmd help", ["int_par"])
    root.insert("string_cmd", string_cmd, "string_cmd help", ["string_par"])
    return Cli(root)


def test_basics_help():
    text = user_input(make_basic_cli(), "help")
    assert first_prompt(text) == "cli"
    assert last_prompt(text) == "cli"
    body = content(text)
    assert "int_cmd" in body
    assert "<int_par>" in body
    assert "string_cmd" in body
    assert "<string_par>" in body


def test_basics_commands():
    cli = make_basic_cli()
    text = user_input(cli, "int_cmd 42")
    assert first_prompt(text) == "cli"
    assert last_prompt(text) == "cli"
    assert content(text) == "42"

    text = user_input(cli, "int_cmd wrong_int_parameter")
    assert "wrong command:" in content(text)

    text = user_input(cli, "int_cmd 42 0")
    assert "wrong command:" in content(text)

    text = user_input(cli, "string_cmd foo")
    assert content(text) == "foo"

    text = user_input(cli, r'''string_cmd "foo 'bar' \"foo\\2"''')
    assert first_prompt(text) == "cli"
    assert last_prompt(text) == "cli"
    assert content(text) == r'''foo 'bar' "foo\2'''


@pytest.mark.parametrize(
    "line, expected",
    [
        ("int_cmd 42", "42"),
        ("int_cmd -42", "-42"),
        ("float_cmd 0.1", "0.1"),
        ("string_cmd foo", "foo"),
    ],
)
def test_parameters(line, expected):
    root = Menu("cli")
    root.insert("int_cmd", int_cmd, "int_cmd help", ["int_par"])
    root.insert("float_cmd", float_cmd, "float_cmd help", ["float_par"])
    root.insert("string_cmd", string_cmd, "string_cmd help", ["string_par"])
    assert content(user_input(Cli(root), line)) == expected


@pytest.mark.parametrize("line", ["int_cmd a", "float_cmd a"])
def test_parameters_wrong(line):
    root = Menu("cli")
    root.insert("int_cmd", int_cmd)
    root.insert("float_cmd", float_cmd)
    assert "wrong command:" in content(user_input(Cli(root), line))


def printer(out, args: list[str]):
    out.write("".join(f"{a}*" for a in args) + "\n")


def test_freeform():
    root = Menu("cli")
    root.insert("cmd_printer", printer, "cmd_printer help", ["<string values>"])
    cli = Cli(root)

    text = user_input(cli, "cmd_printer a b 'c d e' f")
    assert first_prompt(text) == "cli"
    assert last_prompt(text) == "cli"
    assert content(text) == "a*b*c d e*f*"

    text = user_input(cli, "cmd_printer")
    assert last_prompt(text) == "cli"
    assert content(text) == ""


@pytest.mark.parametrize("line", ["", "\t"])
def test_border_line(line):
    assert user_input(Cli(Menu("cli")), line) == "cli> cli> "


def make_submenu_cli():
    root = Menu("cli")
    sub = Menu("sub")
    sub.insert("int_cmd", int_cmd, "int_cmd help", ["int_par"])
    sub.insert("string_cmd", string_cmd, "string_cmd help", ["string_par"])
    subsub = Menu("subsub")

    def double_int_cmd(out, par1: int, par2: int):
        out.write(f"{par1}{par2}\n")

    def double_string_cmd(out, par1: str, par2: str):
        out.write(f"{par1}{par2}\n")

    subsub.insert("double_int_cmd", double_int_cmd)
    subsub.insert("double_string_cmd", double_string_cmd)
    sub.add(subsub)
    root.add(sub)
    return Cli(root)


def test_submenus():
    cli = make_submenu_cli()
    text = user_input(cli, "help")
    assert first_prompt(text) == "cli"
    assert last_prompt(text) == "cli"
    body = content(text)
    assert "sub" in body
    assert "help" in body
    assert "exit" in body

    text = user_input(cli, "sub int_cmd 42")
    assert last_prompt(text) == "cli"
    assert content(text) == "42"

    text = user_input(cli, "sub string_cmd foo")
    assert content(text) == "foo"

    text = user_input(cli, "sub subsub double_int_cmd 42 0")
    assert last_prompt(text) == "cli"
    assert content(text) == "420"

    text = user_input(cli, "sub subsub double_string_cmd foo bar")
    assert content(text) == "foobar"

    text = user_input(cli, "sub\nint_cmd 42")
    assert last_prompt(text) == "sub"
    assert content(text) == "42"

    text = user_input(cli, "sub\nstring_cmd foo")
    assert last_prompt(text) == "sub"
    assert content(text) == "foo"


def test_exit_actions():
    cli = make_basic_cli()
    calls = []
    cli.set_exit_action(lambda out: calls.append("cli"))
    out = io.StringIO()
    with CliSession(cli, out) as session:
        session.set_exit_action(lambda o: calls.append("session"))
        session.feed("exit")
        session.prompt()
    assert calls == ["session", "cli"]
    assert out.getvalue() == ""


def test_exceptions_default_handler():
    root = Menu("cli")

    def failing(out):
        raise ValueError("myerror")

    root.insert("stdexception", failing)
    assert content(user_input(Cli(root), "stdexception")) == "myerror"


def test_exceptions_custom_handler():
    root = Menu("cli")

    class CustomError(Exception):
        pass

    def failing(out):
        raise CustomError("boom")

    root.insert("customexception", failing)
    cli = Cli(root)
    seen = []
    cli.set_exception_handler(lambda out, cmd, exc: seen.append((cmd, type(exc))))
    user_input(cli, "customexception")
    assert seen == [("customexception", CustomError)]


def test_history_is_shared_between_sessions():
    cli = make_basic_cli()
    with CliSession(cli, io.StringIO()) as first:
        first.feed("int_cmd 1")
        first.feed("string_cmd x")
        first.exit()
    with CliSession(cli, io.StringIO()) as second:
        assert second.previous_cmd("") == "string_cmd x"
        assert second.previous_cmd("string_cmd x") == "int_cmd 1"
        assert second.next_cmd() == "string_cmd x"


def test_history_browsing_in_session():
    with CliSession(make_basic_cli(), io.StringIO()) as session:
        session.feed("int_cmd 1")
        session.feed("int_cmd 2")
        assert session.previous_cmd("") == "int_cmd 2"
        assert session.previous_cmd("int_cmd 2") == "int_cmd 1"
        assert session.next_cmd() == "int_cmd 2"


def test_completions():
    with CliSession(make_submenu_cli(), io.StringIO()) as session:
        assert session.get_completions("su") == ["sub"]
        assert session.get_completions("  sub i") == ["sub int_cmd"]
        assert session.get_completions("e") == ["exit"]
        everything = session.get_completions("")
        assert everything == sorted(set(everything))
        assert {"help", "exit", "sub"} <= set(everything)


def test_cout_reaches_open_sessions_only():
    out = io.StringIO()
    session = CliSession(make_basic_cli(), out)
    Cli.cout().write("Hello, everybody\n")
    session.close()
    Cli.cout().write("gone\n")
    assert out.getvalue() == "Hello, everybody\n"


def test_broadcast_stream_register_unregister():
    stream = BroadcastStream()
    a, b = io.StringIO(), io.StringIO()
    stream.register(a)
    stream.register(b)
    assert stream.write("x") == 1
    stream.unregister(a)
    stream.write("y")
    stream.flush()
    assert a.getvalue() == "x"
    assert b.getvalue() == "xy"


def test_show_history():
    out = io.StringIO()
    with CliSession(make_basic_cli(), out) as session:
        session.feed("int_cmd 1")
        out.seek(0)
        out.truncate()
        session.show_history()
    assert out.getvalue() == "\nint_cmd 1\n\n"