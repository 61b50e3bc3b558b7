import io
import sys

import pytest

from mimishell.env import Environment
from mimishell.errors import ExitRequested
from mimishell.executor import Executor, open_redirections
from mimishell.state import Command, Redirect, RedirectKind, Separator

PY = sys.executable


def make_executor(entries=()):
    out, err = io.StringIO(), io.StringIO()
    return Executor(Environment(list(entries)), out, err), out, err


def test_truncate_creates_and_empties(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old")
    command = Command(argv=["echo"], redirects=[Redirect(str(target), RedirectKind.TRUNCATE)])
    assert open_redirections(command, io.StringIO(), "E")
    assert target.read_text() == ""
    assert command.file_write == str(target)


def test_append_keeps_content(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old")
    command = Command(argv=["echo"], redirects=[Redirect(str(target), RedirectKind.APPEND)])
    assert open_redirections(command, io.StringIO(), "E")
    assert target.read_text() == "old"


def test_missing_input_corrupts(tmp_path):
    command = Command(
        argv=["cat"], redirects=[Redirect(str(tmp_path / "missing"), RedirectKind.INPUT)]
    )
    err = io.StringIO()
    assert not open_redirections(command, err, "E")
    assert command.corrupted and command.read_corrupted
    assert command.file_read is None
    assert "No such file or directory" in err.getvalue()


def test_ambiguous_redirect_reported(tmp_path):
    command = Command(
        argv=["echo"], redirects=[Redirect("$VAR", RedirectKind.TRUNCATE, ambiguous=True)]
    )
    err = io.StringIO()
    assert not open_redirections(command, err, "E")
    assert command.write_corrupted
    assert err.getvalue().endswith("$VAR: ambiguous redirect\n")


def test_builtin_writes_to_out():
    executor, out, _ = make_executor()
    assert executor.run(Command(argv=["echo", "hi"], separator=Separator.END)) == 0
    assert out.getvalue() == "hi\n"


def test_builtin_into_file(tmp_path):
    target = tmp_path / "f"
    executor, out, _ = make_executor()
    command = Command(
        argv=["echo", "hi"], redirects=[Redirect(str(target), RedirectKind.TRUNCATE)]
    )
    executor.run(command)
    assert target.read_text() == "hi\n"
    assert out.getvalue() == ""


def test_external_output_and_status():
    executor, out, _ = make_executor()
    command = Command(argv=[PY, "-c", "import sys; print('ok'); sys.exit(3)"])
    assert executor.run(command) == 3
    assert out.getvalue() == "ok\n"
    assert executor.last_status == 3


def test_pipe_between_externals():
    executor, out, _ = make_executor()
    first = Command(argv=[PY, "-c", "print('abc')"], separator=Separator.PIPE)
    second = Command(
        argv=[PY, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"],
        separator=Separator.END,
    )
    executor.run(first)
    executor.run(second)
    assert out.getvalue() == "ABC\n"
    assert executor.pipe_input is None


def test_input_redirect(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("data")
    executor, out, _ = make_executor()
    command = Command(
        argv=[PY, "-c", "import sys; sys.stdout.write(sys.stdin.read())"],
        redirects=[Redirect(str(source), RedirectKind.INPUT)],
    )
    executor.run(command)
    assert out.getvalue() == "data"


def test_piped_builtin_output_and_isolation():
    executor, out, _ = make_executor()
    executor.run(Command(argv=["export", "X=1"], separator=Separator.PIPE))
    assert executor.env.lookup("X") is None
    assert executor.pipe_input == b""
    executor.run(Command(argv=["echo", "hi"], separator=Separator.PIPE))
    assert executor.pipe_input == b"hi\n"
    assert out.getvalue() == ""


def test_exit_requested():
    executor, _, err = make_executor()
    with pytest.raises(ExitRequested) as info:
        executor.run(Command(argv=["exit"]))
    assert info.value.status == 0
    assert err.getvalue() == "exit\n"


def test_unknown_command_status(tmp_path):
    executor, _, err = make_executor([f"PATH={tmp_path}"])
    assert executor.run(Command(argv=["nosuch"])) == 127
    assert "command not found" in err.getvalue()


def test_failed_redirect_skips_command(tmp_path):
    executor, out, _ = make_executor()
    command = Command(
        argv=["echo", "hi"], redirects=[Redirect(str(tmp_path / "no"), RedirectKind.INPUT)]
    )
    assert executor.run(command) == 1
    assert out.getvalue() == ""