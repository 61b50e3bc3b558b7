"""Opening redirections and running commands, builtin or external."""

from __future__ import annotations

import io
import os
import subprocess
from contextlib import ExitStack
from typing import TextIO

from .builtins import run_builtin
from .env import Environment
from .errors import ExitRequested
from .prompt import EmojiPicker, prompt_text
from .resolve import resolve_command
from .state import Command, RedirectKind, Separator

_FLAGS = {
    RedirectKind.TRUNCATE: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    RedirectKind.APPEND: os.O_WRONLY | os.O_CREAT,
    RedirectKind.INPUT: os.O_RDONLY,
}


def open_redirections(command: Command, err: TextIO, emoji: str) -> bool:
    """Create or check every redirection target of ``command`` in order.

    Records the last output and input files on the command. Stops at the
    first failure, marks the command corrupted and returns False.
    """
    for redirect in command.redirects:
        if redirect.ambiguous:
            command.corrupted = True
            if redirect.is_output:
                command.write_corrupted = True
            else:
                command.read_corrupted = True
            err.write(f"{prompt_text(emoji)}{redirect.filename}: ambiguous redirect\n")
            err.flush()
            return False
        try:
            fd = os.open(redirect.filename, _FLAGS[redirect.kind], 0o644)
        except OSError:
            command.corrupted = True
            if redirect.is_output:
                command.write_corrupted = True
            else:
                command.read_corrupted = True
            err.write(f"{os.strerror(2)}\n")
            err.flush()
            return False
        os.close(fd)
        if redirect.is_output:
            command.file_write = redirect.filename
        else:
            command.file_read = redirect.filename
    return True


def _stream_fd(stream: TextIO) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _fatal(err: TextIO, exc: OSError) -> ExitRequested:
    code = exc.errno or 1
    err.write(os.strerror(code))
    err.flush()
    return ExitRequested(code)


class Executor:
    """Runs parsed commands one after another, carrying pipe data between them."""

    def __init__(self, env: Environment, out: TextIO, err: TextIO) -> None:
        self.env = env
        self.out = out
        self.err = err
        self.picker = EmojiPicker()
        self.last_status = 0
        self.pipe_input: bytes | None = None

    def run(self, command: Command) -> int:
        """Run ``command`` and return the last status afterwards."""
        incoming = self.pipe_input
        self.pipe_input = None
        piped = command.separator == Separator.PIPE
        if not open_redirections(command, self.err, self.picker.next()):
            return self._abandon(piped, 1)
        if not command.argv:
            return self._abandon(piped, None)
        status = resolve_command(command, self.env, self.err, self.picker.next())
        if command.corrupted:
            return self._abandon(piped, status)
        if command.is_builtin() and not piped:
            self.last_status = run_builtin(command, self.env, self.out, self.err)
            return self.last_status
        if command.is_builtin():
            result, output = self._run_piped_builtin(command)
        else:
            result, output = self._spawn(command, incoming, piped)
        if piped:
            self.pipe_input = output if output is not None else b""
        if result is not None:
            self.last_status = result
        return self.last_status

    def _abandon(self, piped: bool, status: int | None) -> int:
        if piped:
            self.pipe_input = b""
        if status is not None:
            self.last_status = status
        return self.last_status

    def _run_piped_builtin(self, command: Command) -> tuple[int, bytes]:
        buffer = io.StringIO()
        scratch = Environment(self.env.entries())
        status = run_builtin(command, scratch, buffer, self.err)
        return status, buffer.getvalue().encode("utf-8")

    def _spawn(
        self, command: Command, incoming: bytes | None, piped: bool
    ) -> tuple[int | None, bytes | None]:
        options: dict = {}
        out_fd = _stream_fd(self.out)
        err_fd = _stream_fd(self.err)
        echo_output = False
        with ExitStack() as stack:
            if command.file_read and not command.read_corrupted:
                try:
                    options["stdin"] = stack.enter_context(open(command.file_read, "rb"))
                except OSError as exc:
                    raise _fatal(self.err, exc) from exc
            elif incoming is not None:
                options["input"] = incoming
            if command.file_write and not command.write_corrupted:
                try:
                    options["stdout"] = stack.enter_context(open(command.file_write, "ab"))
                except OSError as exc:
                    raise _fatal(self.err, exc) from exc
            elif piped:
                options["stdout"] = subprocess.PIPE
            elif out_fd is None:
                options["stdout"] = subprocess.PIPE
                echo_output = True
            else:
                options["stdout"] = out_fd
            options["stderr"] = subprocess.PIPE if err_fd is None else err_fd
            self.out.flush()
            self.err.flush()
            try:
                completed = subprocess.run(
                    command.argv,
                    executable=command.executable or command.argv[0],
                    env=self.env.to_environ(),
                    check=False,
                    **options,
                )
            except OSError as exc:
                return exc.errno or 1, None
        if err_fd is None and completed.stderr:
            self.err.write(completed.stderr.decode("utf-8", errors="replace"))
            self.err.flush()
        output = completed.stdout if options["stdout"] is subprocess.PIPE else None
        if echo_output and output:
            self.out.write(output.decode("utf-8", errors="replace"))
            self.out.flush()
            output = None
        status = completed.returncode if completed.returncode >= 0 else None
        return status, output