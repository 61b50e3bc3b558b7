"""The interactive read-parse-execute loop."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Mapping, Sequence
from typing import TextIO

from .env import Environment
from .errors import ExitRequested, ShellError, ShellSyntaxError, report_error
from .executor import Executor
from .expand import LineCursor
from .parser import parse_command
from .prompt import EmojiPicker, prompt_text
from .validate import validate_line


class Shell:
    """A shell session with its environment and its last exit status."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.env = Environment.from_mapping(os.environ if environ is None else environ)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.picker = EmojiPicker(0)
        self.executor = Executor(self.env, self.stdout, self.stderr)
        self.executor.picker = self.picker

    @property
    def last_status(self) -> int:
        return self.executor.last_status

    def run_line(self, line: str) -> int:
        """Validate, parse and run one line; return the last status."""
        self.executor.pipe_input = None
        if not line:
            return self.last_status
        try:
            validate_line(line)
            cursor = LineCursor(line, self.env, self.last_status)
            while cursor.current():
                command = parse_command(cursor)
                self.executor.last_status = cursor.last_status
                cursor.last_status = self.executor.run(command)
        except ShellError as error:
            emoji = self.picker.next() if isinstance(error, ShellSyntaxError) else ""
            self.executor.last_status = report_error(error, self.stderr, emoji)
        return self.last_status

    def loop(self) -> int:
        """Prompt for and run lines until end of input or ``exit``."""
        while True:
            self.stdout.write(prompt_text(self.picker.next()))
            self.stdout.flush()
            try:
                raw = self.stdin.readline()
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue
            if not raw:
                self.stderr.write("exit\n")
                self.stderr.flush()
                return 0
            if raw.endswith("\n"):
                line = raw[:-1]
            else:
                line = raw
                self.stdout.write("\n")
            try:
                self.run_line(line)
            except ExitRequested as request:
                return request.status
            except KeyboardInterrupt:
                self.stdout.write("\n")


def _on_sigquit(signum, frame) -> None:
    sys.stdout.write("\b\b  \b\b")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive session on the standard streams; arguments are ignored."""
    shell = Shell(os.environ, sys.stdin, sys.stdout, sys.stderr)
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, _on_sigquit)
    return shell.loop()