"""Exceptions raised by the shell and the way they are reported."""

from __future__ import annotations

from typing import TextIO

SYNTAX_ERROR_STATUS = 258
_PROMPT_TAG = " \33[1;35m mimishell:\33[0m"


class ShellError(Exception):
    """An error that aborts the current line and sets the last status."""

    def __init__(self, message: str | None, status: int) -> None:
        super().__init__(message or "")
        self.message = message or ""
        self.status = status


class ShellSyntaxError(ShellError):
    """A syntax error near an unexpected token."""

    def __init__(self, token: str | None) -> None:
        self.token = token if token else "newline"
        super().__init__(
            f"syntax error near unexpected token '{self.token}'",
            SYNTAX_ERROR_STATUS,
        )


class ExitRequested(Exception):
    """Raised when the shell should terminate with the given status."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def report_error(error: ShellError, stream: TextIO, emoji: str) -> int:
    """Write ``error`` to ``stream`` and return the status it sets."""
    if isinstance(error, ShellSyntaxError):
        stream.write(f"{emoji}{_PROMPT_TAG} {error.message}\n")
    elif error.message:
        stream.write(f"{error.message}\n")
    stream.flush()
    return error.status