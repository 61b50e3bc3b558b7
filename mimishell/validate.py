"""Syntax check of a whole input line before it is parsed."""

from __future__ import annotations

from .errors import ShellSyntaxError

_ARGUMENT_STOP = " ;|()<>"


def _syntax_error(line: str, pos: int) -> ShellSyntaxError:
    """Build the syntax error for the token found at ``pos`` in ``line``."""
    if pos >= len(line):
        return ShellSyntaxError(None)
    if line[pos] == ">" and line[pos + 1:pos + 2] == ">":
        return ShellSyntaxError(">>")
    return ShellSyntaxError(line[pos])


class _Validator:
    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def _char(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.line[index] if index < len(self.line) else ""

    def _fail(self) -> ShellSyntaxError:
        return _syntax_error(self.line, self.pos)

    def _skip_spaces(self) -> None:
        while self._char() == " ":
            self.pos += 1

    def _quoted(self) -> None:
        quote = self._char()
        self.pos += 1
        while self._char() and self._char() != quote:
            if self._char() == "\\":
                if not self._char(1):
                    self.pos += 1
                    raise self._fail()
                self.pos += 2
                continue
            self.pos += 1
        if not self._char():
            raise self._fail()

    def _argument(self) -> bool:
        validated = False
        while (ch := self._char()) and ch not in _ARGUMENT_STOP:
            validated = True
            if ch in "'\"":
                self._quoted()
            if self._char() == "\\":
                if not self._char(1):
                    self.pos += 1
                    raise self._fail()
                self.pos += 2
                continue
            self.pos += 1
        ch = self._char()
        if ch and ch in "()":
            raise self._fail()
        return validated

    def _command(self) -> bool:
        started = False
        while (ch := self._char()) and ch not in ";|":
            started = True
            if ch == " ":
                self._skip_spaces()
                continue
            if ch in "<>":
                self.pos += 2 if ch == ">" and self._char(1) == ">" else 1
                self._skip_spaces()
            if not self._argument():
                raise self._fail()
        return started

    def run(self) -> None:
        while ch := self._char():
            if ch == " ":
                self._skip_spaces()
                continue
            if not self._command():
                raise self._fail()
            if self._char() in ("|", ";"):
                self.pos += 1
                if not self._char() and self.line[self.pos - 1] != ";":
                    raise self._fail()


def validate_line(line: str) -> None:
    """Raise ShellSyntaxError if ``line`` is not a well-formed command line."""
    _Validator(line).run()