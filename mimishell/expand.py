"""Quote removal, escape handling and variable expansion on a line."""

from __future__ import annotations

from .env import Environment
from .errors import ShellError
from .prompt import is_name_char
from .validate import _syntax_error

_STATUS_MODULUS = 262144
_DIGITS = "0123456789"


class LineCursor:
    """A line being parsed in place, with the position reached so far.

    Expansion edits ``text`` directly, as the parser walks over it.
    """

    def __init__(self, text: str, env: Environment, last_status: int = 0) -> None:
        self.text = text
        self.pos = 0
        self.env = env
        self.last_status = last_status
        self.ambiguous_redirect = False

    def current(self) -> str:
        """The character at the cursor, or an empty string at the end."""
        return self._at(self.pos)

    def _at(self, index: int) -> str:
        return self.text[index] if 0 <= index < len(self.text) else ""

    def _delete(self, start: int, count: int = 1) -> None:
        self.text = self.text[:start] + self.text[start + count:]

    def _insert(self, value: str) -> None:
        self.text = self.text[:self.pos] + value + self.text[self.pos:]

    def skip_spaces(self) -> int:
        """Advance over spaces and return how many were skipped."""
        start = self.pos
        while self.current() == " ":
            self.pos += 1
        return self.pos - start

    def skip_backslashes(self) -> None:
        """Collapse a run of backslashes; an odd one escapes the next character."""
        end = self.pos
        while self._at(end) == "\\":
            end += 1
        total = end - self.pos
        odd = total % 2 == 1
        if odd and not self._at(end):
            raise ShellError("missing escape sequence character", 1)
        kept = total // 2
        self._delete(self.pos, kept)
        self.pos += kept
        if odd:
            self._delete(self.pos)
            self.pos += 1

    def skip_double_quote(self, redirect: bool = False) -> None:
        """Remove a double-quoted section's quotes, expanding inside it."""
        self._delete(self.pos)
        while (ch := self.current()) and ch != '"':
            if ch == "$":
                self.expand_dollar(True, redirect)
                continue
            if ch == "\\":
                self.skip_backslashes()
                continue
            self.pos += 1
        if not self.current():
            raise _syntax_error(self.text, self.pos)
        self._delete(self.pos)

    def skip_single_quote(self) -> None:
        """Remove a single-quoted section's quotes, leaving its text verbatim."""
        close = self.text.find("'", self.pos + 1)
        if close == -1:
            raise ShellError("unclosed single quote", 1)
        self._delete(close)
        self._delete(self.pos)
        self.pos = close - 1

    def _name_end(self) -> int:
        index = self.pos + 1
        while index < len(self.text):
            ch = self.text[index]
            if index - self.pos == 1 and (ch == "?" or ch in _DIGITS):
                index += 1
                break
            if not is_name_char(ch):
                break
            index += 1
        return index

    def _insert_status(self) -> None:
        status = self.last_status
        if status < 0:
            status += _STATUS_MODULUS
        status = status % _STATUS_MODULUS if status >= 0 else -(-status % _STATUS_MODULUS)
        self.last_status = status
        digits = str(status)
        self.text = self.text[:self.pos] + digits + self.text[self.pos + 2:]
        self.pos += len(digits)

    def _finish_ambiguous(self) -> None:
        self.ambiguous_redirect = True
        while (ch := self.current()) and ch not in " ;|()":
            if ch in "'\"":
                self.pos += 1
                while (inner := self.current()) and inner != ch:
                    if inner == "\\":
                        if not self._at(self.pos + 1):
                            self.pos += 1
                            raise _syntax_error(self.text, self.pos)
                        self.pos += 1
                    self.pos += 1
                if not self.current():
                    raise _syntax_error(self.text, self.pos)
            self.pos += 1
        ch = self.current()
        if ch and ch in "()":
            raise _syntax_error(self.text, self.pos)

    def expand_dollar(self, in_quotes: bool = False, redirect: bool = False) -> None:
        """Expand the ``$`` at the cursor in place.

        Outside quotes the value is trimmed of spaces and left under the
        cursor to be scanned again; inside quotes the cursor moves past it.
        """
        end = self._name_end()
        length = end - self.pos
        if length == 1:
            self.pos += 1
            return
        if length == 2 and self.text[end - 1] == "?":
            self._insert_status()
            return
        value = self.env.lookup(self.text[self.pos + 1:end])
        if value is not None and not in_quotes:
            value = value.strip(" ")
            if redirect and " " in value:
                self.pos = end
                self._finish_ambiguous()
                return
        self._delete(self.pos, length)
        if value:
            self._insert(value)
            if in_quotes:
                self.pos += len(value)