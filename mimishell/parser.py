"""Splitting a line into commands, arguments and redirections."""

from __future__ import annotations

from .expand import LineCursor
from .prompt import is_name_char
from .state import Command, Redirect, RedirectKind, Separator
from .validate import _syntax_error

_ARGUMENT_STOP = "|><; "
_SEPARATORS = {"": Separator.END, ";": Separator.SEMICOLON, "|": Separator.PIPE}


def make_argument(cursor: LineCursor, redirect: bool = False) -> str | None:
    """Read one word at the cursor, expanding it; None if there is no word."""
    start = cursor.pos
    filled = False
    while (ch := cursor.current()) and ch not in _ARGUMENT_STOP:
        filled = True
        if ch in "()":
            raise _syntax_error(cursor.text, cursor.pos)
        if ch == "'":
            cursor.skip_single_quote()
        elif ch == '"':
            cursor.skip_double_quote(redirect)
        elif ch == "$":
            cursor.expand_dollar(False, redirect)
        elif ch == "\\":
            cursor.skip_backslashes()
        else:
            cursor.pos += 1
    return cursor.text[start:cursor.pos] if filled else None


def _raw_word_end(text: str, start: int) -> int:
    """Where the unexpanded redirection target starting at ``start`` ends."""
    index = start
    length = len(text)
    while index < length and text[index] not in " |;":
        if text[index] == "$" and index + 1 < length and is_name_char(text[index + 1]):
            index += 1
            while index < length and is_name_char(text[index]):
                index += 1
            if index >= length or text[index] in "|; ":
                return index
        if index < length and text[index] == '"':
            index += 1
            while index < length and text[index] != '"':
                index += 2 if text[index] == "\\" and index + 1 < length else 1
        index += 2 if index < length and text[index] == "\\" and index + 1 < length else 1
    return index


def parse_redirect(cursor: LineCursor, command: Command) -> Redirect:
    """Read a redirection at the cursor and attach it to ``command``."""
    if cursor.current() == "<":
        kind, width = RedirectKind.INPUT, 1
    elif cursor.text[cursor.pos + 1:cursor.pos + 2] == ">":
        kind, width = RedirectKind.APPEND, 2
    else:
        kind, width = RedirectKind.TRUNCATE, 1
    cursor.text = cursor.text[:cursor.pos] + cursor.text[cursor.pos + width:]
    cursor.skip_spaces()
    raw = cursor.text[cursor.pos:_raw_word_end(cursor.text, cursor.pos)]
    filename = make_argument(cursor, True)
    if filename is None:
        raise _syntax_error(cursor.text, cursor.pos)
    if not filename or cursor.ambiguous_redirect:
        cursor.ambiguous_redirect = True
        filename = raw
    redirect = Redirect(filename, kind, cursor.ambiguous_redirect)
    command.redirects.append(redirect)
    cursor.ambiguous_redirect = False
    return redirect


def parse_command(cursor: LineCursor) -> Command:
    """Parse the next command on the line, up to and including its separator."""
    command = Command()
    while (ch := cursor.current()) and ch not in "|;":
        if ch == " ":
            cursor.skip_spaces()
            continue
        if ch in "<>":
            parse_redirect(cursor, command)
            continue
        argument = make_argument(cursor, False)
        if argument is None:
            raise _syntax_error(cursor.text, cursor.pos)
        command.argv.append(argument)
    ch = cursor.current()
    command.separator = _SEPARATORS[ch]
    if ch:
        cursor.pos += 1
    if not command.argv and not command.redirects:
        raise _syntax_error(cursor.text, cursor.pos)
    return command