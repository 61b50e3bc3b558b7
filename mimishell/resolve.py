"""Finding the program a command name refers to."""

from __future__ import annotations

import os
import stat
from typing import TextIO

from .env import Environment
from .prompt import prompt_text
from .state import Command

NOT_FOUND_STATUS = 127
NOT_EXECUTABLE_STATUS = 126


def _readable(path: str) -> bool:
    """Whether ``path`` can be opened for reading."""
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def search_path(name: str, path: str) -> str | None:
    """Return the first ``folder/name`` from the colon list ``path`` that opens."""
    folders = path.split(":")
    if folders[-1] == "":
        folders.pop()
    for folder in folders:
        candidate = f"{folder}/{name}"
        if _readable(candidate):
            return candidate
    return None


def _complain(err: TextIO, emoji: str, name: str, reason: str) -> None:
    err.write(f"{prompt_text(emoji)}{name}: {reason}\n")
    err.flush()


def _check_executable(command: Command, err: TextIO, emoji: str) -> int:
    name = command.name or ""
    try:
        info = os.stat(name)
    except OSError:
        return 0
    if info.st_mode & stat.S_IXUSR and stat.S_ISDIR(info.st_mode):
        _complain(err, emoji, name, "Is a directory")
        command.corrupted = True
        return NOT_EXECUTABLE_STATUS
    if stat.S_ISREG(info.st_mode) and not info.st_mode & stat.S_IXUSR:
        _complain(err, emoji, name, "Permission denied")
        command.corrupted = True
        return NOT_EXECUTABLE_STATUS
    return 0


def _not_found(command: Command, err: TextIO, emoji: str, reason: str) -> int:
    _complain(err, emoji, command.name or "", reason)
    command.corrupted = True
    return NOT_FOUND_STATUS


def resolve_command(command: Command, env: Environment, err: TextIO, emoji: str) -> int:
    """Find the program for ``command``.

    Sets ``command.executable`` when the name was found on ``PATH``; on
    failure reports it, marks the command corrupted and returns its status.
    """
    name = command.name
    if name is None:
        return 0
    builtin = command.is_builtin()
    if builtin and name != "env":
        return 0
    path = env.lookup("PATH")
    if path is not None and name and not builtin and "/" not in name:
        found = search_path(name, path) if path else None
        if found is None:
            return _not_found(command, err, emoji, "command not found")
        command.executable = found
        return 0
    if not builtin:
        if _readable(name):
            return _check_executable(command, err, emoji)
        return _not_found(command, err, emoji, "No such file or directory")
    if path is None:
        return _not_found(command, err, emoji, "No such file or directory")
    return 0