"""Data structures describing parsed commands."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

BUILTIN_NAMES = frozenset({"exit", "echo", "cd", "unset", "export", "env", "pwd"})


class RedirectKind(enum.IntEnum):
    """Direction and mode of a redirection."""

    INPUT = 0
    TRUNCATE = 1
    APPEND = 2


class Separator(enum.IntEnum):
    """What follows a command on the line."""

    NONE = -1
    END = 0
    PIPE = 1
    SEMICOLON = 2


@dataclass
class Redirect:
    """A single file redirection attached to a command."""

    filename: str
    kind: RedirectKind
    ambiguous: bool = False

    @property
    def is_output(self) -> bool:
        return self.kind != RedirectKind.INPUT


def is_builtin_name(name: str | None) -> bool:
    """Return whether ``name`` names a builtin command."""
    return name in BUILTIN_NAMES


@dataclass
class Command:
    """One simple command with its arguments and redirections."""

    argv: list[str] = field(default_factory=list)
    redirects: list[Redirect] = field(default_factory=list)
    separator: Separator = Separator.NONE
    executable: str | None = None
    file_write: str | None = None
    file_read: str | None = None
    corrupted: bool = False
    write_corrupted: bool = False
    read_corrupted: bool = False

    @property
    def name(self) -> str | None:
        """The command name, or None when there are no arguments."""
        return self.argv[0] if self.argv else None

    def is_builtin(self) -> bool:
        return is_builtin_name(self.name)