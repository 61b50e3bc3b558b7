"""The shell's ordered environment of ``NAME=value`` entries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def _entry_name(entry: str) -> str:
    return entry.split("=", 1)[0]


class Environment:
    """An ordered list of environment entries, as the shell keeps them.

    Entries are either ``NAME=value`` or a bare ``NAME`` (exported but unset).
    """

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: list[str] = list(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Environment":
        return cls(f"{key}={value}" for key, value in mapping.items())

    def lookup(self, name: str) -> str | None:
        """Return the value of the first ``name=`` entry, or None."""
        prefix = f"{name}="
        for entry in self._entries:
            if entry.startswith(prefix):
                return entry[len(prefix):]
        return None

    def define(self, entry: str) -> None:
        """Replace the entry with the same name, or append a new one."""
        name = _entry_name(entry)
        for index, existing in enumerate(self._entries):
            if _entry_name(existing) == name:
                self._entries[index] = entry
                return
        self._entries.append(entry)

    def remove(self, name: str) -> bool:
        """Remove the entry called ``name``; return whether one was removed."""
        for index, existing in enumerate(self._entries):
            if _entry_name(existing) == name:
                del self._entries[index]
                return True
        return False

    def entries(self) -> list[str]:
        return list(self._entries)

    def to_environ(self) -> dict[str, str]:
        """Return the entries that carry a value, as a mapping for child processes."""
        environ: dict[str, str] = {}
        for entry in self._entries:
            if "=" in entry:
                key, value = entry.split("=", 1)
                environ.setdefault(key, value)
        return environ

    def home(self) -> str | None:
        return self.lookup("HOME")

    def __iter__(self):
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(_entry_name(e) == name for e in self._entries)