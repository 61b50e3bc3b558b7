"""Prompt decoration and small character helpers."""

from __future__ import annotations

EMOJIS = (
    "😂", "🦆", "⛄️", "🎨", "🦄", "🍆", "🌪 ", "🍕", "🦔", "🍥",
    "😤", "👻", "🌞", "🤯", "🤪", "🤬", "😆", "😎", "🐥", "🌙",
    "🦖", "👾", "👹", "🤡", "🐋", "🐰", "🐢", "🌚", "💩",
)

_MASK = 0xFFFFFFFF


def _step(value: int) -> int:
    return (value * 1103515245 + 12345) & _MASK


class EmojiPicker:
    """Deterministic pseudo-random choice of the prompt emoji."""

    def __init__(self, seed: int = 0) -> None:
        self.state = seed & _MASK

    def next_index(self) -> int:
        value = _step(self.state)
        result = (value // 65536) % 2048
        value = _step(value)
        result = (result << 10) ^ ((value // 65536) % 1024)
        value = _step(value)
        result = (result << 10) ^ ((value // 65536) % 1024)
        self.state = value
        return result % len(EMOJIS)

    def next(self) -> str:
        return EMOJIS[self.next_index()]


def prompt_text(emoji: str) -> str:
    """Return the prompt shown before each line."""
    return f"{emoji} \33[1;35m mimishell: \33[0m"


def is_name_char(ch: str) -> bool:
    """Whether ``ch`` may appear in a variable name."""
    return len(ch) == 1 and ch.isascii() and (ch.isalnum() or ch == "_")


def is_single_variable(line: str, start: int) -> bool:
    """Whether the ``$NAME`` at ``start`` makes up the rest of its word."""
    index = start + 1
    while index < len(line) and is_name_char(line[index]):
        index += 1
    return index >= len(line) or line[index] in "|; "