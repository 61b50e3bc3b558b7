"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import TextIO

from .env import Environment
from .errors import ExitRequested, ShellError
from .state import Command


def builtin_echo(args: Sequence[str], out: TextIO) -> int:
    """Print ``args`` separated by spaces; leading ``-n`` words drop the newline."""
    words = list(args)
    newline = True
    while words and words[0] == "-n":
        newline = False
        words.pop(0)
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    out.flush()
    return 0


def _save_oldpwd(env: Environment) -> None:
    """Copy the current ``PWD`` value into an existing ``OLDPWD`` entry."""
    current_dir = env.lookup("PWD")
    if current_dir is not None and "OLDPWD" in env:
        env.define(f"OLDPWD={current_dir}")


def _store_newpwd(env: Environment) -> None:
    """Record the working directory in an existing ``PWD`` entry."""
    try:
        directory = os.getcwd()
    except OSError as exc:
        raise ShellError(os.strerror(exc.errno or 1), exc.errno or 1) from exc
    if env.lookup("PWD") is not None:
        env.define(f"PWD={directory}")


def _cd_failed(args: Sequence[str], err: TextIO) -> int:
    if args:
        err.write(f"cd: {args[0]}: No such file or directory\n")
    else:
        err.write("cd: HOME not set")
    err.flush()
    return 1


def builtin_cd(env: Environment, args: Sequence[str], err: TextIO) -> int:
    """Change directory to ``args[0]`` or to ``HOME``, updating PWD and OLDPWD."""
    if not args:
        _save_oldpwd(env)
        home = env.home()
        if home is None:
            return _cd_failed(args, err)
        try:
            os.chdir(home)
        except OSError:
            return _cd_failed(args, err)
        _store_newpwd(env)
        return 0
    try:
        os.chdir(args[0])
    except OSError:
        return _cd_failed(args, err)
    _save_oldpwd(env)
    _store_newpwd(env)
    return 0


def builtin_env(env: Environment, out: TextIO) -> int:
    """Print every entry that carries a value."""
    for entry in env:
        if "=" in entry:
            out.write(f"{entry}\n")
    out.flush()
    return 0


def _is_ascii_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_valid_identifier(word: str) -> bool:
    if not word or not (_is_ascii_alpha(word[0]) or word[0] == "_"):
        return False
    name = word.split("=", 1)[0]
    return all(ch.isascii() and (ch.isalnum() or ch == "_") for ch in name)


def export_listing(env: Environment) -> str:
    """Return the sorted ``declare -x`` listing that ``export`` prints."""
    lines = []
    for entry in sorted(env.entries(), key=lambda e: e.encode("utf-8")):
        if not entry or not _is_ascii_alpha(entry[0]):
            continue
        if "=" in entry:
            name, value = entry.split("=", 1)
            lines.append(f'declare -x {name}="{value}"\n')
        else:
            lines.append(f"declare -x {entry}\n")
    return "".join(lines)


def builtin_export(
    env: Environment, args: Sequence[str], out: TextIO, err: TextIO
) -> int:
    """Define each valid ``NAME[=value]``; with no arguments, list the environment."""
    if not args:
        out.write(export_listing(env))
        out.flush()
        return 0
    status = 0
    for word in args:
        if _is_valid_identifier(word):
            env.define(word)
        else:
            err.write(f"export: `{word}': not a valid identifier\n")
            status = 1
    err.flush()
    return status


def builtin_pwd(out: TextIO) -> int:
    """Print the working directory."""
    try:
        directory = os.getcwd()
    except OSError:
        return 1
    out.write(f"{directory}\n")
    out.flush()
    return 0


def builtin_unset(env: Environment, args: Sequence[str]) -> int:
    """Remove each named variable."""
    for name in args:
        env.remove(name)
    return 0


def _dispatch(name: str, args: list[str], env: Environment, out: TextIO, err: TextIO) -> int:
    if name == "echo":
        return builtin_echo(args, out)
    if name == "cd":
        return builtin_cd(env, args, err)
    if name == "unset":
        return builtin_unset(env, args)
    if name == "export":
        return builtin_export(env, args, out, err)
    if name == "env":
        return builtin_env(env, out)
    if name == "pwd":
        return builtin_pwd(out)
    return 0


def run_builtin(command: Command, env: Environment, out: TextIO, err: TextIO) -> int:
    """Run a builtin command and return 1 if it failed, 0 otherwise."""
    if command.corrupted:
        return 1
    name = command.name
    if name == "exit":
        err.write("exit\n")
        err.flush()
        raise ExitRequested(0)
    args = command.argv[1:]
    if command.file_write and not command.write_corrupted:
        try:
            fd = os.open(command.file_write, os.O_WRONLY | os.O_APPEND)
        except OSError as exc:
            code = exc.errno or 1
            err.write(os.strerror(code))
            err.flush()
            raise ExitRequested(code) from exc
        with open(fd, "a", encoding="utf-8") as target:
            status = _dispatch(name or "", args, env, target, err)
    else:
        status = _dispatch(name or "", args, env, out, err)
    return 1 if status else 0