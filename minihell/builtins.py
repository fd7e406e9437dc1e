"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from minihell.envp import (
    get_env_value,
    get_var_name,
    get_var_value,
    set_env_value,
    unset_env_value,
)
from minihell.types import GREY, RESET, ShellState

BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})

_DIGITS = "0123456789"


def _stream(stream: TextIO | None) -> TextIO:
    return stream if stream is not None else sys.stdout


def is_a_builtin(command: str | None) -> bool:
    """Tell whether ``command`` names a builtin."""
    return command in BUILTINS


def echo(arguments: Sequence[str], stream: TextIO | None = None) -> int:
    """Print the arguments separated by spaces; ``-n`` first drops the newline.

    With no arguments at all a lone newline is printed and 1 is returned.
    """
    out = _stream(stream)
    if not arguments:
        out.write("\n")
        return 1
    words = list(arguments)
    newline = True
    if words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def env(envp: Sequence[str] | None, stream: TextIO | None = None) -> int:
    """Print every environment entry except the exit-status variable."""
    out = _stream(stream)
    for entry in envp or ():
        if not entry.startswith("?"):
            out.write(f"{entry}\n")
    return 0


def _set_export(var: str, state: ShellState) -> None:
    name = get_var_name(var)
    value = get_var_value(var)
    if name is not None and value is not None:
        state.envp = set_env_value(name, value, state.envp)


def export(args: Sequence[str], state: ShellState, stream: TextIO | None = None) -> int:
    """Set each ``NAME=value`` argument in the environment of ``state``."""
    out = _stream(stream)
    if len(args) == 1:
        return 1
    status = 0
    for arg in args[1:]:
        if arg == "" or arg.startswith("="):
            out.write(f"{GREY}minishell: export: `{arg}': ")
            out.write(f"not a valid identifier\n{RESET}")
            status = 1
        else:
            _set_export(arg, state)
    return status


def unset(name: str | None, state: ShellState) -> int:
    """Remove ``name`` from the environment of ``state``."""
    if name is not None:
        remaining = unset_env_value(name, state.envp)
        if remaining is not None:
            state.envp = remaining
    return 0


def _cd_to_home(state: ShellState, out: TextIO) -> int:
    home = get_env_value("HOME", state.envp)
    if home is None:
        out.write(f"{GREY}minishell: cd : HOME not set\n{RESET}")
        return 1
    try:
        os.chdir(home)
    except OSError:
        out.write(f"{GREY}minishell: cd: {home}: No such file or directory\n{RESET}")
        return 1
    return 0


def cd(args: Sequence[str], state: ShellState, stream: TextIO | None = None) -> int:
    """Change the working directory; no argument or ``~`` goes to ``HOME``."""
    out = _stream(stream)
    if len(args) > 2:
        out.write(f"{GREY}minishell: cd : too many arguments\n{RESET}")
        return 1
    if len(args) < 2 or args[1] == "~":
        return _cd_to_home(state, out)
    try:
        os.chdir(args[1])
    except OSError:
        out.write(
            f"{GREY}minishell: cd: {args[1]}: No such file or directory\n{RESET}"
        )
        return 1
    return 0


def pwd(stream: TextIO | None = None) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        return 1
    _stream(stream).write(f"{cwd}\n")
    return 0


def parse_exit_code(exit_code: str | None) -> int:
    """Read the argument of ``exit``; anything not an integer counts as 0."""
    if exit_code is None:
        return 0
    digits = exit_code[1:] if exit_code.startswith("-") else exit_code
    if any(ch not in _DIGITS for ch in digits):
        return 0
    if not digits:
        return 0
    return int(exit_code)


def minishell_exit(exit_code: str | None) -> None:
    """Leave the shell with the status given by ``exit_code``."""
    raise SystemExit(parse_exit_code(exit_code) % 256)