"""Running the commands of a parsed pipeline."""

from __future__ import annotations

import io
import os
import subprocess
import sys
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import ExitStack
from typing import TextIO

from minihell.builtins import cd, echo, env, export, minishell_exit, pwd, unset
from minihell.envp import get_env_value, get_var_name, get_var_value
from minihell.types import COMMAND_NOT_FOUND, GREY, RESET, Command, ShellState

STDIN_FILENO = 0

# Builtins that change the shell itself and so run in the shell's own process.
_PARENT_BUILTINS = frozenset({"cd", "export", "unset"})
# Builtins that only produce output and so run where a program would.
_CHILD_BUILTINS = frozenset({"echo", "pwd", "env"})


def execute_builtin(
    cmd: Command, state: ShellState, stream: TextIO | None = None
) -> int:
    """Run the builtin named by ``cmd`` and record its exit code in ``state``."""
    out = stream if stream is not None else state.out
    args = cmd.args
    exit_code = 0
    if cmd.command == "echo":
        exit_code = echo(args[1:], out)
    elif cmd.command == "cd":
        exit_code = cd(args, state, out)
    elif cmd.command == "pwd":
        exit_code = pwd(out)
    elif cmd.command == "export":
        exit_code = export(args, state, out)
    elif cmd.command == "unset":
        exit_code = unset(args[1] if len(args) > 1 else None, state)
    elif cmd.command == "env":
        exit_code = env(state.envp, out)
    state.record_exit_code(exit_code)
    return exit_code


def get_cmd_paths(envp: Sequence[str] | None) -> list[str] | None:
    """Return the directories of ``PATH``, each ending in ``/``, or None."""
    paths = get_env_value("PATH", envp)
    if paths is None:
        return None
    return [f"{directory}/" for directory in paths.split(":") if directory]


def save_last_exit_code(state: ShellState, returncode: int) -> None:
    """Record the status of a finished command unless a signal ended it."""
    if returncode >= 0:
        state.record_exit_code(returncode)


def _environment(envp: Sequence[str]) -> dict[str, str]:
    result: dict[str, str] = {}
    for entry in envp:
        name = get_var_name(entry)
        value = get_var_value(entry)
        if name is not None and value is not None:
            result[name] = value
    return result


def _candidates(command: Command, envp: Sequence[str]) -> Iterator[str]:
    if "/" in command.command:
        yield command.command
    for directory in get_cmd_paths(envp) or ():
        yield directory + command.command


def _launch(command: Command, state: ShellState, stdin, stdout) -> int | None:
    """Start the program of ``command``; None if no candidate could be run."""
    argv = list(command.args) or [command.command]
    environment = _environment(state.envp)
    sys.stdout.flush()
    for path in _candidates(command, state.envp):
        try:
            completed = subprocess.run(
                argv,
                executable=path,
                stdin=stdin,
                stdout=stdout,
                env=environment,
                check=False,
            )
        except OSError:
            continue
        return completed.returncode
    return None


def _command_not_found(name: str) -> None:
    sys.stderr.write(f"{GREY}minishell: {name} : command not found\n{RESET}")
    sys.stderr.flush()


def _run_builtin(command: Command, state: ShellState, stdout_fd: int | None) -> None:
    buffer = io.StringIO()
    execute_builtin(command, state, buffer)
    text = buffer.getvalue()
    if stdout_fd is None:
        state.out.write(text)
        state.out.flush()
    else:
        os.write(stdout_fd, text.encode())


def _run_command(
    command: Command, state: ShellState, pipe_in: int, stdout_fd: int | None
) -> int:
    """Run one command the way a forked child would and return its status."""
    if command.command in _CHILD_BUILTINS:
        _run_builtin(command, state, stdout_fd)
        return 0
    stdin_fd = command.infile.fd if command.infile is not None else pipe_in
    stdin = stdin_fd if stdin_fd >= 0 else subprocess.DEVNULL
    returncode = _launch(command, state, stdin, stdout_fd)
    if returncode is None:
        _command_not_found(command.command)
        return COMMAND_NOT_FOUND
    return returncode


def execution_process(state: ShellState) -> None:
    """Run every command of ``state.command_list`` in order.

    ``exit`` leaves the shell at once. ``cd``, ``export`` and ``unset`` act on
    the shell itself. A command that is last or has an output file writes
    there; any other command feeds its output to the next one.
    """
    commands = state.command_list
    with ExitStack() as stack:
        pipe_in = STDIN_FILENO
        for index, command in enumerate(commands):
            if command.command == "exit":
                minishell_exit(command.args[1] if len(command.args) > 1 else None)
            if command.command in _PARENT_BUILTINS:
                execute_builtin(command, state)
                continue
            is_last = index == len(commands) - 1
            if is_last or command.outfile is not None:
                stdout_fd = command.outfile.fd if command.outfile is not None else None
                save_last_exit_code(
                    state, _run_command(command, state, pipe_in, stdout_fd)
                )
            else:
                buffer = stack.enter_context(tempfile.TemporaryFile())
                save_last_exit_code(
                    state, _run_command(command, state, pipe_in, buffer.fileno())
                )
                os.lseek(buffer.fileno(), 0, os.SEEK_SET)
                pipe_in = buffer.fileno()