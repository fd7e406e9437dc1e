"""Opening the files that redirections name."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Callable

from minihell.types import (
    HEREDOC_PATH,
    TMP_OUTFILE,
    GREY,
    RESET,
    FileType,
    RedirectFile,
    ShellState,
)

ReadLine = Callable[[str], "str | None"]

STDIN_FILENO = 0
_MODE = 0o644


def _prompt_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _open(path: str, flags: int) -> int:
    try:
        return os.open(path, flags, _MODE)
    except OSError:
        return -1


def _read_heredoc(fd: int, limiter: str, read_line: ReadLine) -> int:
    with os.fdopen(fd, "w", closefd=True) as handle:
        while True:
            line = read_line("> ")
            if line is None or line == limiter:
                break
            handle.write(f"{line}\n")
    return _open(HEREDOC_PATH, os.O_RDONLY)


def _fallback_fd(state: ShellState) -> int:
    return state.temp_infile.fd if state.temp_infile is not None else -1


def _file_error_message(file: RedirectFile, state: ShellState) -> None:
    out = state.out
    if file.type is FileType.COMMON_FILE_IN:
        if not os.access(file.path, os.F_OK):
            out.write(f"{GREY}minishell: {file.path} : No such file or directory\n{RESET}")
        elif not os.access(file.path, os.R_OK):
            out.write(f"{GREY}minishell: {file.path} : Permission denied\n{RESET}")
    elif not os.access(file.path, os.W_OK):
        out.write(f"{GREY}minishell: {file.path} : Permission denied\n{RESET}")
    file.fd = _fallback_fd(state)


def file_manager(
    file: RedirectFile | None,
    state: ShellState,
    read_line: ReadLine | None = None,
) -> None:
    """Open ``file`` as its type requires and store the descriptor in it.

    A here-document is read line by line until its limiter and then opened
    for reading. A file that cannot be opened is reported and replaced by
    the descriptor of the shell's temporary input file.
    """
    if file is None:
        return
    if file.type is FileType.HEREDOC_FILE:
        fd = os.open(HEREDOC_PATH, os.O_WRONLY | os.O_CREAT | os.O_APPEND, _MODE)
        file.fd = _read_heredoc(fd, file.path, read_line or _prompt_line)
        return
    if file.type is FileType.COMMON_FILE_IN:
        file.fd = _open(file.path, os.O_RDONLY)
    elif file.type is FileType.COMMON_FILE_OUT:
        file.fd = _open(file.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC)
    elif file.type is FileType.APPEND_FILE:
        file.fd = _open(file.path, os.O_WRONLY | os.O_CREAT | os.O_APPEND)
    if file.fd == -1:
        _file_error_message(file, state)


def init_files(state: ShellState, read_line: ReadLine | None = None) -> None:
    """Open every redirection of the commands in ``state``.

    The first command reads standard input unless it redirects its input.
    """
    for index, command in enumerate(state.command_list):
        if command.infile is None and index == 0:
            command.infile = RedirectFile("", STDIN_FILENO, FileType.COMMON_FILE_IN)
        else:
            file_manager(command.infile, state, read_line)
        file_manager(command.outfile, state, read_line)


def delete_temporary_files() -> None:
    """Remove the temporary files the shell may have left behind."""
    for path in (TMP_OUTFILE, HEREDOC_PATH):
        with contextlib.suppress(OSError):
            os.unlink(path)