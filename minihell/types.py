"""Core data types and shared state of the shell."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TextIO

from minihell.envp import set_env_value

COMMAND_NOT_FOUND = 127
EMPTY_INFILE = "/tmp/empty_infile"
TMP_OUTFILE = "/tmp/discarded"
HEREDOC_PATH = "/tmp/herecdoc_minihell"

GREY = "\033[0;90m"
RESET = "\033[0m"

EXIT_STATUS_VAR = "?"


class FileType(Enum):
    """Kind of redirection a file takes part in."""

    COMMON_FILE_IN = auto()
    COMMON_FILE_OUT = auto()
    APPEND_FILE = auto()
    HEREDOC_FILE = auto()


@dataclass
class RedirectFile:
    """A file named in a redirection, with the descriptor opened for it."""

    path: str
    fd: int = 0
    type: FileType = FileType.COMMON_FILE_IN


@dataclass
class Command:
    """One simple command of a pipeline."""

    command: str = ""
    args: list[str] = field(default_factory=list)
    infile: RedirectFile | None = None
    outfile: RedirectFile | None = None


@dataclass
class ShellState:
    """Everything the shell keeps between two prompts."""

    envp: list[str] = field(default_factory=list)
    current_path: str = ""
    last_exit_code: int = 0
    command_list: list[Command] = field(default_factory=list)
    temp_infile: RedirectFile | None = None
    temp_outfile: RedirectFile | None = None
    stdout: TextIO | None = None

    @property
    def out(self) -> TextIO:
        """The stream messages are written to."""
        return self.stdout if self.stdout is not None else sys.stdout

    def error(self, message: str, exit_code: int) -> int:
        """Report an error, remember its exit code and return it."""
        self.out.write(f"{GREY}minishell: {message}\n{RESET}")
        self.last_exit_code = exit_code
        return exit_code

    def record_exit_code(self, exit_code: int) -> None:
        """Remember an exit code and publish it as the ``?`` variable."""
        self.last_exit_code = exit_code
        self.envp = set_env_value(EXIT_STATUS_VAR, str(exit_code), self.envp)