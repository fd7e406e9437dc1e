# minihell

The core of a small POSIX-style shell, as a Python library. The shell's
environment is a list of `NAME=value` strings. The package provides the usual
builtins and opens input and output redirections, here-documents included. It
also runs a list of already parsed commands as a pipeline.

## Modules

### `minihell.types`

- `FileType` is an enum of the kinds of redirection: `COMMON_FILE_IN`,
  `COMMON_FILE_OUT`, `APPEND_FILE` and `HEREDOC_FILE`.
- `RedirectFile` is a dataclass holding a `path`, the `fd` opened for it and
  its `type`.
- `Command` is a dataclass for one command of a pipeline: `command`, `args`,
  and optional `infile` and `outfile`.
- `ShellState` is a dataclass that holds the state of the shell:
  - `envp`, `last_exit_code` and `command_list`;
  - `temp_infile`, whose descriptor stands in for a redirection file that
    cannot be opened;
  - `stdout`, an optional stream for messages, which defaults to
    `sys.stdout`.

  It has two methods. `ShellState.error(message, exit_code)` prints
  `minishell: <message>`, stores the exit code and returns it.
  `ShellState.record_exit_code(exit_code)` stores the exit code and sets the
  `?` variable in `envp`.
- The module also holds the constants `COMMAND_NOT_FOUND` (127), `HEREDOC_PATH`
  and `TMP_OUTFILE`.

### `minihell.envp`

- `get_var_name(string)` returns the text before the first `=`.
- `get_var_value(string)` returns the text after the first `=`.
- Both return `None` when the string has no `=`.
- `get_env_value(name, envp)` looks up a variable.
- `set_env_value(name, value, envp)` returns a new list. Any earlier entry
  with that name is dropped, and `NAME=value` is appended at the end.
- `unset_env_value(name, envp)` returns a new list without the entries that
  have that name.
- The list passed in is never changed.

### `minihell.builtins`

- `is_a_builtin(command)` is true for `echo`, `cd`, `pwd`, `export`, `unset`,
  `env` and `exit`.
- `echo(arguments, stream)` prints its arguments separated by spaces.
  - A first argument of `-n` suppresses the final newline.
  - With no arguments it prints a lone newline and returns 1.
- `env(envp, stream)` prints every entry except the `?` variable.
- `export(args, state, stream)` sets each `NAME=value` argument in
  `state.envp`.
  - `args[0]` is the command name. With no further arguments it returns 1.
  - An empty argument, or one that begins with `=`, is reported as
    "not a valid identifier". The remaining arguments are still processed and
    the result is 1.
  - Arguments without `=` are ignored.
- `unset(name, state)` removes one variable.
- `cd(args, state, stream)` changes the working directory.
  - With no argument, or with `~`, it goes to `$HOME`.
  - More than one argument, a missing `HOME` or a directory that cannot be
    entered prints a message and returns 1.
- `pwd(stream)` prints the working directory.
- `parse_exit_code(exit_code)` reads the argument of `exit`. It accepts an
  optional leading `-` followed by digits. Anything else gives 0.
- `minishell_exit(exit_code)` raises `SystemExit` with that code taken
  modulo 256.

### `minihell.files`

`file_manager(file, state, read_line)` opens a single `RedirectFile` and
stores the descriptor in `file.fd`:

- input files are opened read-only;
- output files are opened truncated, created with mode 0644 if needed;
- append files are opened for appending;
- a here-document calls `read_line("> ")` until it returns the limiter (the
  file's path) or `None`. The lines are appended to `HEREDOC_PATH`, and that
  file is then opened for reading. `read_line` defaults to `input`.

A file that cannot be opened is reported as "No such file or directory" or
"Permission denied". Its descriptor is then replaced by that of
`state.temp_infile`, or -1 if that is not set.

`init_files(state, read_line)` opens the redirections of every command in
`state.command_list`. If the first command has no input redirection, it is
given standard input.

`delete_temporary_files()` removes `TMP_OUTFILE` and `HEREDOC_PATH`.

### `minihell.execution`

- `execute_builtin(cmd, state, stream)` runs `echo`, `cd`, `pwd`, `export`,
  `unset` or `env` and records the exit code in `state`.
- `get_cmd_paths(envp)` returns the non-empty directories of `PATH`, each
  ending in `/`. It returns `None` when `PATH` is unset.
- `save_last_exit_code(state, returncode)` records a status. A negative
  return code, meaning the command was ended by a signal, is ignored.
- `execution_process(state)` runs `state.command_list` in order:
  - `exit` raises `SystemExit` straight away;
  - `cd`, `export` and `unset` act on `state` itself;
  - `echo`, `pwd` and `env` run in-process and write to their output target;
  - any other command is started as a program:
    - a name containing `/` is tried as given first;
    - then every `PATH` directory is tried in turn;
    - the program gets the environment built from `state.envp`.
  - If no program can be started, `minishell: <name> : command not found`
    goes to standard error and the status is 127.
  - A command with no input redirection reads the output of the command
    before it. The first command reads standard input.
  - A command that is last, or that has an output file, writes there.
  - Any other command writes into a temporary file, which becomes the input of
    the next command.

## Example

```python
import io

from minihell.builtins import echo, is_a_builtin
from minihell.envp import get_env_value, set_env_value, unset_env_value

envp = ["HOME=/home/user", "PATH=/usr/bin:/bin"]
envp = set_env_value("GREETING", "hello", envp)
assert get_env_value("GREETING", envp) == "hello"

envp = unset_env_value("GREETING", envp)
assert get_env_value("GREETING", envp) is None

out = io.StringIO()
echo(["-n", "hello", "world"], out)
assert out.getvalue() == "hello world"

assert is_a_builtin("export")
assert not is_a_builtin("ls")
```

## What the package does not do

- There is no interactive prompt and no command to start.
- There is no tokenizer, quote handling, variable expansion or parser that
  turns a line of text into `Command` objects. Callers build the command list
  themselves.
- There is no signal handling.
- Commands in a pipeline run one after another rather than at the same time.
  Each command's output is collected in full before the next one starts.