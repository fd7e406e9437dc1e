import io
import os

import pytest

from minihell.builtins import (
    cd,
    echo,
    env,
    export,
    is_a_builtin,
    minishell_exit,
    parse_exit_code,
    pwd,
    unset,
)
from minihell.envp import get_env_value
from minihell.types import ShellState


@pytest.mark.parametrize(
    "name", ["echo", "cd", "pwd", "export", "unset", "env", "exit"]
)
def test_builtin_names(name):
    assert is_a_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "", "ech", "ECHO", None])
def test_not_builtin(name):
    assert is_a_builtin(name) is False


def test_echo_joins_with_spaces():
    out = io.StringIO()
    assert echo(["hello", "world"], out) == 0
    assert out.getvalue() == "hello world\n"


def test_echo_n_flag_drops_newline():
    out = io.StringIO()
    assert echo(["-n", "hi", "there"], out) == 0
    assert out.getvalue() == "hi there"


def test_echo_only_exact_n_is_flag():
    out = io.StringIO()
    echo(["-nn", "x"], out)
    assert out.getvalue() == "-nn x\n"


def test_echo_without_arguments():
    out = io.StringIO()
    assert echo([], out) == 1
    assert out.getvalue() == "\n"


def test_env_hides_exit_status():
    out = io.StringIO()
    assert env(["A=1", "?=0", "B=2"], out) == 0
    assert out.getvalue() == "A=1\nB=2\n"


def test_export_without_arguments_returns_one():
    state = ShellState(envp=["A=1"])
    assert export(["export"], state, io.StringIO()) == 1
    assert state.envp == ["A=1"]


def test_export_sets_variable():
    state = ShellState(envp=["A=1"])
    assert export(["export", "B=two", "A=3"], state, io.StringIO()) == 0
    assert get_env_value("B", state.envp) == "two"
    assert get_env_value("A", state.envp) == "3"


def test_export_invalid_identifier():
    state = ShellState(envp=["A=1"])
    out = io.StringIO()
    assert export(["export", "=x", "C=c"], state, out) == 1
    assert "`=x': not a valid identifier" in out.getvalue()
    assert get_env_value("C", state.envp) == "c"


def test_export_without_equal_sign_changes_nothing():
    state = ShellState(envp=["A=1"])
    assert export(["export", "NOVALUE"], state, io.StringIO()) == 0
    assert state.envp == ["A=1"]


def test_unset_removes_variable():
    state = ShellState(envp=["A=1", "B=2"])
    assert unset("A", state) == 0
    assert state.envp == ["B=2"]


def test_unset_none_keeps_env():
    state = ShellState(envp=["A=1"])
    unset(None, state)
    assert state.envp == ["A=1"]


def test_cd_too_many_arguments(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert cd(["cd", "a", "b"], ShellState(), out) == 1
    assert "too many arguments" in out.getvalue()
    assert os.getcwd() == str(tmp_path)


def test_cd_to_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    target.mkdir()
    assert cd(["cd", str(target)], ShellState(), io.StringIO()) == 0
    assert os.getcwd() == str(target)


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    missing = str(tmp_path / "missing")
    assert cd(["cd", missing], ShellState(), out) == 1
    assert f"{missing}: No such file or directory" in out.getvalue()


@pytest.mark.parametrize("args", [["cd"], ["cd", "~"]])
def test_cd_home(tmp_path, monkeypatch, args):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    state = ShellState(envp=[f"HOME={home}"])
    assert cd(args, state, io.StringIO()) == 0
    assert os.getcwd() == str(home)


def test_cd_home_not_set(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert cd(["cd"], ShellState(envp=[]), out) == 1
    assert "HOME not set" in out.getvalue()


def test_pwd_prints_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert pwd(out) == 0
    assert out.getvalue() == f"{tmp_path}\n"


@pytest.mark.parametrize(
    "text, expected",
    [(None, 0), ("42", 42), ("-3", -3), ("abc", 0), ("4a", 0), ("-", 0), ("", 0)],
)
def test_parse_exit_code(text, expected):
    assert parse_exit_code(text) == expected


def test_minishell_exit_raises_system_exit():
    with pytest.raises(SystemExit) as info:
        minishell_exit("5")
    assert info.value.code == 5


def test_minishell_exit_default_zero():
    with pytest.raises(SystemExit) as info:
        minishell_exit(None)
    assert info.value.code == 0