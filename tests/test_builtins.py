import io
import os

import pytest

from minish.builtins import (
    ShellExit,
    cd,
    echo,
    env,
    exit_shell,
    export,
    is_builtin,
    is_valid_identifier,
    pwd,
    run_builtin,
    unset,
)
from minish.environment import Environment, ShellState


@pytest.fixture
def state():
    return ShellState(env=Environment(["A=1", "B=2"]), exit_code=0)


@pytest.mark.parametrize("name", ["echo", "cd", "pwd", "export", "unset", "env", "exit"])
def test_is_builtin_true(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "", None, "ECHO"])
def test_is_builtin_false(name):
    assert is_builtin(name) is False


@pytest.mark.parametrize("name", ["A", "_x", "abc_123"])
def test_valid_identifiers(name):
    assert is_valid_identifier(name) is True


@pytest.mark.parametrize("name", ["", "1a", "a-b", "a=b", None])
def test_invalid_identifiers(name):
    assert is_valid_identifier(name) is False


def test_echo_joins_with_spaces():
    out = io.StringIO()
    assert echo(["echo", "hello", "world"], out) == 0
    assert out.getvalue() == "hello world\n"


def test_echo_dash_n():
    out = io.StringIO()
    echo(["echo", "-n", "hi"], out)
    assert out.getvalue() == "hi"


def test_echo_only_first_dash_n_is_option():
    out = io.StringIO()
    echo(["echo", "-n", "-n", "x"], out)
    assert out.getvalue() == "-n x"


def test_echo_no_args():
    out = io.StringIO()
    echo(["echo"], out)
    assert out.getvalue() == "\n"


def test_env_lists_in_order(state):
    out = io.StringIO()
    assert env(state, out) == 0
    assert out.getvalue().splitlines() == ["A=1", "B=2"]


def test_export_sets_and_appends(state):
    assert export(["export", "C=x=y", "A=9"], state) == 0
    assert state.env.items() == [("A", "9"), ("B", "2"), ("C", "x=y")]


def test_export_without_value_sets_empty(state):
    export(["export", "D"], state)
    assert state.env.get("D") == ""


def test_export_without_args_lists(state):
    out = io.StringIO()
    assert export(["export"], state, out) == 0
    assert out.getvalue().splitlines() == state.env.to_strings()


def test_export_invalid_stops(state, capsys):
    assert export(["export", "OK=1", "1bad=2", "LATER=3"], state) == 1
    assert state.env.get("OK") == "1"
    assert state.env.get("LATER") is None
    assert "export: not a valid identifier" in capsys.readouterr().err


def test_unset_removes(state):
    assert unset(["unset", "A", "NOPE"], state) == 0
    assert "A" not in state.env
    assert state.env.get("B") == "2"


def test_unset_invalid(state, capsys):
    assert unset(["unset", "a-b"], state) == 1
    assert "unset: not a valid identifier" in capsys.readouterr().err


def test_exit_with_code(state):
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_shell(["exit", "7"], state, out)
    assert info.value.code == 7
    assert out.getvalue() == "exit\n"


def test_exit_defaults_to_last_status(state):
    state.exit_code = 5
    with pytest.raises(ShellExit) as info:
        exit_shell(["exit"], state, io.StringIO())
    assert info.value.code == state.exit_code


def test_exit_non_numeric_is_zero(state):
    with pytest.raises(ShellExit) as info:
        exit_shell(["exit", "abc"], state, io.StringIO())
    assert info.value.code == 0


def test_exit_status_wraps_to_byte(state):
    with pytest.raises(ShellExit) as info:
        exit_shell(["exit", "-1"], state, io.StringIO())
    assert info.value.code == 255


def test_exit_too_many_arguments(state, capsys):
    out = io.StringIO()
    assert exit_shell(["exit", "1", "2"], state, out) == 1
    assert out.getvalue() == ""
    assert "exit: too many arguments" in capsys.readouterr().err


def test_pwd_prints_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert pwd(out) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_to_directory(tmp_path, monkeypatch, state):
    monkeypatch.chdir(tmp_path)
    sub = tmp_path / "sub"
    sub.mkdir()
    assert cd(["cd", str(sub)], state) == 0
    assert os.path.samefile(os.getcwd(), sub)


def test_cd_home(tmp_path, monkeypatch, state):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state.env.set("HOME", str(home))
    assert cd(["cd"], state) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_cd_home_not_set(state, capsys):
    assert cd(["cd"], state) == 1
    assert "cd: HOME not set" in capsys.readouterr().err


def test_cd_missing_directory(tmp_path, monkeypatch, state, capsys):
    monkeypatch.chdir(tmp_path)
    assert cd(["cd", str(tmp_path / "missing")], state) == 1
    assert capsys.readouterr().err.startswith("minishell: cd: ")
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_run_builtin_dispatches(state):
    out = io.StringIO()
    assert run_builtin(["echo", "x"], state, out) == 0
    assert out.getvalue() == "x\n"
    assert run_builtin(["unset", "A"], state) == 0
    assert "A" not in state.env


def test_run_builtin_unknown_and_empty(state):
    assert run_builtin(["ls"], state) == 1
    assert run_builtin([], state) == 1


def test_run_builtin_exit_raises(state):
    with pytest.raises(ShellExit):
        run_builtin(["exit", "0"], state, io.StringIO())