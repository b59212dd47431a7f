import io

import pytest

from mitpair.console import Shell
from mitpair.errors import MitError, NoTimeoutSet
from mitpair.git_mit import (
    GitMitArgs,
    build_parser,
    is_hook_present,
    main,
    parse_args,
    print_completions,
    repo_present,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("GIT_MIT_AUTHORS_CONFIG", "GIT_MIT_AUTHORS_EXEC", "GIT_MIT_AUTHORS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_package_name():
    assert build_parser().prog == "git-mit"


@pytest.mark.parametrize("timeout", [0, 1, 60, 12345, 2**64 - 1])
def test_timeout_will_be_ok_with_valid_u64(timeout):
    args = parse_args(["--timeout", str(timeout), "eg"])
    assert args.timeout_minutes() == timeout


@pytest.mark.parametrize("timeout", ["abc", "1.5", "", "18446744073709551616", "1 2"])
def test_timeout_will_fail_without_valid_u64(timeout):
    args = parse_args(["--timeout", timeout, "eg"])
    with pytest.raises(MitError):
        args.timeout_minutes()


def test_missing_timeout_raises():
    with pytest.raises(NoTimeoutSet):
        GitMitArgs(initials=["eg"], timeout=None).timeout_minutes()


def test_timeout_defaults_to_sixty():
    assert parse_args(["eg"]).timeout_minutes() == 60


def test_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("GIT_MIT_AUTHORS_TIMEOUT", "15")
    assert parse_args(["eg"]).timeout_minutes() == 15


def test_command_is_none_if_missing():
    assert parse_args(["eg", "bt"]).command is None


def test_command_is_some_if_present():
    args = parse_args(["--exec", "cat authors.toml", "eg"])
    assert args.command == "cat authors.toml"


def test_command_from_environment(monkeypatch):
    monkeypatch.setenv("GIT_MIT_AUTHORS_EXEC", "echo hi")
    assert parse_args(["eg"]).command == "echo hi"


@pytest.mark.parametrize("initials", [["eg"], ["bt", "se"], ["a", "b", "c"]])
def test_initials_contains_all_initials(initials):
    assert parse_args(initials).initials == initials


def test_config_file_missing_defaults():
    assert parse_args(["eg"]).file == "$HOME/.config/git-mit/mit.toml"


@pytest.mark.parametrize("file", ["authors.toml", "/tmp/mit.yml"])
def test_config_file_defined_returns(file):
    assert parse_args(["-c", file, "eg"]).file == file


@pytest.mark.parametrize("shell", list(Shell))
def test_completion_with_defined_value_returns(shell):
    assert parse_args(["--completion", str(shell)]).completion is shell


def test_completion_is_none_by_default():
    assert parse_args(["bt"]).completion is None


def test_initials_required_without_completion():
    with pytest.raises(SystemExit):
        parse_args([])


def test_unknown_shell_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--completion", "tcsh"])


@pytest.mark.parametrize("shell", list(Shell))
def test_print_completions_is_not_empty(shell):
    stream = io.StringIO()
    print_completions(build_parser(), shell, stream)
    output = stream.getvalue()
    assert output.strip()
    assert "git-mit" in output


def test_main_prints_completion(capsys):
    assert main(["--completion", "bash"]) == 0
    assert "complete -F" in capsys.readouterr().out


def test_no_repository_outside_git(tmp_path):
    assert repo_present(tmp_path) is False


def test_no_hook_outside_git(tmp_path):
    assert is_hook_present(tmp_path) is False