import pytest

from mitpair.author import Author
from mitpair.authors import Authors
from mitpair.console import (
    Shell,
    ShellFromStrError,
    author_table,
    report_error,
    success,
    to_be_piped,
    warning,
)
from mitpair.errors import NoAuthorsToSet, UnknownAuthor


@pytest.mark.parametrize("shell", list(Shell))
def test_bi_directional_translation(shell):
    assert Shell.parse(str(shell)) is shell


@pytest.mark.parametrize(
    "text, expected",
    [
        ("bash", Shell.BASH),
        ("fish", Shell.FISH),
        ("zsh", Shell.ZSH),
        ("elvish", Shell.ELVISH),
        ("powershell", Shell.POWERSHELL),
    ],
)
def test_from_string(text, expected):
    assert Shell.parse(text) is expected


@pytest.mark.parametrize(
    "shell, expected",
    [
        (Shell.BASH, "bash"),
        (Shell.FISH, "fish"),
        (Shell.ZSH, "zsh"),
        (Shell.ELVISH, "elvish"),
        (Shell.POWERSHELL, "powershell"),
    ],
)
def test_into_string(shell, expected):
    assert str(shell) == expected


def test_unknown_shell_is_an_error():
    with pytest.raises(ShellFromStrError) as info:
        Shell.parse("cmd")
    assert info.value.labels() == [("unknown shell", 0, 3)]
    assert info.value.source_code == "cmd"


def test_success_prints_message_and_tip(capsys):
    success("all done", "nothing else to do")
    out = capsys.readouterr().out
    assert "all done" in out
    assert "help: nothing else to do" in out


def test_warning_prints_to_stderr(capsys):
    warning("careful", "slow down")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "careful" in captured.err
    assert "help: slow down" in captured.err


def test_warning_without_tip(capsys):
    warning("careful")
    assert "help:" not in capsys.readouterr().err


def test_to_be_piped_is_undecorated(capsys):
    to_be_piped("[bt]")
    assert capsys.readouterr().out == "[bt]\n"


def test_author_table_lists_authors():
    authors = Authors(
        {
            "bt": Author("Billie Thompson", "billie@example.com", "0A46826A"),
            "se": Author("Someone Else", "someone@example.com"),
        }
    )
    table = author_table(authors)
    assert "╭" in table
    assert "Signing Key" in table
    assert "Billie Thompson" in table
    assert "0A46826A" in table
    assert "None" in table
    assert table.index("bt") < table.index("se")


def test_report_error_includes_code(capsys):
    report_error(NoAuthorsToSet())
    err = capsys.readouterr().err
    assert "no authors provided to set" in err
    assert "mit_commit_message_lints::mit::cmd::errors::error::no_authors_to_set" in err


def test_report_error_shows_labels_and_help(capsys):
    report_error(UnknownAuthor("git mit zz", ["zz"]))
    err = capsys.readouterr().err
    assert "git mit zz" in err
    assert "Not found" in err
    assert "git mit-config mit generate" in err


def test_report_error_shows_causes(capsys):
    try:
        try:
            raise OSError("disk gone")
        except OSError as exc:
            raise NoAuthorsToSet() from exc
    except NoAuthorsToSet as error:
        report_error(error)
    assert "disk gone" in capsys.readouterr().err