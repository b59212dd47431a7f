import time
from datetime import datetime, timezone

import pytest

from mitpair.author import Author
from mitpair.console import Shell
from mitpair.errors import NoAuthorError, StaleAuthorError
from mitpair.pre_commit import build_parser, check_authors, main
from mitpair.vcs import InMemory


def test_program_name():
    assert build_parser().prog == "mit-pre-commit"


@pytest.mark.parametrize("shell", list(Shell))
def test_completion_option_parses(shell):
    assert build_parser().parse_args(["--completion", shell.value]).completion is shell


def test_no_authors_set_raises():
    with pytest.raises(NoAuthorError):
        check_authors(InMemory({}))


def test_expired_authors_raise_stale_error():
    expired = int(time.time()) - 100
    store = InMemory({"mit.author.expires": str(expired)})
    with pytest.raises(StaleAuthorError) as info:
        check_authors(store)
    assert info.value.date == datetime.fromtimestamp(expired, tz=timezone.utc)
    assert info.value.labels()[0][2] == len(info.value.source_code)


def test_current_authors_are_returned():
    store = InMemory(
        {
            "mit.author.expires": str(int(time.time()) + 100),
            "mit.author.coauthors.0.name": "Annie Example",
            "mit.author.coauthors.0.email": "annie@example.com",
        }
    )
    assert check_authors(store) == [Author("Annie Example", "annie@example.com")]


def test_current_with_no_coauthors_is_empty():
    store = InMemory({"mit.author.expires": str(int(time.time()) + 100)})
    assert check_authors(store) == []


def test_main_prints_completion(capsys):
    assert main(["--completion", "zsh"]) == 0
    assert "#compdef mit-pre-commit" in capsys.readouterr().out