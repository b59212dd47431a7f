"""The pre-commit hook: refuse to commit when no current authors are set."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mitpair.author import Author
from mitpair.commands import get_commit_coauthor_configuration
from mitpair.console import Shell, report_error
from mitpair.errors import MitError, NoAuthorError, StaleAuthorError
from mitpair.git_mit import print_completions
from mitpair.vcs import ConfigStore, GitConfig

PROG = "mit-pre-commit"


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the pre-commit hook."""
    parser = argparse.ArgumentParser(
        prog=PROG, description="Run first, before you even type in a commit message."
    )
    parser.add_argument("--completion", type=Shell.parse, choices=list(Shell))
    return parser


def check_authors(store: ConfigStore) -> list[Author]:
    """Return the current co-authors, raising if they expired or were never set."""
    state = get_commit_coauthor_configuration(store)
    if state.is_timeout():
        raise StaleAuthorError(state.expired_at)
    if state.is_none():
        raise NoAuthorError()
    return state.unwrap()


def main(argv: list[str] | None = None) -> int:
    """Run the pre-commit hook."""
    parser = build_parser()
    namespace = parser.parse_args(argv)
    if namespace.completion is not None:
        print_completions(parser, namespace.completion)
        return 0
    try:
        check_authors(GitConfig.discover(Path.cwd()))
    except MitError as error:
        report_error(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())