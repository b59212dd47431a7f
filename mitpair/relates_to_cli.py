"""The ``git mit-relates-to`` command: set the Relates-to trailer."""

from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from mitpair.console import Shell, report_error, warning
from mitpair.errors import MitError, NoRelatesToMessageSet, NoTimeoutSet
from mitpair.git_mit import is_hook_present, print_completions, repo_present
from mitpair.relates import RelateTo, set_relates_to
from mitpair.vcs import GitConfig

PROG = "git-mit-relates-to"

_U64 = re.compile(r"\+?[0-9]+")


@dataclass
class RelatesToArgs:
    """The options given to ``git mit-relates-to``."""

    issue_number: str | None = None
    timeout: str | None = "60"
    completion: Shell | None = None

    def timeout_seconds(self) -> int:
        """The timeout, given in minutes, as seconds."""
        if self.timeout is None:
            raise NoTimeoutSet()
        if not _U64.fullmatch(self.timeout):
            raise MitError(f"invalid digit found in string: {self.timeout!r}")
        minutes = int(self.timeout)
        if minutes >= 2**64:
            raise MitError("number too large to fit in target type")
        return minutes * 60


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for ``git mit-relates-to``."""
    parser = argparse.ArgumentParser(
        prog=PROG, description="Set Relates-to trailer."
    )
    parser.add_argument(
        "issue_number",
        nargs="?",
        help="The issue number or other string to place into the Relates-to trailer",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        default=os.environ.get("GIT_MIT_RELATES_TO_TIMEOUT", "60"),
        help="Number of minutes to expire the configuration in",
    )
    parser.add_argument("--completion", type=Shell.parse, choices=list(Shell))
    return parser


def parse_args(argv: list[str] | None = None) -> RelatesToArgs:
    """Parse the command line; the issue is required unless completing."""
    parser = build_parser()
    namespace = parser.parse_args(argv)
    if namespace.issue_number is None and namespace.completion is None:
        parser.error("the following arguments are required: issue_number")
    return RelatesToArgs(
        issue_number=namespace.issue_number,
        timeout=namespace.timeout,
        completion=namespace.completion,
    )


def _run(args: RelatesToArgs) -> None:
    if args.issue_number is None:
        raise NoRelatesToMessageSet()
    cwd = Path.cwd()
    if repo_present(cwd) and not is_hook_present(cwd):
        warning(
            "Hooks not found in this repository, your commits won't contain "
            "trailers, and lints will not be checked",
            "`git mit-install` `will fix this",
        )
    store = GitConfig.discover(cwd)
    try:
        expires_in = timedelta(seconds=args.timeout_seconds())
    except OverflowError as exc:
        raise MitError("timeout is too large") from exc
    set_relates_to(store, RelateTo(args.issue_number), expires_in)


def main(argv: list[str] | None = None) -> int:
    """Run ``git mit-relates-to``."""
    args = parse_args(argv)
    if args.completion is not None:
        print_completions(build_parser(), args.completion)
        return 0
    try:
        _run(args)
    except MitError as error:
        report_error(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())