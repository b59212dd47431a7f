"""The ``git mit`` command: choose who is writing the next commits."""

from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import TextIO

from mitpair.authors import Authors
from mitpair.commands import AUTHOR_FILE_DEFAULT, get_authors, set_commit_authors
from mitpair.console import Shell, report_error, warning
from mitpair.errors import (
    GitConfigError,
    MitError,
    NoAuthorInitialsProvided,
    NoTimeoutSet,
    UnknownAuthor,
)
from mitpair.vcs import GitConfig

PROG = "git-mit"

_U64 = re.compile(r"\+?[0-9]+")

_AFTER_HELP = """\
COMMON TASKS:
    You can install git-mit into a new repository using

        git mit-install

    You can add a new author to that repository by running

        git mit-config mit set eg "Egg Sample" egg.sample@example.com

    You can save that author permanently by running

        git mit-config mit set eg "Egg Sample" egg.sample@example.com
        git mit-config mit generate > $HOME/.config/git-mit/mit.toml

    You can disable a lint by running

        git mit-config lint disable jira-issue-key-missing

    You can install the example authors file to the default location with

        git mit-config mit example > $HOME/.config/git-mit/mit.toml

    You can set the current author, and Co-authors by running

        git mit ae se

    You can populate the `Relates-to` trailer using

        git mit-relates-to "[#12345678]"
"""


def _parse_u64(value: str) -> int:
    if not _U64.fullmatch(value):
        raise MitError(f"invalid digit found in string: {value!r}")
    number = int(value)
    if number >= 2**64:
        raise MitError("number too large to fit in target type")
    return number


def _options(parser: argparse.ArgumentParser) -> list[tuple[str, str]]:
    return [
        (flag, action.help or "")
        for action in parser._actions
        for flag in action.option_strings
    ]


def print_completions(
    parser: argparse.ArgumentParser, shell: Shell, stream: TextIO | None = None
) -> None:
    """Write a completion script for ``parser`` in the given shell's syntax."""
    out = sys.stdout if stream is None else stream
    prog = parser.prog
    options = _options(parser)
    flags = " ".join(flag for flag, _ in options)
    function = "_" + re.sub(r"\W", "_", prog)

    def clean(text: str) -> str:
        return re.sub(r"['\[\]]", "", text).replace("\n", " ")

    if shell is Shell.BASH:
        lines = [
            f"{function}() {{",
            f'    COMPREPLY=($(compgen -W "{flags}" -- "${{COMP_WORDS[COMP_CWORD]}}"))',
            "}",
            f"complete -F {function} {prog}",
        ]
    elif shell is Shell.FISH:
        lines = [
            f"complete -c {prog} "
            + (f"-l {flag[2:]}" if flag.startswith("--") else f"-s {flag[1:]}")
            + f" -d '{clean(help_text)}'"
            for flag, help_text in options
        ]
    elif shell is Shell.ZSH:
        lines = [f"#compdef {prog}", "_arguments \\"]
        lines += [f"    '{flag}[{clean(help_text)}]' \\" for flag, help_text in options]
        lines.append("    '*::arguments:'")
    elif shell is Shell.ELVISH:
        lines = [f"set edit:completion:arg-completer[{prog}] = {{|@words| put {flags} }}"]
    else:
        quoted = ", ".join(f"'{flag}'" for flag, _ in options)
        lines = [
            f"Register-ArgumentCompleter -Native -CommandName '{prog}' -ScriptBlock {{",
            "    param($wordToComplete)",
            f'    @({quoted}) | Where-Object {{ $_ -like "$wordToComplete*" }}',
            "}",
        ]
    out.write("\n".join(lines) + "\n")


@dataclass
class GitMitArgs:
    """The options given to ``git mit``."""

    initials: list[str] = field(default_factory=list)
    file: str | None = AUTHOR_FILE_DEFAULT
    command: str | None = None
    timeout: str | None = "60"
    completion: Shell | None = None

    def timeout_minutes(self) -> int:
        """The number of minutes before the authors expire."""
        if self.timeout is None:
            raise NoTimeoutSet()
        return _parse_u64(self.timeout)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for ``git mit``."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Set author and Co-authored trailer.",
        epilog=_AFTER_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "initials", nargs="*", help="Initials of the mit to put in the commit"
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="file",
        default=os.environ.get("GIT_MIT_AUTHORS_CONFIG", AUTHOR_FILE_DEFAULT),
        help="Path to a file where mit initials, emails and names can be found",
    )
    parser.add_argument(
        "-e",
        "--exec",
        dest="command",
        default=os.environ.get("GIT_MIT_AUTHORS_EXEC"),
        help=(
            "Execute a command to generate the mit configuration, stdout will be "
            "captured and used instead of the file, if both this and the file is "
            "present, this takes precedence"
        ),
    )
    parser.add_argument(
        "-t",
        "--timeout",
        default=os.environ.get("GIT_MIT_AUTHORS_TIMEOUT", "60"),
        help="Number of minutes to expire the configuration in",
    )
    parser.add_argument("--completion", type=Shell.parse, choices=list(Shell))
    return parser


def parse_args(argv: list[str] | None = None) -> GitMitArgs:
    """Parse the command line; initials are required unless completing."""
    parser = build_parser()
    namespace = parser.parse_args(argv)
    if not namespace.initials and namespace.completion is None:
        parser.error("the following arguments are required: initials")
    return GitMitArgs(
        initials=list(namespace.initials),
        file=namespace.file,
        command=namespace.command,
        timeout=namespace.timeout,
        completion=namespace.completion,
    )


def _git_dir(path: Path) -> Path | None:
    try:
        return GitConfig.discover(path).git_dir
    except GitConfigError:
        return None


def repo_present(path: str | Path | None = None) -> bool:
    """Whether ``path`` lies inside a git repository."""
    return _git_dir(Path.cwd() if path is None else Path(path)) is not None


def is_hook_present(path: str | Path | None = None) -> bool:
    """Whether the repository's commit-msg hook points at the mit hook."""
    git_dir = _git_dir(Path.cwd() if path is None else Path(path))
    if git_dir is None:
        return False
    try:
        resolved = (git_dir / "hooks" / "commit-msg").resolve(strict=True)
    except OSError:
        return False
    return "mit-commit-msg" in str(resolved)


def not_setup_warning() -> None:
    warning(
        "Hooks not found in this repository, your commits won't contain trailers, "
        "and lints will not be checked",
        "`git mit-install` will fix this",
    )


def _run(args: GitMitArgs, command_line: str) -> None:
    cwd = Path.cwd()
    store = GitConfig.discover(cwd)
    file_authors = get_authors(args.command, args.file)
    authors = file_authors.merge(Authors.from_store(store))
    if not args.initials:
        raise NoAuthorInitialsProvided()

    if repo_present(cwd) and not is_hook_present(cwd):
        not_setup_warning()

    missing = authors.missing_initials(args.initials)
    if missing:
        raise UnknownAuthor(command_line, missing)

    try:
        expires_in = timedelta(minutes=args.timeout_minutes())
    except OverflowError as exc:
        raise MitError("timeout is too large") from exc
    set_commit_authors(store, authors.get(args.initials), expires_in)


def main(argv: list[str] | None = None) -> int:
    """Run ``git mit``."""
    arguments = sys.argv[1:] if argv is None else list(argv)
    args = parse_args(arguments)
    if args.completion is not None:
        print_completions(build_parser(), args.completion)
        return 0
    try:
        _run(args, " ".join([PROG, *arguments]))
    except MitError as error:
        report_error(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())