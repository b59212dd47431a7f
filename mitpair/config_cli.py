"""The ``git mit-config`` command: manage authors and relates-to settings."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from mitpair.author import Author
from mitpair.authors import Authors
from mitpair.commands import AUTHOR_FILE_DEFAULT, get_authors, set_config_authors
from mitpair.console import Shell, author_table, report_error, to_be_piped
from mitpair.errors import MitError, UnrecognisedCommand
from mitpair.git_mit import print_completions
from mitpair.vcs import ConfigStore, GitConfig

PROG = "git-mit-config"

_FILE_HELP = "Path to a file where mit initials, emails and names can be found"
_COMMAND_HELP = (
    "Execute a command to generate the mit configuration, stdout will be captured "
    "and used instead of the file, if both this and the file is present, this "
    "takes precedence"
)


def _add_scope(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-s", "--scope", choices=["local", "global"], default="local")


def _add_author_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        dest="file",
        default=os.environ.get("GIT_MIT_AUTHORS_CONFIG", AUTHOR_FILE_DEFAULT),
        help=_FILE_HELP,
    )
    parser.add_argument(
        "-e",
        "--exec",
        dest="command",
        default=os.environ.get("GIT_MIT_AUTHORS_EXEC"),
        help=_COMMAND_HELP,
    )


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for ``git mit-config``."""
    parser = argparse.ArgumentParser(
        prog=PROG, description="A command for enabling and disabling git lints"
    )
    parser.add_argument("--completion", type=Shell.parse, choices=list(Shell))
    groups = parser.add_subparsers(dest="group")

    mit = groups.add_parser("mit", help="Manage mit configuration")
    mit_actions = mit.add_subparsers(dest="action", required=True)

    set_parser = mit_actions.add_parser(
        "set", help="Update or add an initial in the mit configuration"
    )
    _add_scope(set_parser)
    set_parser.add_argument("initial", help="Initial of the mit to update or add")
    set_parser.add_argument(
        "name", help='Name to use for the mit in format "Forename Surname"'
    )
    set_parser.add_argument("email", help="Email to use for the mit")
    set_parser.add_argument(
        "signingkey", nargs="?", help="Signing key to use for this user"
    )

    generate = mit_actions.add_parser(
        "generate", help="Generate a file version of available authors"
    )
    _add_author_source(generate)
    available = mit_actions.add_parser("available", help="List available authors")
    _add_author_source(available)
    mit_actions.add_parser("example", help="Print example mit toml file")

    relates = groups.add_parser("relates-to", help="Manage relates-to settings")
    relates_actions = relates.add_subparsers(dest="action", required=True)
    template = relates_actions.add_parser(
        "template", help="Use a template for the relates-to trailer"
    )
    _add_scope(template)
    template.add_argument(
        "template",
        nargs="?",
        default=os.environ.get("GIT_MIT_RELATES_TO_TEMPLATE", "{ value }"),
        help=(
            "A template with a single value variable that will be applied to the "
            "relates-to trailer"
        ),
    )
    return parser


def get_store(local: bool, cwd: str | Path | None = None) -> ConfigStore:
    """The repository's config when ``local``, otherwise the user's."""
    if local:
        return GitConfig.discover(Path.cwd() if cwd is None else Path(cwd))
    return GitConfig.global_config()


def run_author_example() -> None:
    """Print an example authors file."""
    to_be_piped(Authors.example().to_toml().strip())


def run_author_generate(args: argparse.Namespace, generate: bool) -> None:
    """Print the known authors, as TOML when ``generate`` or else as a table."""
    file_authors = get_authors(args.command, args.file)
    store = GitConfig.discover(Path.cwd())
    authors = file_authors.merge(Authors.from_store(store))
    output = authors.to_toml().strip() if generate else author_table(authors)
    to_be_piped(output)


def run_author_set(args: argparse.Namespace) -> None:
    """Save an author under its initial."""
    store = get_store(args.scope == "local", Path.cwd())
    set_config_authors(store, args.initial, Author(args.name, args.email, args.signingkey))


def run_relates_to_template(args: argparse.Namespace) -> None:
    """Save the template applied to the relates-to trailer."""
    store = get_store(args.scope == "local", Path.cwd())
    store.set_str("mit.relate.template", args.template)


def _dispatch(args: argparse.Namespace) -> None:
    match (args.group, getattr(args, "action", None)):
        case ("mit", "example"):
            run_author_example()
        case ("mit", "generate"):
            run_author_generate(args, True)
        case ("mit", "available"):
            run_author_generate(args, False)
        case ("mit", "set"):
            run_author_set(args)
        case ("relates-to", "template"):
            run_relates_to_template(args)
        case _:
            raise UnrecognisedCommand()


def main(argv: list[str] | None = None) -> int:
    """Run ``git mit-config``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.completion is not None:
        print_completions(parser, args.completion)
        return 0
    try:
        _dispatch(args)
    except MitError as error:
        report_error(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())