"""Errors raised by the mit tools, each carrying a diagnostic code and help."""

from __future__ import annotations

from datetime import datetime


class MitError(Exception):
    """Base class for every error the mit tools report."""

    message: str = "mit error"
    code: str | None = None
    help_text: str | None = None
    source_code: str | None = None

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.message)

    def help(self) -> str | None:
        """Advice on how to fix the problem, if there is any."""
        return self.help_text

    def labels(self) -> list[tuple[str, int, int]]:
        """Spans of ``source_code`` as ``(label, offset, length)`` tuples."""
        return []


class NoAuthorsToSet(MitError):
    message = "no authors provided to set"
    code = "mit_commit_message_lints::mit::cmd::errors::error::no_authors_to_set"


class ExecUtf8Error(MitError):
    message = "failed to convert author command output to unicode"
    code = "git_mit::errors::git_mit_error::exec_utf8"
    help_text = "all characters must parse as utf8"

    def __init__(self, command: str) -> None:
        super().__init__()
        self.command = command
        self.source_code = command


class NoAuthorInitialsProvided(MitError):
    message = "no mit initials provided"
    code = "git_mit::errors::git_mit_error::no_author_initials_provided"


class NoTimeoutSet(MitError):
    message = "no timeout set"
    code = "git_mit::errors::git_mit_error::no_timeout_set"


class AuthorFileNotSet(MitError):
    message = "expected a mit file path, didn't find one"
    code = "git_mit::errors::git_mit_error::author_file_not_set"


class NoRelatesToMessageSet(MitError):
    message = "no relates to message set"
    code = "git_mit_relates_to::errors::git_relates_to::no_relates_to_message_set"


class SerializeAuthorsError(MitError):
    message = "could not convert author configuration to toml"
    code = "mit_commit_message_lints::mit::lib::authors::deserialise_authors_error"
    help_text = "please report this error on our issue tracker, this is a bug"


class DeserializeAuthorsError(MitError):
    message = "could not parse author configuration"
    code = "mit_commit_message_lints::mit::lib::authors::serialise_authors_error"
    help_text = (
        "`git mit-config mit example` can show you an example of what it should "
        "look like, or you can generate one using `git mit-config mit generate` "
        "after setting up some authors with `git mit-config mit set`"
    )

    def __init__(
        self,
        src: str,
        toml_offset: int,
        yaml_offset: int,
        toml_message: str = "",
        yaml_message: str = "",
    ) -> None:
        super().__init__()
        self.source_code = src
        self.toml_offset = toml_offset
        self.yaml_offset = yaml_offset
        self.toml_message = toml_message
        self.yaml_message = yaml_message

    def labels(self) -> list[tuple[str, int, int]]:
        return [
            (f"invalid in toml: {self.toml_message}", self.toml_offset, 0),
            (f"invalid in yaml: {self.yaml_message}", self.yaml_offset, 0),
        ]


class UnknownAuthor(MitError):
    message = "could not find initial"

    def __init__(self, command: str, missing_initials: list[str]) -> None:
        super().__init__()
        self.command = command
        self.missing_initials = list(missing_initials)
        self.source_code = command

    def help(self) -> str:
        tips = [
            "To see a summary of your configured authors run",
            "`git mit-config mit generate`",
            "To add a new author run",
            '`git mit-config mit set eg "Egg Sample" egg.sample@example.com`',
        ]
        suggestions = {
            "config": "Did you mean `git mit-config`",
            "relates-to": "Did you mean `git mit-relates-to`",
            "install": "Did you mean `git mit-install`",
        }
        tips.extend(tip for word, tip in suggestions.items() if word in self.missing_initials)
        return " ".join(tips)

    def labels(self) -> list[tuple[str, int, int]]:
        found: list[tuple[str, int, int]] = []
        for initial in self.missing_initials:
            pattern = f" {initial} "
            start = self.command.find(pattern)
            while start != -1:
                found.append(("Not found", start + 1, len(initial)))
                start = self.command.find(pattern, start + len(pattern))
            if self.command.endswith(initial):
                found.append(
                    ("Not found", len(self.command) - len(initial), len(initial))
                )
        return found


class ExistingHook(MitError):
    message = "failed to install hook"
    code = "git_mit_install::errors::git_mit_install_error::existing_hook"

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path

    def help(self) -> str:
        return f"{self.path} already exists, you need to remove this before continuing"


class ExistingSymlink(MitError):
    message = "failed to install hook"
    code = "git_mit_install::errors::git_mit_install_error::existing_symlink"

    def __init__(self, path: str, destination: str) -> None:
        super().__init__()
        self.path = path
        self.destination = destination

    def help(self) -> str:
        return (
            f"{self.path} already exists, you need to remove this before continuing, "
            f"looks like it's a symlink to {self.destination}"
        )


class StaleAuthorError(MitError):
    message = "The details of the author of this commit are stale"
    code = "mit_pre_commit::errors::stale_author_error"
    help_text = (
        "Can you confirm who's currently coding? It's nice to get and give the right "
        "credit. You can fix this by running `git mit` then the initials of whoever "
        "is coding for example: `git mit bt` or `git mit bt se`"
    )

    def __init__(self, last_updated: datetime) -> None:
        super().__init__()
        self.date = last_updated
        self.source_code = str(last_updated.astimezone())

    def labels(self) -> list[tuple[str, int, int]]:
        return [
            (
                "The previously set authors expired at this time",
                0,
                len(self.source_code or ""),
            )
        ]


class NoAuthorError(MitError):
    message = "No authors set"
    code = "mit_pre_commit::errors::stale_author_error"
    help_text = (
        "Can you set who's currently coding? It's nice to get and give the right "
        "credit. You can fix this by running `git mit` then the initials of whoever "
        "is coding for example: `git mit bt` or `git mit bt se`"
    )


class UnrecognisedCommand(MitError):
    message = "unrecognised subcommand"
    code = "git_mit_config::errors::unrecognised_lint_command"
    help_text = "try `git mit-config --help`"


class GitConfigError(MitError):
    message = "failed to interact with the git config"

    def __init__(self, message: str | None = None, help_text: str | None = None) -> None:
        super().__init__(message)
        if help_text is not None:
            self.help_text = help_text