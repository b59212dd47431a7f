"""Reading and writing the pairing configuration of authors."""

from __future__ import annotations

import math
import os
import shlex
import subprocess
import time
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from itertools import count, takewhile
from pathlib import Path

from mitpair.author import Author, AuthorState
from mitpair.authors import Authors
from mitpair.errors import (
    AuthorFileNotSet,
    ExecUtf8Error,
    GitConfigError,
    MitError,
    NoAuthorsToSet,
)
from mitpair.vcs import ConfigStore, get_coauthors_config, has_coauthor

CONFIG_KEY_EXPIRES = "mit.author.expires"
AUTHOR_FILE_DEFAULT = "$HOME/.config/git-mit/mit.toml"


def set_commit_authors(
    store: ConfigStore, authors: Sequence[Author], expires_in: timedelta
) -> None:
    """Make the first author the committer and the rest co-authors."""
    if not authors:
        raise NoAuthorsToSet()
    first, *others = authors

    stale = [
        f"mit.author.coauthors.{index}.{field}"
        for index in takewhile(lambda i: has_coauthor(store, i), count())
        for field in ("name", "email")
    ]
    for key in stale:
        store.remove(key)

    store.set_str("user.name", first.name)
    store.set_str("user.email", first.email)
    if first.signingkey is not None:
        store.set_str("user.signingkey", first.signingkey)
    else:
        try:
            store.remove("user.signingkey")
        except GitConfigError:
            pass

    for index, author in enumerate(others):
        store.set_str(f"mit.author.coauthors.{index}.name", author.name)
        store.set_str(f"mit.author.coauthors.{index}.email", author.email)

    store.set_i64(CONFIG_KEY_EXPIRES, math.floor(time.time() + expires_in.total_seconds()))


def get_commit_coauthor_configuration(store: ConfigStore) -> AuthorState[list[Author]]:
    """The current co-authors, or whether they expired or were never set."""
    expires = store.get_i64(CONFIG_KEY_EXPIRES)
    if expires is None:
        return AuthorState.none()
    try:
        config_time = datetime.fromtimestamp(expires, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise MitError(f"invalid author expiry time: {expires}") from exc
    if datetime.now(timezone.utc) < config_time:
        names = get_coauthors_config(store, "name")
        emails = get_coauthors_config(store, "email")
        return AuthorState.some(
            [
                Author(name, email)
                for name, email in zip(names, emails)
                if name is not None and email is not None
            ]
        )
    return AuthorState.timeout(config_time)


def set_config_authors(store: ConfigStore, initial: str, author: Author) -> None:
    """Save an author under its initial."""
    store.set_str(f"mit.author.config.{initial}.email", author.email)
    store.set_str(f"mit.author.config.{initial}.name", author.name)
    if author.signingkey is not None:
        store.set_str(f"mit.author.config.{initial}.signingkey", author.signingkey)


def author_file_path() -> str:
    """The default location of the authors file for this platform."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base is None:
            raise MitError("environment variable APPDATA not found")
        return str(Path(base) / "git-mit" / "mit.toml")
    home = os.environ.get("HOME")
    if home is None:
        raise MitError("environment variable HOME not found")
    return str(Path(home) / ".config" / "git-mit" / "mit.toml")


def _from_file(file: str | None) -> str:
    if file is None:
        raise AuthorFileNotSet()
    path = author_file_path() if file == AUTHOR_FILE_DEFAULT else file
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


def _from_exec(command: str) -> str:
    commandline = shlex.split(command) or [""]
    result = subprocess.run(commandline, stdout=subprocess.PIPE, check=False)
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExecUtf8Error(command) from exc


def get_authors(command: str | None, file: str | None) -> Authors:
    """Load authors from a command's output, or else from a file."""
    text = _from_exec(command) if command is not None else _from_file(file)
    return Authors.from_text(text)