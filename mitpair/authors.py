"""A collection of authors keyed by their initials."""

from __future__ import annotations

import re
import subprocess
import tomllib
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import tomli_w
import yaml

from mitpair.author import Author
from mitpair.errors import DeserializeAuthorsError, GitConfigError, SerializeAuthorsError
from mitpair.vcs import ConfigStore, GitConfig, InMemory

_CONFIG_KEY = re.compile(
    r"mit\.author\.config\.(?P<initial>.+)\.(?P<field>name|email|signingkey)"
)
_TOML_LOCATION = re.compile(r"at line (\d+), column (\d+)")


def _offset_from_location(text: str, line: int, column: int) -> int:
    """Turn a 1-based line and column into an offset within ``text``."""
    lines = text.splitlines(keepends=True)
    offset = sum(len(part) for part in lines[: max(line - 1, 0)]) + max(column - 1, 0)
    return min(max(offset, 0), len(text))


def _author_from_mapping(value: Any) -> Author:
    if not isinstance(value, Mapping):
        raise ValueError("an author must be a table of name, email and signingkey")
    name = value.get("name")
    email = value.get("email")
    signingkey = value.get("signingkey")
    if not isinstance(name, str):
        raise ValueError("missing field `name`")
    if not isinstance(email, str):
        raise ValueError("missing field `email`")
    if signingkey is not None and not isinstance(signingkey, str):
        raise ValueError("invalid type for `signingkey`, expected a string")
    return Author(name, email, signingkey)


def _authors_from_data(data: Any) -> dict[str, Author]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("expected a map of initials to authors")
    result: dict[str, Author] = {}
    for initial, value in data.items():
        if not isinstance(initial, str):
            raise ValueError("initials must be strings")
        result[initial] = _author_from_mapping(value)
    return result


def _config_keys(store: ConfigStore) -> list[str]:
    if isinstance(store, InMemory):
        return list(store.store)
    if isinstance(store, GitConfig):
        args = ["git", "config"]
        if not store.local:
            args.append("--global")
        args += ["--name-only", "--get-regexp", r"^mit\.author\.config\."]
        try:
            result = subprocess.run(args, cwd=store.cwd, capture_output=True, text=True)
        except OSError as exc:
            raise GitConfigError(f"failed to interact with the git config: {exc}") from exc
        if result.returncode == 1:
            return []
        if result.returncode != 0:
            raise GitConfigError(
                f"failed to interact with the git config: {result.stderr.strip()}"
            )
        return result.stdout.splitlines()
    raise TypeError(f"cannot list the keys of {type(store).__name__}")


@dataclass
class Authors:
    """Authors keyed by initials, always kept in initial order."""

    authors: dict[str, Author] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.authors = dict(sorted(self.authors.items()))

    def __iter__(self) -> Iterator[tuple[str, Author]]:
        return iter(self.authors.items())

    def __len__(self) -> int:
        return len(self.authors)

    def missing_initials(self, initials: Iterable[str]) -> list[str]:
        """The initials given that have no configured author."""
        return [initial for initial in dict.fromkeys(initials) if initial not in self.authors]

    def get(self, initials: Iterable[str]) -> list[Author]:
        """The authors for the given initials, skipping unknown ones."""
        return [self.authors[initial] for initial in initials if initial in self.authors]

    def merge(self, other: Authors) -> Authors:
        """Combine two collections; entries in ``other`` win."""
        return Authors({**self.authors, **other.authors})

    @classmethod
    def example(cls) -> Authors:
        """An example collection showing what a config file holds."""
        return cls(
            {
                "ae": Author("Anyone Else", "anyone@example.com"),
                "se": Author("Someone Else", "someone@example.com"),
                "bt": Author("Billie Thompson", "billie@example.com", "0A46826A"),
            }
        )

    @classmethod
    def from_text(cls, text: str) -> Authors:
        """Parse YAML, falling back to TOML."""
        try:
            return cls(_authors_from_data(yaml.safe_load(text)))
        except (yaml.YAMLError, ValueError) as yaml_error:
            yaml_offset = 0
            mark = getattr(yaml_error, "problem_mark", None)
            if mark is not None:
                yaml_offset = _offset_from_location(text, mark.line + 1, mark.column + 1)
            try:
                return cls(_authors_from_data(tomllib.loads(text)))
            except (tomllib.TOMLDecodeError, ValueError) as toml_error:
                toml_offset = 0
                location = _TOML_LOCATION.search(str(toml_error))
                if location is not None:
                    toml_offset = _offset_from_location(
                        text, int(location.group(1)), int(location.group(2))
                    )
                raise DeserializeAuthorsError(text, toml_offset, yaml_offset) from toml_error

    @classmethod
    def from_store(cls, store: ConfigStore) -> Authors:
        """Read authors saved under ``mit.author.config`` in a store."""
        initials = dict.fromkeys(
            match["initial"]
            for match in map(_CONFIG_KEY.fullmatch, _config_keys(store))
            if match is not None
        )
        found: dict[str, Author] = {}
        for initial in initials:
            prefix = f"mit.author.config.{initial}"
            name = store.get_str(f"{prefix}.name")
            email = store.get_str(f"{prefix}.email")
            if name is None or email is None:
                continue
            found[initial] = Author(name, email, store.get_str(f"{prefix}.signingkey"))
        return cls(found)

    def to_toml(self) -> str:
        """Serialise the authors as a TOML document."""
        data: dict[str, dict[str, str]] = {}
        for initial, author in self:
            entry = {"name": author.name, "email": author.email}
            if author.signingkey is not None:
                entry["signingkey"] = author.signingkey
            data[initial] = entry
        try:
            return tomli_w.dumps(data)
        except (TypeError, ValueError) as exc:
            raise SerializeAuthorsError() from exc