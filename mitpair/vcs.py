"""Key/value configuration stores backed by memory or by git config."""

from __future__ import annotations

import re
import subprocess
from abc import ABC, abstractmethod
from itertools import count, takewhile
from pathlib import Path

from mitpair.errors import GitConfigError

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ConfigStore(ABC):
    """A place where configuration values can be read and written."""

    @abstractmethod
    def get_str(self, name: str) -> str | None:
        """Read a string value, or None when it is not set."""

    @abstractmethod
    def get_i64(self, name: str) -> int | None:
        """Read an integer value, or None when it is not set."""

    @abstractmethod
    def get_bool(self, name: str) -> bool | None:
        """Read a boolean value, or None when it is not set."""

    @abstractmethod
    def set_str(self, name: str, value: str) -> None:
        """Write a string value."""

    @abstractmethod
    def set_i64(self, name: str, value: int) -> None:
        """Write an integer value."""

    @abstractmethod
    def remove(self, name: str) -> None:
        """Delete a value."""


class InMemory(ConfigStore):
    """A store over a plain dict, which is shared and changed in place."""

    def __init__(self, store: dict[str, str] | None = None) -> None:
        self.store = {} if store is None else store

    def get_str(self, name: str) -> str | None:
        return self.store.get(name)

    def get_i64(self, name: str) -> int | None:
        value = self.store.get(name)
        if value is None:
            return None
        if not _INTEGER.fullmatch(value):
            raise GitConfigError(f"invalid integer for {name}: {value!r}")
        return int(value)

    def get_bool(self, name: str) -> bool | None:
        value = self.store.get(name)
        if value is None:
            return None
        if value not in ("true", "false"):
            raise GitConfigError(f"invalid boolean for {name}: {value!r}")
        return value == "true"

    def set_str(self, name: str, value: str) -> None:
        self.store[name] = value

    def set_i64(self, name: str, value: int) -> None:
        self.store[name] = str(value)

    def remove(self, name: str) -> None:
        self.store.pop(name, None)


class GitConfig(ConfigStore):
    """A store that reads and writes through the ``git config`` command."""

    def __init__(
        self, cwd: Path | None = None, local: bool = True, git_dir: Path | None = None
    ) -> None:
        self.cwd = cwd
        self.local = local
        self.git_dir = git_dir

    @classmethod
    def discover(cls, path: str | Path) -> GitConfig:
        """Open the configuration of the repository containing ``path``."""
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--absolute-git-dir"],
                cwd=path,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise GitConfigError(
                "unable to discover git repository", "is the directory a git repository"
            ) from exc
        if result.returncode != 0:
            raise GitConfigError(
                "unable to discover git repository", "is the directory a git repository"
            )
        return cls(cwd=Path(path), local=True, git_dir=Path(result.stdout.strip()))

    @classmethod
    def global_config(cls) -> GitConfig:
        """Open the user's global git configuration."""
        return cls(cwd=None, local=False)

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                ["git", "config", *args], cwd=self.cwd, capture_output=True, text=True
            )
        except OSError as exc:
            raise GitConfigError(f"failed to interact with the git config: {exc}") from exc

    @property
    def _write_scope(self) -> list[str]:
        return ["--local"] if self.local else ["--global"]

    def _get(self, name: str, value_type: str | None = None) -> str | None:
        args = [] if self.local else ["--global"]
        if value_type is not None:
            args += ["--type", value_type]
        result = self._run(*args, "--get", name)
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise GitConfigError(
                f"failed to interact with the git config: {result.stderr.strip()}"
            )
        return result.stdout.rstrip("\n")

    def get_str(self, name: str) -> str | None:
        return self._get(name)

    def get_i64(self, name: str) -> int | None:
        value = self._get(name, "int")
        return None if value is None else int(value)

    def get_bool(self, name: str) -> bool | None:
        value = self._get(name, "bool")
        return None if value is None else value == "true"

    def set_str(self, name: str, value: str) -> None:
        result = self._run(*self._write_scope, name, value)
        if result.returncode != 0:
            raise GitConfigError(
                f"failed to interact with the git config: {result.stderr.strip()}"
            )

    def set_i64(self, name: str, value: int) -> None:
        self.set_str(name, str(value))

    def remove(self, name: str) -> None:
        result = self._run(*self._write_scope, "--unset", name)
        if result.returncode != 0:
            raise GitConfigError(f"failed to remove {name} from the git config")


def get_coauthor_config(store: ConfigStore, key: str, index: int) -> str | None:
    """Read one field of the co-author at ``index``."""
    return store.get_str(f"mit.author.coauthors.{index}.{key}")


def has_coauthor(store: ConfigStore, index: int) -> bool:
    """Whether a co-author with both a name and an email exists at ``index``."""
    try:
        return (
            get_coauthor_config(store, "name", index) is not None
            and get_coauthor_config(store, "email", index) is not None
        )
    except GitConfigError:
        return False


def get_coauthors_config(store: ConfigStore, key: str) -> list[str | None]:
    """Read one field of every consecutively numbered co-author."""
    return [
        get_coauthor_config(store, key, index)
        for index in takewhile(lambda i: has_coauthor(store, i), count())
    ]