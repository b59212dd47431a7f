"""A single author and the state of the current pairing configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Author:
    """An author that might be developing."""

    name: str
    email: str
    signingkey: str | None = None


class _Kind(Enum):
    SOME = auto()
    TIMEOUT = auto()
    NONE = auto()


@dataclass(frozen=True)
class AuthorState(Generic[T]):
    """Authors are set, have expired, or were never set."""

    _kind: _Kind
    value: T | None = None
    expired_at: datetime | None = None

    @classmethod
    def some(cls, value: T) -> AuthorState[T]:
        return cls(_Kind.SOME, value=value)

    @classmethod
    def timeout(cls, expired_at: datetime) -> AuthorState[T]:
        return cls(_Kind.TIMEOUT, expired_at=expired_at)

    @classmethod
    def none(cls) -> AuthorState[T]:
        return cls(_Kind.NONE)

    def is_some(self) -> bool:
        return self._kind is _Kind.SOME

    def is_none(self) -> bool:
        return self._kind is _Kind.NONE

    def is_timeout(self) -> bool:
        return self._kind is _Kind.TIMEOUT

    def unwrap(self) -> T:
        """Return the value, raising ValueError when there is none."""
        if self._kind is _Kind.SOME:
            return self.value  # type: ignore[return-value]
        if self._kind is _Kind.TIMEOUT:
            raise ValueError(f"called unwrap() on a Timeout({self.expired_at}) value")
        raise ValueError("called unwrap() on a None value")

    def to_optional(self) -> T | None:
        return self.value if self._kind is _Kind.SOME else None