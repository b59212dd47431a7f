"""Console output: shells for completion, styled messages and tables."""

from __future__ import annotations

import io
import os
import shutil
import sys
from enum import Enum
from typing import TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from mitpair.authors import Authors
from mitpair.errors import MitError


class ShellFromStrError(MitError, ValueError):
    message = "could not parse a shell from the given string"
    help_text = "valid shells are: bash, elvish, fish, powershell, and zsh"

    def __init__(self, text: str) -> None:
        super().__init__()
        self.source_code = text

    def labels(self) -> list[tuple[str, int, int]]:
        return [("unknown shell", 0, len(self.source_code or ""))]


class Shell(Enum):
    """A shell that completions can be generated for."""

    BASH = "bash"
    ELVISH = "elvish"
    FISH = "fish"
    POWERSHELL = "powershell"
    ZSH = "zsh"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Shell:
        """Parse a shell name, raising ShellFromStrError if unknown."""
        try:
            return cls(text)
        except ValueError:
            raise ShellFromStrError(text) from None


class _Severity(Enum):
    ADVICE = ("☞", "36")
    WARNING = ("⚠", "33")
    ERROR = ("×", "31")


def _use_colour(stream: TextIO) -> bool:
    if "DEBUG_PRETTY_ERRORS" in os.environ or "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _snippet(source: str, labels: list[tuple[str, int, int]]) -> list[str]:
    lines = source.split("\n")
    width = len(str(len(lines)))
    gutter = " " * width
    out = [f" {gutter} ╭────"]
    offset = 0
    for number, line in enumerate(lines, 1):
        out.append(f" {number:>{width}} │ {line}")
        end = offset + len(line)
        for label, start, length in labels:
            if offset <= start <= end:
                column = " " * (start - offset)
                out.append(f" {gutter} · {column}{'─' * max(length, 1)}")
                out.append(f" {gutter} · {column}╰── {label}")
        offset = end + 1
    out.append(f" {gutter} ╰────")
    return out


def _render(
    severity: _Severity,
    message: str,
    *,
    colour: bool,
    code: str | None = None,
    help_text: str | None = None,
    source: str | None = None,
    labels: list[tuple[str, int, int]] | None = None,
    causes: list[str] | None = None,
) -> str:
    symbol, ansi = severity.value
    if colour:
        symbol = f"\x1b[{ansi}m{symbol}\x1b[0m"
    lines: list[str] = []
    if code:
        lines += [code, ""]
    lines.append(f"  {symbol} {message}")
    lines += [f"  ╰─▶ {cause}" for cause in causes or []]
    if source is not None:
        lines += _snippet(source, labels or [])
    if help_text:
        lines.append(f"  help: {help_text}")
    return "\n".join(lines) + "\n"


def success(message: str, tip: str) -> None:
    """Print an advice message with a tip to stdout."""
    print(
        _render(_Severity.ADVICE, message, colour=_use_colour(sys.stdout), help_text=tip)
    )


def warning(message: str, tip: str | None = None) -> None:
    """Print a warning with an optional tip to stderr."""
    print(
        _render(_Severity.WARNING, message, colour=_use_colour(sys.stderr), help_text=tip),
        file=sys.stderr,
    )


def report_error(error: BaseException) -> None:
    """Print an error with its code, source, labels and help to stderr."""
    causes = []
    cause = error.__cause__
    while cause is not None:
        causes.append(str(cause))
        cause = cause.__cause__
    if isinstance(error, MitError):
        text = _render(
            _Severity.ERROR,
            str(error),
            colour=_use_colour(sys.stderr),
            code=error.code,
            help_text=error.help(),
            source=error.source_code,
            labels=error.labels(),
            causes=causes,
        )
    else:
        text = _render(
            _Severity.ERROR, str(error), colour=_use_colour(sys.stderr), causes=causes
        )
    print(f"Error: {text}", file=sys.stderr)


def to_be_piped(output: str) -> None:
    """Print entirely undecorated to stdout."""
    print(output)


def author_table(authors: Authors) -> str:
    """Render the authors as a table."""
    table = Table(box=box.ROUNDED, show_lines=True)
    for header in ("Initial", "Name", "Email", "Signing Key"):
        table.add_column(header)
    for initial, author in authors:
        key = (
            Text(author.signingkey)
            if author.signingkey is not None
            else Text("None", style="italic")
        )
        table.add_row(Text(initial), Text(author.name), Text(author.email), key)
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=max(shutil.get_terminal_size().columns, 40),
        force_terminal=False,
        color_system=None,
    )
    console.print(table)
    return buffer.getvalue().rstrip("\n")