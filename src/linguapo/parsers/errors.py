"""Parse results and exceptions.

``parse()`` reports problems as plain values (:class:`ParseError`,
:class:`DuplicateError`); the raising entry points in :mod:`linguapo.po`
turn those into :class:`PoSyntaxError` / :class:`DuplicateMessagesError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParseError:
    """Lexical or structural problem at a 1-based line."""
    message: str
    line: int


@dataclass(frozen=True)
class Duplicate:
    """Two live (or two obsolete) messages sharing an identity."""
    message: str
    new_line: int
    old_line: int


@dataclass(frozen=True)
class DuplicateError:
    duplicates: tuple[Duplicate, ...]


class ParseFailure(Exception):
    """Raised inside the lexer and parser; caught by ``parse()``."""

    def __init__(self, reason: str, line: int):
        super().__init__(f"{line}: {reason}")
        self.reason = reason
        self.line = line

    def to_result(self) -> ParseError:
        return ParseError(self.reason, self.line)


class PoError(ValueError):
    """Base class for catalog errors."""


def _prefix(file: Optional[str], line: int) -> str:
    if file:
        return f"{file}:{line}"
    return str(line)


class PoSyntaxError(PoError):
    def __init__(self, reason: str, line: int, file: Optional[str] = None):
        self.reason = reason
        self.line = line
        self.file = file
        super().__init__(f"{_prefix(file, line)}: {reason}")


class DuplicateMessagesError(PoError):
    def __init__(self, duplicates, file: Optional[str] = None):
        self.duplicates = tuple(duplicates)
        self.file = file
        super().__init__("\n".join(
            f"{_prefix(file, d.new_line)}: {d.message}" for d in self.duplicates
        ))


def raise_for_result(result, file: Optional[str] = None):
    """Return ``result`` if it is a catalog, otherwise raise the matching exception."""
    if isinstance(result, ParseError):
        raise PoSyntaxError(result.message, result.line, file)
    if isinstance(result, DuplicateError):
        raise DuplicateMessagesError(result.duplicates, file)
    return result
