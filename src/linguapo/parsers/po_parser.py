"""PO/POT parser.

The input is split into physical lines once; :class:`PoParser` then walks
that array with an index, classifying lines on demand, and assembles one
entry at a time::

    comments -> [msgctxt] -> msgid -> [msgid_plural] -> msgstr | msgstr[N]...

The first problem stops the parse.  Duplicates are checked afterwards over
the whole catalog and reported together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from linguapo.parsers.duplicates import find_duplicates
from linguapo.parsers.errors import DuplicateError, ParseError, ParseFailure
from linguapo.parsers.lexer import CommentKind, Line, LineKind, classify, split_lines
from linguapo.parsers.messages import Catalog, Message, Plural, Singular

log = logging.getLogger(__name__)

ParseResult = Union[Catalog, ParseError, DuplicateError]


@dataclass
class _Entry:
    message: Optional[Message]
    raw_comments: list[str] = field(default_factory=list)
    first_line: int = 0


def _name(line: Line) -> str:
    if line.index is not None:
        return f"{line.keyword}[{line.index}]"
    return line.keyword or ""


def _is_keyword(line: Optional[Line], keyword: str) -> bool:
    return line is not None and line.kind is LineKind.KEYWORD and line.keyword == keyword


class PoParser:
    """Entry-by-entry parser over a pre-split array of lines."""

    def __init__(self, text: str, file: Optional[str] = None):
        self.file = file
        self._raw = split_lines(text)
        self._lines: list[Optional[Line]] = [None] * len(self._raw)
        self._pos = 0

    # ── Cursor ────────────────────────────────────────────────────

    def _line_at(self, pos: int) -> Line:
        line = self._lines[pos]
        if line is None:
            line = self._lines[pos] = classify(self._raw[pos], pos + 1)
        return line

    def _peek(self) -> Optional[Line]:
        """Next non-blank line, or ``None`` at end of input."""
        while self._pos < len(self._raw):
            line = self._line_at(self._pos)
            if line.kind is not LineKind.BLANK:
                return line
            self._pos += 1
        return None

    def _advance(self) -> None:
        self._pos += 1

    @property
    def _last_lineno(self) -> int:
        return max(len(self._raw), 1)

    # ── Errors ────────────────────────────────────────────────────

    def _unexpected(self, line: Optional[Line], expected: str) -> ParseFailure:
        if line is None:
            return ParseFailure(f"missing '{expected}'", self._last_lineno)
        if line.kind is LineKind.UNKNOWN:
            return ParseFailure(f"unknown keyword '{line.text}'", line.lineno)
        if line.kind is LineKind.STRING:
            return ParseFailure("unexpected string", line.lineno)
        if line.kind is LineKind.COMMENT:
            return ParseFailure(f"expected '{expected}' but got a comment", line.lineno)
        return ParseFailure(f"expected '{expected}' but got '{_name(line)}'", line.lineno)

    # ── Entries ───────────────────────────────────────────────────

    def entries(self) -> list[_Entry]:
        """Parse the whole input into raw entries, in source order."""
        self._pos = 0
        result = []
        while True:
            entry = self._parse_entry()
            if entry is None:
                break
            if entry.message is None:
                if result:
                    raise ParseFailure(
                        "comments at end of file are not attached to a message",
                        entry.first_line,
                    )
            result.append(entry)
        return result

    def _parse_entry(self) -> Optional[_Entry]:
        line = self._peek()
        if line is None:
            return None
        entry = _Entry(None, first_line=line.lineno)
        fields = _CommentFields()

        while line is not None and line.kind is LineKind.COMMENT:
            entry.raw_comments.append(line.raw)
            fields.add(line)
            self._advance()
            line = self._peek()
        if line is None:
            return entry

        obsolete = line.obsolete
        msgctxt = None
        if _is_keyword(line, "msgctxt"):
            msgctxt = self._read_value(obsolete)
            line = self._peek()

        if not _is_keyword(line, "msgid"):
            raise self._unexpected(line, "msgid")
        msgid_line = line.lineno
        msgid = self._read_value(obsolete)

        line = self._peek()
        if _is_keyword(line, "msgid_plural"):
            msgid_plural = self._read_value(obsolete)
            message = Plural(msgid=msgid, msgid_plural=msgid_plural,
                             msgstr=self._read_plural_forms(obsolete))
        else:
            message = Singular(msgid=msgid, msgstr=self._read_msgstr(obsolete))

        message.msgctxt = msgctxt
        message.obsolete = obsolete
        message.line = msgid_line
        fields.apply(message)
        entry.message = message
        return entry

    def _read_value(self, obsolete: bool) -> list[str]:
        """Consume a keyword line plus its continuation strings."""
        line = self._peek()
        self._check_obsolete(line, obsolete)
        self._advance()
        fragments = list(line.strings)
        line = self._peek()
        while line is not None and line.kind is LineKind.STRING:
            self._check_obsolete(line, obsolete)
            fragments.extend(line.strings)
            self._advance()
            line = self._peek()
        return fragments

    @staticmethod
    def _check_obsolete(line: Line, obsolete: bool) -> None:
        if line.obsolete != obsolete:
            raise ParseFailure("inconsistent obsolete marker", line.lineno)

    def _read_msgstr(self, obsolete: bool) -> list[str]:
        line = self._peek()
        if _is_keyword(line, "msgstr"):
            if line.index is not None:
                raise ParseFailure(f"'{_name(line)}' used without 'msgid_plural'", line.lineno)
            return self._read_value(obsolete)
        if line is not None and line.kind is LineKind.UNKNOWN:
            raise self._unexpected(line, "msgstr")
        if line is not None and line.kind is LineKind.STRING:
            raise self._unexpected(line, "msgstr")
        lineno = line.lineno if line is not None else self._last_lineno
        raise ParseFailure("missing 'msgstr' for msgid", lineno)

    def _read_plural_forms(self, obsolete: bool) -> dict[int, list[str]]:
        forms: dict[int, list[str]] = {}
        line = self._peek()
        while _is_keyword(line, "msgstr"):
            if line.index is None:
                raise ParseFailure(
                    "'msgstr' used with 'msgid_plural'; expected 'msgstr[N]'", line.lineno)
            if line.index in forms:
                raise ParseFailure(f"duplicate plural form '{_name(line)}'", line.lineno)
            index = line.index
            forms[index] = self._read_value(obsolete)
            line = self._peek()
        if not forms:
            if line is not None and line.kind in (LineKind.UNKNOWN, LineKind.STRING):
                raise self._unexpected(line, "msgstr[N]")
            lineno = line.lineno if line is not None else self._last_lineno
            raise ParseFailure("missing 'msgstr[N]' for msgid_plural", lineno)
        return dict(sorted(forms.items()))

    # ── Catalog ───────────────────────────────────────────────────

    def catalog(self) -> Catalog:
        """Parse into a :class:`Catalog`, lifting out the header entry."""
        catalog = Catalog(file=self.file)
        header_found = False
        for entry in self.entries():
            message = entry.message
            if message is None:
                catalog.top_comments = entry.raw_comments
            elif not header_found and _is_header(message):
                header_found = True
                catalog.headers = _split_header(message.msgstr_text)
                catalog.top_comments = entry.raw_comments
                log.debug("header entry on line %s", message.line)
            else:
                catalog.messages.append(message)
        log.debug("parsed %d message(s) from %s", len(catalog.messages), self.file or "<string>")
        return catalog


class _CommentFields:
    """Accumulates the comment lines in front of one entry."""

    def __init__(self):
        self.comments: list[str] = []
        self.extracted: list[str] = []
        self.references: list[list[str]] = []
        self.flags: list[str] = []
        self.previous: dict[str, list[str]] = {}
        self._previous_key: Optional[str] = None

    def add(self, line: Line) -> None:
        marker = line.marker
        if marker is CommentKind.TRANSLATOR:
            self.comments.append(line.text)
        elif marker is CommentKind.EXTRACTED:
            self.extracted.append(line.text)
        elif marker is CommentKind.REFERENCE:
            refs = line.text.split()
            if refs:
                self.references.append(refs)
        elif marker is CommentKind.FLAG:
            for flag in line.text.split(","):
                flag = flag.strip()
                if flag and flag not in self.flags:
                    self.flags.append(flag)
        else:
            self._add_previous(line)

    def _add_previous(self, line: Line) -> None:
        inner = line.inner
        if inner.kind is LineKind.STRING:
            if self._previous_key is None:
                raise ParseFailure("unexpected string in previous-message comment", line.lineno)
            self.previous[self._previous_key].extend(inner.strings)
            return
        if inner.keyword == "msgstr":
            raise ParseFailure(
                f"unexpected '{_name(inner)}' in previous-message comment", line.lineno)
        self._previous_key = inner.keyword
        self.previous[inner.keyword] = list(inner.strings)

    def apply(self, message: Message) -> None:
        message.comments = self.comments
        message.extracted_comments = self.extracted
        message.references = self.references
        message.flags = self.flags
        message.previous_msgctxt = self.previous.get("msgctxt")
        message.previous_msgid = self.previous.get("msgid")
        message.previous_msgid_plural = self.previous.get("msgid_plural")


def _is_header(message: Message) -> bool:
    return (
        isinstance(message, Singular)
        and not message.obsolete
        and message.msgctxt is None
        and message.msgid_text == ""
    )


def _split_header(value: str) -> list[str]:
    if not value:
        return []
    lines = value.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse(text: str, file: Optional[str] = None) -> ParseResult:
    """Parse ``text`` into a :class:`Catalog`.

    Returns a :class:`ParseError` for the first lexical or structural
    problem, or a :class:`DuplicateError` listing every duplicated message.
    ``file`` is only used as a display hint.
    """
    try:
        catalog = PoParser(text, file).catalog()
    except ParseFailure as exc:
        log.debug("parse failed at line %d: %s", exc.line, exc.reason)
        return exc.to_result()

    duplicates = find_duplicates(catalog.messages)
    if duplicates:
        return DuplicateError(tuple(duplicates))
    return catalog
