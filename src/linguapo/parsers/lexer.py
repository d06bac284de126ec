"""Line classifier for PO files.

Every physical line is turned into one :class:`Line`.  Keyword and string
lines carry their already unescaped quoted strings, so the parser never
looks at raw text again.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from linguapo.parsers.errors import ParseFailure


class LineKind(Enum):
    KEYWORD = "keyword"
    COMMENT = "comment"
    STRING = "string"
    BLANK = "blank"
    UNKNOWN = "unknown"


class CommentKind(Enum):
    TRANSLATOR = "#"
    EXTRACTED = "#."
    REFERENCE = "#:"
    FLAG = "#,"
    PREVIOUS = "#|"


KEYWORDS = ("msgctxt", "msgid", "msgid_plural", "msgstr")

_COMMENT_MARKERS = {
    ".": CommentKind.EXTRACTED,
    ":": CommentKind.REFERENCE,
    ",": CommentKind.FLAG,
    "|": CommentKind.PREVIOUS,
}

_KEYWORD_RE = re.compile(r"([A-Za-z_]+)(\[[^\]\s]*\])?")

ESCAPE_MAP = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    '"': '"',
    "'": "'",
    "?": "?",
    "\\": "\\",
}

# Inverse table for the composer; order matters for the backslash.
_UNESCAPE_ORDER = [
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ("\r", "\\r"),
    ("\a", "\\a"),
    ("\b", "\\b"),
    ("\f", "\\f"),
    ("\v", "\\v"),
]

_OCTAL_RE = re.compile(r"[0-7]{1,3}")
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_STRAIGHT_RUN = re.compile(r'[^"\\]*')


@dataclass
class Line:
    """One classified physical line."""
    lineno: int
    kind: LineKind
    keyword: Optional[str] = None
    index: Optional[int] = None
    strings: list[str] = field(default_factory=list)
    marker: Optional[CommentKind] = None
    text: str = ""
    inner: Optional["Line"] = None
    obsolete: bool = False
    raw: str = ""


def escape(value: str) -> str:
    """Escape ``value`` for use between double quotes."""
    for plain, escaped in _UNESCAPE_ORDER:
        value = value.replace(plain, escaped)
    return value


def unescape(body: str, lineno: int = 0) -> str:
    """Unescape the text between a pair of quotes."""
    out = []
    pos = 0
    while pos < len(body):
        run = _STRAIGHT_RUN.match(body, pos)
        out.append(run.group())
        pos = run.end()
        if pos >= len(body):
            break
        if body[pos] == '"':
            raise ParseFailure("unescaped '\"' inside string", lineno)
        # backslash
        if pos + 1 >= len(body):
            raise ParseFailure("invalid escape sequence '\\'", lineno)
        lead = body[pos + 1]
        if lead in ESCAPE_MAP:
            out.append(ESCAPE_MAP[lead])
            pos += 2
        elif lead == "x":
            digits = _HEX_RE.match(body, pos + 2)
            if digits is None:
                raise ParseFailure("invalid escape sequence '\\x'", lineno)
            code = int(digits.group(), 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise ParseFailure(f"invalid escape sequence '\\x{digits.group()}'", lineno)
            out.append(chr(code))
            pos = digits.end()
        elif lead in "01234567":
            digits = _OCTAL_RE.match(body, pos + 1)
            out.append(chr(int(digits.group(), 8)))
            pos = digits.end()
        else:
            raise ParseFailure(f"invalid escape sequence '\\{lead}'", lineno)
    return "".join(out)


def _read_strings(rest: str, lineno: int) -> list[str]:
    """Read one or more adjacent quoted strings making up ``rest``."""
    strings = []
    pos = 0
    while True:
        if pos >= len(rest) or rest[pos] != '"':
            raise ParseFailure("expected a quoted string", lineno)
        end = pos + 1
        while end < len(rest):
            ch = rest[end]
            if ch == "\\":
                end += 2
                continue
            if ch == '"':
                break
            end += 1
        if end >= len(rest):
            raise ParseFailure("unterminated string", lineno)
        strings.append(unescape(rest[pos + 1:end], lineno))
        pos = end + 1
        tail = rest[pos:].lstrip()
        if not tail:
            return strings
        if not tail.startswith('"'):
            raise ParseFailure(f"unexpected content after string: '{tail}'", lineno)
        pos = len(rest) - len(tail)


def _classify_keyword(stripped: str, lineno: int) -> Line:
    match = _KEYWORD_RE.match(stripped)
    token = stripped.split(None, 1)[0]
    if match is None or match.group(1) not in KEYWORDS:
        return Line(lineno, LineKind.UNKNOWN, text=token)

    keyword, bracket = match.group(1), match.group(2)
    index = None
    if bracket is not None:
        if keyword != "msgstr":
            return Line(lineno, LineKind.UNKNOWN, text=token)
        digits = bracket[1:-1]
        if not (digits.isascii() and digits.isdigit()):
            raise ParseFailure(f"invalid plural index in '{token}'", lineno)
        index = int(digits)

    name = stripped[:match.end()]
    rest = stripped[match.end():]
    if rest and not rest[0].isspace() and rest[0] != '"':
        # msgidfoo, msgstr_x ...
        return Line(lineno, LineKind.UNKNOWN, text=token)
    if not rest or not rest[0].isspace():
        raise ParseFailure(f"no space after '{name}'", lineno)
    rest = rest.lstrip()
    if not rest.startswith('"'):
        raise ParseFailure(f"expected a quoted string after '{name}'", lineno)
    return Line(lineno, LineKind.KEYWORD, keyword=keyword, index=index,
                strings=_read_strings(rest, lineno))


def classify(raw: str, lineno: int) -> Line:
    """Classify a single physical line."""
    # comment text keeps its trailing whitespace
    text = raw.lstrip()
    stripped = text.rstrip()
    if not stripped:
        line = Line(lineno, LineKind.BLANK)
    elif stripped.startswith("#~"):
        rest = stripped[2:]
        if rest.startswith("|"):
            line = classify("#" + rest, lineno)
        else:
            line = classify(rest, lineno)
            if line.kind is LineKind.BLANK:
                # a lone "#~" is an empty obsolete comment
                line = Line(lineno, LineKind.COMMENT, marker=CommentKind.TRANSLATOR)
        line.obsolete = True
    elif stripped.startswith("#"):
        line = _classify_comment(text, lineno)
        line.raw = text
        return line
    elif stripped.startswith('"'):
        line = Line(lineno, LineKind.STRING, strings=_read_strings(stripped, lineno))
    else:
        line = _classify_keyword(stripped, lineno)
    line.raw = stripped
    return line


def _classify_comment(comment: str, lineno: int) -> Line:
    marker = _COMMENT_MARKERS.get(comment[1:2], CommentKind.TRANSLATOR)
    if marker is CommentKind.TRANSLATOR:
        text = comment[1:]
    else:
        text = comment[2:]
    if text.startswith(" "):
        text = text[1:]

    inner = None
    if marker is CommentKind.PREVIOUS:
        inner = classify(text, lineno)
        if inner.kind not in (LineKind.KEYWORD, LineKind.STRING):
            raise ParseFailure(f"invalid previous-message comment: '{comment.rstrip()}'", lineno)
    return Line(lineno, LineKind.COMMENT, marker=marker, text=text, inner=inner)


def split_lines(text: str) -> list[str]:
    """Split ``text`` into physical lines; CRLF endings are accepted."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def tokenize(text: str) -> Iterator[Line]:
    """Yield a classified :class:`Line` for every physical line of ``text``."""
    for lineno, raw in enumerate(split_lines(text), 1):
        yield classify(raw, lineno)
