"""PO/POT lexer, parser, duplicate detector and composer."""

from __future__ import annotations

from linguapo.parsers.composer import compose, compose_string
from linguapo.parsers.errors import (
    Duplicate,
    DuplicateError,
    DuplicateMessagesError,
    ParseError,
    PoError,
    PoSyntaxError,
)
from linguapo.parsers.messages import Catalog, Message, Plural, Singular
from linguapo.parsers.po_parser import parse

__all__ = [
    "Catalog",
    "Duplicate",
    "DuplicateError",
    "DuplicateMessagesError",
    "Message",
    "ParseError",
    "Plural",
    "PoError",
    "PoSyntaxError",
    "Singular",
    "compose",
    "compose_string",
    "parse",
]
