"""Duplicate message detection."""

from __future__ import annotations

import logging
from typing import Iterable

from linguapo.parsers.errors import Duplicate
from linguapo.parsers.messages import Message, Plural

log = logging.getLogger(__name__)


def describe(message: Message) -> str:
    """Human readable identity, e.g. ``msgid: 'File' and msgctxt: 'menu'``."""
    text = f"msgid: '{message.msgid_text}'"
    if message.msgctxt is not None:
        text += f" and msgctxt: '{message.msgctxt_text}'"
    if isinstance(message, Plural):
        text += f" and msgid_plural: '{message.msgid_plural_text}'"
    return text


def find_duplicates(messages: Iterable[Message]) -> list[Duplicate]:
    """Report every message whose identity was already seen earlier.

    Obsolete messages are tracked apart from live ones, so an obsolete
    entry never collides with a live entry of the same id.
    """
    seen: dict[tuple, int] = {}
    duplicates: list[Duplicate] = []
    for message in messages:
        key = (message.obsolete, message.key())
        line = message.line or 0
        if key in seen:
            duplicates.append(Duplicate(
                f"found duplicate on line {line} for {describe(message)}",
                line,
                seen[key],
            ))
        else:
            seen[key] = line
    if duplicates:
        log.debug("found %d duplicate message(s)", len(duplicates))
    return duplicates
