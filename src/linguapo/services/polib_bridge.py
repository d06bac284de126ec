"""Conversion between :class:`Catalog` and polib's ``POFile``."""

from __future__ import annotations

import logging
from typing import Optional

import polib

from linguapo.parsers.messages import Catalog, Message, Plural, Singular, join

log = logging.getLogger(__name__)


def _fragments(value: Optional[str]) -> Optional[list[str]]:
    if value is None:
        return None
    return [value]


def _split_reference(ref: str) -> tuple[str, str]:
    path, sep, line = ref.rpartition(":")
    if sep and line.isdigit():
        return path, line
    return ref, ""


def _header_comment(top_comments: list[str]) -> str:
    lines = []
    for line in top_comments:
        if not line.startswith("#"):
            lines.append(line)
        elif line[1:2] in (" ", ""):
            lines.append(line[2:])
    return "\n".join(lines)


def _fuzzy_header(top_comments: list[str]) -> bool:
    for line in top_comments:
        if line.startswith("#,") and "fuzzy" in [f.strip() for f in line[2:].split(",")]:
            return True
    return False


def entry_to_polib(message: Message) -> polib.POEntry:
    """Build a ``POEntry`` from one message."""
    entry = polib.POEntry(
        msgid=message.msgid_text,
        msgctxt=message.msgctxt_text,
        comment="\n".join(message.extracted_comments),
        tcomment="\n".join(message.comments),
        flags=list(message.flags),
        occurrences=[_split_reference(ref) for refs in message.references for ref in refs],
        obsolete=message.obsolete,
        previous_msgctxt=join(message.previous_msgctxt),
        previous_msgid=join(message.previous_msgid),
        previous_msgid_plural=join(message.previous_msgid_plural),
    )
    if isinstance(message, Plural):
        entry.msgid_plural = message.msgid_plural_text
        entry.msgstr_plural = {i: "".join(v) for i, v in message.msgstr.items()}
    else:
        entry.msgstr = message.msgstr_text
    return entry


def entry_from_polib(entry: polib.POEntry) -> Message:
    """Build a message from a ``POEntry``."""
    if entry.msgid_plural:
        message: Message = Plural(
            msgid_plural=[entry.msgid_plural],
            msgstr={int(i): [v] for i, v in sorted(entry.msgstr_plural.items())},
        )
    else:
        message = Singular(msgstr=[entry.msgstr])
    message.msgid = [entry.msgid]
    message.msgctxt = _fragments(entry.msgctxt)
    message.comments = entry.tcomment.split("\n") if entry.tcomment else []
    message.extracted_comments = entry.comment.split("\n") if entry.comment else []
    refs = [f"{path}:{line}" if line else path for path, line in entry.occurrences]
    message.references = [refs] if refs else []
    message.flags = list(entry.flags)
    message.previous_msgctxt = _fragments(entry.previous_msgctxt)
    message.previous_msgid = _fragments(entry.previous_msgid)
    message.previous_msgid_plural = _fragments(entry.previous_msgid_plural)
    message.obsolete = bool(entry.obsolete)
    message.line = getattr(entry, "linenum", None)
    return message


def to_polib(catalog: Catalog) -> polib.POFile:
    """Convert ``catalog`` into a ``polib.POFile``."""
    po = polib.POFile()
    po.header = _header_comment(catalog.top_comments)
    po.metadata_is_fuzzy = _fuzzy_header(catalog.top_comments)
    for line in catalog.headers:
        key, sep, value = line.partition(":")
        if not sep:
            log.warning("header line without ':' dropped: %r", line)
            continue
        po.metadata[key.strip()] = value.strip()
    for message in catalog.messages:
        po.append(entry_to_polib(message))
    return po


def from_polib(po: polib.POFile, file: Optional[str] = None) -> Catalog:
    """Convert a ``polib.POFile`` into a :class:`Catalog`."""
    top_comments = [f"# {line}" if line else "#" for line in po.header.split("\n")] if po.header else []
    if po.metadata_is_fuzzy:
        top_comments.append("#, fuzzy")
    return Catalog(
        messages=[entry_from_polib(e) for e in po],
        headers=[f"{key}: {value}" for key, value in po.metadata.items()],
        top_comments=top_comments,
        file=file or getattr(po, "fpath", None),
    )
