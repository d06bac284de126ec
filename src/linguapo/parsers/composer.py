"""Render a :class:`Catalog` back to PO text.

Fragments are written the way they are stored: the first one on the
keyword line and every further one on its own quoted line.  A catalog that
came out of the parser unchanged therefore composes to the same text.
Passing ``wrap_width`` re-wraps every value the way msgcat does instead.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from linguapo.parsers.lexer import escape
from linguapo.parsers.messages import Catalog, Message, Plural, Singular

_WORD_RE = re.compile(r"[^ ]+ *| +")
_PIECE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def _comment(marker: str, text: str) -> str:
    return f"{marker} {text}" if text else marker


def _split_words(piece: str, limit: int) -> list[str]:
    chunks: list[str] = []
    current = ""
    for word in _WORD_RE.findall(piece):
        if current and len(escape(current + word)) > limit:
            chunks.append(current)
            current = word
        else:
            current += word
    if current:
        chunks.append(current)
    return chunks


def wrap(value: str, width: int, lead: int = 0, indent: int = 0) -> list[str]:
    """Split ``value`` into fragments fitting ``width`` columns.

    ``lead`` is the width of the keyword line around the first fragment,
    ``indent`` the prefix width of continuation lines.
    """
    if "\n" not in value[:-1] and lead + len(escape(value)) <= width:
        return [value]
    limit = max(width - indent - 2, 1)
    fragments = [""]
    for piece in _PIECE_RE.findall(value):
        fragments.extend(_split_words(piece, limit))
    return fragments


def _field(keyword: str, fragments: list[str], prefix: str,
           wrap_width: Optional[int]) -> Iterator[str]:
    if wrap_width:
        fragments = wrap("".join(fragments), wrap_width,
                         lead=len(prefix) + len(keyword) + 3, indent=len(prefix))
    if not fragments:
        fragments = [""]
    yield f'{prefix}{keyword} "{escape(fragments[0])}"'
    for fragment in fragments[1:]:
        yield f'{prefix}"{escape(fragment)}"'


def _header_block(catalog: Catalog) -> Iterator[str]:
    for line in catalog.top_comments:
        yield line if line.startswith("#") else _comment("#", line)
    yield 'msgid ""'
    yield 'msgstr ""'
    for line in catalog.headers:
        yield '"' + escape(line) + '\\n"'


def _message_block(message: Message, wrap_width: Optional[int]) -> Iterator[str]:
    for text in message.comments:
        yield _comment("#", text)
    for text in message.extracted_comments:
        yield _comment("#.", text)
    for refs in message.references:
        if refs:
            yield "#: " + " ".join(refs)
    if message.flags:
        yield "#, " + ", ".join(message.flags)

    previous = "#~| " if message.obsolete else "#| "
    for keyword, value in (
        ("msgctxt", message.previous_msgctxt),
        ("msgid", message.previous_msgid),
        ("msgid_plural", message.previous_msgid_plural),
    ):
        if value is not None:
            yield from _field(keyword, value, previous, wrap_width)

    prefix = "#~ " if message.obsolete else ""
    if message.msgctxt is not None:
        yield from _field("msgctxt", message.msgctxt, prefix, wrap_width)
    yield from _field("msgid", message.msgid, prefix, wrap_width)
    if isinstance(message, Plural):
        yield from _field("msgid_plural", message.msgid_plural, prefix, wrap_width)
        for index in sorted(message.msgstr):
            yield from _field(f"msgstr[{index}]", message.msgstr[index], prefix, wrap_width)
    else:
        yield from _field("msgstr", message.msgstr, prefix, wrap_width)


def _needs_header(catalog: Catalog) -> bool:
    """True if a message would be read back as the header entry."""
    return any(
        isinstance(m, Singular) and not m.obsolete and m.msgctxt is None and m.msgid_text == ""
        for m in catalog.messages
    )


def compose_lines(catalog: Catalog, wrap_width: Optional[int] = None) -> Iterator[str]:
    """Yield the lines of the composed catalog, without line endings."""
    blocks = []
    if catalog.headers or catalog.top_comments or _needs_header(catalog):
        blocks.append(_header_block(catalog))
    for message in catalog.messages:
        blocks.append(_message_block(message, wrap_width))
    for i, block in enumerate(blocks):
        if i:
            yield ""
        yield from block


def compose_string(catalog: Catalog, wrap_width: Optional[int] = None) -> str:
    lines = list(compose_lines(catalog, wrap_width))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def compose(catalog: Catalog, wrap_width: Optional[int] = None) -> bytes:
    """Compose ``catalog`` as UTF-8 encoded bytes."""
    # lone surrogates only come from hand-built catalogs
    return compose_string(catalog, wrap_width).encode("utf-8", "surrogatepass")
