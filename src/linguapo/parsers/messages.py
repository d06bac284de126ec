"""In-memory model of a gettext catalog.

A string value is kept as the list of quoted fragments it was written as
(``msgid ""`` followed by ``"Hello "`` and ``"world"`` is ``["", "Hello ",
"world"]``).  Comparisons and identity always use the concatenated value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


def join(fragments: Optional[list[str]]) -> Optional[str]:
    """Concatenate a fragment list, passing ``None`` through."""
    if fragments is None:
        return None
    return "".join(fragments)


@dataclass
class _MessageBase:
    """Fields shared by singular and plural messages."""
    msgid: list[str] = field(default_factory=list)
    msgctxt: Optional[list[str]] = None
    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    references: list[list[str]] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    previous_msgctxt: Optional[list[str]] = None
    previous_msgid: Optional[list[str]] = None
    previous_msgid_plural: Optional[list[str]] = None
    obsolete: bool = False
    line: Optional[int] = field(default=None, compare=False)

    @property
    def msgid_text(self) -> str:
        return "".join(self.msgid)

    @property
    def msgctxt_text(self) -> Optional[str]:
        return join(self.msgctxt)

    @property
    def is_fuzzy(self) -> bool:
        return "fuzzy" in self.flags

    def add_flag(self, flag: str) -> None:
        if flag not in self.flags:
            self.flags.append(flag)

    def remove_flag(self, flag: str) -> None:
        if flag in self.flags:
            self.flags.remove(flag)


@dataclass
class Singular(_MessageBase):
    """A ``msgid`` / ``msgstr`` pair."""
    msgstr: list[str] = field(default_factory=list)

    @property
    def msgstr_text(self) -> str:
        return "".join(self.msgstr)

    @property
    def is_translated(self) -> bool:
        return bool(self.msgstr_text)

    def key(self) -> tuple:
        return (self.msgctxt_text, self.msgid_text)


@dataclass
class Plural(_MessageBase):
    """A ``msgid`` / ``msgid_plural`` pair with indexed ``msgstr[N]`` forms."""
    msgid_plural: list[str] = field(default_factory=list)
    msgstr: dict[int, list[str]] = field(default_factory=dict)

    @property
    def msgid_plural_text(self) -> str:
        return "".join(self.msgid_plural)

    def msgstr_text(self, index: int) -> str:
        return "".join(self.msgstr.get(index, []))

    @property
    def is_translated(self) -> bool:
        # every form present must be filled in
        return bool(self.msgstr) and all("".join(f) for f in self.msgstr.values())

    def key(self) -> tuple:
        return (self.msgctxt_text, self.msgid_text, self.msgid_plural_text)


Message = Union[Singular, Plural]


@dataclass
class Catalog:
    """A parsed (or hand-built) PO/POT file."""
    messages: list[Message] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    top_comments: list[str] = field(default_factory=list)
    file: Optional[str] = field(default=None, compare=False)

    def header_value(self, name: str) -> Optional[str]:
        """Return the value of the ``Name: value`` header line, if any."""
        wanted = name.lower()
        for line in self.headers:
            key, sep, value = line.partition(":")
            if sep and key.strip().lower() == wanted:
                return value.strip()
        return None

    def find(self, msgid: str, msgctxt: Optional[str] = None) -> Optional[Message]:
        """Return the first live message with this id and context."""
        for message in self.messages:
            if message.obsolete:
                continue
            if message.msgid_text == msgid and message.msgctxt_text == msgctxt:
                return message
        return None

    @property
    def live_messages(self) -> list[Message]:
        return [m for m in self.messages if not m.obsolete]

    @property
    def obsolete_messages(self) -> list[Message]:
        return [m for m in self.messages if m.obsolete]

    @property
    def translated_count(self) -> int:
        return sum(1 for m in self.live_messages if m.is_translated and not m.is_fuzzy)

    @property
    def untranslated_count(self) -> int:
        return sum(1 for m in self.live_messages if not m.is_translated)

    @property
    def fuzzy_count(self) -> int:
        return sum(1 for m in self.live_messages if m.is_fuzzy)

    @property
    def total_count(self) -> int:
        return len(self.live_messages)

    @property
    def percent_translated(self) -> float:
        total = self.total_count
        if total == 0:
            return 100.0
        return round(self.translated_count / total * 100, 1)
