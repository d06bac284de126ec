"""String and file entry points for PO/POT catalogs.

``parse_string`` and ``parse_file`` return result values
(:class:`~linguapo.parsers.errors.ParseError`,
:class:`~linguapo.parsers.errors.DuplicateError` or a
:class:`~linguapo.parsers.messages.Catalog`).  ``loads`` and ``load``
raise :class:`~linguapo.parsers.errors.PoSyntaxError` /
:class:`~linguapo.parsers.errors.DuplicateMessagesError` instead.

Example::

    >>> catalog = loads('msgid "foo"\\nmsgstr "bar"\\n')
    >>> catalog.messages[0].msgstr
    ['bar']
    >>> parse_string("foo")
    ParseError(message="unknown keyword 'foo'", line=1)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from linguapo.parsers import composer
from linguapo.parsers.errors import raise_for_result
from linguapo.parsers.messages import Catalog
from linguapo.parsers.po_parser import ParseResult, parse

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_string(text: str, file: Optional[str] = None) -> ParseResult:
    """Parse ``text``; ``file`` is kept on the catalog as a display hint."""
    return parse(text, file)


def loads(text: str, file: Optional[str] = None) -> Catalog:
    """Parse ``text`` and raise on syntax errors or duplicate messages."""
    return raise_for_result(parse(text, file), file)


def _read(path: Path) -> str:
    # utf-8-sig drops a leading BOM
    return path.read_text(encoding="utf-8-sig")


def parse_file(path: PathLike) -> ParseResult:
    """Parse a PO/POT file.  Errors reading the file propagate as ``OSError``."""
    path = Path(path)
    log.debug("reading %s", path)
    return parse(_read(path), str(path))


def load(path: PathLike, file: Optional[str] = None) -> Catalog:
    """Parse a PO/POT file, raising on any error.

    ``file`` overrides the path shown in error messages.
    """
    path = Path(path)
    hint = file or str(path)
    return raise_for_result(parse(_read(path), hint), hint)


def compose(catalog: Catalog, wrap_width: Optional[int] = None) -> bytes:
    return composer.compose(catalog, wrap_width)


def dumps(catalog: Catalog, wrap_width: Optional[int] = None) -> str:
    return composer.compose_string(catalog, wrap_width)


def dump(catalog: Catalog, path: Optional[PathLike] = None,
         wrap_width: Optional[int] = None) -> Path:
    """Write ``catalog`` to ``path`` (default: the file it was read from)."""
    out = Path(path) if path else Path(catalog.file) if catalog.file else None
    if out is None:
        raise ValueError("no path given and the catalog has no file")
    out.write_bytes(composer.compose(catalog, wrap_width))
    log.debug("wrote %d message(s) to %s", len(catalog.messages), out)
    return out
