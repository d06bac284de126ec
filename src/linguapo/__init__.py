"""linguapo: read and write gettext PO/POT catalogs."""

from linguapo.parsers import (
    Catalog,
    DuplicateMessagesError,
    Plural,
    PoError,
    PoSyntaxError,
    Singular,
)

__version__ = "0.3.0"
APP_ID = "linguapo"

__all__ = [
    "APP_ID",
    "Catalog",
    "DuplicateMessagesError",
    "Plural",
    "PoError",
    "PoSyntaxError",
    "Singular",
    "__version__",
]
