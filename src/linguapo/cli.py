"""linguapo command line: check and re-format PO/POT files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from linguapo import __version__
from linguapo.parsers.errors import PoError
from linguapo.po import dump, dumps, load
from linguapo.services.settings import Settings

log = logging.getLogger("linguapo.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linguapo", description=__doc__)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Parse files and report errors")
    check.add_argument("files", nargs="+", type=Path)
    check.add_argument("--stats", action="store_true", help="Print translation statistics")

    fmt = sub.add_parser("format", help="Re-compose a file in canonical form")
    fmt.add_argument("file", type=Path)
    fmt.add_argument("-o", "--output", type=Path, default=None)
    fmt.add_argument("-i", "--in-place", action="store_true")
    fmt.add_argument("--wrap-width", type=int, default=None,
                     help="Re-wrap strings to this width (0 keeps fragments)")
    return parser


def _check(files: list[Path], stats: bool) -> int:
    failed = 0
    for path in files:
        try:
            catalog = load(path)
        except PoError as exc:
            print(exc, file=sys.stderr)
            failed += 1
            continue
        except OSError as exc:
            print(f"{path}: {exc.strerror or exc}", file=sys.stderr)
            failed += 1
            continue
        if stats:
            print(
                f"{path}: {catalog.translated_count} translated, "
                f"{catalog.fuzzy_count} fuzzy, {catalog.untranslated_count} untranslated "
                f"({catalog.percent_translated}%)"
            )
        log.info("%s: ok (%d messages)", path, len(catalog.messages))
    return 1 if failed else 0


def _format(path: Path, output: Optional[Path], in_place: bool,
            wrap_width: Optional[int]) -> int:
    if wrap_width is None:
        wrap_width = Settings.get().wrap_width
    try:
        catalog = load(path)
    except PoError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    width = wrap_width or None
    if in_place:
        dump(catalog, path, width)
    elif output:
        dump(catalog, output, width)
    else:
        sys.stdout.write(dumps(catalog, width))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    level = "DEBUG" if args.verbose else Settings.get().log_level
    logging.basicConfig(level=getattr(logging, level), format="%(name)s: %(message)s")

    if args.command == "check":
        return _check(args.files, args.stats)
    return _format(args.file, args.output, args.in_place, args.wrap_width)


if __name__ == "__main__":
    sys.exit(main())
