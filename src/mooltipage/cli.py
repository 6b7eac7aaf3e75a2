"""
CLI interface for mooltipage.

Compiles pages from a source directory into an output directory:

    mooltipage --inpath=site --outpath=build --formatter=minimized site/

Directory arguments are searched recursively for ``.html`` files.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mooltipage import __version__
from mooltipage.api import Mooltipage
from mooltipage.environment.exceptions import MooltipageError
from mooltipage.environment.options import MpOptions
from mooltipage.formatting import FormatterMode


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="mooltipage",
        description="Compile HTML templates into static pages",
    )

    parser.add_argument(
        "pages",
        nargs="+",
        help="Pages to compile; directories are searched for .html files",
    )

    parser.add_argument(
        "--inpath",
        type=str,
        help="Source directory (default: current directory)",
    )

    parser.add_argument(
        "--outpath",
        type=str,
        help="Output directory (default: same as --inpath)",
    )

    parser.add_argument(
        "--formatter",
        type=str,
        default=FormatterMode.PRETTY.value,
        choices=[mode.value for mode in FormatterMode],
        help="Output formatting (default: pretty)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(args)


def expand_page_paths(paths: list[str], base_path: Path) -> list[str]:
    """Resource paths, relative to ``base_path``, of every page named or contained in ``paths``."""
    base = base_path.resolve()
    pages: list[str] = []
    for raw in paths:
        path = Path(raw).resolve()
        if path.is_dir():
            candidates = sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() == ".html")
        elif path.is_file() and path.suffix.lower() == ".html":
            candidates = [path]
        else:
            candidates = []
        pages.extend(candidate.relative_to(base).as_posix() for candidate in candidates)
    return pages


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    in_path = Path(args.inpath) if args.inpath else Path.cwd()
    out_path = Path(args.outpath) if args.outpath else in_path

    try:
        pages = expand_page_paths(args.pages, in_path)
    except ValueError as e:
        print(f"Page is outside the source directory: {e}", file=sys.stderr)
        return 1

    print(f"Source path: [{in_path}]")
    print(f"Destination path: [{out_path}]")
    print(f"Page count: {len(pages)}")
    print()

    options = MpOptions(
        in_path=str(in_path),
        out_path=str(out_path),
        formatter=args.formatter,
        on_page_compiled=lambda page: print(f"Compiled [{page.path}]."),
    )

    try:
        Mooltipage(options).process_pages(pages)
    except MooltipageError as e:
        print(e.format_compact(), file=sys.stderr)
        return 1

    print()
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
