"""Command-line front-end.

Usage:
    # Every START..END block in a file
    tagscope 'START' 'END' notes.txt

    # Blocks around each line matching 'TODO', with line numbers and markers
    tagscope -n -a -w 'TODO' '^def ' '^\\s*return' module.py

    # Walk a directory tree
    tagscope -r 'BEGIN' 'END' ./configs

Results and error messages go to stdout; log records go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tagscope import __version__
from tagscope.errors import (
    FileUnreadableError,
    InvalidPatternError,
    LineDecodeError,
    TagscopeError,
)
from tagscope.formatting import build_report, dump_json, render_regions, render_tree
from tagscope.patterns import CompiledPatterns, ExtractOptions, compile_patterns
from tagscope.walker import extract_file, walk_tree

log = logging.getLogger(__name__)

UNREADABLE_MESSAGE = "Either the file doesn't exists or you don't have access to it"
RACE_MESSAGE = (
    'Possible race conditions while recursive search: file "{path}" '
    "does not exist or you don't have access to it"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagscope",
        description="Regex parser to search through files.",
    )
    parser.add_argument("regex", help="Regex to apply")
    parser.add_argument("endtag", help="End Tag for the match")
    parser.add_argument("path", type=Path, help="File to parse")
    parser.add_argument(
        "-w", "--within",
        default=None,
        metavar="WITHIN",
        help=(
            "Switch to scope mode, and use this regex as a search and "
            "(regex, endtag) as boundaries of the search afterwards"
        ),
    )
    parser.add_argument(
        "-n", "--numbers",
        action="store_true",
        help="Print line numbers for each printed lines starting from 0",
    )
    parser.add_argument(
        "-a", "--add-markers",
        action="store_true",
        help="Add markers to better show which line matched",
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Recursive search through directories",
    )
    parser.add_argument(
        "-i", "--ignore-case",
        action="store_true",
        help="Match all patterns case-insensitively",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a structured JSON report instead of plain lines",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser


def _emit(lines: list[str]) -> None:
    for line in lines:
        print(line)


def _report_skip(path: Path, exc: TagscopeError) -> None:
    if isinstance(exc, FileUnreadableError):
        print(RACE_MESSAGE.format(path=path))
    else:
        print(f'Got error while parsing "{path}": {exc}')


def run_single(
    path: Path,
    patterns: CompiledPatterns,
    options: ExtractOptions,
    *,
    as_json: bool = False,
) -> None:
    try:
        result = extract_file(path, patterns)
    except FileUnreadableError as exc:
        log.debug("open failed: %s", exc)
        print(UNREADABLE_MESSAGE)
        return
    except LineDecodeError as exc:
        print(f"Got error while parsing: {exc}")
        return

    if as_json:
        dump_json(build_report([result], options))
    else:
        _emit(render_regions(result.regions, options))


def run_recursive(
    root: Path,
    patterns: CompiledPatterns,
    options: ExtractOptions,
    *,
    as_json: bool = False,
) -> None:
    try:
        results = walk_tree(root, patterns, on_skip=_report_skip)
    except FileUnreadableError as exc:
        print(f"Got error while parsing recursively: {exc}")
        return

    if as_json:
        dump_json(build_report(results, options))
    else:
        _emit(render_tree(results, options))


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        patterns = compile_patterns(
            args.regex, args.endtag, args.within, ignore_case=args.ignore_case,
        )
    except InvalidPatternError as exc:
        print(f"Got error while parsing: {exc}")
        return

    options = ExtractOptions(numbers=args.numbers, add_markers=args.add_markers)

    if args.recursive:
        run_recursive(args.path, patterns, options, as_json=args.json)
    else:
        run_single(args.path, patterns, options, as_json=args.json)


if __name__ == "__main__":
    main()
