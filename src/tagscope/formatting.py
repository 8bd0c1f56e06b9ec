"""Rendering of extracted regions: plain lines and the JSON report."""
from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any

import orjson

from tagscope.extractor import Region, RegionLine, iter_region_lines
from tagscope.patterns import ExtractOptions
from tagscope.walker import FileResult

MARKER = " <------- XXXXXXXXXXXXX"
NUMBER_SEPARATOR = ": "
HEADER_TEMPLATE = "-------- {path} --------"


def format_line(line: RegionLine, options: ExtractOptions) -> str:
    """Render one line with the optional index prefix and marker suffix."""
    text = line.text
    if options.add_markers and line.marked:
        text = f"{text}{MARKER}"
    if options.numbers:
        return f"{line.index}{NUMBER_SEPARATOR}{text}"
    return text


def file_header(path: Path) -> str:
    return HEADER_TEMPLATE.format(path=path)


def render_regions(regions: Iterable[Region], options: ExtractOptions) -> list[str]:
    """Render regions in output order, one string per line."""
    return [format_line(line, options) for line in iter_region_lines(regions)]


def render_tree(results: Iterable[FileResult], options: ExtractOptions) -> list[str]:
    """Render recursive results: a header before each non-empty file block."""
    out: list[str] = []
    for result in results:
        lines = render_regions(result.regions, options)
        if not lines:
            continue
        out.append(file_header(result.path))
        out.extend(lines)
    return out


# ---------------------------------------------------------------------------
# JSON report
# ---------------------------------------------------------------------------

def region_to_dict(region: Region, options: ExtractOptions) -> dict[str, Any]:
    return {
        "trigger": region.trigger,
        "first_line": region.first_index,
        "last_line": region.last_index,
        "closed": region.closed,
        "lines": [
            {
                "index": line.index,
                "text": format_line(line, options),
                "marked": line.marked,
            }
            for line in region.lines
        ],
    }


def build_report(
    results: Iterable[FileResult], options: ExtractOptions,
) -> dict[str, Any]:
    """Structured report over one or more files.

    ``text`` entries carry the same rendering as plain output, so ``-n`` and
    ``-a`` affect them identically.
    """
    files = [
        {
            "path": str(result.path),
            "region_count": len(result.regions),
            "line_count": result.line_count,
            "regions": [region_to_dict(r, options) for r in result.regions],
        }
        for result in results
    ]
    return {
        "file_count": len(files),
        "region_count": sum(f["region_count"] for f in files),
        "files": files,
    }


def dump_json(obj: Any, stream: IO[str] | None = None) -> None:
    """Write ``obj`` as indented JSON followed by a newline."""
    out = stream if stream is not None else sys.stdout
    out.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8"))
    out.write("\n")
