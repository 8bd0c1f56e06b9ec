"""Recursive traversal: run extraction over every regular file in a tree."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from tagscope.errors import FileUnreadableError, LineDecodeError, TagscopeError
from tagscope.extractor import Region, extract_regions
from tagscope.loader import load_document
from tagscope.patterns import CompiledPatterns

log = logging.getLogger(__name__)

SkipHandler = Callable[[Path, TagscopeError], None]


@dataclass(frozen=True, slots=True)
class FileResult:
    """Regions extracted from one file."""

    path: Path
    regions: tuple[Region, ...]

    @property
    def line_count(self) -> int:
        return sum(len(r.lines) for r in self.regions)

    @property
    def is_empty(self) -> bool:
        return self.line_count == 0


def extract_file(path: Path, patterns: CompiledPatterns) -> FileResult:
    """Load one file and extract its regions.

    Raises:
        FileUnreadableError: The file cannot be opened or read.
        LineDecodeError: The file contains a line that is not valid UTF-8.
    """
    doc = load_document(path)
    return FileResult(path=path, regions=tuple(extract_regions(doc, patterns)))


def iter_files(
    root: Path,
    *,
    on_error: Callable[[Path, OSError], None] | None = None,
) -> Iterator[Path]:
    """Yield every regular file beneath ``root``, sorted by path.

    Hidden entries are included; symlinks to files are followed. An entry
    whose type cannot be determined (e.g. EACCES on stat) is passed to
    ``on_error`` and skipped.
    """
    for entry in sorted(root.rglob("*")):
        try:
            is_file = entry.is_file()
        except OSError as exc:
            if on_error is not None:
                on_error(entry, exc)
            continue
        if is_file:
            yield entry


def walk_tree(
    root: Path,
    patterns: CompiledPatterns,
    *,
    on_skip: SkipHandler | None = None,
) -> list[FileResult]:
    """Extract regions from every regular file under ``root``.

    Files that cannot be read, or that contain undecodable lines, are logged,
    reported to ``on_skip`` and skipped; the walk continues. Files yielding no
    lines are dropped from the result.

    Raises:
        FileUnreadableError: ``root`` itself does not exist or cannot be
            stat'd.
    """
    try:
        root.stat()
    except OSError as exc:
        raise FileUnreadableError(root, exc) from exc

    def skip(path: Path, exc: TagscopeError) -> None:
        log.info("skipping %s: %s", path, exc)
        if on_skip is not None:
            on_skip(path, exc)

    def stat_failed(path: Path, exc: OSError) -> None:
        skip(path, FileUnreadableError(path, exc))

    results: list[FileResult] = []
    scanned = 0
    for path in iter_files(root, on_error=stat_failed):
        scanned += 1
        try:
            result = extract_file(path, patterns)
        except (FileUnreadableError, LineDecodeError) as exc:
            skip(path, exc)
            continue
        if not result.is_empty:
            results.append(result)

    log.debug(
        "walked %s: %d file(s) scanned, %d with output",
        root, scanned, len(results),
    )
    return results
