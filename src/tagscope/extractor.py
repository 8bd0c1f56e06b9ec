"""Region extraction over a loaded document.

Two modes:
  tag mode:    a start match opens a region, the next end match closes it
  within mode: every anchor (within match) expands backward to the nearest
                start match and forward to the nearest end match

Patterns are matched with ``re.Pattern.search`` against the raw line text.
Extraction never formats anything; see ``tagscope.formatting``.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from tagscope.loader import Document
from tagscope.patterns import CompiledPatterns

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RegionLine:
    """One emitted line with its source index."""

    index: int
    text: str
    marked: bool = False  # start line (tag mode) or anchor line (within mode)


@dataclass(frozen=True, slots=True)
class Region:
    """Contiguous lines bounded by a start match and an end match.

    ``trigger`` is the index of the line that produced the region: the start
    match in tag mode, the anchor in within mode. ``closed`` is False when
    the region ran into end-of-file without an end match.
    """

    trigger: int
    lines: tuple[RegionLine, ...]
    closed: bool = True

    @property
    def first_index(self) -> int:
        return self.lines[0].index

    @property
    def last_index(self) -> int:
        return self.lines[-1].index


class _State(enum.Enum):
    OUTSIDE = enum.auto()
    INSIDE = enum.auto()


# ---------------------------------------------------------------------------
# Tag mode
# ---------------------------------------------------------------------------

def extract_tag_regions(
    doc: Document, patterns: CompiledPatterns,
) -> list[Region]:
    """Extract start..end regions in a single pass.

    A start match while already inside a region is ignored (no nesting).
    The start line may close its own region when it also matches the end
    pattern. A region still open at end-of-file is returned with
    ``closed=False``.
    """
    regions: list[Region] = []
    state = _State.OUTSIDE
    current: list[RegionLine] = []
    trigger = -1

    for idx, text in enumerate(doc.lines):
        if state is _State.OUTSIDE:
            if patterns.start.search(text) is None:
                continue
            state = _State.INSIDE
            trigger = idx
            current = [RegionLine(idx, text, marked=True)]
        else:
            current.append(RegionLine(idx, text))

        if patterns.end.search(text) is not None:
            regions.append(Region(trigger, tuple(current)))
            state = _State.OUTSIDE
            current = []

    if state is _State.INSIDE:
        regions.append(Region(trigger, tuple(current), closed=False))

    return regions


# ---------------------------------------------------------------------------
# Within mode
# ---------------------------------------------------------------------------

def find_anchors(doc: Document, patterns: CompiledPatterns) -> list[int]:
    """Return the ascending indices of lines matching the within pattern."""
    if patterns.within is None:
        raise ValueError("find_anchors requires a within pattern")
    within = patterns.within
    return [idx for idx, text in enumerate(doc.lines) if within.search(text)]


def _backward_run(
    doc: Document, patterns: CompiledPatterns, anchor: int, anchors: set[int],
) -> list[RegionLine]:
    # Lines strictly before the anchor, back to the nearest start match.
    run: list[RegionLine] = []
    for idx in range(anchor - 1, -1, -1):
        text = doc.lines[idx]
        run.append(RegionLine(idx, text, marked=idx in anchors))
        if patterns.start.search(text) is not None:
            break
    run.reverse()
    return run


def _forward_run(
    doc: Document, patterns: CompiledPatterns, anchor: int, anchors: set[int],
) -> tuple[list[RegionLine], bool]:
    run: list[RegionLine] = []
    for idx in range(anchor, len(doc.lines)):
        text = doc.lines[idx]
        run.append(RegionLine(idx, text, marked=idx in anchors))
        if patterns.end.search(text) is not None:
            return run, True
    return run, False


def extract_within_regions(
    doc: Document, patterns: CompiledPatterns,
) -> list[Region]:
    """Extract one region per anchor line.

    For each anchor ``i`` (ascending), the region is the backward run over
    ``i-1 .. 0`` stopping at the first start match (inclusive), in document
    order, followed by the forward run over ``i .. EOF`` stopping at the first
    end match (inclusive). The anchor line appears exactly once per region.
    Regions of different anchors may overlap and are not deduplicated.
    """
    anchors = find_anchors(doc, patterns)
    log.debug("%s: %d anchor line(s)", doc.path, len(anchors))
    anchor_set = set(anchors)

    regions: list[Region] = []
    for anchor in anchors:
        before = _backward_run(doc, patterns, anchor, anchor_set)
        after, closed = _forward_run(doc, patterns, anchor, anchor_set)
        regions.append(Region(anchor, tuple(before + after), closed=closed))
    return regions


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def extract_regions(doc: Document, patterns: CompiledPatterns) -> list[Region]:
    """Extract regions with the mode implied by ``patterns``."""
    if patterns.within_mode:
        regions = extract_within_regions(doc, patterns)
    else:
        regions = extract_tag_regions(doc, patterns)
    log.debug("%s: %d region(s)", doc.path, len(regions))
    return regions


def iter_region_lines(regions: Iterable[Region]) -> Iterator[RegionLine]:
    """Flatten regions into output order."""
    for region in regions:
        yield from region.lines
