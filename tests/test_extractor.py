"""Tests for tagscope.extractor module."""
from __future__ import annotations

from pathlib import Path

import pytest

from tagscope.extractor import (
    Region,
    RegionLine,
    extract_regions,
    extract_tag_regions,
    extract_within_regions,
    find_anchors,
    iter_region_lines,
)
from tagscope.loader import Document
from tagscope.patterns import compile_patterns

SAMPLE = ("A", "START", "x", "y", "END", "B")


def _doc(*lines: str) -> Document:
    return Document(path=Path("sample.txt"), lines=tuple(lines))


def _texts(regions: list[Region]) -> list[str]:
    return [line.text for line in iter_region_lines(regions)]


def _indices(regions: list[Region]) -> list[int]:
    return [line.index for line in iter_region_lines(regions)]


class TestTagMode:
    def test_single_region(self) -> None:
        regions = extract_tag_regions(_doc(*SAMPLE), compile_patterns("START", "END"))
        assert len(regions) == 1
        assert _texts(regions) == ["START", "x", "y", "END"]
        assert _indices(regions) == [1, 2, 3, 4]
        assert regions[0].trigger == 1
        assert regions[0].closed is True

    def test_start_line_is_marked(self) -> None:
        regions = extract_tag_regions(_doc(*SAMPLE), compile_patterns("START", "END"))
        assert [line.marked for line in regions[0].lines] == [True, False, False, False]

    def test_multiple_disjoint_regions(self) -> None:
        doc = _doc("S", "a", "E", "b", "S", "c", "E", "d")
        regions = extract_tag_regions(doc, compile_patterns("S", "E"))
        assert len(regions) == 2
        assert _texts(regions) == ["S", "a", "E", "S", "c", "E"]
        assert [r.trigger for r in regions] == [0, 4]

    def test_regions_do_not_nest(self) -> None:
        doc = _doc("S1", "S2", "x", "E", "y")
        regions = extract_tag_regions(doc, compile_patterns("S", "E"))
        assert len(regions) == 1
        assert _texts(regions) == ["S1", "S2", "x", "E"]
        # A start match while inside does not re-trigger
        assert [line.marked for line in regions[0].lines] == [True, False, False, False]

    def test_unclosed_region_cut_at_eof(self) -> None:
        doc = _doc("a", "START", "b", "c")
        regions = extract_tag_regions(doc, compile_patterns("START", "END"))
        assert _texts(regions) == ["START", "b", "c"]
        assert regions[0].closed is False

    def test_start_line_can_close_itself(self) -> None:
        doc = _doc("a", "BEGIN END", "b", "BEGIN", "END")
        regions = extract_tag_regions(doc, compile_patterns("BEGIN", "END"))
        assert [r.lines for r in regions] == [
            (RegionLine(1, "BEGIN END", marked=True),),
            (RegionLine(3, "BEGIN", marked=True), RegionLine(4, "END")),
        ]

    def test_end_before_any_start_is_ignored(self) -> None:
        doc = _doc("END", "START", "END")
        regions = extract_tag_regions(doc, compile_patterns("START", "END"))
        assert _indices(regions) == [1, 2]

    def test_no_match(self) -> None:
        regions = extract_tag_regions(_doc(*SAMPLE), compile_patterns("NOPE", "END"))
        assert regions == []

    def test_empty_document(self) -> None:
        assert extract_tag_regions(_doc(), compile_patterns("S", "E")) == []

    def test_search_semantics(self) -> None:
        doc = _doc("xx <tag> yy", "body", "yy </tag> xx")
        regions = extract_tag_regions(doc, compile_patterns("<tag>", "</tag>"))
        assert _indices(regions) == [0, 1, 2]

    def test_anchored_patterns(self) -> None:
        doc = _doc("  def f():", "def g():", "    return 1", "x")
        regions = extract_tag_regions(doc, compile_patterns("^def ", "return"))
        assert _texts(regions) == ["def g():", "    return 1"]


class TestWithinMode:
    def test_backward_and_forward_runs(self) -> None:
        regions = extract_within_regions(
            _doc(*SAMPLE), compile_patterns("START", "END", "y"),
        )
        assert len(regions) == 1
        region = regions[0]
        assert region.trigger == 3
        # backward run START, x then forward run y, END
        assert [line.text for line in region.lines] == ["START", "x", "y", "END"]
        assert [line.index for line in region.lines] == [1, 2, 3, 4]
        assert region.closed is True

    def test_anchor_line_emitted_once_per_region(self) -> None:
        regions = extract_within_regions(
            _doc(*SAMPLE), compile_patterns("START", "END", "y"),
        )
        assert _indices(regions).count(3) == 1

    def test_only_anchor_is_marked(self) -> None:
        regions = extract_within_regions(
            _doc(*SAMPLE), compile_patterns("START", "END", "y"),
        )
        marked = [line.index for line in regions[0].lines if line.marked]
        assert marked == [3]

    def test_anchor_at_index_zero_has_no_backward_run(self) -> None:
        doc = _doc("y", "a", "END", "b")
        regions = extract_within_regions(doc, compile_patterns("START", "END", "y"))
        assert _texts(regions) == ["y", "a", "END"]

    def test_backward_run_stops_at_document_start(self) -> None:
        doc = _doc("a", "b", "y", "c")
        regions = extract_within_regions(doc, compile_patterns("START", "END", "y"))
        assert _texts(regions) == ["a", "b", "y", "c"]
        assert regions[0].closed is False

    def test_backward_run_stops_at_nearest_start(self) -> None:
        doc = _doc("START", "a", "START", "b", "y", "END")
        regions = extract_within_regions(doc, compile_patterns("START", "END", "y"))
        assert _indices(regions) == [2, 3, 4, 5]

    def test_anchor_matching_start_does_not_stop_backward_run(self) -> None:
        doc = _doc("START", "a", "START y", "b", "END")
        regions = extract_within_regions(doc, compile_patterns("START", "END", "y"))
        assert _texts(regions) == ["START", "a", "START y", "b", "END"]

    def test_anchor_matching_end_closes_forward_run(self) -> None:
        doc = _doc("START", "y END", "z", "END")
        regions = extract_within_regions(doc, compile_patterns("START", "END", "y"))
        assert _texts(regions) == ["START", "y END"]

    def test_overlapping_regions_are_not_deduplicated(self) -> None:
        doc = _doc("START", "y1", "y2", "END")
        regions = extract_within_regions(doc, compile_patterns("START", "END", "y"))
        assert [r.trigger for r in regions] == [1, 2]
        assert _indices(regions) == [0, 1, 2, 3, 0, 1, 2, 3]
        # every anchor stays marked wherever it is emitted
        marked = [line.index for line in iter_region_lines(regions) if line.marked]
        assert marked == [1, 2, 1, 2]

    def test_no_anchor(self) -> None:
        regions = extract_within_regions(
            _doc(*SAMPLE), compile_patterns("START", "END", "zzz"),
        )
        assert regions == []

    def test_find_anchors(self) -> None:
        doc = _doc("y", "a", "ya", "b")
        assert find_anchors(doc, compile_patterns("S", "E", "y")) == [0, 2]

    def test_find_anchors_requires_within(self) -> None:
        with pytest.raises(ValueError):
            find_anchors(_doc("a"), compile_patterns("S", "E"))


class TestExtractRegions:
    def test_dispatches_on_within(self) -> None:
        doc = _doc("a", "START", "y", "END", "START", "z", "END")
        tag = extract_regions(doc, compile_patterns("START", "END"))
        within = extract_regions(doc, compile_patterns("START", "END", "y"))
        assert len(tag) == 2
        assert len(within) == 1
        assert within[0].trigger == 2

    def test_region_bounds(self) -> None:
        regions = extract_regions(_doc(*SAMPLE), compile_patterns("START", "END"))
        assert regions[0].first_index == 1
        assert regions[0].last_index == 4
