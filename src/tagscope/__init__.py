"""Extract regex-bounded regions of text from files."""
from __future__ import annotations

from tagscope.errors import (
    FileUnreadableError,
    InvalidPatternError,
    LineDecodeError,
    TagscopeError,
)
from tagscope.extractor import (
    Region,
    RegionLine,
    extract_regions,
    extract_tag_regions,
    extract_within_regions,
)
from tagscope.loader import Document, load_document
from tagscope.patterns import CompiledPatterns, ExtractOptions, compile_patterns

__version__ = "0.1.0"

__all__ = [
    "CompiledPatterns",
    "Document",
    "ExtractOptions",
    "FileUnreadableError",
    "InvalidPatternError",
    "LineDecodeError",
    "Region",
    "RegionLine",
    "TagscopeError",
    "compile_patterns",
    "extract_regions",
    "extract_tag_regions",
    "extract_within_regions",
    "load_document",
]
