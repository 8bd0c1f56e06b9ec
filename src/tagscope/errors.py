"""Exception hierarchy for tagscope.

Library code raises these; the CLI turns them into printed messages.
"""
from __future__ import annotations

from pathlib import Path


class TagscopeError(RuntimeError):
    """Base class for all tagscope failures."""


class InvalidPatternError(TagscopeError):
    """Raised when one of the user-supplied regexes fails to compile."""

    def __init__(self, name: str, pattern: str, reason: str) -> None:
        super().__init__(f"invalid {name} pattern {pattern!r}: {reason}")
        self.name = name
        self.pattern = pattern
        self.reason = reason


class FileUnreadableError(TagscopeError):
    """Raised when a file does not exist or cannot be read."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cannot read {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class LineDecodeError(TagscopeError):
    """Raised when a line of a file is not valid UTF-8."""

    def __init__(self, path: Path, line_index: int, cause: UnicodeDecodeError) -> None:
        super().__init__(
            f"{path}: line {line_index} is not valid UTF-8 ({cause.reason})"
        )
        self.path = path
        self.line_index = line_index
        self.cause = cause
