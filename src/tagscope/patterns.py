"""Pattern compilation and the frozen option set for one invocation."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from tagscope.errors import InvalidPatternError

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompiledPatterns:
    """The start, end and optional within regexes, compiled once."""

    start: re.Pattern[str]
    end: re.Pattern[str]
    within: re.Pattern[str] | None = None

    @property
    def within_mode(self) -> bool:
        return self.within is not None


@dataclass(frozen=True, slots=True)
class ExtractOptions:
    """Presentation switches shared by every extraction in a run."""

    numbers: bool = False
    add_markers: bool = False


def _compile(name: str, pattern: str, flags: int) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidPatternError(name, pattern, str(exc)) from exc


def compile_patterns(
    start: str,
    end: str,
    within: str | None = None,
    *,
    ignore_case: bool = False,
) -> CompiledPatterns:
    """Compile the user-supplied patterns.

    Args:
        start: Start-of-region regex (``regex`` on the command line).
        end: End-of-region regex (``endtag`` on the command line).
        within: Optional anchor regex enabling within-scoped mode.
        ignore_case: Compile every pattern with ``re.IGNORECASE``.

    Returns:
        CompiledPatterns ready to be reused across files.

    Raises:
        InvalidPatternError: If any pattern fails to compile. The error
            names which of the three patterns was rejected.
    """
    flags = re.IGNORECASE if ignore_case else 0
    compiled = CompiledPatterns(
        start=_compile("regex", start, flags),
        end=_compile("endtag", end, flags),
        within=_compile("within", within, flags) if within is not None else None,
    )
    log.debug(
        "compiled patterns start=%r end=%r within=%r",
        start, end, within,
    )
    return compiled
