"""Line loading: read a whole file into an immutable sequence of lines."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tagscope.errors import FileUnreadableError, LineDecodeError


@dataclass(frozen=True, slots=True)
class Document:
    """All lines of one file, 0-indexed, without line terminators."""

    path: Path
    lines: tuple[str, ...]


def split_lines(raw: bytes, path: Path) -> tuple[str, ...]:
    """Split raw file bytes into decoded lines.

    Lines end at ``\\n``; a trailing ``\\r`` is dropped so CRLF files read the
    same as LF files. A final terminator does not produce an empty last line.

    Raises:
        LineDecodeError: On the first line that is not valid UTF-8.
    """
    chunks = raw.split(b"\n")
    if chunks and chunks[-1] == b"":
        chunks.pop()
    lines: list[str] = []
    for idx, chunk in enumerate(chunks):
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        try:
            lines.append(chunk.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise LineDecodeError(path, idx, exc) from exc
    return tuple(lines)


def load_document(path: Path) -> Document:
    """Read ``path`` fully into memory.

    The file handle is closed before any extraction happens.

    Raises:
        FileUnreadableError: The file is missing, is a directory, or is not
            readable by the current user.
        LineDecodeError: The file contains a line that is not valid UTF-8.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise FileUnreadableError(path, exc) from exc
    return Document(path=path, lines=split_lines(raw, path))
