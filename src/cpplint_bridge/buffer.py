# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Text buffer interface and an in-memory document implementation."""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import TextRange


@runtime_checkable
class TextBuffer(Protocol):
    """Read-only view of a host editor buffer."""

    @property
    def line_count(self) -> int:
        """Return the number of lines in the buffer (``0`` when empty)."""

        raise NotImplementedError

    def line_start_offset(self, line: int) -> int:
        """Return the offset of the first character of ``line`` (0-based)."""

        raise NotImplementedError

    def line_end_offset(self, line: int) -> int:
        """Return the offset just past ``line`` excluding its terminator."""

        raise NotImplementedError

    def text_in_range(self, text_range: TextRange) -> str:
        """Return the text covered by ``text_range``."""

        raise NotImplementedError


class Document:
    """Editable in-memory buffer mirroring the host editor's line model.

    A trailing newline starts a new, empty last line, so ``"a\\n"`` has two
    lines. Line terminators may be ``\\n`` or ``\\r\\n``.
    """

    def __init__(self, text: str, *, path: Path | None = None, root: Path | None = None) -> None:
        self.path = path
        self.root = root
        self._text = text
        self._line_starts = self._compute_line_starts(text)

    @classmethod
    def from_file(cls, path: Path, *, root: Path | None = None) -> Document:
        """Load ``path`` into a new document."""
        text = path.read_text(encoding="utf-8", errors="replace")
        return cls(text, path=path, root=root)

    @staticmethod
    def _compute_line_starts(text: str) -> list[int]:
        if not text:
            return []
        starts = [0]
        index = text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = text.find("\n", index + 1)
        return starts

    @property
    def text(self) -> str:
        """Return the full buffer contents."""
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def _check_line(self, line: int) -> None:
        if not 0 <= line < len(self._line_starts):
            raise IndexError(f"line {line} out of range (0..{len(self._line_starts) - 1})")

    def line_start_offset(self, line: int) -> int:
        self._check_line(line)
        return self._line_starts[line]

    def line_end_offset(self, line: int) -> int:
        self._check_line(line)
        if line + 1 == len(self._line_starts):
            return len(self._text)
        end = self._line_starts[line + 1] - 1
        if end > self._line_starts[line] and self._text[end - 1] == "\r":
            end -= 1
        return end

    def line_text(self, line: int) -> str:
        """Return the text of ``line`` without its terminator."""
        return self._text[self.line_start_offset(line) : self.line_end_offset(line)]

    def line_of_offset(self, offset: int) -> int:
        """Return the 0-based line containing ``offset``."""
        if not self._line_starts:
            raise IndexError("empty document has no lines")
        return max(0, bisect_right(self._line_starts, offset) - 1)

    def text_in_range(self, text_range: TextRange) -> str:
        return self._text[text_range.start : text_range.end]

    def replace(self, start: int, end: int, replacement: str) -> None:
        """Replace ``text[start:end]`` with ``replacement``."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"invalid edit range {start}..{end} for length {len(self._text)}")
        self._text = self._text[:start] + replacement + self._text[end:]
        self._line_starts = self._compute_line_starts(self._text)

    def insert(self, offset: int, value: str) -> None:
        """Insert ``value`` at ``offset``."""
        self.replace(offset, offset, value)

    def save(self) -> None:
        """Write the document back to :attr:`path`."""
        if self.path is None:
            raise ValueError("document has no backing path")
        self.path.write_text(self._text, encoding="utf-8")


__all__ = ["Document", "TextBuffer"]
