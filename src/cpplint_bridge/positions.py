# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map cpplint's 1-based line numbers onto buffer offsets."""

from __future__ import annotations

from .buffer import TextBuffer
from .models import TextRange


def resolve_line_index(buffer: TextBuffer, line_number: int) -> int | None:
    """Clamp a 1-based ``line_number`` to a valid 0-based line of ``buffer``.

    cpplint occasionally reports one line past the end of the file, so values
    beyond the buffer collapse onto its last line. Returns ``None`` for an
    empty buffer.
    """

    line_count = buffer.line_count
    if line_count == 0:
        return None
    if line_number >= line_count:
        return line_count - 1
    if line_number > 0:
        return line_number - 1
    return 0


def resolve_range(buffer: TextBuffer, line_number: int) -> TextRange | None:
    """Return the highlighted range for a finding on ``line_number``.

    The range spans the clamped line from its first non-whitespace character
    to the end of the line, excluding the terminator.

    Args:
        buffer: Text buffer the finding refers to.
        line_number: 1-based line reported by cpplint.

    Returns:
        TextRange | None: The range to highlight, or ``None`` when the buffer
        has no lines and the finding must be dropped.
    """

    line = resolve_line_index(buffer, line_number)
    if line is None:
        return None
    start = buffer.line_start_offset(line)
    end = buffer.line_end_offset(line)
    text = buffer.text_in_range(TextRange(start=start, end=end))
    indent = len(text) - len(text.lstrip())
    return TextRange(start=start + indent, end=end)


__all__ = ["resolve_line_index", "resolve_range"]
