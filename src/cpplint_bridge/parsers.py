# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for cpplint's emacs-style diagnostic lines."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Final

from .models import Finding

DEFAULT_CONFIDENCE: Final[int] = 1

_CPPLINT_PATTERN: Final = re.compile(
    r"""
    ^.+:(?P<line>[0-9]+):\s+
    (?P<message>.+)\s+\[(?P<category>[^\]]+)\]\s+\[(?P<confidence>[0-9]+)\]$
    """,
    re.VERBOSE,
)


def _coerce_confidence(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_CONFIDENCE


def parse_line(raw_line: str) -> Finding | None:
    """Parse one cpplint output line.

    Args:
        raw_line: Line written by cpplint, without its terminator.

    Returns:
        Finding | None: The parsed finding, or ``None`` for progress lines
        such as ``Done processing foo.cc`` and anything else that is not a
        diagnostic.
    """

    match = _CPPLINT_PATTERN.fullmatch(raw_line)
    if match is None:
        return None
    return Finding(
        line_number=int(match.group("line")),
        message=match.group("message"),
        rule_category=match.group("category"),
        confidence=_coerce_confidence(match.group("confidence")),
    )


def parse_lines(lines: Iterable[str]) -> Iterator[Finding]:
    """Yield findings for each diagnostic in ``lines``, preserving order."""

    for line in lines:
        finding = parse_line(line.rstrip("\r\n"))
        if finding is not None:
            yield finding


__all__ = ["DEFAULT_CONFIDENCE", "parse_line", "parse_lines"]
