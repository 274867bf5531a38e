# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lookup of quick fixes offered for each cpplint rule category."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Final

from .fixes import Fix, HeaderGuardFix, SuppressionFix, TrailingNewlineFix

HEADER_GUARD_CATEGORY: Final[str] = "build/header_guard"

_GUARD_SUGGESTION_PATTERN: Final = re.compile(r"please use:\s+(\w+)", re.IGNORECASE)

BUILTIN_FIXES: Final[Mapping[str, Callable[[], Fix]]] = MappingProxyType(
    {
        "whitespace/ending_newline": TrailingNewlineFix,
    },
)


def extract_guard_name(message: str) -> str | None:
    """Return the guard suggested by a ``build/header_guard`` message, if any."""

    match = _GUARD_SUGGESTION_PATTERN.search(message)
    return match.group(1) if match else None


def resolve_fixes(rule_category: str, message: str) -> tuple[Fix, ...]:
    """Return the quick fixes for a finding, most specific first.

    Args:
        rule_category: cpplint rule category, e.g. ``"legal/copyright"``.
        message: Diagnostic message; inspected only for header guard findings.

    Returns:
        tuple[Fix, ...]: The rule-specific fix when one exists, followed by
        a :class:`SuppressionFix` for ``rule_category``.
    """

    specific: Fix | None
    if rule_category == HEADER_GUARD_CATEGORY:
        specific = HeaderGuardFix(extract_guard_name(message))
    else:
        factory = BUILTIN_FIXES.get(rule_category)
        specific = factory() if factory is not None else None

    suppression = SuppressionFix(rule_category)
    if specific is None:
        return (suppression,)
    return (specific, suppression)


__all__ = [
    "BUILTIN_FIXES",
    "HEADER_GUARD_CATEGORY",
    "extract_guard_name",
    "resolve_fixes",
]
