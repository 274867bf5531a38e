# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Quick fix variants that can be applied to a :class:`Document`."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .buffer import Document

FAMILY_NAME: Final[str] = "Cpplint"

_IFNDEF_PATTERN: Final = re.compile(r"^\s*#\s*ifndef\s+(\w+)")
_DEFINE_PATTERN: Final = re.compile(r"^\s*#\s*define\s+(\w+)")
_ENDIF_PATTERN: Final = re.compile(r"^\s*#\s*endif\b")
# cpplint honours only the first NOLINT marker on a line.
_NOLINT_PATTERN: Final = re.compile(r"\bNOLINT\b(?:\(([^)]*)\))?")
_GUARD_SANITIZER: Final = re.compile(r"[^a-zA-Z0-9]")
_FALLBACK_GUARD_STEM: Final[str] = "UNTITLED_H"


class Fix(ABC):
    """Automated edit offered for a finding."""

    __slots__ = ()

    family_name: str = FAMILY_NAME

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the label shown for this fix."""

    @abstractmethod
    def apply(self, document: Document, line: int) -> None:
        """Apply the fix to ``document`` for a finding reported on ``line`` (0-based)."""


@dataclass(frozen=True, slots=True)
class SuppressionFix(Fix):
    """Append a ``NOLINT(category)`` comment to the offending line."""

    rule_category: str

    @property
    def name(self) -> str:
        return f"Add NOLINT for '{self.rule_category}'"

    @property
    def marker(self) -> str:
        """Return the suppression comment inserted by this fix."""
        return f"// NOLINT({self.rule_category})"

    def apply(self, document: Document, line: int) -> None:
        if document.line_count == 0:
            return
        text = document.line_text(line)
        existing = _NOLINT_PATTERN.search(text)
        if existing is None:
            document.insert(document.line_end_offset(line), f"  {self.marker}")
            return
        if existing.group(1) is None:
            return
        categories = [part.strip() for part in existing.group(1).split(",") if part.strip()]
        if "*" in categories or self.rule_category in categories:
            return
        merged = f"NOLINT({', '.join([*categories, self.rule_category])})"
        start = document.line_start_offset(line)
        document.replace(start + existing.start(), start + existing.end(), merged)


@dataclass(frozen=True, slots=True)
class TrailingNewlineFix(Fix):
    """Terminate the file with a newline character."""

    @property
    def name(self) -> str:
        return "Add newline at end of file"

    def apply(self, document: Document, line: int) -> None:
        del line
        if not document.text.endswith("\n"):
            document.insert(len(document.text), "\n")


def default_guard_name(path: Path | None, root: Path | None = None) -> str:
    """Derive a cpplint-style header guard from ``path``.

    The path is made relative to ``root`` when possible, otherwise only the
    file name is used. Every non-alphanumeric character becomes ``_`` and the
    result is uppercased with a trailing underscore, so ``src/foo/bar.h``
    yields ``SRC_FOO_BAR_H_``.
    """

    if path is None:
        return f"{_FALLBACK_GUARD_STEM}_"
    relative: Path | None = None
    if root is not None:
        try:
            relative = path.resolve().relative_to(root.resolve())
        except (OSError, ValueError):
            relative = None
    stem = relative.as_posix() if relative is not None else path.name
    return _GUARD_SANITIZER.sub("_", stem).upper() + "_"


@dataclass(frozen=True, slots=True)
class HeaderGuardFix(Fix):
    """Rename the existing header guard, or add one when the file has none."""

    guard_name: str | None = None

    @property
    def name(self) -> str:
        if self.guard_name:
            return f"Use header guard '{self.guard_name}'"
        return "Fix header guard"

    def resolve_guard(self, document: Document) -> str:
        """Return the guard to write.

        Without an explicit ``guard_name`` the document's existing guard is
        kept; a path-derived name is used only for files with no guard.
        """

        if self.guard_name:
            return self.guard_name
        existing = _find_guard(document)
        if existing is not None:
            return existing[2]
        return default_guard_name(document.path, document.root)

    def apply(self, document: Document, line: int) -> None:
        del line
        guard = self.resolve_guard(document)
        existing = _find_guard(document)
        if existing is None:
            _wrap_with_guard(document, guard)
            return
        ifndef_line, define_line, old_guard = existing
        endif_line = _find_last_endif(document)
        if endif_line is not None and endif_line > define_line:
            _replace_line(document, endif_line, f"#endif  // {guard}")
        if old_guard == guard:
            return
        word = re.compile(rf"\b{re.escape(old_guard)}\b")
        for target in (define_line, ifndef_line):
            _replace_line(document, target, word.sub(guard, document.line_text(target)))


def _replace_line(document: Document, line: int, text: str) -> None:
    document.replace(document.line_start_offset(line), document.line_end_offset(line), text)


def _find_guard(document: Document) -> tuple[int, int, str] | None:
    """Return ``(ifndef_line, define_line, guard)`` for the first guard block."""
    for line in range(document.line_count):
        match = _IFNDEF_PATTERN.match(document.line_text(line))
        if match is None:
            continue
        following = line + 1
        while following < document.line_count and not document.line_text(following).strip():
            following += 1
        if following >= document.line_count:
            return None
        define = _DEFINE_PATTERN.match(document.line_text(following))
        if define is not None and define.group(1) == match.group(1):
            return line, following, match.group(1)
        return None
    return None


def _find_last_endif(document: Document) -> int | None:
    for line in range(document.line_count - 1, -1, -1):
        if _ENDIF_PATTERN.match(document.line_text(line)):
            return line
    return None


def _wrap_with_guard(document: Document, guard: str) -> None:
    suffix = "" if not document.text or document.text.endswith("\n") else "\n"
    document.insert(len(document.text), f"{suffix}\n#endif  // {guard}\n")
    document.insert(0, f"#ifndef {guard}\n#define {guard}\n\n")


__all__ = [
    "FAMILY_NAME",
    "Fix",
    "HeaderGuardFix",
    "SuppressionFix",
    "TrailingNewlineFix",
    "default_guard_name",
]
