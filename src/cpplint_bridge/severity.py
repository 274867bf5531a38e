# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Presentation severity derived from cpplint's confidence scale."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        """Return the editor-facing highlight name for this severity."""

        return _SEVERITY_LABELS[self]


_SEVERITY_LABELS: Final[dict[Severity, str]] = {
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "weak warning",
}

_CONFIDENCE_TO_SEVERITY: Final[dict[int, Severity]] = {
    5: Severity.HIGH,
    4: Severity.MEDIUM,
    3: Severity.MEDIUM,
    2: Severity.LOW,
    1: Severity.LOW,
}


def severity_from_confidence(confidence: int) -> Severity:
    """Map a cpplint confidence level (1-5) to a :class:`Severity`.

    Args:
        confidence: Confidence value reported by cpplint.

    Returns:
        Severity: ``HIGH`` for 5, ``MEDIUM`` for 3-4 and ``LOW`` otherwise.
    """

    return _CONFIDENCE_TO_SEVERITY.get(confidence, Severity.LOW)


__all__ = ["Severity", "severity_from_confidence"]
