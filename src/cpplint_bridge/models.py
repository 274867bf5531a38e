# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the cpplint_bridge package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .fixes import Fix
from .severity import Severity


class Finding(BaseModel):
    """Single diagnostic parsed from one line of cpplint output."""

    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=0)
    message: str
    rule_category: str
    confidence: int = 1


class TextRange(BaseModel):
    """Half-open character range inside a text buffer."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> TextRange:
        """Reject ranges whose end precedes their start."""
        if self.end < self.start:
            raise ValueError(f"range end {self.end} precedes start {self.start}")
        return self

    @property
    def length(self) -> int:
        """Return the number of characters covered by the range."""
        return self.end - self.start


class LintFinding(BaseModel):
    """Finding enriched with its location, severity and quick fixes."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    finding: Finding
    severity: Severity
    text_range: TextRange
    line_index: int = Field(ge=0)
    fixes: tuple[Fix, ...] = Field(min_length=1)

    @property
    def display_message(self) -> str:
        """Return the message as presented to the user."""
        return f"cpplint: {self.finding.message}"

    @property
    def specific_fix(self) -> Fix | None:
        """Return the rule-specific fix, if one was offered."""
        return self.fixes[0] if len(self.fixes) > 1 else None


__all__ = ["Finding", "LintFinding", "TextRange"]
