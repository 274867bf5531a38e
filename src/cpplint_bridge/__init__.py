# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run cpplint, position its findings and offer quick fixes."""

from __future__ import annotations

from importlib import metadata

from .buffer import Document, TextBuffer
from .models import Finding, LintFinding, TextRange
from .parsers import parse_line
from .positions import resolve_range
from .quickfixes import resolve_fixes
from .runner import CpplintRunner
from .severity import Severity, severity_from_confidence
from .validation import ConfigInvalid, ConfigValid, validate_configuration

__all__ = [
    "ConfigInvalid",
    "ConfigValid",
    "CpplintRunner",
    "Document",
    "Finding",
    "LintFinding",
    "Severity",
    "TextBuffer",
    "TextRange",
    "__version__",
    "parse_line",
    "resolve_fixes",
    "resolve_range",
    "severity_from_confidence",
    "validate_configuration",
]

try:
    __version__ = metadata.version("cpplint-bridge")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
