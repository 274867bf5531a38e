# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pre-flight validation of the configured interpreter and cpplint paths."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from .config import KEY_CPPLINT, KEY_PYTHON, SettingsProvider


@dataclass(frozen=True, slots=True)
class ConfigValid:
    """Configuration is usable; cpplint may be spawned."""


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    """Configuration is unusable; ``is_interpreter_error`` flags a Python problem."""

    message: str
    is_interpreter_error: bool


ConfigValidationResult: TypeAlias = ConfigValid | ConfigInvalid


def validate_configuration(settings: SettingsProvider) -> ConfigValidationResult:
    """Check that cpplint and the Python interpreter are configured and present.

    Checks run in order and the first failure is returned: cpplint path set,
    cpplint path exists, interpreter path set, interpreter path exists.
    """

    cpplint_path = settings.get(KEY_CPPLINT)
    if not cpplint_path:
        return ConfigInvalid("Cpplint path is not configured.", is_interpreter_error=False)
    if not Path(cpplint_path).exists():
        return ConfigInvalid(f"Cpplint not found at: {cpplint_path}", is_interpreter_error=False)

    python_path = settings.get(KEY_PYTHON)
    if not python_path:
        return ConfigInvalid("Python path is not configured.", is_interpreter_error=True)
    if not Path(python_path).exists():
        return ConfigInvalid(
            f"Python not found at: {python_path}\n\nPython may have been uninstalled or moved.",
            is_interpreter_error=True,
        )

    return ConfigValid()


__all__ = [
    "ConfigInvalid",
    "ConfigValid",
    "ConfigValidationResult",
    "validate_configuration",
]
