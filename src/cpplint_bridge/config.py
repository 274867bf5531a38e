# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persistent settings for the interpreter, cpplint script and extra options."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

KEY_PYTHON: Final[str] = "python"
KEY_CPPLINT: Final[str] = "cpplint"
KEY_CPPLINT_OPTIONS: Final[str] = "cpplintOptions"
SETTING_KEYS: Final[tuple[str, ...]] = (KEY_PYTHON, KEY_CPPLINT, KEY_CPPLINT_OPTIONS)

SETTINGS_PATH_ENV: Final[str] = "CPPLINT_BRIDGE_SETTINGS"
_ENV_OVERRIDES: Final[dict[str, str]] = {
    KEY_PYTHON: "CPPLINT_BRIDGE_PYTHON",
    KEY_CPPLINT: "CPPLINT_BRIDGE_CPPLINT",
    KEY_CPPLINT_OPTIONS: "CPPLINT_BRIDGE_OPTIONS",
}
_FIELD_NAMES: Final[dict[str, str]] = {
    KEY_PYTHON: "python",
    KEY_CPPLINT: "cpplint",
    KEY_CPPLINT_OPTIONS: "cpplint_options",
}


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


@runtime_checkable
class SettingsProvider(Protocol):
    """Key/value access to the three cpplint settings."""

    def get(self, key: str) -> str | None:
        """Return the value stored for ``key`` or ``None`` when unset."""

        raise NotImplementedError


class CpplintSettings(BaseModel):
    """Settings persisted between runs."""

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    python: str | None = None
    cpplint: str | None = None
    cpplint_options: str | None = Field(default=None, alias=KEY_CPPLINT_OPTIONS)


def default_settings_path() -> Path:
    """Return the settings file location, honouring ``CPPLINT_BRIDGE_SETTINGS``."""

    override = os.environ.get(SETTINGS_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "cpplint-bridge" / "settings.json"


def _field_for(key: str) -> str:
    try:
        return _FIELD_NAMES[key]
    except KeyError:
        raise ConfigError(f"unknown setting '{key}'; expected one of {', '.join(SETTING_KEYS)}") from None


class SettingsStore:
    """JSON-backed :class:`SettingsProvider` with environment overrides."""

    def __init__(
        self,
        path: Path | None = None,
        *,
        environ: dict[str, str] | None = None,
    ) -> None:
        self.path = path if path is not None else default_settings_path()
        self._environ = environ if environ is not None else dict(os.environ)
        self.settings = self._load()

    def _load(self) -> CpplintSettings:
        if not self.path.is_file():
            return CpplintSettings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return CpplintSettings()
        if not isinstance(data, dict):
            return CpplintSettings()
        try:
            return CpplintSettings.model_validate(data)
        except ValidationError:
            return CpplintSettings()

    def get(self, key: str) -> str | None:
        """Return the environment override or stored value for ``key``."""
        field = _field_for(key)
        override = self._environ.get(_ENV_OVERRIDES[key])
        if override:
            return override
        return getattr(self.settings, field)

    def set(self, key: str, value: str | None) -> None:
        """Store ``value`` for ``key`` in memory; call :meth:`save` to persist."""
        setattr(self.settings, _field_for(key), value)

    def save(self) -> None:
        """Write the stored settings to :attr:`path`."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.settings.model_dump(by_alias=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def as_dict(self) -> dict[str, str | None]:
        """Return the effective value of every setting keyed by setting name."""
        return {key: self.get(key) for key in SETTING_KEYS}


__all__ = [
    "ConfigError",
    "CpplintSettings",
    "KEY_CPPLINT",
    "KEY_CPPLINT_OPTIONS",
    "KEY_PYTHON",
    "SETTING_KEYS",
    "SettingsProvider",
    "SettingsStore",
    "default_settings_path",
]
