# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from cpplint_bridge.config import KEY_CPPLINT, KEY_PYTHON, SettingsStore
from cpplint_bridge.notifications import NotificationAction, NotificationSeverity

_FAKE_CPPLINT = '''\
import sys

target = sys.argv[-1]
for _ in range({stdout_repeat}):
    sys.stdout.write("Processing noise that must be drained\\n")
for line in {stderr_lines!r}:
    sys.stderr.write(line.replace("{{file}}", target) + "\\n")
sys.stderr.write("Done processing " + target + "\\n")
sys.stderr.write("Total errors found: {count}\\n")
'''


@dataclass
class RecordingSink:
    """Notification sink that records every delivered notification."""

    calls: list[tuple[str, str, NotificationSeverity, tuple[NotificationAction, ...]]] = field(
        default_factory=list
    )

    def notify(
        self,
        title: str,
        message: str,
        severity: NotificationSeverity,
        actions: Sequence[NotificationAction],
    ) -> None:
        self.calls.append((title, message, severity, tuple(actions)))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


FakeCpplintFactory = Callable[..., Path]


@pytest.fixture
def fake_cpplint(tmp_path: Path) -> FakeCpplintFactory:
    """Return a factory writing a stand-in cpplint script.

    ``{file}`` inside a stderr line is replaced with the linted path.
    """

    def _factory(stderr_lines: Sequence[str], *, stdout_repeat: int = 10) -> Path:
        script = tmp_path / "fake_cpplint.py"
        script.write_text(
            _FAKE_CPPLINT.format(
                stdout_repeat=stdout_repeat,
                stderr_lines=list(stderr_lines),
                count=len(stderr_lines),
            ),
            encoding="utf-8",
        )
        return script

    return _factory


@pytest.fixture
def settings_store(tmp_path: Path) -> SettingsStore:
    """Return an isolated settings store pointing at the running interpreter."""

    store = SettingsStore(tmp_path / "settings.json", environ={})
    store.set(KEY_PYTHON, sys.executable)
    return store


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def configured_store(settings_store: SettingsStore) -> Callable[[Path], SettingsStore]:
    def _configure(script: Path) -> SettingsStore:
        settings_store.set(KEY_CPPLINT, str(script))
        return settings_store

    return _configure
