# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run cpplint against a file and turn its output into enriched findings."""

from __future__ import annotations

import logging

# Bandit: subprocess usage is intentional; commands come from the user's own
# cpplint settings and are assembled by the shell adapter.
import subprocess  # nosec B404
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Final

from .buffer import TextBuffer
from .config import KEY_CPPLINT, KEY_CPPLINT_OPTIONS, KEY_PYTHON, SettingsProvider
from .models import Finding, LintFinding
from .notifications import (
    DEFAULT_THROTTLE,
    NOTIFICATION_TITLE,
    ConsoleNotificationSink,
    NotificationAction,
    NotificationSeverity,
    NotificationSink,
    NotificationThrottle,
)
from .parsers import parse_lines
from .positions import resolve_line_index, resolve_range
from .quickfixes import resolve_fixes
from .severity import severity_from_confidence
from .shell import CommandSpec, HostShellAdapter, ShellAdapter
from .validation import ConfigInvalid, validate_configuration

LOGGER = logging.getLogger(__name__)

DEFAULT_PYTHON: Final[str] = "python"
OPEN_SETTINGS_LABEL: Final[str] = "Open Settings"
OPEN_SETTINGS_HINT: Final[str] = "run `cpplint-bridge config set <python|cpplint|cpplintOptions> VALUE`"
EXECUTABLE_NOT_FOUND_MESSAGE: Final[str] = (
    "Failed to execute cpplint: Python or cpplint executable not found.\n\n"
    "Please verify your Python and cpplint paths in Settings."
)


def enrich_finding(buffer: TextBuffer, finding: Finding) -> LintFinding | None:
    """Attach range, severity and quick fixes to ``finding``.

    Returns ``None`` when the finding cannot be placed in ``buffer``.
    """

    line_index = resolve_line_index(buffer, finding.line_number)
    text_range = resolve_range(buffer, finding.line_number)
    if line_index is None or text_range is None:
        return None
    return LintFinding(
        finding=finding,
        severity=severity_from_confidence(finding.confidence),
        text_range=text_range,
        line_index=line_index,
        fixes=resolve_fixes(finding.rule_category, finding.message),
    )


def _drain(stream: Iterable[str]) -> None:
    """Consume ``stream`` until EOF, discarding its content."""
    try:
        for _ in stream:
            pass
    except (OSError, ValueError) as exc:
        LOGGER.debug("Stopped draining cpplint stdout: %s", exc)


class CpplintRunner:
    """Validate settings, spawn cpplint and collect its findings."""

    def __init__(
        self,
        settings: SettingsProvider,
        *,
        shell: ShellAdapter | None = None,
        sink: NotificationSink | None = None,
        throttle: NotificationThrottle | None = None,
        open_settings: Callable[[], None] | None = None,
    ) -> None:
        self._settings = settings
        self._shell = shell if shell is not None else HostShellAdapter()
        self._sink = sink if sink is not None else ConsoleNotificationSink()
        self._throttle = throttle if throttle is not None else DEFAULT_THROTTLE
        self._open_settings = open_settings

    def run(
        self,
        buffer: TextBuffer,
        file_path: Path | str,
        project_root: Path | str | None,
    ) -> list[LintFinding]:
        """Lint ``file_path`` and return findings placed within ``buffer``.

        Args:
            buffer: Current text of the file, used to position findings.
            file_path: File handed to cpplint.
            project_root: Working directory for the cpplint process.

        Returns:
            list[LintFinding]: Findings in cpplint's output order. Empty when
            the configuration is invalid or cpplint cannot be started, and
            partial when reading its output fails midway.
        """

        validation = validate_configuration(self._settings)
        if isinstance(validation, ConfigInvalid):
            LOGGER.warning("Cpplint configuration invalid: %s", validation.message)
            self.notify_configuration_error(validation.message)
            return []

        if not project_root or not str(project_root).strip():
            LOGGER.error("No valid base directory found for %s", file_path)
            return []
        root = Path(project_root)
        if not root.is_dir():
            LOGGER.error("Project root %s for %s is not a directory", root, file_path)
            return []

        command = self.build_command(file_path)
        return self._execute(command, buffer, root, file_path)

    def build_command(self, file_path: Path | str) -> CommandSpec:
        """Return the command that lints ``file_path`` with the current settings."""
        python = self._settings.get(KEY_PYTHON) or DEFAULT_PYTHON
        script = self._settings.get(KEY_CPPLINT) or ""
        # First-time users have no options stored.
        options = self._settings.get(KEY_CPPLINT_OPTIONS) or ""
        target = str(file_path)
        if self._shell.is_alt_shell_environment():
            target = self._shell.to_alt_shell_path(target)
        return self._shell.build_command(python, script, options, target)

    def notify_configuration_error(self, message: str) -> bool:
        """Show ``message`` unless a notification was shown within the throttle window.

        Returns:
            bool: ``True`` when the notification was delivered.
        """

        if not self._throttle.should_notify():
            return False
        action = NotificationAction(OPEN_SETTINGS_LABEL, OPEN_SETTINGS_HINT, self._open_settings)
        self._sink.notify(NOTIFICATION_TITLE, message, NotificationSeverity.WARNING, (action,))
        return True

    def _spawn(self, command: CommandSpec, cwd: Path, file_path: Path | str) -> subprocess.Popen[str] | None:
        try:
            # Bandit: argv comes from the shell adapter; no shell=True expansion here.
            return subprocess.Popen(  # nosec B603
                list(command.argv),
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as exc:
            LOGGER.error("Failed to run lint against file %s: %s", file_path, exc)
            self.notify_configuration_error(EXECUTABLE_NOT_FOUND_MESSAGE)
        except OSError as exc:
            LOGGER.error("Failed to run lint against file %s: %s", file_path, exc)
            self.notify_configuration_error(f"Failed to execute cpplint: {exc}")
        return None

    def _execute(
        self,
        command: CommandSpec,
        buffer: TextBuffer,
        cwd: Path,
        file_path: Path | str,
    ) -> list[LintFinding]:
        LOGGER.debug("Running cpplint: %s (cwd=%s)", command.argv, cwd)
        process = self._spawn(command, cwd, file_path)
        if process is None:
            return []

        findings: list[LintFinding] = []
        with process:
            # cpplint reports on stderr; stdout is drained so the child never blocks on it.
            drainer = threading.Thread(target=_drain, args=(process.stdout,), daemon=True)
            drainer.start()
            try:
                if process.stderr is not None:
                    for finding in parse_lines(process.stderr):
                        enriched = enrich_finding(buffer, finding)
                        if enriched is not None:
                            findings.append(enriched)
            except OSError as exc:
                LOGGER.error("Failed to read cpplint output for %s: %s", file_path, exc)
                process.kill()
            finally:
                drainer.join()
        LOGGER.debug("cpplint exited with %s and reported %d finding(s)", process.returncode, len(findings))
        return findings


__all__ = [
    "CpplintRunner",
    "EXECUTABLE_NOT_FOUND_MESSAGE",
    "enrich_finding",
]
