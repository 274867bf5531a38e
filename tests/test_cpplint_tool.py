# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for running cpplint and collecting enriched findings."""

from __future__ import annotations

import logging
import subprocess  # nosec B404
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import IO, TYPE_CHECKING

import pytest

from cpplint_bridge.buffer import Document
from cpplint_bridge.config import KEY_CPPLINT_OPTIONS, SettingsStore
from cpplint_bridge.fixes import HeaderGuardFix, SuppressionFix, TrailingNewlineFix
from cpplint_bridge.models import Finding
from cpplint_bridge.notifications import NotificationThrottle
from cpplint_bridge.runner import EXECUTABLE_NOT_FOUND_MESSAGE, CpplintRunner, enrich_finding
from cpplint_bridge.severity import Severity
from cpplint_bridge.shell import CommandSpec, HostShellAdapter

if TYPE_CHECKING:
    from conftest import FakeClock, FakeCpplintFactory, RecordingSink


def _native_shell() -> HostShellAdapter:
    return HostShellAdapter(platform="win32", environ={})


class _RecordingShell:
    """Shell adapter stub reporting a Cygwin host and recording its inputs."""

    def __init__(self, argv: tuple[str, ...] | None = None) -> None:
        self.argv = argv
        self.calls: list[tuple[str, str, str, str]] = []

    def is_alt_shell_environment(self) -> bool:
        return True

    def to_alt_shell_path(self, path: str) -> str:
        return f"/cygdrive/x{path}"

    def shell_executable(self) -> str:
        return "/bin/sh"

    def build_command(self, python: str, script: str, options: str, file_path: str) -> CommandSpec:
        self.calls.append((python, script, options, file_path))
        return CommandSpec(argv=self.argv or (python, script, file_path))


def _source(tmp_path: Path, lines: int = 100) -> tuple[Path, Document]:
    source = tmp_path / "foo.h"
    source.write_text("\n".join(f"  int v{index};" for index in range(lines)), encoding="utf-8")
    return source, Document.from_file(source, root=tmp_path)


def test_enrich_copyright_scenario() -> None:
    document = Document("\n".join(f"  int v{index};" for index in range(100)))
    finding = Finding(
        line_number=42,
        message="No copyright message found",
        rule_category="legal/copyright",
        confidence=5,
    )

    enriched = enrich_finding(document, finding)

    assert enriched is not None
    assert enriched.severity is Severity.HIGH
    assert enriched.line_index == 41
    assert document.text_in_range(enriched.text_range) == "int v41;"
    assert enriched.fixes == (SuppressionFix("legal/copyright"),)
    assert enriched.display_message == "cpplint: No copyright message found"
    assert enriched.specific_fix is None


def test_enrich_drops_finding_for_empty_buffer() -> None:
    finding = Finding(line_number=1, message="m", rule_category="legal/copyright", confidence=5)
    assert enrich_finding(Document(""), finding) is None


def test_run_collects_findings_in_order(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
    sink: RecordingSink,
) -> None:
    script = fake_cpplint(
        [
            "{file}:0: No copyright message found.  [legal/copyright] [5]",
            "{file}:1: #ifndef header guard has wrong style, please use: FOO_H_  [build/header_guard] [5]",
            "{file}:101: Could not find a newline character at the end of the file.  [whitespace/ending_newline] [5]",
            "{file}:3: Tab found; better to use spaces  [whitespace/tab] [1]",
        ],
        stdout_repeat=20000,
    )
    source, document = _source(tmp_path)
    runner = CpplintRunner(configured_store(script), shell=_native_shell(), sink=sink, throttle=NotificationThrottle())

    findings = runner.run(document, source, tmp_path)

    assert [item.finding.rule_category for item in findings] == [
        "legal/copyright",
        "build/header_guard",
        "whitespace/ending_newline",
        "whitespace/tab",
    ]
    assert [item.line_index for item in findings] == [0, 0, 99, 2]
    assert findings[1].fixes[0] == HeaderGuardFix("FOO_H_")
    assert isinstance(findings[2].fixes[0], TrailingNewlineFix)
    assert findings[3].severity is Severity.LOW
    assert all(isinstance(item.fixes[-1], SuppressionFix) for item in findings)
    assert sink.calls == []


def test_run_passes_options_to_cpplint(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
) -> None:
    script = fake_cpplint(["{file}:2: Line ends in whitespace.  [whitespace/end_of_line] [4]"])
    source, document = _source(tmp_path)
    store = configured_store(script)
    store.set(KEY_CPPLINT_OPTIONS, "--verbose=0")
    runner = CpplintRunner(store, shell=_native_shell(), throttle=NotificationThrottle())

    assert runner.build_command(source).argv[-2:] == ("--verbose=0", str(source))
    findings = runner.run(document, source, tmp_path)
    assert len(findings) == 1
    assert findings[0].severity is Severity.MEDIUM


def test_invalid_configuration_notifies_once(
    tmp_path: Path,
    settings_store: SettingsStore,
    sink: RecordingSink,
    clock: FakeClock,
) -> None:
    source, document = _source(tmp_path)
    runner = CpplintRunner(settings_store, shell=_native_shell(), sink=sink, throttle=NotificationThrottle(clock=clock))

    assert runner.run(document, source, tmp_path) == []
    assert runner.run(document, source, tmp_path) == []
    assert len(sink.calls) == 1
    assert "not configured" in sink.calls[0][1]

    clock.advance(61)
    assert runner.run(document, source, tmp_path) == []
    assert len(sink.calls) == 2


def test_spawn_failure_reports_missing_executable(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
    sink: RecordingSink,
) -> None:
    script = fake_cpplint([])
    source, document = _source(tmp_path)
    shell = _RecordingShell(argv=(str(tmp_path / "missing" / "python"), str(script), str(source)))
    runner = CpplintRunner(configured_store(script), shell=shell, sink=sink, throttle=NotificationThrottle())

    assert runner.run(document, source, tmp_path) == []
    assert [call[1] for call in sink.calls] == [EXECUTABLE_NOT_FOUND_MESSAGE]


def test_alt_shell_converts_file_path(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
) -> None:
    script = fake_cpplint([])
    store = configured_store(script)
    shell = _RecordingShell()
    runner = CpplintRunner(store, shell=shell, throttle=NotificationThrottle())

    runner.build_command(tmp_path / "foo.h")

    assert shell.calls[0][2] == ""
    assert shell.calls[0][3] == f"/cygdrive/x{tmp_path / 'foo.h'}"


def test_missing_project_root_returns_nothing(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
    sink: RecordingSink,
) -> None:
    script = fake_cpplint(["{file}:1: No copyright message found.  [legal/copyright] [5]"])
    source, document = _source(tmp_path)
    runner = CpplintRunner(configured_store(script), shell=_native_shell(), sink=sink, throttle=NotificationThrottle())

    assert runner.run(document, source, None) == []
    assert runner.run(document, source, "") == []
    assert sink.calls == []


def test_empty_buffer_drops_every_finding(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
) -> None:
    script = fake_cpplint(["{file}:1: No copyright message found.  [legal/copyright] [5]"])
    source = tmp_path / "empty.h"
    source.write_text("", encoding="utf-8")
    runner = CpplintRunner(configured_store(script), shell=_native_shell(), throttle=NotificationThrottle())

    assert runner.run(Document(""), source, tmp_path) == []


def test_missing_project_directory_is_not_reported_as_missing_executable(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
    sink: RecordingSink,
    caplog: pytest.LogCaptureFixture,
) -> None:
    script = fake_cpplint(["{file}:1: No copyright message found.  [legal/copyright] [5]"])
    source, document = _source(tmp_path)
    runner = CpplintRunner(configured_store(script), shell=_native_shell(), sink=sink, throttle=NotificationThrottle())

    with caplog.at_level(logging.ERROR, logger="cpplint_bridge.runner"):
        assert runner.run(document, source, tmp_path / "absent") == []

    assert sink.calls == []
    assert "is not a directory" in caplog.text


@pytest.mark.skipif(sys.platform == "win32", reason="relies on POSIX execute permission bits")
def test_spawn_failure_reports_os_error(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
    sink: RecordingSink,
) -> None:
    script = fake_cpplint([])
    script.chmod(0o644)
    source, document = _source(tmp_path)
    shell = _RecordingShell(argv=(str(script), str(source)))
    runner = CpplintRunner(configured_store(script), shell=shell, sink=sink, throttle=NotificationThrottle())

    assert runner.run(document, source, tmp_path) == []

    assert len(sink.calls) == 1
    message = sink.calls[0][1]
    assert message.startswith("Failed to execute cpplint: ")
    assert "Permission denied" in message
    assert message != EXECUTABLE_NOT_FOUND_MESSAGE


class _FailingStream:
    """Stderr wrapper that raises ``OSError`` after yielding ``limit`` lines."""

    def __init__(self, stream: IO[str], limit: int) -> None:
        self._stream = stream
        self._limit = limit

    def __iter__(self) -> Iterator[str]:
        for count, line in enumerate(self._stream):
            if count == self._limit:
                raise OSError("stream closed unexpectedly")
            yield line

    def close(self) -> None:
        self._stream.close()


class _BrokenStderrRunner(CpplintRunner):
    def _spawn(
        self,
        command: CommandSpec,
        cwd: Path,
        file_path: Path | str,
    ) -> subprocess.Popen[str] | None:
        process = super()._spawn(command, cwd, file_path)
        assert process is not None and process.stderr is not None
        process.stderr = _FailingStream(process.stderr, 2)  # type: ignore[assignment]
        return process


def test_stream_failure_returns_partial_findings(
    tmp_path: Path,
    fake_cpplint: FakeCpplintFactory,
    configured_store: Callable[[Path], SettingsStore],
    sink: RecordingSink,
    caplog: pytest.LogCaptureFixture,
) -> None:
    script = fake_cpplint(
        [
            "{file}:1: No copyright message found.  [legal/copyright] [5]",
            "{file}:2: Line ends in whitespace.  [whitespace/end_of_line] [4]",
            "{file}:3: Tab found; better to use spaces  [whitespace/tab] [1]",
        ]
    )
    source, document = _source(tmp_path)
    runner = _BrokenStderrRunner(configured_store(script), shell=_native_shell(), sink=sink, throttle=NotificationThrottle())

    with caplog.at_level(logging.ERROR, logger="cpplint_bridge.runner"):
        findings = runner.run(document, source, tmp_path)

    assert [item.finding.rule_category for item in findings] == ["legal/copyright", "whitespace/end_of_line"]
    assert "Failed to read cpplint output" in caplog.text
    assert sink.calls == []
