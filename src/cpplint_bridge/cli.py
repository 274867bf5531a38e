# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line interface wiring the cpplint pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.text import Text

from .buffer import Document
from .config import SETTING_KEYS, ConfigError, SettingsStore
from .console import MessageKind, build_console, echo, stdout_is_terminal
from .fixes import Fix
from .models import LintFinding
from .notifications import ConsoleNotificationSink, NotificationThrottle
from .runner import CpplintRunner
from .severity import Severity

app = typer.Typer(name="cpplint-bridge", help="Run cpplint and offer quick fixes.", no_args_is_help=True)
config_app = typer.Typer(help="Inspect or change stored cpplint settings.", no_args_is_help=True)
app.add_typer(config_app, name="config")

_SEVERITY_STYLES = {
    Severity.HIGH: "bold red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "dim",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run cpplint and offer quick fixes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _render_findings(path: Path, findings: Sequence[LintFinding], *, use_color: bool) -> None:
    console = build_console(use_color=use_color)
    for item in findings:
        line = Text(f"{path}:{item.line_index + 1}: ")
        line.append(f"[{item.severity.label}]", style=_SEVERITY_STYLES[item.severity] if use_color else None)
        line.append(f" {item.display_message} [{item.finding.rule_category}]")
        console.print(line)
        console.print(Text("    fixes: " + "; ".join(fix.name for fix in item.fixes)))


def _apply_specific_fixes(document: Document, findings: Sequence[LintFinding]) -> int:
    """Apply each distinct rule-specific fix, bottom-most finding first."""
    applied: set[Fix] = set()
    for item in sorted(findings, key=lambda entry: entry.line_index, reverse=True):
        fix = item.specific_fix
        if fix is None or fix in applied:
            continue
        fix.apply(document, item.line_index)
        applied.add(fix)
    return len(applied)


@app.command("lint")
def lint_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="C/C++ file to lint."),
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root used as working directory."),
    settings_path: Path | None = typer.Option(None, "--settings", help="Settings file to read."),
    fix: bool = typer.Option(False, "--fix", help="Apply rule-specific quick fixes and save the file."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Decorate messages with emoji."),
) -> None:
    """Lint FILE with cpplint and report findings."""
    project_root = (root or Path.cwd()).resolve()
    target = file.resolve()
    store = SettingsStore(settings_path)
    runner = CpplintRunner(
        store,
        sink=ConsoleNotificationSink(use_emoji=emoji),
        throttle=NotificationThrottle(),
    )
    document = Document.from_file(target, root=project_root)
    findings = runner.run(document, target, project_root)

    if not findings:
        echo(MessageKind.SUCCESS, "No cpplint findings", use_emoji=emoji)
        raise typer.Exit(code=0)

    _render_findings(file, findings, use_color=stdout_is_terminal())
    echo(MessageKind.WARNING, f"{len(findings)} cpplint finding(s)", use_emoji=emoji)
    if fix:
        count = _apply_specific_fixes(document, findings)
        if count:
            document.save()
        echo(MessageKind.INFO, f"Applied {count} quick fix(es) to {file}", use_emoji=emoji)
    raise typer.Exit(code=1)


@config_app.command("show")
def config_show(
    settings_path: Path | None = typer.Option(None, "--settings", help="Settings file to read."),
) -> None:
    """Print the effective cpplint settings."""
    store = SettingsStore(settings_path)
    typer.echo(f"settings file: {store.path}")
    for key, value in store.as_dict().items():
        typer.echo(f"{key} = {value if value is not None else '<unset>'}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"One of: {', '.join(SETTING_KEYS)}."),
    value: str = typer.Argument(..., help="Value to store; an empty string clears the setting."),
    settings_path: Path | None = typer.Option(None, "--settings", help="Settings file to update."),
) -> None:
    """Store a cpplint setting."""
    store = SettingsStore(settings_path)
    try:
        store.set(key, value or None)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="KEY") from exc
    store.save()
    typer.echo(f"{key} saved to {store.path}")


__all__ = ["app"]
