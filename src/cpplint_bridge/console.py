# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Terminal output for lint summaries and notifications."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final

from rich.console import Console
from rich.text import Text


class MessageKind(str, Enum):
    """Kind of status line written to the terminal."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# kind -> (emoji prefix, rich style)
_DECORATIONS: Final[Mapping[MessageKind, tuple[str, str]]] = MappingProxyType(
    {
        MessageKind.INFO: ("ℹ️ ", "cyan"),
        MessageKind.SUCCESS: ("✅ ", "green"),
        MessageKind.WARNING: ("⚠️ ", "yellow"),
        MessageKind.ERROR: ("❌ ", "bold red"),
    },
)


def stdout_is_terminal() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def build_console(*, use_color: bool | None = None) -> Console:
    """Return a console bound to the current ``sys.stdout``.

    Colour is enabled when ``use_color`` is true, or when it is ``None`` and
    stdout is a terminal.
    """

    color = stdout_is_terminal() if use_color is None else use_color
    return Console(
        color_system="auto" if color else None,
        no_color=not color,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def echo(
    kind: MessageKind,
    message: str,
    *,
    use_emoji: bool = True,
    use_color: bool | None = None,
) -> None:
    """Print ``message`` decorated for ``kind``."""
    prefix, style = _DECORATIONS[kind]
    text = Text(f"{prefix}{message}" if use_emoji else message, style=style)
    build_console(use_color=use_color).print(text)


__all__ = [
    "MessageKind",
    "build_console",
    "echo",
    "stdout_is_terminal",
]
