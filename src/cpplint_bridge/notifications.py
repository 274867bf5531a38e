# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User notifications about configuration and launch problems."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final, Protocol, runtime_checkable

from .console import MessageKind, echo

NOTIFICATION_TITLE: Final[str] = "Cpplint Configuration Error"
THROTTLE_WINDOW_SECONDS: Final[float] = 60.0


class NotificationSeverity(str, Enum):
    """Severity of a user notification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class NotificationAction:
    """Follow-up action offered alongside a notification."""

    label: str
    hint: str
    callback: Callable[[], None] | None = None


@runtime_checkable
class NotificationSink(Protocol):
    """Destination that renders notifications to the user."""

    def notify(
        self,
        title: str,
        message: str,
        severity: NotificationSeverity,
        actions: Sequence[NotificationAction],
    ) -> None:
        """Display a notification."""

        raise NotImplementedError


class NotificationThrottle:
    """Allow at most one notification per ``window`` seconds.

    The first notification after construction always passes. The timestamp is
    shared without locking, so concurrent callers may occasionally see an
    extra or a missed notification.
    """

    def __init__(
        self,
        window: float = THROTTLE_WINDOW_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window = window
        self._clock = clock
        self._last: float | None = None

    def should_notify(self) -> bool:
        """Return ``True`` and record the time when a notification may be shown."""
        now = self._clock()
        if self._last is not None and now - self._last < self.window:
            return False
        self._last = now
        return True

    def reset(self) -> None:
        """Forget the last notification time."""
        self._last = None


DEFAULT_THROTTLE: Final[NotificationThrottle] = NotificationThrottle()


class ConsoleNotificationSink:
    """Print notifications and their follow-up actions to stdout."""

    def __init__(self, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
        self._use_emoji = use_emoji
        self._use_color = use_color

    def notify(
        self,
        title: str,
        message: str,
        severity: NotificationSeverity,
        actions: Sequence[NotificationAction],
    ) -> None:
        lines = [(MessageKind(severity.value), f"{title}: {message}")]
        lines.extend((MessageKind.INFO, f"{action.label}: {action.hint}") for action in actions)
        for kind, text in lines:
            echo(kind, text, use_emoji=self._use_emoji, use_color=self._use_color)


__all__ = [
    "ConsoleNotificationSink",
    "DEFAULT_THROTTLE",
    "NOTIFICATION_TITLE",
    "NotificationAction",
    "NotificationSeverity",
    "NotificationSink",
    "NotificationThrottle",
    "THROTTLE_WINDOW_SECONDS",
]
