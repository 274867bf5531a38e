# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host shell detection and command-line assembly for cpplint."""

from __future__ import annotations

import os
import re
import shlex
import shutil
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

_DEFAULT_BASH: Final[str] = "/bin/bash"
_WINDOWS_DRIVE_PATTERN: Final = re.compile(r"^(?P<drive>[A-Za-z]):[\\/]?(?P<rest>.*)$")


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Command description handed to the process launcher unmodified."""

    argv: tuple[str, ...]
    shell_wrapped: bool = False


@runtime_checkable
class ShellAdapter(Protocol):
    """Shell environment services needed to launch cpplint."""

    def is_alt_shell_environment(self) -> bool:
        """Return ``True`` when paths must be converted to Cygwin form."""

        raise NotImplementedError

    def to_alt_shell_path(self, path: str) -> str:
        """Return ``path`` converted for the alternate shell."""

        raise NotImplementedError

    def shell_executable(self) -> str:
        """Return the shell used to run wrapped commands."""

        raise NotImplementedError

    def build_command(self, python: str, script: str, options: str, file_path: str) -> CommandSpec:
        """Assemble the command running ``script`` against ``file_path``."""

        raise NotImplementedError


def to_cygwin_path(path: str) -> str:
    """Convert a Windows path such as ``C:\\src\\a.h`` to ``/cygdrive/c/src/a.h``."""

    match = _WINDOWS_DRIVE_PATTERN.match(path)
    if match is None:
        return path.replace("\\", "/")
    rest = match.group("rest").replace("\\", "/")
    return f"/cygdrive/{match.group('drive').lower()}/{rest}"


class HostShellAdapter:
    """:class:`ShellAdapter` that inspects the running interpreter's platform."""

    def __init__(self, *, platform: str | None = None, environ: Mapping[str, str] | None = None) -> None:
        self._platform = platform if platform is not None else sys.platform
        self._environ = environ if environ is not None else os.environ

    def is_alt_shell_environment(self) -> bool:
        return self._platform == "cygwin" or self._environ.get("OSTYPE", "").lower() == "cygwin"

    def is_native_launch(self) -> bool:
        """Return ``True`` when cpplint should be spawned without a wrapping shell."""
        if self.is_alt_shell_environment():
            return False
        if self._environ.get("MSYSTEM", "").upper().startswith("MINGW"):
            return True
        return self._platform == "win32"

    def to_alt_shell_path(self, path: str) -> str:
        return to_cygwin_path(path)

    def shell_executable(self) -> str:
        return shutil.which("bash") or _DEFAULT_BASH

    def build_command(self, python: str, script: str, options: str, file_path: str) -> CommandSpec:
        if self.is_native_launch():
            return CommandSpec(argv=(python, script, *options.split(), file_path))
        parts = [shlex.quote(python), shlex.quote(script)]
        if options.strip():
            parts.append(options.strip())
        parts.append(shlex.quote(file_path))
        return CommandSpec(argv=(self.shell_executable(), "-c", " ".join(parts)), shell_wrapped=True)


__all__ = [
    "CommandSpec",
    "HostShellAdapter",
    "ShellAdapter",
    "to_cygwin_path",
]
