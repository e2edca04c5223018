# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Process filter used by the reaper.

The directory reference is the only criterion that distinguishes a stale
engine of this context from any other engine on the host, so a process is
matched only when one of its arguments names the working directory itself
or a path inside it.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path, PurePath

from pydantic import BaseModel, ConfigDict


class ModelProcessMatcher(BaseModel):
    """Matches engine processes whose arguments reference a directory.

    Attributes:
        executable_name: Engine executable name (``mongod``)
        directory: Working directory the process must reference

    Example:
        >>> matcher = ModelProcessMatcher(
        ...     executable_name="mongod", directory=Path("/tmp/.mongohat_users")
        ... )
        >>> matcher.matches("mongod", ["mongod", "--dbpath", "/tmp/.mongohat_users"])
        True
        >>> matcher.matches("mongod", ["mongod", "--dbpath", "/tmp/.mongohat_users2"])
        False
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    executable_name: str
    directory: Path

    def matches(self, name: str | None, cmdline: Sequence[str]) -> bool:
        """Return True if the process is this context's engine."""
        if not cmdline:
            return False
        if not self._is_engine(name, cmdline[0]):
            return False
        return any(self._references_directory(arg) for arg in cmdline[1:])

    def _is_engine(self, name: str | None, executable: str) -> bool:
        # Windows reports "mongod.exe"
        candidates = {name or "", PurePath(executable).name}
        return any(
            candidate == self.executable_name
            or candidate == f"{self.executable_name}.exe"
            for candidate in candidates
        )

    def _references_directory(self, argument: str) -> bool:
        if argument.startswith("-") and "=" in argument:
            argument = argument.split("=", 1)[1]
        if not argument:
            return False
        directory = os.path.normpath(str(self.directory))
        candidate = os.path.normpath(argument)
        return candidate == directory or candidate.startswith(directory + os.sep)


__all__: list[str] = ["ModelProcessMatcher"]
