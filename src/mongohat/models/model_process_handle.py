# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Snapshot of a host process matched by the reaper."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelProcessHandle(BaseModel):
    """Identity of a process found in the host process table.

    Attributes:
        pid: Operating system process id
        name: Executable name reported by the OS
        cmdline: Full invocation arguments, executable first
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pid: int = Field(ge=0)
    name: str
    cmdline: tuple[str, ...] = ()

    @property
    def arguments(self) -> tuple[str, ...]:
        return self.cmdline[1:]


__all__: list[str] = ["ModelProcessHandle"]
