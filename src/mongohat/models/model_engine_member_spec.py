# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Launch parameters of one engine process."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ModelEngineMemberSpec(BaseModel):
    """Fully-built invocation of a single ``mongod`` process.

    Attributes:
        port: Port the member listens on
        db_path: Data directory of the member
        log_path: Engine log file, read back when startup fails
        argv: Complete argument vector, binary first
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    port: int
    db_path: Path
    log_path: Path
    argv: tuple[str, ...]


__all__: list[str] = ["ModelEngineMemberSpec"]
