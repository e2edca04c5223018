# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Read-only view of a live instance's connection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelConnectionInfo(BaseModel):
    """Connection details exposed to callers of a started controller.

    Attributes:
        url: Connection string accepted by any MongoDB driver
        db_name: Database fixtures are loaded into
        ports: Port of every engine member, in member order
        replica_set_name: Replica set name, None for a standalone engine
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str
    db_name: str
    ports: tuple[int, ...] = Field(min_length=1)
    replica_set_name: str | None = None


__all__: list[str] = ["ModelConnectionInfo"]
