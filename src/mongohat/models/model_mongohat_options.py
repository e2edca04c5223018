# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Construction-time options for a ``Mongohat`` controller."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ModelMongohatOptions(BaseModel):
    """Caller-supplied overrides merged over the context-derived defaults.

    Every field left as None keeps its default; every field set replaces
    the corresponding default (shallow merge). Nothing beyond field types is
    validated here: malformed paths or ports surface later as launch errors.

    Attributes:
        db_name: Logical database name (default: trimmed context name)
        db_path: Working directory (default: namespaced under the base directory)
        db_port: Base port for the free-port scan (default: 27777)
        use_replica_set: Launch a replica set instead of a standalone engine
        version: Engine version pin (e.g. "6.0" or "7.0.5")
        replica_set_name: Replica set name (default: "testset")
        replica_member_count: Number of replica set members (default: 1)
        storage_engine: Standalone storage engine override

    Example:
        >>> options = ModelMongohatOptions(db_port=28000, use_replica_set=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    db_name: str | None = Field(default=None, description="Logical database name")
    db_path: Path | None = Field(default=None, description="Working directory")
    db_port: int | None = Field(default=None, description="Base port for the scan")
    use_replica_set: bool | None = Field(
        default=None, description="Launch a replica set topology"
    )
    version: str | None = Field(default=None, description="Engine version pin")
    replica_set_name: str | None = Field(
        default=None, description="Replica set name"
    )
    replica_member_count: int | None = Field(
        default=None, ge=1, le=7, description="Number of replica set members"
    )
    storage_engine: str | None = Field(
        default=None, description="Standalone storage engine override"
    )


__all__: list[str] = ["ModelMongohatOptions"]
