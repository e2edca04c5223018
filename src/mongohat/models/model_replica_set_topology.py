# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Replica set topology variant."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mongohat.enums import EnumTopologyKind

DEFAULT_REPLICA_SET_NAME = "testset"
REPLICA_SET_STORAGE_ENGINE = "wiredTiger"


class ModelReplicaSetTopology(BaseModel):
    """A coordinated group of engine members under one replica set name.

    Replica set members always use the durable storage engine; the
    replication machinery does not run on the in-memory test engine.

    Attributes:
        kind: Discriminator, always REPLICA_SET
        replica_set_name: ``--replSet`` name shared by every member
        member_count: Number of members to launch
        storage_engine: Storage engine for every member
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[EnumTopologyKind.REPLICA_SET] = EnumTopologyKind.REPLICA_SET
    replica_set_name: str = Field(default=DEFAULT_REPLICA_SET_NAME, min_length=1)
    member_count: int = Field(default=1, ge=1, le=7)
    storage_engine: Literal["wiredTiger"] = REPLICA_SET_STORAGE_ENGINE


__all__: list[str] = [
    "DEFAULT_REPLICA_SET_NAME",
    "REPLICA_SET_STORAGE_ENGINE",
    "ModelReplicaSetTopology",
]
