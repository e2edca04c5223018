# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolved, immutable configuration of one ephemeral instance."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field

from mongohat.models.model_replica_set_topology import ModelReplicaSetTopology
from mongohat.models.model_standalone_topology import ModelStandaloneTopology

TopologyVariant = Annotated[
    Union[ModelStandaloneTopology, ModelReplicaSetTopology],
    Field(discriminator="kind"),
]


class ModelInstanceConfig(BaseModel):
    """Fully-populated configuration produced by the config resolver.

    Attributes:
        context_name: Trimmed context name (or the fallback label)
        db_name: Logical database fixtures are loaded into
        working_directory: On-disk location owned by this context
        base_port: First port tried by the free-port scan
        topology: Standalone or replica set variant
        engine_version: Optional engine version pin
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    context_name: str = Field(min_length=1)
    db_name: str = Field(min_length=1)
    working_directory: Path
    base_port: int
    topology: TopologyVariant = Field(default_factory=ModelStandaloneTopology)
    engine_version: str | None = None


__all__: list[str] = ["ModelInstanceConfig", "TopologyVariant"]
