# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for resolved configuration and result models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mongohat.enums import EnumTopologyKind
from mongohat.models import (
    ModelFixtureLoadResult,
    ModelInstanceConfig,
    ModelProcessHandle,
    ModelReplicaSetTopology,
    ModelStandaloneTopology,
)


class TestModelInstanceConfig:
    """Tests for ModelInstanceConfig topology handling."""

    def test_default_topology_is_standalone(self) -> None:
        config = ModelInstanceConfig(
            context_name="orders",
            db_name="orders",
            working_directory=Path("/tmp/.mongohat_orders"),
            base_port=27777,
        )
        assert isinstance(config.topology, ModelStandaloneTopology)
        assert config.topology.member_count == 1

    def test_topology_discriminated_by_kind(self) -> None:
        """A plain mapping is parsed into the variant its kind names."""
        config = ModelInstanceConfig.model_validate(
            {
                "context_name": "orders",
                "db_name": "orders",
                "working_directory": "/tmp/.mongohat_orders",
                "base_port": 27777,
                "topology": {
                    "kind": EnumTopologyKind.REPLICA_SET.value,
                    "member_count": 3,
                },
            }
        )
        assert isinstance(config.topology, ModelReplicaSetTopology)
        assert config.topology.member_count == 3
        assert config.topology.replica_set_name == "testset"

    def test_replica_set_storage_engine_is_fixed(self) -> None:
        with pytest.raises(ValidationError):
            ModelReplicaSetTopology(storage_engine="ephemeralForTest")  # type: ignore[arg-type]

    def test_empty_db_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelInstanceConfig(
                context_name="orders",
                db_name="",
                working_directory=Path("/tmp"),
                base_port=27777,
            )


class TestResultModels:
    """Tests for ModelFixtureLoadResult and ModelProcessHandle."""

    def test_total_inserted(self) -> None:
        result = ModelFixtureLoadResult(inserted_counts={"users": 2, "orders": 5})
        assert result.total_inserted == 7
        assert ModelFixtureLoadResult().total_inserted == 0

    def test_process_handle_arguments(self) -> None:
        handle = ModelProcessHandle(
            pid=42, name="mongod", cmdline=("mongod", "--port", "27777")
        )
        assert handle.arguments == ("--port", "27777")
