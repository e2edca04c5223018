# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat Models Module.

Pydantic models for options, settings, resolved configuration, launch plans,
process snapshots and operation results.
"""

from mongohat.models.model_connection_info import ModelConnectionInfo
from mongohat.models.model_engine_member_spec import ModelEngineMemberSpec
from mongohat.models.model_fixture_load_result import ModelFixtureLoadResult
from mongohat.models.model_instance_config import ModelInstanceConfig, TopologyVariant
from mongohat.models.model_launch_spec import ModelLaunchSpec
from mongohat.models.model_mongohat_options import ModelMongohatOptions
from mongohat.models.model_mongohat_settings import ModelMongohatSettings
from mongohat.models.model_process_handle import ModelProcessHandle
from mongohat.models.model_process_matcher import ModelProcessMatcher
from mongohat.models.model_replica_set_topology import (
    DEFAULT_REPLICA_SET_NAME,
    ModelReplicaSetTopology,
)
from mongohat.models.model_standalone_topology import ModelStandaloneTopology

__all__: list[str] = [
    "DEFAULT_REPLICA_SET_NAME",
    "ModelConnectionInfo",
    "ModelEngineMemberSpec",
    "ModelFixtureLoadResult",
    "ModelInstanceConfig",
    "ModelLaunchSpec",
    "ModelMongohatOptions",
    "ModelMongohatSettings",
    "ModelProcessHandle",
    "ModelProcessMatcher",
    "ModelReplicaSetTopology",
    "ModelStandaloneTopology",
    "TopologyVariant",
]
