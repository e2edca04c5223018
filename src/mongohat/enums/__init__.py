# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat Enumerations Module.

Exports:
    EnumErrorCode: Error classification codes
    EnumInfraTransportType: Host resource type used in error context
    EnumLifecycleState: Controller lifecycle state machine
    EnumTopologyKind: Standalone vs replica set topology discriminator
"""

from mongohat.enums.enum_error_code import EnumErrorCode
from mongohat.enums.enum_infra_transport_type import EnumInfraTransportType
from mongohat.enums.enum_lifecycle_state import EnumLifecycleState
from mongohat.enums.enum_topology_kind import EnumTopologyKind

__all__: list[str] = [
    "EnumErrorCode",
    "EnumInfraTransportType",
    "EnumLifecycleState",
    "EnumTopologyKind",
]
