# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Engine topology discriminator."""

from enum import Enum


class EnumTopologyKind(str, Enum):
    """Engine topology variants.

    Attributes:
        STANDALONE: A single ``mongod`` process with scratch storage
        REPLICA_SET: A coordinated group of ``mongod`` members sharing a
            replica set name, backed by a durable storage engine
    """

    STANDALONE = "standalone"
    REPLICA_SET = "replica_set"


__all__ = ["EnumTopologyKind"]
