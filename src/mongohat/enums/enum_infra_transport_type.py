# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Defines the resource classes mongohat touches on the host.
Used for error context and log correlation.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Host resource types touched while managing an ephemeral instance.

    Attributes:
        FILESYSTEM: Working directory preparation and engine log files
        PROCESS: Host process table (enumeration, termination, spawning)
        NETWORK: Port probing on the local host
        DATABASE: Client connection to the engine (commands, inserts, drops)
    """

    FILESYSTEM = "filesystem"
    PROCESS = "process"
    NETWORK = "network"
    DATABASE = "db"


__all__ = ["EnumInfraTransportType"]
