# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Lifecycle State Enumeration for the ephemeral instance controller."""

from enum import Enum


class EnumLifecycleState(str, Enum):
    """States of a ``Mongohat`` controller.

    Transitions:
        UNINITIALIZED -> STARTING on ``start()``
        STARTING -> READY once the engine is reachable and the client connected
        STARTING -> FAILED when any start step raises
        READY -> STOPPED on a successful ``stop()``
        STOPPED / FAILED -> STARTING on a fresh ``start()``
    """

    UNINITIALIZED = "uninitialized"
    STARTING = "starting"
    READY = "ready"
    STOPPED = "stopped"
    FAILED = "failed"

    @property
    def holds_connection(self) -> bool:
        """Return True if a controller in this state owns an open connection."""
        return self is EnumLifecycleState.READY


__all__ = ["EnumLifecycleState"]
