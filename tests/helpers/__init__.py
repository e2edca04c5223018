# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for mongohat unit tests.

Available Utilities:
    Fake Mongo:
        - FakeClient / FakeDatabase / FakeCollection: in-memory motor stand-ins
    Runtime:
        - FakeProcessRegistry: scripted ProtocolProcessRegistry
        - FakeLauncher / FakeRunningInstance: launcher that never spawns mongod
"""

from tests.helpers.fake_mongo import (
    FakeAdmin,
    FakeClient,
    FakeCollection,
    FakeDatabase,
)
from tests.helpers.runtime_helpers import (
    FakeLauncher,
    FakeProcessRegistry,
    FakeRunningInstance,
)

__all__ = [
    "FakeAdmin",
    "FakeClient",
    "FakeCollection",
    "FakeDatabase",
    "FakeLauncher",
    "FakeProcessRegistry",
    "FakeRunningInstance",
]
