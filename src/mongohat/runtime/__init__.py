# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat Runtime Module.

Components, in the order ``Mongohat.start`` uses them:
    - config_resolver: options + context name -> ModelInstanceConfig
    - process_reaper: kill engines left on the working directory
    - port_negotiator: find free ports from the base port upward
    - instance_launcher: spawn mongod, wait for readiness, open the client
    - fixture_manager: load / refresh / clean / drop fixture data
    - lifecycle_controller: the ``Mongohat`` state machine tying them together
"""

from mongohat.runtime.config_resolver import (
    DEFAULT_BASE_PORT,
    FALLBACK_CONTEXT_NAME,
    resolve_instance_config,
)
from mongohat.runtime.fixture_manager import FixtureManager, FixtureSet
from mongohat.runtime.instance_launcher import (
    InstanceLauncher,
    RunningInstance,
    build_launch_spec,
)
from mongohat.runtime.lifecycle_controller import Mongohat
from mongohat.runtime.port_negotiator import PortNegotiator
from mongohat.runtime.process_reaper import ProcessReaper, PsutilProcessRegistry

__all__: list[str] = [
    "DEFAULT_BASE_PORT",
    "FALLBACK_CONTEXT_NAME",
    "FixtureManager",
    "FixtureSet",
    "InstanceLauncher",
    "Mongohat",
    "PortNegotiator",
    "ProcessReaper",
    "PsutilProcessRegistry",
    "RunningInstance",
    "build_launch_spec",
    "resolve_instance_config",
]
