# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat: disposable MongoDB instances for integration tests.

Start an engine scoped to a test context, load fixture documents, reset
them between tests and tear everything down afterwards::

    from mongohat import Mongohat

    hat = Mongohat("orders")
    url = await hat.start()
    await hat.load({"orders": [{"sku": "A-1"}]})
    ...
    await hat.stop()
"""

from mongohat.enums import EnumLifecycleState, EnumTopologyKind
from mongohat.errors import (
    EngineStartTimeoutError,
    FixtureDataError,
    LaunchError,
    MongohatError,
    NotInstantiatedError,
    PortNegotiationError,
    ProcessReapError,
    WorkspaceError,
)
from mongohat.models import (
    ModelConnectionInfo,
    ModelFixtureLoadResult,
    ModelMongohatOptions,
    ModelMongohatSettings,
)
from mongohat.runtime import Mongohat

__version__ = "0.1.0"

__all__: list[str] = [
    "EngineStartTimeoutError",
    "EnumLifecycleState",
    "EnumTopologyKind",
    "FixtureDataError",
    "LaunchError",
    "ModelConnectionInfo",
    "ModelFixtureLoadResult",
    "ModelMongohatOptions",
    "ModelMongohatSettings",
    "Mongohat",
    "MongohatError",
    "NotInstantiatedError",
    "PortNegotiationError",
    "ProcessReapError",
    "WorkspaceError",
    "__version__",
]
