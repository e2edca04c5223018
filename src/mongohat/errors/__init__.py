# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat Errors Module.

Exports:
    ModelInfraErrorContext: Configuration model for bundled error context
    ModelErrorDetail: Structured payload carried by every error
    MongohatError: Base error class
    NotInstantiatedError: Operation invoked without a live instance
    ProcessReapError: Stale process enumeration/termination failure
    PortNegotiationError: No free port in the scan range
    LaunchError: Engine start or client connection failure
    EngineStartTimeoutError: Engine startup exceeded the launch timeout
    WorkspaceError: Working directory could not be reset
    FixtureDataError: Fixture insert or drop failure

Correlation ID Assignment:
    Every ``start``/``stop`` call generates one correlation ID with
    ``generate_correlation_id()`` and threads it through the error context of
    every step, so log lines and raised errors for one lifecycle call can be
    joined.

    Example::

        from mongohat.enums import EnumInfraTransportType
        from mongohat.errors import LaunchError, ModelInfraErrorContext

        context = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.PROCESS,
            operation="launch",
            target_name=str(config.working_directory),
            correlation_id=correlation_id,
        )
        raise LaunchError("mongod exited during startup", context=context) from e
"""

from mongohat.errors.model_error_detail import ModelErrorDetail
from mongohat.errors.model_infra_error_context import ModelInfraErrorContext
from mongohat.errors.mongohat_errors import (
    EngineStartTimeoutError,
    FixtureDataError,
    LaunchError,
    MongohatError,
    NotInstantiatedError,
    PortNegotiationError,
    ProcessReapError,
    WorkspaceError,
)

__all__: list[str] = [
    "ModelErrorDetail",
    "ModelInfraErrorContext",
    "MongohatError",
    "NotInstantiatedError",
    "ProcessReapError",
    "PortNegotiationError",
    "LaunchError",
    "EngineStartTimeoutError",
    "WorkspaceError",
    "FixtureDataError",
]
