# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat Error Classes.

Error Hierarchy:
    MongohatError (base error)
    ├── NotInstantiatedError
    ├── ProcessReapError
    ├── PortNegotiationError
    ├── LaunchError
    │   ├── EngineStartTimeoutError
    │   └── WorkspaceError
    └── FixtureDataError

All errors:
    - Carry a frozen ModelErrorDetail at ``.model``
    - Use EnumErrorCode for classification
    - Support proper error chaining with ``raise ... from e``
    - Accept ModelInfraErrorContext for bundled context parameters
"""

from __future__ import annotations

from mongohat.enums import EnumErrorCode
from mongohat.errors.model_error_detail import ModelErrorDetail
from mongohat.errors.model_infra_error_context import ModelInfraErrorContext


class MongohatError(Exception):
    """Base error class for every failure surfaced by mongohat.

    Structured Fields (via ModelInfraErrorContext):
        transport_type: Host resource involved
        operation: Operation being performed
        correlation_id: Lifecycle call correlation ID
        target_name: Target resource name

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.PROCESS,
        ...     operation="reap",
        ...     target_name="/tmp/.mongohat_users",
        ... )
        >>> raise MongohatError("Operation failed", context=context, pid=4242)
    """

    default_error_code: EnumErrorCode = EnumErrorCode.OPERATION_FAILED

    def __init__(
        self,
        message: str,
        error_code: EnumErrorCode | None = None,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize MongohatError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to the class default)
            context: Bundled error context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            correlation_id = context.correlation_id

        self.model = ModelErrorDetail(
            message=message,
            error_code=error_code or self.default_error_code,
            correlation_id=correlation_id,
            context=structured_context,
        )
        super().__init__(message)

    def __str__(self) -> str:
        message = self.model.message
        if self.model.correlation_id is not None:
            return f"{message} (correlation_id={self.model.correlation_id})"
        return message


class NotInstantiatedError(MongohatError):
    """Raised when an operation other than start runs without a live instance.

    Covers every fixture operation, ``get_connection_url`` and ``stop``
    invoked before a successful ``start`` or after ``stop``. Never retried.

    Example:
        >>> raise NotInstantiatedError(
        ...     "The client has not been instantiated.",
        ...     operation="load",
        ... )
    """

    default_error_code = EnumErrorCode.NOT_INSTANTIATED


class ProcessReapError(MongohatError):
    """Raised when enumerating or terminating stale engine processes fails.

    Finding nothing is not an error; only a failure of the enumeration or
    termination mechanism itself (e.g. insufficient privilege) is.
    """

    default_error_code = EnumErrorCode.PROCESS_ERROR


class PortNegotiationError(MongohatError):
    """Raised when no bindable port exists in the bounded scan range, or the
    OS reports a bind error other than "address in use"."""

    default_error_code = EnumErrorCode.PORT_UNAVAILABLE


class LaunchError(MongohatError):
    """Raised when the engine fails to start or the client cannot connect.

    Any partially-started engine process has been stopped by the time this
    error reaches the caller.
    """

    default_error_code = EnumErrorCode.LAUNCH_FAILED


class EngineStartTimeoutError(LaunchError):
    """Raised when engine startup exceeds the launch timeout."""

    default_error_code = EnumErrorCode.LAUNCH_TIMEOUT


class WorkspaceError(LaunchError):
    """Raised when the working directory cannot be reset."""

    default_error_code = EnumErrorCode.WORKSPACE_ERROR


class FixtureDataError(MongohatError):
    """Raised when a fixture insert or drop fails.

    Inserts already committed by the same ``load`` call are not rolled back.

    Example:
        >>> raise FixtureDataError(
        ...     "Insert into 'users' failed",
        ...     context=context,
        ...     collection="users",
        ... )
    """

    default_error_code = EnumErrorCode.DATA_ERROR


__all__ = [
    "MongohatError",
    "NotInstantiatedError",
    "ProcessReapError",
    "PortNegotiationError",
    "LaunchError",
    "EngineStartTimeoutError",
    "WorkspaceError",
    "FixtureDataError",
]
