# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Error Context Configuration Model.

This module defines the configuration model for error context, encapsulating
common structured fields to reduce __init__ parameter count while keeping
strong typing.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from mongohat.enums import EnumInfraTransportType


class ModelInfraErrorContext(BaseModel):
    """Configuration model for error context.

    Attributes:
        transport_type: Host resource involved (PROCESS, NETWORK, DATABASE, FILESYSTEM)
        operation: Operation being performed (reap, acquire_port, launch, load, ...)
        target_name: Target resource (working directory, port, collection name)
        correlation_id: Correlation ID of the lifecycle call that failed

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.DATABASE,
        ...     operation="load",
        ...     target_name="users",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise FixtureDataError("Insert failed", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    transport_type: EnumInfraTransportType | None = Field(
        default=None,
        description="Host resource involved in the failing operation",
    )
    operation: str | None = Field(
        default=None,
        description="Operation being performed (reap, acquire_port, launch, load, ...)",
    )
    target_name: str | None = Field(
        default=None,
        description="Target resource name",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Correlation ID of the lifecycle call",
    )


__all__ = ["ModelInfraErrorContext"]
