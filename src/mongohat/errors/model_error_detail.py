# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Structured detail attached to every mongohat error."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from mongohat.enums import EnumErrorCode


class ModelErrorDetail(BaseModel):
    """Immutable error payload exposed as ``MongohatError.model``.

    Attributes:
        message: Human-readable error message
        error_code: Error classification
        correlation_id: Correlation ID of the failing call, if known
        context: Flattened structured context (transport_type, operation,
            target_name and any extra keyword context)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str
    error_code: EnumErrorCode = EnumErrorCode.OPERATION_FAILED
    correlation_id: UUID | None = None
    context: dict[str, Any] = Field(default_factory=dict)


__all__ = ["ModelErrorDetail"]
