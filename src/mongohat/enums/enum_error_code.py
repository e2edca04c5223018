# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error codes attached to every mongohat error."""

from enum import Enum


class EnumErrorCode(str, Enum):
    """Classification codes carried by ``MongohatError.model.error_code``."""

    OPERATION_FAILED = "MONGOHAT_001_OPERATION_FAILED"
    NOT_INSTANTIATED = "MONGOHAT_010_NOT_INSTANTIATED"
    PROCESS_ERROR = "MONGOHAT_020_PROCESS_ERROR"
    PORT_UNAVAILABLE = "MONGOHAT_030_PORT_UNAVAILABLE"
    LAUNCH_FAILED = "MONGOHAT_040_LAUNCH_FAILED"
    LAUNCH_TIMEOUT = "MONGOHAT_041_LAUNCH_TIMEOUT"
    WORKSPACE_ERROR = "MONGOHAT_042_WORKSPACE_ERROR"
    DATA_ERROR = "MONGOHAT_050_DATA_ERROR"


__all__ = ["EnumErrorCode"]
