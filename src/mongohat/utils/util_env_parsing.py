# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Type-safe environment variable parsing.

Invalid or out-of-range values never abort the caller: they are logged at
WARNING and the default is returned, since every setting read here has a
safe default.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def parse_env_int(
    name: str,
    default: int,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an integer environment variable with optional bounds.

    Args:
        name: Environment variable name.
        default: Value returned when the variable is unset or invalid.
        min_value: Inclusive lower bound.
        max_value: Inclusive upper bound.

    Returns:
        The parsed value, or ``default``.

    Example:
        >>> parse_env_int("MONGOHAT_PORT_SCAN_SPAN", 1000, min_value=1)
        1000
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(
            "Invalid %s environment variable %r, using default %d", name, raw, default
        )
        return default
    if (min_value is not None and value < min_value) or (
        max_value is not None and value > max_value
    ):
        logger.warning(
            "%s=%d outside [%s, %s], using default %d",
            name,
            value,
            min_value,
            max_value,
            default,
        )
        return default
    return value


def parse_env_float(
    name: str,
    default: float,
    *,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """Parse a float environment variable with optional bounds.

    Args:
        name: Environment variable name.
        default: Value returned when the variable is unset or invalid.
        min_value: Inclusive lower bound.
        max_value: Inclusive upper bound.

    Returns:
        The parsed value, or ``default``.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        logger.warning(
            "Invalid %s environment variable %r, using default %s", name, raw, default
        )
        return default
    if (min_value is not None and value < min_value) or (
        max_value is not None and value > max_value
    ):
        logger.warning(
            "%s=%s outside [%s, %s], using default %s",
            name,
            value,
            min_value,
            max_value,
            default,
        )
        return default
    return value


__all__ = ["parse_env_float", "parse_env_int"]
