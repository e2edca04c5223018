# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility modules for mongohat.

This package provides common utilities used across the runtime:
    - correlation: Correlation ID generation for lifecycle tracing
    - util_env_parsing: Type-safe environment variable parsing
    - util_logging: Verbose logging switch
    - util_semver: Engine version parsing and pin matching
"""

from mongohat.utils.correlation import generate_correlation_id
from mongohat.utils.util_env_parsing import parse_env_float, parse_env_int
from mongohat.utils.util_logging import enable_verbose_logging
from mongohat.utils.util_semver import (
    engine_major,
    parse_engine_version,
    validate_version_lenient,
    version_satisfies_pin,
)

__all__: list[str] = [
    "generate_correlation_id",
    "parse_env_int",
    "parse_env_float",
    "enable_verbose_logging",
    "engine_major",
    "parse_engine_version",
    "validate_version_lenient",
    "version_satisfies_pin",
]
