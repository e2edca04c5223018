# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Engine version parsing and pin matching.

Provides lenient validation for a pinned engine version (``"7"``, ``"7.0"``,
``"7.0.5"``) and extraction of the version reported by ``mongod --version``.
"""

from __future__ import annotations

import re

# First line of `mongod --version`, e.g. "db version v7.0.5"
ENGINE_VERSION_PATTERN = re.compile(r"db version v?(\d+\.\d+\.\d+(?:-[A-Za-z0-9.-]+)?)")


def validate_version_lenient(v: str) -> str:
    """Validate version format with lenient parsing.

    Accepted formats:
        - "7" (major only)
        - "7.0" (major.minor)
        - "7.0.5" (major.minor.patch)
        - "7.0.5-rc1" (with prerelease suffix)

    Args:
        v: The version string to validate.

    Returns:
        The validated and stripped version string.

    Raises:
        ValueError: If the version is empty, has more than 3 numeric
            components, an empty component or a non-integer component.

    Example:
        >>> validate_version_lenient(" 6.0 ")
        '6.0'
        >>> validate_version_lenient("6.0.x")  # Raises ValueError
    """
    if not v or not v.strip():
        raise ValueError("Version cannot be empty")

    v = v.strip()
    if v[0] in "vV":
        v = v[1:]

    version_part = v
    if "-" in v:
        version_part, prerelease = v.split("-", 1)
        if not prerelease:
            raise ValueError(
                f"Invalid version '{v}': prerelease cannot be empty after '-'"
            )

    parts = version_part.split(".")
    if len(parts) > 3:
        raise ValueError(f"Invalid version '{v}': expected format 'major.minor.patch'")

    for part in parts:
        if not part:
            raise ValueError(f"Invalid version '{v}': empty component")
        if not part.isdigit():
            raise ValueError(
                f"Invalid version '{v}': non-integer component '{part}'"
            )

    return v


def parse_engine_version(output: str) -> str | None:
    """Extract the engine version from ``mongod --version`` output.

    Returns:
        The version string (e.g. ``"7.0.5"``), or None if not found.
    """
    match = ENGINE_VERSION_PATTERN.search(output)
    return match.group(1) if match else None


def engine_major(version: str) -> int:
    """Return the major component of a version string."""
    return int(validate_version_lenient(version).split(".")[0].split("-")[0])


def version_satisfies_pin(detected: str, pinned: str) -> bool:
    """Return True if ``detected`` matches ``pinned`` component-wise.

    A pin matches every version that shares all of its components:
    ``"7.0"`` matches ``"7.0.5"`` but not ``"7.1.0"`` or ``"70.0.0"``.
    """
    pinned_parts = validate_version_lenient(pinned).split(".")
    detected_parts = validate_version_lenient(detected).split(".")
    return detected_parts[: len(pinned_parts)] == pinned_parts


__all__: list[str] = [
    "ENGINE_VERSION_PATTERN",
    "engine_major",
    "parse_engine_version",
    "validate_version_lenient",
    "version_satisfies_pin",
]
