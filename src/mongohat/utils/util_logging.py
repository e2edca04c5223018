# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Verbose logging switch for the ``mongohat`` logger hierarchy."""

from __future__ import annotations

import logging

PACKAGE_LOGGER_NAME = "mongohat"
VERBOSE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def enable_verbose_logging() -> logging.Logger:
    """Set the package logger to DEBUG and attach a stderr handler once.

    The root logger is left untouched. Calling this repeatedly does not
    stack handlers.

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    if not any(
        getattr(handler, "_mongohat_verbose", False)
        for handler in package_logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(VERBOSE_LOG_FORMAT))
        handler._mongohat_verbose = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
    return package_logger


__all__ = ["PACKAGE_LOGGER_NAME", "enable_verbose_logging"]
