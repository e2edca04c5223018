# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat command line interface."""

from mongohat.cli.commands import cli

__all__: list[str] = ["cli"]
