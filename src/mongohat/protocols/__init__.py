# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mongohat Protocols Module."""

from mongohat.protocols.protocol_process_registry import ProtocolProcessRegistry

__all__: list[str] = ["ProtocolProcessRegistry"]
