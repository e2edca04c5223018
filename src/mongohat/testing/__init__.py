# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test-runner integration for mongohat."""
