# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for lifecycle and topology enums."""

import pytest

from mongohat.enums import EnumLifecycleState, EnumTopologyKind


class TestEnumLifecycleState:
    """Tests for EnumLifecycleState."""

    @pytest.mark.parametrize(
        ("state", "expected"),
        [
            (EnumLifecycleState.UNINITIALIZED, False),
            (EnumLifecycleState.STARTING, False),
            (EnumLifecycleState.READY, True),
            (EnumLifecycleState.STOPPED, False),
            (EnumLifecycleState.FAILED, False),
        ],
    )
    def test_holds_connection(self, state: EnumLifecycleState, expected: bool) -> None:
        """Only a ready controller owns an open connection."""
        assert state.holds_connection is expected

    def test_string_values(self) -> None:
        assert EnumLifecycleState("ready") is EnumLifecycleState.READY
        assert EnumLifecycleState.READY == "ready"


class TestEnumTopologyKind:
    """Tests for EnumTopologyKind."""

    def test_members(self) -> None:
        assert {kind.value for kind in EnumTopologyKind} == {
            EnumTopologyKind.STANDALONE.value,
            EnumTopologyKind.REPLICA_SET.value,
        }
