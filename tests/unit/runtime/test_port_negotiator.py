# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for free port negotiation."""

from __future__ import annotations

import errno
import socket
from unittest.mock import MagicMock, patch

import pytest

from mongohat.errors import PortNegotiationError
from mongohat.models import ModelMongohatSettings
from mongohat.runtime.port_negotiator import (
    PortNegotiator,
    candidate_ports,
    probe_port,
)


def _busy(*ports: int):
    busy = set(ports)

    def probe(host: str, port: int) -> bool:
        return port not in busy

    return probe


class TestCandidatePorts:
    """Tests for candidate_ports()."""

    def test_scans_upward(self) -> None:
        assert list(candidate_ports(27777, 3)) == [27777, 27778, 27779]

    def test_capped_at_max_port(self) -> None:
        assert list(candidate_ports(65534, 10)) == [65534, 65535]


class TestPortNegotiator:
    """Tests for PortNegotiator with an injected probe."""

    async def test_preferred_port_when_free(self) -> None:
        negotiator = PortNegotiator(probe=_busy())
        assert await negotiator.acquire(27777) == 27777

    async def test_skips_busy_ports(self) -> None:
        negotiator = PortNegotiator(probe=_busy(27777, 27778))
        assert await negotiator.acquire(27777) == 27779

    async def test_exhausted_range_raises(self) -> None:
        negotiator = PortNegotiator(span=3, probe=_busy(27777, 27778, 27779))
        with pytest.raises(PortNegotiationError) as exc_info:
            await negotiator.acquire(27777)
        assert "27777-27779" in str(exc_info.value)
        assert exc_info.value.model.context["preferred_port"] == 27777

    async def test_acquire_many_returns_distinct_ascending(self) -> None:
        negotiator = PortNegotiator(probe=_busy(27778))
        assert await negotiator.acquire_many(27777, 3) == [27777, 27779, 27780]

    def test_from_settings(self) -> None:
        settings = ModelMongohatSettings(bind_host="0.0.0.0", port_scan_span=5)
        negotiator = PortNegotiator.from_settings(settings)
        assert negotiator.host == "0.0.0.0"
        assert negotiator.span == 5

    async def test_real_socket_skips_bound_port(self) -> None:
        """A port held by a listening socket is reported busy."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as held:
            held.bind(("127.0.0.1", 0))
            held.listen(1)
            held_port = held.getsockname()[1]

            assert probe_port("127.0.0.1", held_port) is False
            port = await PortNegotiator(span=50).acquire(held_port)

        assert port > held_port


class TestProbePort:
    """Tests for probe_port() error classification."""

    def test_unexpected_bind_error_raises(self) -> None:
        sock = MagicMock()
        sock.__enter__.return_value = sock
        sock.bind.side_effect = OSError(errno.EADDRNOTAVAIL, "Cannot assign address")
        with patch("mongohat.runtime.port_negotiator.socket.socket", return_value=sock):
            with pytest.raises(PortNegotiationError) as exc_info:
                probe_port("10.255.255.1", 27777)
        assert exc_info.value.model.context["errno"] == errno.EADDRNOTAVAIL
