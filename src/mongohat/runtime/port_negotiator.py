# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Free Port Negotiation.

Stale engines and parallel test runs may hold the base port, so the launcher
never binds it blindly. Candidates are scanned upward from the preferred
port and each one is confirmed by binding and releasing a socket on the
engine's bind host.

The answer is a snapshot: another process can take the port between the
probe and the engine's own bind. That window surfaces as a launch failure.
"""

from __future__ import annotations

import asyncio
import errno
import logging
import socket
from collections.abc import Callable

from mongohat.enums import EnumInfraTransportType
from mongohat.errors import ModelInfraErrorContext, PortNegotiationError
from mongohat.models import ModelMongohatSettings
from mongohat.models.model_mongohat_settings import (
    DEFAULT_BIND_HOST,
    DEFAULT_PORT_SCAN_SPAN,
)

logger = logging.getLogger(__name__)

MAX_PORT = 65535

# Windows reports WSAEADDRINUSE (10048) instead of EADDRINUSE
_ADDRESS_IN_USE_ERRNOS = frozenset({errno.EADDRINUSE, 10048})

PortProbe = Callable[[str, int], bool]


def candidate_ports(preferred_port: int, span: int = DEFAULT_PORT_SCAN_SPAN) -> range:
    """Return the bounded, restartable sequence of ports to probe.

    Example:
        >>> list(candidate_ports(27777, 3))
        [27777, 27778, 27779]
        >>> list(candidate_ports(65534, 10))
        [65534, 65535]
    """
    start = max(preferred_port, 1)
    return range(start, min(start + span, MAX_PORT + 1))


def probe_port(host: str, port: int) -> bool:
    """Return True if ``host:port`` can be bound right now.

    Raises:
        PortNegotiationError: If binding fails for a reason other than the
            address being in use.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError as e:
            if e.errno in _ADDRESS_IN_USE_ERRNOS:
                return False
            raise PortNegotiationError(
                f"Cannot probe port {port} on {host}: {e}",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.NETWORK,
                    operation="probe_port",
                    target_name=f"{host}:{port}",
                ),
                errno=e.errno,
            ) from e
    return True


class PortNegotiator:
    """Finds free ports starting from a preferred base port.

    Attributes:
        host: Interface ports are probed on
        span: Number of candidates scanned per acquisition

    Example:
        >>> negotiator = PortNegotiator()
        >>> port = await negotiator.acquire(27777)
    """

    def __init__(
        self,
        host: str = DEFAULT_BIND_HOST,
        span: int = DEFAULT_PORT_SCAN_SPAN,
        probe: PortProbe = probe_port,
    ) -> None:
        self.host = host
        self.span = span
        self._probe = probe

    @classmethod
    def from_settings(cls, settings: ModelMongohatSettings) -> PortNegotiator:
        return cls(host=settings.bind_host, span=settings.port_scan_span)

    async def acquire(self, preferred_port: int) -> int:
        """Return the first bindable port at or above ``preferred_port``.

        Raises:
            PortNegotiationError: If the scan range is exhausted or the OS
                reports an error other than "in use".
        """
        return await asyncio.to_thread(self._scan, preferred_port)

    async def acquire_many(self, preferred_port: int, count: int) -> list[int]:
        """Return ``count`` distinct ascending free ports.

        Each port is searched from just above the previous one, so the
        members of a replica set get neighbouring ports when available.
        """
        ports: list[int] = []
        next_port = preferred_port
        for _ in range(count):
            port = await self.acquire(next_port)
            ports.append(port)
            next_port = port + 1
        return ports

    def _scan(self, preferred_port: int) -> int:
        candidates = candidate_ports(preferred_port, self.span)
        for port in candidates:
            if self._probe(self.host, port):
                if port != preferred_port:
                    logger.debug(
                        "Port %d busy, using %d instead", preferred_port, port
                    )
                return port
        raise PortNegotiationError(
            f"No free port in range {candidates.start}-{candidates.stop - 1} on {self.host}",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.NETWORK,
                operation="acquire_port",
                target_name=self.host,
            ),
            preferred_port=preferred_port,
            span=self.span,
        )


__all__: list[str] = [
    "MAX_PORT",
    "PortNegotiator",
    "PortProbe",
    "candidate_ports",
    "probe_port",
]
