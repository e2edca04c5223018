# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared runtime helpers for Mongohat lifecycle testing.

Provides a scripted process registry and a launcher that hands out
in-memory instances, so the ``Mongohat`` state machine can be exercised
without a ``mongod`` binary.

Usage::

    from tests.helpers.runtime_helpers import FakeLauncher, FakeProcessRegistry

    launcher = FakeLauncher()
    hat = Mongohat(
        "orders",
        settings=settings,
        process_registry=FakeProcessRegistry(),
        port_negotiator=PortNegotiator(probe=lambda host, port: True),
        launcher=launcher,
    )
    await hat.start()
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from mongohat.models import (
    ModelConnectionInfo,
    ModelInstanceConfig,
    ModelProcessHandle,
    ModelProcessMatcher,
)
from tests.helpers.fake_mongo import FakeClient, FakeDatabase


class FakeProcessRegistry:
    """Process table holding a fixed list of handles.

    ``find`` filters the handles through the matcher, just like the psutil
    registry does with the real process table. Terminated handles are
    removed from the table.
    """

    def __init__(
        self,
        handles: Sequence[ModelProcessHandle] = (),
        terminate_error: Exception | None = None,
    ) -> None:
        self.handles = list(handles)
        self.terminate_error = terminate_error
        self.find_calls: list[ModelProcessMatcher] = []
        self.terminated: list[int] = []

    async def find(self, matcher: ModelProcessMatcher) -> list[ModelProcessHandle]:
        self.find_calls.append(matcher)
        return [
            handle
            for handle in self.handles
            if matcher.matches(handle.name, handle.cmdline)
        ]

    async def terminate(self, handle: ModelProcessHandle) -> None:
        if self.terminate_error is not None:
            raise self.terminate_error
        self.terminated.append(handle.pid)
        self.handles = [h for h in self.handles if h.pid != handle.pid]


class FakeRunningInstance:
    """Running instance backed by a ``FakeClient``."""

    def __init__(self, config: ModelInstanceConfig, ports: Sequence[int]) -> None:
        self.client = FakeClient(f"mongodb://127.0.0.1:{ports[0]}/")
        self._config = config
        self._ports = tuple(ports)
        self.stop_calls = 0

    @property
    def database(self) -> FakeDatabase:
        return self.client.get_database(self._config.db_name)

    @property
    def connection_info(self) -> ModelConnectionInfo:
        return ModelConnectionInfo(
            url=self.client.url,
            db_name=self._config.db_name,
            ports=self._ports,
        )

    async def stop(self) -> None:
        self.stop_calls += 1
        self.client.close()


class FakeLauncher:
    """Launcher recording every launch and optionally failing it."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.launches: list[tuple[ModelInstanceConfig, list[int], UUID | None]] = []
        self.instances: list[FakeRunningInstance] = []

    async def launch(
        self,
        config: ModelInstanceConfig,
        ports: Sequence[int],
        correlation_id: UUID | None = None,
    ) -> FakeRunningInstance:
        self.launches.append((config, list(ports), correlation_id))
        if self.error is not None:
            raise self.error
        instance = FakeRunningInstance(config, ports)
        self.instances.append(instance)
        return instance


__all__ = ["FakeLauncher", "FakeProcessRegistry", "FakeRunningInstance"]
