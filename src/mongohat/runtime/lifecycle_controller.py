# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Ephemeral MongoDB Lifecycle Controller.

``Mongohat`` owns one disposable engine for a named test context: it resets
the context's working directory, reaps engines a previous run left behind,
negotiates ports, launches the engine and exposes the fixture operations of
the running instance.

State Machine:
    UNINITIALIZED -> STARTING -> READY -> STOPPED
                         |                  |
                         v                  v
                       FAILED  ---------> STARTING (fresh start)

Concurrency:
    A controller is meant to be driven by one task. Two ``start`` calls
    racing on the same controller, or two controllers sharing a context
    name, reap and relaunch each other's engines; neither is guarded.

Example:
    >>> async with Mongohat("orders") as hat:
    ...     await hat.load({"orders": [{"sku": "A-1", "qty": 2}]})
    ...     orders = hat.get_collection("orders")
    ...     assert await orders.count_documents({}) == 1
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path
from types import TracebackType
from uuid import UUID

from motor.motor_asyncio import AsyncIOMotorCollection

from mongohat.enums import EnumInfraTransportType, EnumLifecycleState
from mongohat.errors import (
    ModelInfraErrorContext,
    NotInstantiatedError,
    WorkspaceError,
)
from mongohat.models import (
    ModelConnectionInfo,
    ModelFixtureLoadResult,
    ModelInstanceConfig,
    ModelMongohatOptions,
    ModelMongohatSettings,
)
from mongohat.protocols import ProtocolProcessRegistry
from mongohat.runtime.config_resolver import resolve_instance_config
from mongohat.runtime.fixture_manager import FixtureManager, FixtureSet
from mongohat.runtime.instance_launcher import InstanceLauncher, RunningInstance
from mongohat.runtime.port_negotiator import PortNegotiator
from mongohat.runtime.process_reaper import ProcessReaper, PsutilProcessRegistry
from mongohat.utils.correlation import generate_correlation_id
from mongohat.utils.util_logging import enable_verbose_logging

logger = logging.getLogger(__name__)

NOT_INSTANTIATED_MESSAGE = "The client has not been instantiated."


class Mongohat:
    """Lifecycle controller for one ephemeral MongoDB instance.

    Args:
        context_name: Logical test scope. Names the database and the working
            directory; a blank name falls back to ``Mongohat-test``.
        options: Per-instance overrides (port, database name, path, topology,
            engine version pin).
        settings: Host-level tuning; read from the environment when omitted.
        process_registry: Process table used to reap stale engines.
        port_negotiator: Port finder; built from ``settings`` when omitted.
        launcher: Engine launcher; built from ``settings`` when omitted.
    """

    def __init__(
        self,
        context_name: str | None = None,
        options: ModelMongohatOptions | None = None,
        *,
        settings: ModelMongohatSettings | None = None,
        process_registry: ProtocolProcessRegistry | None = None,
        port_negotiator: PortNegotiator | None = None,
        launcher: InstanceLauncher | None = None,
    ) -> None:
        self._settings = settings or ModelMongohatSettings.from_environment()
        self._config = resolve_instance_config(context_name, options, self._settings)
        self._reaper = ProcessReaper(
            registry=process_registry
            or PsutilProcessRegistry(
                terminate_timeout_seconds=self._settings.process_terminate_timeout_seconds
            )
        )
        self._port_negotiator = port_negotiator or PortNegotiator.from_settings(
            self._settings
        )
        self._launcher = launcher or InstanceLauncher(self._settings)

        self._state = EnumLifecycleState.UNINITIALIZED
        self._instance: RunningInstance | None = None
        self._fixtures: FixtureManager | None = None

    @property
    def state(self) -> EnumLifecycleState:
        return self._state

    @property
    def config(self) -> ModelInstanceConfig:
        return self._config

    @property
    def connection_info(self) -> ModelConnectionInfo | None:
        """Connection details of the running instance, or None."""
        if self._instance is None:
            return None
        return self._instance.connection_info

    async def start(self, verbose: bool = False) -> str:
        """Start the instance and return its connection URL.

        Calling ``start`` on a ready controller returns the existing URL
        without relaunching.

        Args:
            verbose: Switch the ``mongohat`` logger to DEBUG on stderr.

        Returns:
            The MongoDB connection URL.

        Raises:
            WorkspaceError: If the working directory cannot be reset.
            ProcessReapError: If stale engines cannot be enumerated or killed.
            PortNegotiationError: If no free port is available.
            LaunchError: If the engine cannot be started or reached.
        """
        if verbose:
            enable_verbose_logging()

        if self._state.holds_connection and self._instance is not None:
            return self._instance.connection_info.url

        correlation_id = generate_correlation_id()
        self._state = EnumLifecycleState.STARTING
        logger.info(
            "Starting mongohat context %s (correlation_id=%s)",
            self._config.context_name,
            correlation_id,
            extra={
                "working_directory": str(self._config.working_directory),
                "base_port": self._config.base_port,
                "topology": self._config.topology.kind.value,
            },
        )

        try:
            await self._prepare_working_directory(correlation_id)
            await self._reaper.cleanup(self._config.working_directory)
            ports = await self._port_negotiator.acquire_many(
                self._config.base_port, self._config.topology.member_count
            )
            instance = await self._launcher.launch(
                self._config, ports, correlation_id=correlation_id
            )
        except Exception as e:
            self._state = EnumLifecycleState.FAILED
            logger.error(
                "Failed to start mongohat context %s: %s (correlation_id=%s)",
                self._config.context_name,
                e,
                correlation_id,
            )
            raise

        self._instance = instance
        self._fixtures = FixtureManager(instance.database)
        self._state = EnumLifecycleState.READY
        return instance.connection_info.url

    async def stop(self) -> None:
        """Close the client, stop the engine and reap leftovers.

        The controller is STOPPED once ``stop`` returns or raises; a failed
        reap still leaves it ready for a fresh ``start``.

        Raises:
            NotInstantiatedError: If the controller has no running instance.
            ProcessReapError: If leftover engines cannot be enumerated or killed.
        """
        instance = self._require_instance("stop")
        correlation_id = generate_correlation_id()

        self._instance = None
        self._fixtures = None
        try:
            await instance.stop()
            await self._reaper.cleanup(self._config.working_directory)
        finally:
            self._state = EnumLifecycleState.STOPPED
        await asyncio.sleep(self._settings.stop_grace_period_seconds)
        logger.info(
            "Stopped mongohat context %s (correlation_id=%s)",
            self._config.context_name,
            correlation_id,
        )

    def get_connection_url(self) -> str:
        return self._require_instance("get_connection_url").connection_info.url

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        return self._require_fixtures("get_collection").get_collection(name)

    async def load(
        self, data: FixtureSet, retain_previous: bool = False
    ) -> ModelFixtureLoadResult:
        """Load fixtures; see ``FixtureManager.load``."""
        return await self._require_fixtures("load").load(data, retain_previous)

    async def refresh(self) -> ModelFixtureLoadResult | None:
        return await self._require_fixtures("refresh").refresh()

    async def clean(self, data: FixtureSet | None = None) -> None:
        await self._require_fixtures("clean").clean(data)

    async def drop(self) -> None:
        await self._require_fixtures("drop").drop()

    async def drop_all(self) -> None:
        await self._require_fixtures("drop_all").drop_all()

    async def __aenter__(self) -> Mongohat:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._instance is not None:
            await self.stop()

    def _require_instance(self, operation: str) -> RunningInstance:
        if self._instance is None:
            raise self._not_instantiated(operation)
        return self._instance

    def _require_fixtures(self, operation: str) -> FixtureManager:
        if self._instance is None or self._fixtures is None:
            raise self._not_instantiated(operation)
        return self._fixtures

    def _not_instantiated(self, operation: str) -> NotInstantiatedError:
        return NotInstantiatedError(
            NOT_INSTANTIATED_MESSAGE,
            operation=operation,
            context_name=self._config.context_name,
            state=self._state.value,
        )

    async def _prepare_working_directory(self, correlation_id: UUID) -> None:
        working_directory = self._config.working_directory
        try:
            await asyncio.to_thread(_reset_directory, working_directory)
        except OSError as e:
            raise WorkspaceError(
                f"Cannot reset working directory {working_directory}: {e}",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.FILESYSTEM,
                    operation="prepare_working_directory",
                    target_name=str(working_directory),
                    correlation_id=correlation_id,
                ),
            ) from e


def _reset_directory(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    try:
        path.mkdir(parents=True)
    except FileExistsError:
        logger.debug("Working directory %s created concurrently", path)


__all__: list[str] = ["NOT_INSTANTIATED_MESSAGE", "Mongohat"]
