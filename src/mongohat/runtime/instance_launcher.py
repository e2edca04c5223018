# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Ephemeral Engine Launcher.

Spawns ``mongod`` for a resolved ``ModelInstanceConfig``, waits until every
member answers, initiates the replica set when the topology asks for one,
and opens the client the fixture manager works through.

Launch Sequence:
    1. Resolve the engine binary (setting, else ``mongod`` on PATH)
    2. Read the engine version and enforce the optional version pin
    3. Build the launch plan with ``build_launch_spec`` (one ``match`` over
       the topology variant)
    4. Spawn every member
    5. Wait for each member to answer ``ping``; fail fast if one exits
    6. Replica set only: ``replSetInitiate`` and wait for a writable primary
    7. Open the client on the instance URL and ``ping`` through it

Steps 4-7 are bounded by ``launch_timeout_seconds``. Nothing is retried, and
a failure at any step stops every spawned member and closes every client
before the error propagates.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any
from uuid import UUID

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

from mongohat.enums import EnumInfraTransportType, EnumTopologyKind
from mongohat.errors import (
    EngineStartTimeoutError,
    LaunchError,
    ModelInfraErrorContext,
    WorkspaceError,
)
from mongohat.models import (
    ModelConnectionInfo,
    ModelEngineMemberSpec,
    ModelInstanceConfig,
    ModelLaunchSpec,
    ModelMongohatSettings,
    ModelReplicaSetTopology,
    ModelStandaloneTopology,
)
from mongohat.runtime.process_reaper import ENGINE_EXECUTABLE_NAME
from mongohat.utils.correlation import generate_correlation_id
from mongohat.utils.util_semver import (
    engine_major,
    parse_engine_version,
    version_satisfies_pin,
)

logger = logging.getLogger(__name__)

# The in-memory test engine was removed from mongod in 7.0
EPHEMERAL_STORAGE_ENGINE = "ephemeralForTest"
DURABLE_STORAGE_ENGINE = "wiredTiger"
EPHEMERAL_ENGINE_LAST_MAJOR = 6

PROBE_SERVER_SELECTION_TIMEOUT_MS = 500
VERSION_PROBE_TIMEOUT_SECONDS = 10.0
LOG_TAIL_LINES = 20

# MongoDB server error code for "already initialized"
_ALREADY_INITIALIZED = 23

ClientFactory = Callable[..., AsyncIOMotorClient]
ProcessSpawner = Callable[[ModelEngineMemberSpec], Awaitable[asyncio.subprocess.Process]]


def _default_storage_engine(engine_version: str | None) -> str:
    if engine_version is not None and engine_major(engine_version) > EPHEMERAL_ENGINE_LAST_MAJOR:
        return DURABLE_STORAGE_ENGINE
    return EPHEMERAL_STORAGE_ENGINE


def _member_argv(
    binary: str,
    host: str,
    port: int,
    db_path: Path,
    log_path: Path,
    storage_engine: str,
    extra: Sequence[str] = (),
) -> tuple[str, ...]:
    return (
        binary,
        "--port",
        str(port),
        "--bind_ip",
        host,
        "--dbpath",
        str(db_path),
        "--storageEngine",
        storage_engine,
        "--logpath",
        str(log_path),
        *extra,
    )


def build_launch_spec(
    config: ModelInstanceConfig,
    ports: Sequence[int],
    *,
    binary: str = ENGINE_EXECUTABLE_NAME,
    host: str = "127.0.0.1",
    engine_version: str | None = None,
) -> ModelLaunchSpec:
    """Build the launch plan for ``config`` on the negotiated ``ports``.

    Args:
        config: Resolved instance configuration.
        ports: One negotiated port per member.
        binary: Engine executable.
        host: Interface every member binds to.
        engine_version: Detected engine version, used to pick the standalone
            storage engine when the topology does not name one.

    Returns:
        Launch plan with one member spec per engine process.

    Raises:
        ValueError: If fewer ports than members were supplied.
    """
    topology = config.topology
    if len(ports) < topology.member_count:
        raise ValueError(
            f"{topology.kind.value} topology needs {topology.member_count} ports, "
            f"got {len(ports)}"
        )
    workdir = config.working_directory

    match topology:
        case ModelStandaloneTopology(storage_engine=storage_engine):
            port = ports[0]
            log_path = workdir / f"mongod-{port}.log"
            member = ModelEngineMemberSpec(
                port=port,
                db_path=workdir,
                log_path=log_path,
                argv=_member_argv(
                    binary,
                    host,
                    port,
                    workdir,
                    log_path,
                    storage_engine or _default_storage_engine(engine_version),
                ),
            )
            return ModelLaunchSpec(
                topology=EnumTopologyKind.STANDALONE,
                members=(member,),
                host=host,
                db_name=config.db_name,
                connection_url=f"mongodb://{host}:{port}/",
            )

        case ModelReplicaSetTopology(
            replica_set_name=replica_set_name,
            member_count=member_count,
            storage_engine=storage_engine,
        ):
            members = []
            for index, port in enumerate(ports[:member_count]):
                db_path = workdir / f"member-{index}"
                log_path = workdir / f"mongod-{port}.log"
                members.append(
                    ModelEngineMemberSpec(
                        port=port,
                        db_path=db_path,
                        log_path=log_path,
                        argv=_member_argv(
                            binary,
                            host,
                            port,
                            db_path,
                            log_path,
                            storage_engine,
                            ("--replSet", replica_set_name),
                        ),
                    )
                )
            hosts = ",".join(f"{host}:{member.port}" for member in members)
            return ModelLaunchSpec(
                topology=EnumTopologyKind.REPLICA_SET,
                members=tuple(members),
                host=host,
                db_name=config.db_name,
                connection_url=f"mongodb://{hosts}/?replicaSet={replica_set_name}",
                replica_set_name=replica_set_name,
            )

    raise ValueError(f"Unsupported topology: {topology!r}")


def resolve_engine_binary(settings: ModelMongohatSettings) -> str:
    """Return the engine executable to launch.

    Raises:
        LaunchError: If no binary is configured and none is on PATH.
    """
    if settings.mongod_binary:
        return settings.mongod_binary
    found = shutil.which(ENGINE_EXECUTABLE_NAME)
    if found is None:
        raise LaunchError(
            f"'{ENGINE_EXECUTABLE_NAME}' not found on PATH; "
            "install MongoDB or set MONGOHAT_MONGOD_BINARY",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.PROCESS,
                operation="resolve_binary",
                target_name=ENGINE_EXECUTABLE_NAME,
            ),
        )
    return found


async def probe_engine_version(
    binary: str, timeout: float = VERSION_PROBE_TIMEOUT_SECONDS
) -> str | None:
    """Run ``<binary> --version`` and return the reported engine version.

    Returns:
        The version string, or None if the output could not be parsed.

    Raises:
        LaunchError: If the binary cannot be executed or does not answer
            within ``timeout``.
    """
    context = ModelInfraErrorContext(
        transport_type=EnumInfraTransportType.PROCESS,
        operation="probe_version",
        target_name=binary,
    )
    try:
        process = await asyncio.create_subprocess_exec(
            binary,
            "--version",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as e:
        raise LaunchError(f"Cannot execute engine binary {binary}: {e}", context=context) from e

    try:
        stdout, _ = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError as e:
        process.kill()
        await process.wait()
        raise LaunchError(
            f"{binary} --version did not answer within {timeout}s", context=context
        ) from e
    return parse_engine_version(stdout.decode(errors="replace"))


def _read_log_tail(log_path: Path, lines: int = LOG_TAIL_LINES) -> str:
    try:
        content = log_path.read_text(errors="replace")
    except OSError:
        return ""
    return "\n".join(content.splitlines()[-lines:])


async def _terminate_process(
    process: asyncio.subprocess.Process, timeout: float
) -> None:
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(process.wait(), timeout)
    except asyncio.TimeoutError:
        logger.warning(
            "Engine PID %d did not stop in %.1fs; force killing", process.pid, timeout
        )
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()


async def spawn_member(member: ModelEngineMemberSpec) -> asyncio.subprocess.Process:
    """Start one engine process with output going to its log file."""
    return await asyncio.create_subprocess_exec(
        *member.argv,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.DEVNULL,
    )


class RunningInstance:
    """A launched engine group and the client connected to it.

    This is the connection handle owned by exactly one ``Mongohat``
    controller. Callers see it only through ``connection_info``.
    """

    def __init__(
        self,
        spec: ModelLaunchSpec,
        processes: Sequence[asyncio.subprocess.Process],
        client: AsyncIOMotorClient,
        terminate_timeout_seconds: float = 5.0,
    ) -> None:
        self._spec = spec
        self._processes = list(processes)
        self._client = client
        self._terminate_timeout_seconds = terminate_timeout_seconds
        self._stopped = False

    @property
    def spec(self) -> ModelLaunchSpec:
        return self._spec

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._client.get_database(self._spec.db_name)

    @property
    def pids(self) -> list[int]:
        return [process.pid for process in self._processes]

    @property
    def connection_info(self) -> ModelConnectionInfo:
        return ModelConnectionInfo(
            url=self._spec.connection_url,
            db_name=self._spec.db_name,
            ports=self._spec.ports,
            replica_set_name=self._spec.replica_set_name,
        )

    async def stop(self) -> None:
        """Close the client, then stop every engine member.

        Safe to call more than once.
        """
        if self._stopped:
            return
        self._stopped = True
        self._client.close()
        await asyncio.gather(
            *(
                _terminate_process(process, self._terminate_timeout_seconds)
                for process in self._processes
            )
        )
        logger.debug("Stopped engine members %s", self.pids)


class InstanceLauncher:
    """Launches ephemeral engines and connects a client to them.

    Example:
        >>> launcher = InstanceLauncher(ModelMongohatSettings.from_environment())
        >>> instance = await launcher.launch(config, ports=[27777])
        >>> instance.connection_info.url
        'mongodb://127.0.0.1:27777/'
        >>> await instance.stop()
    """

    def __init__(
        self,
        settings: ModelMongohatSettings | None = None,
        *,
        client_factory: ClientFactory = AsyncIOMotorClient,
        spawner: ProcessSpawner = spawn_member,
    ) -> None:
        self._settings = settings or ModelMongohatSettings.from_environment()
        self._client_factory = client_factory
        self._spawner = spawner

    async def launch(
        self,
        config: ModelInstanceConfig,
        ports: Sequence[int],
        correlation_id: UUID | None = None,
    ) -> RunningInstance:
        """Start the engine described by ``config`` on ``ports``.

        Args:
            config: Resolved instance configuration.
            ports: Negotiated ports, one per member.
            correlation_id: Correlation ID of the enclosing start call.

        Returns:
            The running instance with an open client.

        Raises:
            EngineStartTimeoutError: If startup exceeds the launch timeout.
            LaunchError: If the engine cannot be started or reached.
        """
        correlation_id = correlation_id or generate_correlation_id()
        context = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.PROCESS,
            operation="launch",
            target_name=str(config.working_directory),
            correlation_id=correlation_id,
        )

        binary = resolve_engine_binary(self._settings)
        detected_version = await probe_engine_version(binary)
        if config.engine_version is not None:
            self._enforce_version_pin(config.engine_version, detected_version, context)

        spec = build_launch_spec(
            config,
            ports,
            binary=binary,
            host=self._settings.bind_host,
            engine_version=detected_version,
        )
        for member in spec.members:
            try:
                member.db_path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise WorkspaceError(
                    f"Cannot create data directory {member.db_path}: {e}",
                    context=context,
                ) from e

        processes: list[asyncio.subprocess.Process] = []
        opened_clients: list[AsyncIOMotorClient] = []
        launched = False
        try:
            for member in spec.members:
                try:
                    processes.append(await self._spawner(member))
                except OSError as e:
                    raise LaunchError(
                        f"Failed to spawn engine on port {member.port}: {e}",
                        context=context,
                        port=member.port,
                    ) from e
            logger.debug(
                "Spawned %s engine members %s (correlation_id=%s)",
                spec.topology.value,
                [process.pid for process in processes],
                correlation_id,
            )

            try:
                client = await asyncio.wait_for(
                    self._bring_up(spec, processes, opened_clients, context),
                    self._settings.launch_timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                raise EngineStartTimeoutError(
                    f"Engine did not become ready within "
                    f"{self._settings.launch_timeout_seconds}s",
                    context=context,
                    timeout_seconds=self._settings.launch_timeout_seconds,
                    log_tail=_read_log_tail(spec.members[0].log_path),
                ) from e
            except PyMongoError as e:
                raise LaunchError(
                    f"Engine rejected startup command: {e}",
                    context=context,
                ) from e

            launched = True
        finally:
            if not launched:
                for opened in opened_clients:
                    opened.close()
                await asyncio.gather(
                    *(
                        _terminate_process(
                            process, self._settings.process_terminate_timeout_seconds
                        )
                        for process in processes
                    )
                )

        logger.info(
            "Engine ready at %s (correlation_id=%s)",
            spec.connection_url,
            correlation_id,
            extra={
                "topology": spec.topology.value,
                "ports": list(spec.ports),
                "db_name": spec.db_name,
            },
        )
        return RunningInstance(
            spec,
            processes,
            client,
            terminate_timeout_seconds=self._settings.process_terminate_timeout_seconds,
        )

    def _enforce_version_pin(
        self,
        pinned: str,
        detected: str | None,
        context: ModelInfraErrorContext,
    ) -> None:
        if detected is None:
            raise LaunchError(
                f"Cannot determine engine version to check pin {pinned}",
                context=context,
                pinned_version=pinned,
            )
        try:
            satisfied = version_satisfies_pin(detected, pinned)
        except ValueError as e:
            raise LaunchError(
                f"Invalid engine version pin {pinned!r}: {e}",
                context=context,
                pinned_version=pinned,
            ) from e
        if not satisfied:
            raise LaunchError(
                f"Engine version {detected} does not match pinned version {pinned}",
                context=context,
                pinned_version=pinned,
                detected_version=detected,
            )

    def _probe_client(self, host: str, port: int) -> AsyncIOMotorClient:
        return self._client_factory(
            f"mongodb://{host}:{port}/?directConnection=true",
            serverSelectionTimeoutMS=PROBE_SERVER_SELECTION_TIMEOUT_MS,
            connectTimeoutMS=PROBE_SERVER_SELECTION_TIMEOUT_MS,
        )

    async def _bring_up(
        self,
        spec: ModelLaunchSpec,
        processes: Sequence[asyncio.subprocess.Process],
        opened_clients: list[AsyncIOMotorClient],
        context: ModelInfraErrorContext,
    ) -> AsyncIOMotorClient:
        for member, process in zip(spec.members, processes):
            await self._wait_for_member(spec.host, member, process, context)

        if spec.replica_set_name is not None:
            await self._initiate_replica_set(spec, opened_clients)

        client = self._client_factory(
            spec.connection_url,
            serverSelectionTimeoutMS=int(self._settings.launch_timeout_seconds * 1000),
        )
        opened_clients.append(client)
        await client.admin.command("ping")
        return client

    async def _wait_for_member(
        self,
        host: str,
        member: ModelEngineMemberSpec,
        process: asyncio.subprocess.Process,
        context: ModelInfraErrorContext,
    ) -> None:
        probe = self._probe_client(host, member.port)
        try:
            while True:
                if process.returncode is not None:
                    raise LaunchError(
                        f"Engine on port {member.port} exited with code "
                        f"{process.returncode} during startup",
                        context=context,
                        port=member.port,
                        log_tail=_read_log_tail(member.log_path),
                    )
                try:
                    await probe.admin.command("ping")
                    logger.debug("Engine member on port %d answered", member.port)
                    return
                except ConnectionFailure:
                    await asyncio.sleep(self._settings.readiness_poll_interval_seconds)
        finally:
            probe.close()

    async def _initiate_replica_set(
        self,
        spec: ModelLaunchSpec,
        opened_clients: list[AsyncIOMotorClient],
    ) -> None:
        seed = self._probe_client(spec.host, spec.members[0].port)
        opened_clients.append(seed)
        replica_config: dict[str, Any] = {
            "_id": spec.replica_set_name,
            "members": [
                {"_id": index, "host": f"{spec.host}:{member.port}"}
                for index, member in enumerate(spec.members)
            ],
        }
        try:
            await seed.admin.command("replSetInitiate", replica_config)
        except OperationFailure as e:
            if e.code != _ALREADY_INITIALIZED:
                raise
        while True:
            try:
                hello = await seed.admin.command("hello")
            except ConnectionFailure:
                hello = {}
            if hello.get("isWritablePrimary"):
                logger.debug("Replica set %s has a primary", spec.replica_set_name)
                break
            await asyncio.sleep(self._settings.readiness_poll_interval_seconds)
        seed.close()
        opened_clients.remove(seed)


__all__: list[str] = [
    "DURABLE_STORAGE_ENGINE",
    "EPHEMERAL_STORAGE_ENGINE",
    "InstanceLauncher",
    "RunningInstance",
    "build_launch_spec",
    "probe_engine_version",
    "resolve_engine_binary",
    "spawn_member",
]
