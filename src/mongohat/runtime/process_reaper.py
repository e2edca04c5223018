# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Stale Engine Process Reaper.

Engines left behind by a crashed or improperly stopped run keep holding the
working directory lock and their port. Before every start, and again after
every stop, the reaper finds ``mongod`` processes whose arguments reference
the context's working directory and terminates them.

Blast Radius:
    The directory filter in ``ModelProcessMatcher`` is the only selector.
    Engines serving other directories, including other mongohat contexts,
    are never touched.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import psutil

from mongohat.enums import EnumInfraTransportType
from mongohat.errors import ModelInfraErrorContext, ProcessReapError
from mongohat.models import (
    ModelMongohatSettings,
    ModelProcessHandle,
    ModelProcessMatcher,
)
from mongohat.protocols import ProtocolProcessRegistry

logger = logging.getLogger(__name__)

ENGINE_EXECUTABLE_NAME = "mongod"


class PsutilProcessRegistry:
    """``ProtocolProcessRegistry`` backed by the host process table via psutil."""

    def __init__(self, terminate_timeout_seconds: float = 5.0) -> None:
        self._terminate_timeout_seconds = terminate_timeout_seconds

    async def find(self, matcher: ModelProcessMatcher) -> list[ModelProcessHandle]:
        return await asyncio.to_thread(self._find_sync, matcher)

    async def terminate(self, handle: ModelProcessHandle) -> None:
        await asyncio.to_thread(self._terminate_sync, handle)

    def _find_sync(self, matcher: ModelProcessMatcher) -> list[ModelProcessHandle]:
        handles: list[ModelProcessHandle] = []
        try:
            for proc in psutil.process_iter(["pid", "name", "cmdline"]):
                try:
                    name = proc.info.get("name")
                    cmdline = proc.info.get("cmdline") or []
                    if matcher.matches(name, cmdline):
                        handles.append(
                            ModelProcessHandle(
                                pid=proc.info["pid"],
                                name=name or "",
                                cmdline=tuple(cmdline),
                            )
                        )
                except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                    continue
        except psutil.Error as e:
            raise ProcessReapError(
                f"Failed to enumerate host processes: {e}",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.PROCESS,
                    operation="find",
                    target_name=str(matcher.directory),
                ),
            ) from e
        return handles

    def _terminate_sync(self, handle: ModelProcessHandle) -> None:
        context = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.PROCESS,
            operation="terminate",
            target_name=str(handle.pid),
        )
        try:
            process = psutil.Process(handle.pid)
            process.terminate()
            try:
                process.wait(timeout=self._terminate_timeout_seconds)
            except psutil.TimeoutExpired:
                logger.warning(
                    "PID %d did not stop in %.1fs; force killing",
                    handle.pid,
                    self._terminate_timeout_seconds,
                )
                process.kill()
                process.wait(timeout=self._terminate_timeout_seconds)
        except psutil.NoSuchProcess:
            return
        except psutil.AccessDenied as e:
            raise ProcessReapError(
                f"Permission denied terminating PID {handle.pid}",
                context=context,
                pid=handle.pid,
            ) from e
        except psutil.Error as e:
            raise ProcessReapError(
                f"Failed to terminate PID {handle.pid}: {e}",
                context=context,
                pid=handle.pid,
            ) from e


class ProcessReaper:
    """Terminates stale engine processes bound to a working directory.

    Example:
        >>> reaper = ProcessReaper()
        >>> reaped = await reaper.cleanup(Path("/tmp/.mongohat_orders"))
        >>> [handle.pid for handle in reaped]
        []
    """

    def __init__(
        self,
        registry: ProtocolProcessRegistry | None = None,
        executable_name: str = ENGINE_EXECUTABLE_NAME,
    ) -> None:
        self._registry: ProtocolProcessRegistry = (
            registry or PsutilProcessRegistry()
        )
        self._executable_name = executable_name

    @classmethod
    def from_settings(cls, settings: ModelMongohatSettings) -> ProcessReaper:
        return cls(
            registry=PsutilProcessRegistry(
                terminate_timeout_seconds=settings.process_terminate_timeout_seconds
            )
        )

    async def cleanup(self, working_directory: Path) -> list[ModelProcessHandle]:
        """Terminate every engine process referencing ``working_directory``.

        Args:
            working_directory: Directory owned by the context being started
                or stopped.

        Returns:
            Handles of the processes that were terminated (possibly empty).

        Raises:
            ProcessReapError: If enumeration or termination fails.
        """
        matcher = ModelProcessMatcher(
            executable_name=self._executable_name,
            directory=working_directory,
        )
        handles = await self._registry.find(matcher)
        if not handles:
            logger.debug(
                "No stale %s processes for %s",
                self._executable_name,
                working_directory,
            )
            return []

        for handle in handles:
            logger.info(
                "Killing stale engine PID %d (command=%s, arguments=%s)",
                handle.pid,
                handle.name,
                " ".join(handle.arguments),
            )
            await self._registry.terminate(handle)
        return handles


__all__: list[str] = [
    "ENGINE_EXECUTABLE_NAME",
    "ProcessReaper",
    "PsutilProcessRegistry",
]
