# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol for host process table access.

Scanning and killing host processes is a host-wide side effect, so the reaper
reaches the process table only through this capability. Tests substitute an
in-memory registry; production uses ``PsutilProcessRegistry``.

Example:
    >>> class ProcessReaper:
    ...     def __init__(self, registry: ProtocolProcessRegistry):
    ...         self._registry = registry
    ...
    ...     async def cleanup(self, directory: Path) -> list[ModelProcessHandle]:
    ...         matcher = ModelProcessMatcher(executable_name="mongod", directory=directory)
    ...         handles = await self._registry.find(matcher)
    ...         for handle in handles:
    ...             await self._registry.terminate(handle)
    ...         return handles
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mongohat.models.model_process_handle import ModelProcessHandle
    from mongohat.models.model_process_matcher import ModelProcessMatcher


@runtime_checkable
class ProtocolProcessRegistry(Protocol):
    """Find and terminate host processes.

    Methods:
        find: Return every process accepted by the matcher
        terminate: Stop one process, escalating to a forced kill
    """

    async def find(self, matcher: ModelProcessMatcher) -> list[ModelProcessHandle]:
        """Enumerate host processes accepted by ``matcher``.

        Processes that exit or deny inspection while being enumerated are
        skipped. Zero matches is an empty list, not an error.

        Raises:
            ProcessReapError: If the enumeration mechanism itself fails.
        """
        ...

    async def terminate(self, handle: ModelProcessHandle) -> None:
        """Terminate one process. A process that is already gone is success.

        Raises:
            ProcessReapError: If the process cannot be terminated.
        """
        ...


__all__: list[str] = ["ProtocolProcessRegistry"]
