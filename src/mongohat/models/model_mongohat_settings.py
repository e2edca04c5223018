# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Host environment settings for mongohat.

Settings describe the machine rather than the test context: where working
directories live, which engine binary to run, and how long to wait for it.
They are read once from ``MONGOHAT_*`` environment variables.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from mongohat.utils.util_env_parsing import parse_env_float, parse_env_int

DEFAULT_BIND_HOST = "127.0.0.1"
DEFAULT_LAUNCH_TIMEOUT_SECONDS = 10.0
DEFAULT_STOP_GRACE_PERIOD_SECONDS = 0.1
DEFAULT_PORT_SCAN_SPAN = 1000


class ModelMongohatSettings(BaseModel):
    """Host-level tuning for launching and tearing down engines.

    Attributes:
        base_directory: Directory under which per-context working
            directories are created
        mongod_binary: Explicit engine binary path (None: look up ``mongod`` on PATH)
        bind_host: Interface engines bind to and ports are probed on
        launch_timeout_seconds: Upper bound for engine startup and client connect
        stop_grace_period_seconds: Wait after stop for socket/file release
        port_scan_span: Number of ports scanned upward from the base port
        process_terminate_timeout_seconds: Wait after SIGTERM before SIGKILL
        readiness_poll_interval_seconds: Delay between readiness probes
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_directory: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Parent directory of per-context working directories",
    )
    mongod_binary: str | None = Field(
        default=None, description="Explicit mongod binary path"
    )
    bind_host: str = Field(default=DEFAULT_BIND_HOST, description="Bind interface")
    launch_timeout_seconds: float = Field(
        default=DEFAULT_LAUNCH_TIMEOUT_SECONDS,
        gt=0.0,
        le=600.0,
        description="Engine startup timeout in seconds",
    )
    stop_grace_period_seconds: float = Field(
        default=DEFAULT_STOP_GRACE_PERIOD_SECONDS,
        ge=0.0,
        le=60.0,
        description="Wait after stop for OS resource release",
    )
    port_scan_span: int = Field(
        default=DEFAULT_PORT_SCAN_SPAN,
        ge=1,
        le=65535,
        description="Ports scanned upward from the base port",
    )
    process_terminate_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        le=120.0,
        description="Wait after SIGTERM before SIGKILL",
    )
    readiness_poll_interval_seconds: float = Field(
        default=0.1,
        gt=0.0,
        le=10.0,
        description="Delay between readiness probes",
    )

    @classmethod
    def from_environment(cls) -> ModelMongohatSettings:
        """Create settings from ``MONGOHAT_*`` environment variables."""
        base_directory = os.getenv("MONGOHAT_BASE_DIR")
        return cls(
            base_directory=(
                Path(base_directory)
                if base_directory
                else Path(tempfile.gettempdir())
            ),
            mongod_binary=os.getenv("MONGOHAT_MONGOD_BINARY") or None,
            bind_host=os.getenv("MONGOHAT_BIND_HOST", DEFAULT_BIND_HOST),
            launch_timeout_seconds=parse_env_float(
                "MONGOHAT_LAUNCH_TIMEOUT",
                DEFAULT_LAUNCH_TIMEOUT_SECONDS,
                min_value=0.1,
                max_value=600.0,
            ),
            stop_grace_period_seconds=parse_env_float(
                "MONGOHAT_STOP_GRACE_PERIOD",
                DEFAULT_STOP_GRACE_PERIOD_SECONDS,
                min_value=0.0,
                max_value=60.0,
            ),
            port_scan_span=parse_env_int(
                "MONGOHAT_PORT_SCAN_SPAN",
                DEFAULT_PORT_SCAN_SPAN,
                min_value=1,
                max_value=65535,
            ),
        )


__all__: list[str] = ["ModelMongohatSettings"]
