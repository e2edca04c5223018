# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Instance configuration resolution.

Merges caller-supplied ``ModelMongohatOptions`` over defaults derived from the
context name. The working directory is always placed under the injected
settings base directory; it is never derived from where this package is
installed.

Collision Note:
    Two controllers constructed with the same context name resolve to the
    same working directory and will reap each other's engines. Running them
    concurrently is unsupported.
"""

from __future__ import annotations

import re

from mongohat.models import (
    ModelInstanceConfig,
    ModelMongohatOptions,
    ModelMongohatSettings,
    ModelReplicaSetTopology,
    ModelStandaloneTopology,
    TopologyVariant,
)
from mongohat.models.model_replica_set_topology import DEFAULT_REPLICA_SET_NAME

DEFAULT_BASE_PORT = 27777
FALLBACK_CONTEXT_NAME = "Mongohat-test"
WORKING_DIRECTORY_PREFIX = ".mongohat_"

_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def normalize_context_name(context_name: str | None) -> str:
    """Return the trimmed context name, or the fallback label when blank."""
    trimmed = (context_name or "").strip()
    return trimmed or FALLBACK_CONTEXT_NAME


def working_directory_name(context_name: str) -> str:
    """Return the directory name namespaced by ``context_name``.

    Example:
        >>> working_directory_name("user service")
        '.mongohat_user_service'
    """
    return WORKING_DIRECTORY_PREFIX + _UNSAFE_PATH_CHARS.sub("_", context_name)


def _resolve_topology(options: ModelMongohatOptions) -> TopologyVariant:
    if options.use_replica_set:
        return ModelReplicaSetTopology(
            replica_set_name=options.replica_set_name or DEFAULT_REPLICA_SET_NAME,
            member_count=options.replica_member_count or 1,
        )
    return ModelStandaloneTopology(storage_engine=options.storage_engine)


def resolve_instance_config(
    context_name: str | None,
    options: ModelMongohatOptions | None = None,
    settings: ModelMongohatSettings | None = None,
) -> ModelInstanceConfig:
    """Resolve the full instance configuration for a test context.

    Args:
        context_name: Logical test scope owning the instance.
        options: Field-by-field overrides; unset fields keep their defaults.
        settings: Host settings supplying the base directory.

    Returns:
        Immutable configuration for one controller.

    Example:
        >>> config = resolve_instance_config("  orders ")
        >>> config.db_name, config.base_port
        ('orders', 27777)
    """
    options = options or ModelMongohatOptions()
    settings = settings or ModelMongohatSettings.from_environment()

    name = normalize_context_name(context_name)
    working_directory = settings.base_directory / working_directory_name(name)

    return ModelInstanceConfig(
        context_name=name,
        db_name=options.db_name if options.db_name is not None else name,
        working_directory=(
            options.db_path if options.db_path is not None else working_directory
        ),
        base_port=options.db_port if options.db_port is not None else DEFAULT_BASE_PORT,
        topology=_resolve_topology(options),
        engine_version=options.version,
    )


__all__: list[str] = [
    "DEFAULT_BASE_PORT",
    "FALLBACK_CONTEXT_NAME",
    "normalize_context_name",
    "resolve_instance_config",
    "working_directory_name",
]
