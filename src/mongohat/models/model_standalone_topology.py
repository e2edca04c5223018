# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Standalone topology variant."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mongohat.enums import EnumTopologyKind


class ModelStandaloneTopology(BaseModel):
    """A single engine process with scratch storage.

    Attributes:
        kind: Discriminator, always STANDALONE
        storage_engine: Storage engine; None selects the in-memory test
            engine where the installed engine still ships it
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal[EnumTopologyKind.STANDALONE] = EnumTopologyKind.STANDALONE
    storage_engine: str | None = Field(default=None)

    @property
    def member_count(self) -> int:
        return 1


__all__: list[str] = ["ModelStandaloneTopology"]
