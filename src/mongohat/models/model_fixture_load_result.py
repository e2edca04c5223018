# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Result of a fixture load."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelFixtureLoadResult(BaseModel):
    """Per-collection inserted document counts of one ``load`` call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    inserted_counts: dict[str, int] = Field(default_factory=dict)

    @property
    def total_inserted(self) -> int:
        return sum(self.inserted_counts.values())


__all__: list[str] = ["ModelFixtureLoadResult"]
