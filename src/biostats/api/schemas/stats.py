"""Stats DTOs — pure Pydantic, mirrors the backend JSON."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from biostats.domain.stats import parse_timestamp


class StatsSnapshot(BaseModel):
    """Per-category count maps. Extra categories from the backend are kept."""

    model_config = ConfigDict(extra="allow")

    docker: dict[str, Any] = Field(default_factory=dict)
    conda: dict[str, Any] = Field(default_factory=dict)
    bioconductor: dict[str, Any] = Field(default_factory=dict)


class StatsFileResponse(BaseModel):
    """Body of ``GET /fetch-stats-from-file``."""

    stats: StatsSnapshot = Field(default_factory=StatsSnapshot)
    last_update: datetime | None = None

    @field_validator("last_update", mode="before")
    @classmethod
    def _lenient_last_update(cls, value: Any) -> datetime | None:
        # A blank or unparsable timestamp must not discard the stats with it.
        return parse_timestamp(value)
