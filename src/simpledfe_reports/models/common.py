from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model that rejects unknown fields to keep schema strict."""

    model_config = ConfigDict(extra="forbid")


class FrozenModel(BaseModel):
    """Immutable base model for layout configuration and drawing instructions."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class SourceModel(BaseModel):
    """Immutable base for report source data.

    Source payloads come straight from the aggregation query, so keys the
    report does not use (e.g. `totalNfses`) are ignored instead of rejected.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ErrorInfo(StrictModel):
    """Normalized error payload for failed report generations."""

    code: str
    message: str
    details: dict[str, Any] | None = None
