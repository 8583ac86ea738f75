"""Pydantic models describing unroll requests and their outcome."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UnrollEvent(BaseModel):
    """A document to unroll together with its correlation identifiers."""

    content: dict[str, Any]
    transaction_id: str
    uuid: str = ""


class UnrollResult(BaseModel):
    """Outcome of unrolling a document.

    ``content`` is always set; when ``error`` is present it holds the original,
    unmodified document.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: dict[str, Any] = Field(default_factory=dict)
    error: Exception | None = None
