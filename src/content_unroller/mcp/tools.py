"""FastMCP tool registrations for the content unroller."""

from __future__ import annotations

from typing import Any

from content_unroller.domain.unroll_service import UnrollRequestError, UnrollService
from content_unroller.mcp import mcp
from content_unroller.mcp.resources import get_content_resolver

_unroll_service: UnrollService | None = None


def _get_unroll_service() -> UnrollService:
    global _unroll_service
    if _unroll_service is None:
        _unroll_service = UnrollService(get_content_resolver())
    return _unroll_service


@mcp.tool(
    name="unroll_content",
    description="Expand main image, embedded image sets/dynamic content and promotional image of a document.",
)
async def unroll_content(
    content: dict[str, Any],
    transaction_id: str | None = None,
) -> dict[str, Any]:
    """Return the document with its image references resolved."""

    try:
        return await _get_unroll_service().unroll(content, transaction_id)
    except UnrollRequestError as exc:
        return {"status": "error", "message": str(exc)}


@mcp.tool(
    name="unroll_internal_content",
    description="Expand lead images and embedded dynamic content of a document.",
)
async def unroll_internal_content(
    content: dict[str, Any],
    transaction_id: str | None = None,
) -> dict[str, Any]:
    """Return the document with lead images and dynamic content resolved."""

    try:
        return await _get_unroll_service().unroll_internal(content, transaction_id)
    except UnrollRequestError as exc:
        return {"status": "error", "message": str(exc)}


@mcp.tool(
    name="unroll_internal_content_preview",
    description="Expand lead images from the native source and embedded dynamic content of a document.",
)
async def unroll_internal_content_preview(
    content: dict[str, Any],
    transaction_id: str | None = None,
) -> dict[str, Any]:
    try:
        return await _get_unroll_service().unroll_internal_preview(content, transaction_id)
    except UnrollRequestError as exc:
        return {"status": "error", "message": str(exc)}
