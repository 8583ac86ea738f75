"""Service validating unroll requests and rendering their results."""

from __future__ import annotations

from typing import Any, Mapping
from uuid import uuid4

from content_unroller.domain.content import ID
from content_unroller.domain.identity import InvalidIdentityError, extract_uuid
from content_unroller.domain.models.unroll import UnrollEvent, UnrollResult
from content_unroller.domain.resolver import ContentResolver


class UnrollRequestError(ValueError):
    """Raised when the submitted document cannot be unrolled."""


class UnrollService:
    """High-level entry point used by the MCP tools."""

    def __init__(self, resolver: ContentResolver) -> None:
        self._resolver = resolver

    async def unroll(self, content: Any, transaction_id: str | None = None) -> dict[str, Any]:
        """Expand images of ``content``; fetch failures are reported with the original document."""

        event = self._build_event(content, transaction_id)
        return self._render(event, await self._resolver.resolve_images(event))

    async def unroll_internal(self, content: Any, transaction_id: str | None = None) -> dict[str, Any]:
        event = self._build_event(content, transaction_id)
        return self._render(event, await self._resolver.resolve_internal(event))

    async def unroll_internal_preview(self, content: Any, transaction_id: str | None = None) -> dict[str, Any]:
        event = self._build_event(content, transaction_id)
        return self._render(event, await self._resolver.resolve_internal_preview(event))

    @staticmethod
    def _build_event(content: Any, transaction_id: str | None) -> UnrollEvent:
        if not isinstance(content, Mapping):
            raise UnrollRequestError("Content must be a JSON object.")
        try:
            identity = extract_uuid(content.get(ID))
        except InvalidIdentityError as exc:
            raise UnrollRequestError(f"Invalid content id: {exc}") from exc
        return UnrollEvent(
            content=dict(content),
            transaction_id=transaction_id or f"tid_{uuid4().hex[:10]}",
            uuid=identity,
        )

    @staticmethod
    def _render(event: UnrollEvent, result: UnrollResult) -> dict[str, Any]:
        if result.error is not None:
            return {
                "status": "error",
                "transaction_id": event.transaction_id,
                "message": str(result.error),
                "content": result.content,
            }
        return {
            "status": "unrolled",
            "transaction_id": event.transaction_id,
            "content": result.content,
        }
