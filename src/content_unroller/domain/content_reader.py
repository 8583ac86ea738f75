"""HTTP reader for the content backends used while unrolling."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

import httpx
from pydantic import BaseModel

from content_unroller.domain.content import ID, MEMBERS, UUID, Content, get_list
from content_unroller.domain.identity import InvalidIdentityError, extract_uuid, is_valid_uuid

__all__ = [
    "ContentFetcher",
    "ContentReader",
    "ContentReaderError",
    "DecodingError",
    "ReaderConfig",
    "UpstreamUnavailableError",
]

logger = logging.getLogger(__name__)

TRANSACTION_ID_HEADER = "X-Request-Id"
USER_AGENT = "UPP_content-unroller"


class ContentReaderError(Exception):
    """Raised when a content backend call fails."""


class UpstreamUnavailableError(ContentReaderError):
    """The backend was unreachable or answered with a non-success status."""


class DecodingError(ContentReaderError):
    """The backend response could not be decoded into content."""


class ContentFetcher(Protocol):
    """Fetch capabilities the resolver relies on."""

    async def fetch_batch(self, identities: list[str], transaction_id: str) -> dict[str, Content]: ...

    async def fetch_internal_batch(self, identities: list[str], transaction_id: str) -> dict[str, Content]: ...

    async def fetch_one(self, identity: str, transaction_id: str) -> Content: ...

    async def fetch_native(self, identities: list[str], transaction_id: str) -> dict[str, Content]: ...


class ReaderConfig(BaseModel):
    """Names and URLs of the backends read by :class:`ContentReader`."""

    content_source_app_name: str = "content-public-read"
    content_source_url: str = "http://localhost:8080/content"
    internal_content_source_app_name: str = "document-store-api"
    internal_content_source_url: str = "http://localhost:8080/internalcomponents"
    native_content_source_app_name: str = "methode-api"
    native_content_source_url: str = "http://localhost:8080/eom-file/"
    native_content_source_auth: str | None = None
    transform_content_source_app_name: str = "methode-article-image-set-mapper"
    transform_content_source_url: str = "http://localhost:8080/map"


class ContentReader:
    """Async client for the published, internal, native and transform backends."""

    def __init__(
        self,
        config: ReaderConfig,
        timeout: float = 10.0,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._timeout = timeout
        self._client = client

    async def fetch_batch(self, identities: list[str], transaction_id: str) -> dict[str, Content]:
        """Fetch published content, following up with the members of any sets returned."""

        config = self._config
        batch = await self._get_batch(
            identities,
            transaction_id,
            config.content_source_url,
            config.content_source_app_name,
        )
        content_map: dict[str, Content] = {}
        member_ids: list[str] = []
        for item in batch:
            self._add_item(item, content_map)
            if MEMBERS in item:
                member_ids.extend(_member_uuids(item))

        if not member_ids:
            return content_map

        members = await self._get_batch(
            member_ids,
            transaction_id,
            config.content_source_url,
            config.content_source_app_name,
        )
        for item in members:
            self._add_item(item, content_map)
        return content_map

    async def fetch_internal_batch(self, identities: list[str], transaction_id: str) -> dict[str, Content]:
        """Fetch internal components keyed by their ``uuid`` field."""

        config = self._config
        batch = await self._get_batch(
            identities,
            transaction_id,
            config.internal_content_source_url,
            config.internal_content_source_app_name,
        )
        content_map: dict[str, Content] = {}
        for item in batch:
            identity = item.get(UUID)
            if not isinstance(identity, str):
                logger.warning("Cannot extract uuid for internal content: %r", item)
                continue
            content_map[identity] = item
        return content_map

    async def fetch_one(self, identity: str, transaction_id: str) -> Content:
        """Fetch native content for one identity and run it through the transformer."""

        config = self._config
        headers = {
            TRANSACTION_ID_HEADER: transaction_id,
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
        }
        if config.native_content_source_auth:
            headers["Authorization"] = f"Basic {config.native_content_source_auth}"

        native = await self._send_request(
            "GET",
            f"{config.native_content_source_url}{identity}",
            config.native_content_source_app_name,
            headers=headers,
        )
        transformed = await self._send_request(
            "POST",
            config.transform_content_source_url,
            config.transform_content_source_app_name,
            headers={
                TRANSACTION_ID_HEADER: transaction_id,
                "User-Agent": USER_AGENT,
                "Content-Type": "application/json",
            },
            content=native.content,
        )
        payload = _decode_json(transformed, config.transform_content_source_app_name)
        if not isinstance(payload, dict):
            raise DecodingError(
                f"Unexpected payload from {config.transform_content_source_app_name} for uuid: {identity}"
            )
        return payload

    async def fetch_native(self, identities: list[str], transaction_id: str) -> dict[str, Content]:
        """Fetch and transform native content one item at a time; the first failure aborts."""

        content_map: dict[str, Content] = {}
        for identity in identities:
            content_map[identity] = await self.fetch_one(identity, transaction_id)
        return content_map

    async def _get_batch(
        self,
        identities: Iterable[str],
        transaction_id: str,
        url: str,
        app_name: str,
    ) -> list[Content]:
        params = [("uuid", identity) for identity in identities if is_valid_uuid(identity)]
        response = await self._send_request(
            "GET",
            url,
            app_name,
            params=params,
            headers={TRANSACTION_ID_HEADER: transaction_id, "User-Agent": USER_AGENT},
        )
        payload = _decode_json(response, app_name)
        if not isinstance(payload, list):
            raise DecodingError(f"Unexpected payload from {app_name}: expected a list of content.")
        batch = [item for item in payload if isinstance(item, dict)]
        logger.debug("Batch fetched", extra={"app": app_name, "requested": len(params), "received": len(batch)})
        return batch

    async def _send_request(
        self,
        method: str,
        url: str,
        app_name: str,
        *,
        params: Any | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """Send an HTTP request and return the response with shared error handling."""

        client = self._client
        try:
            if client is not None:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    headers=headers,
                    content=content,
                    timeout=self._timeout,
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as session:
                    response = await session.request(
                        method,
                        url,
                        params=params,
                        headers=headers,
                        content=content,
                    )
        except httpx.RequestError as exc:
            raise UpstreamUnavailableError(f"Request to {app_name} failed: {exc!s}") from exc

        if response.status_code != httpx.codes.OK:
            raise UpstreamUnavailableError(
                f"Request to {app_name} failed with status code {response.status_code}"
            )
        return response

    @staticmethod
    def _add_item(item: Content, content_map: dict[str, Content]) -> None:
        try:
            identity = extract_uuid(item.get(ID))
        except InvalidIdentityError:
            return
        content_map[identity] = item


def _member_uuids(item: Content) -> list[str]:
    identities: list[str] = []
    for member in get_list(item, MEMBERS) or []:
        if not isinstance(member, dict):
            continue
        try:
            identities.append(extract_uuid(member.get(ID)))
        except InvalidIdentityError:
            continue
    return identities


def _decode_json(response: httpx.Response, app_name: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise DecodingError(f"Error unmarshalling response from {app_name}") from exc
