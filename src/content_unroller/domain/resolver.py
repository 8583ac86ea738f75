"""Unroll images and internal components of content documents."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping

from content_unroller.domain.body import DYNAMIC_CONTENT_TYPE, BodyParseError, extract_embedded
from content_unroller.domain.content import (
    ALT_IMAGES,
    BODY_XML,
    EMBEDS,
    ID,
    IMAGE,
    LEAD_IMAGES,
    MAIN_IMAGE,
    PROMOTIONAL_IMAGE,
    Content,
    clone,
    get_list,
    get_mapping,
    get_str,
)
from content_unroller.domain.content_reader import ContentFetcher, ContentReaderError
from content_unroller.domain.event_logger import EventLogger
from content_unroller.domain.identity import InvalidIdentityError, extract_uuid
from content_unroller.domain.members import SetMemberResolver
from content_unroller.domain.models.unroll import UnrollEvent, UnrollResult
from content_unroller.domain.schema import ContentSchema, Slot

__all__ = ["ContentResolver", "UnrollError"]

logger = logging.getLogger(__name__)

BatchFetch = Callable[[list[str], str], Awaitable[dict[str, Content]]]


class UnrollError(RuntimeError):
    """Raised (and returned in results) when expanded content cannot be fetched."""


class ContentResolver:
    """Replace reference stubs inside a document with the content they point to."""

    def __init__(self, fetcher: ContentFetcher, whitelist: str, api_host: str) -> None:
        self._fetcher = fetcher
        self._whitelist = whitelist
        self._api_host = api_host
        self._members = SetMemberResolver(api_host)

    async def resolve_images(self, event: UnrollEvent) -> UnrollResult:
        """Expand main image, embedded content and promotional image.

        A failed fetch returns the original document together with the error;
        nothing is partially applied.
        """

        log = EventLogger(logger, event.transaction_id, event.uuid)
        cc = clone(event.content)
        schema = ContentSchema()

        found_main = self._put_identity(schema, Slot.MAIN_IMAGE, get_mapping(cc, MAIN_IMAGE), "main image", log)

        embedded = self._extract_embedded(cc, self._whitelist, log)
        if embedded:
            schema.put_all(Slot.EMBEDS, embedded)

        alt_images = get_mapping(cc, ALT_IMAGES)
        found_promo = False
        if alt_images is not None:
            found_promo = self._put_identity(
                schema,
                Slot.PROMOTIONAL_IMAGE,
                get_mapping(alt_images, PROMOTIONAL_IMAGE),
                "promotional image",
                log,
            )

        if not schema:
            log.info("No main image or body images or promotional image to expand")
            return UnrollResult(content=event.content)

        try:
            content_map = await self._fetcher.fetch_batch(schema.to_list(), event.transaction_id)
        except ContentReaderError as exc:
            error = _wrap_fetch_error(exc, f"Error while getting expanded images for uuid:{event.uuid}")
            log.error("%s", error)
            return UnrollResult(content=event.content, error=error)

        if found_main:
            cc[MAIN_IMAGE] = self._members.resolve_set(schema.get(Slot.MAIN_IMAGE), content_map, log)

        if embedded:
            cc[EMBEDS] = [
                self._members.resolve_set(identity, content_map, log)
                for identity in schema.get_all(Slot.EMBEDS)
            ]

        if found_promo and alt_images is not None:
            promo = content_map.get(schema.get(Slot.PROMOTIONAL_IMAGE))
            if promo is not None:
                expanded_alt = clone(alt_images)
                expanded_alt[PROMOTIONAL_IMAGE] = promo
                cc[ALT_IMAGES] = expanded_alt

        return UnrollResult(content=cc)

    async def resolve_internal(self, event: UnrollEvent) -> UnrollResult:
        """Expand lead images and embedded dynamic content; failures are only logged."""

        return await self._resolve_internal(event, self._fetcher.fetch_batch)

    async def resolve_internal_preview(self, event: UnrollEvent) -> UnrollResult:
        """Like :meth:`resolve_internal`, with lead images read from the native source."""

        return await self._resolve_internal(event, self._fetcher.fetch_native)

    async def _resolve_internal(self, event: UnrollEvent, fetch_lead_images: BatchFetch) -> UnrollResult:
        log = EventLogger(logger, event.transaction_id, event.uuid)
        cc = clone(event.content)

        lead_images = await self._unroll_lead_images(cc, fetch_lead_images, log)
        if lead_images is not None:
            cc[LEAD_IMAGES] = lead_images

        embedded = await self._unroll_dynamic_content(cc, log)
        if embedded is not None:
            cc[EMBEDS] = embedded

        return UnrollResult(content=cc)

    async def _unroll_lead_images(
        self,
        cc: Content,
        fetch: BatchFetch,
        log: EventLogger,
    ) -> list[Any] | None:
        images = get_list(cc, LEAD_IMAGES)
        if not images:
            log.info("No lead images to expand for supplied content")
            return None

        schema = ContentSchema()
        stub_ids: list[str | None] = []
        for item in images:
            identity = None
            if isinstance(item, Mapping):
                try:
                    identity = extract_uuid(item.get(ID))
                except InvalidIdentityError as exc:
                    log.info("Error while getting UUID for lead image: %s", exc)
            else:
                log.info("Skipping lead image with unexpected shape: %r", item)
            stub_ids.append(identity)
            if identity is not None:
                schema.put_all(Slot.LEAD_IMAGES, [identity])

        if not schema:
            return None

        try:
            image_map = await fetch(schema.to_list(), log.transaction_id)
        except ContentReaderError as exc:
            log.error("Error while getting content for expanded lead images: %s", exc)
            return None

        expanded: list[Any] = []
        for item, identity in zip(images, stub_ids):
            if identity is None:
                expanded.append(item)
                continue
            stub = clone(item)
            image_data = image_map.get(identity)
            if image_data is None:
                log.info("Missing image model %s. Returning only the id.", identity)
            else:
                stub[IMAGE] = image_data
            expanded.append(stub)
        return expanded

    async def _unroll_dynamic_content(self, cc: Content, log: EventLogger) -> list[Content] | None:
        identities = self._extract_embedded(cc, f"^{DYNAMIC_CONTENT_TYPE}", log)
        if not identities:
            return None

        try:
            content_map = await self._fetcher.fetch_internal_batch(identities, log.transaction_id)
        except ContentReaderError as exc:
            log.error("Error while getting embedded dynamic content: %s", exc)
            return None

        return [content_map[identity] for identity in identities if identity in content_map]

    @staticmethod
    def _put_identity(
        schema: ContentSchema,
        slot: Slot,
        stub: Mapping[str, Any] | None,
        label: str,
        log: EventLogger,
    ) -> bool:
        if stub is None:
            log.info("Cannot find %s. Skipping expanding %s", label, label)
            return False
        try:
            identity = extract_uuid(stub.get(ID))
        except InvalidIdentityError as exc:
            log.info("Cannot find %s: %s. Skipping expanding %s", label, exc, label)
            return False
        schema.put(slot, identity)
        return True

    @staticmethod
    def _extract_embedded(cc: Content, type_filter: str, log: EventLogger) -> list[str]:
        body = get_str(cc, BODY_XML)
        if body is None:
            log.info("Missing body. Skipping expanding embedded content and images.")
            return []
        try:
            return extract_embedded(body, type_filter)
        except BodyParseError as exc:
            log.error("Cannot parse body: %s", exc)
            return []


def _wrap_fetch_error(exc: ContentReaderError, message: str) -> UnrollError:
    try:
        raise UnrollError(f"{message}: {exc}") from exc
    except UnrollError as error:
        return error
