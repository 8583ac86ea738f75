"""Resolve the members of set-like content against an already fetched batch."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from content_unroller.domain.content import ID, MEMBERS, Content, clone, get_list, merge
from content_unroller.domain.identity import InvalidIdentityError, create_id, extract_uuid

logger = logging.getLogger(__name__)


class SetMemberResolver:
    """Expand ``members`` stubs of image sets with their fetched models."""

    def __init__(self, api_host: str) -> None:
        self._api_host = api_host

    def resolve_members(
        self,
        set_content: Mapping[str, Any],
        fetched: Mapping[str, Content],
        log: logging.LoggerAdapter | logging.Logger = logger,
    ) -> list[Content]:
        """Return a new member list with fetched fields merged onto each stub.

        Fetched values win on key collision and stub-only keys survive. Stubs
        missing from ``fetched`` are kept bare; members without a usable
        identity are dropped.
        """

        resolved: list[Content] = []
        for member in get_list(set_content, MEMBERS) or []:
            if not isinstance(member, Mapping):
                log.info("Skipping set member with unexpected shape: %r", member)
                continue
            stub = clone(member)
            try:
                identity = extract_uuid(stub.get(ID))
            except InvalidIdentityError as exc:
                log.info("Error while extracting UUID from set member: %s", exc)
                continue
            model = fetched.get(identity)
            if model is None:
                resolved.append(stub)
                continue
            resolved.append(merge(stub, model))
        return resolved

    def resolve_set(
        self,
        identity: str,
        fetched: Mapping[str, Content],
        log: logging.LoggerAdapter | logging.Logger = logger,
    ) -> Content:
        """Return the fetched set with resolved members, or a minimal stub if it was not fetched."""

        found = fetched.get(identity)
        if found is None:
            log.info("Missing content model %s. Returning only the id.", identity)
            return {ID: create_id(self._api_host, "content", identity)}
        if get_list(found, MEMBERS) is None:
            return found
        resolved = clone(found)
        resolved[MEMBERS] = self.resolve_members(found, fetched, log)
        return resolved
