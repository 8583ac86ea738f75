"""Per-call accumulator of identities grouped by resolution slot."""

from __future__ import annotations

from enum import Enum


class Slot(str, Enum):
    """Named resolution targets inside a document."""

    MAIN_IMAGE = "mainImage"
    PROMOTIONAL_IMAGE = "promotionalImage"
    LEAD_IMAGES = "leadImages"
    EMBEDS = "embeds"

    @property
    def multi_valued(self) -> bool:
        return self in (Slot.LEAD_IMAGES, Slot.EMBEDS)


class ContentSchema:
    """Identities requested for each slot of a single unroll call.

    Single-valued slots keep the first identity put into them; any later
    ``put`` for the same slot is ignored. Calls made with a slot of the wrong
    cardinality are no-ops returning the empty value.
    """

    def __init__(self) -> None:
        self._single: dict[Slot, str] = {}
        self._multi: dict[Slot, list[str]] = {}

    def put(self, slot: Slot, identity: str) -> None:
        if slot.multi_valued:
            return
        self._single.setdefault(slot, identity)

    def get(self, slot: Slot) -> str:
        if slot.multi_valued:
            return ""
        return self._single.get(slot, "")

    def put_all(self, slot: Slot, identities: list[str]) -> None:
        if not slot.multi_valued:
            return
        self._multi.setdefault(slot, []).extend(identities)

    def get_all(self, slot: Slot) -> list[str]:
        if not slot.multi_valued:
            return []
        return list(self._multi.get(slot, []))

    def to_list(self) -> list[str]:
        """Flatten every slot into one de-duplicated fetch request."""

        combined: list[str] = list(self._single.values())
        for identities in self._multi.values():
            combined.extend(identities)
        return list(dict.fromkeys(combined))

    def __bool__(self) -> bool:
        return bool(self._single) or any(self._multi.values())
