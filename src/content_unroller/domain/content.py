"""Content document type and checked accessors for its JSON-shaped fields."""

from __future__ import annotations

from typing import Any, Mapping

Content = dict[str, Any]

ID = "id"
UUID = "uuid"
MAIN_IMAGE = "mainImage"
EMBEDS = "embeds"
ALT_IMAGES = "alternativeImages"
PROMOTIONAL_IMAGE = "promotionalImage"
LEAD_IMAGES = "leadImages"
MEMBERS = "members"
BODY_XML = "bodyXML"
IMAGE = "image"


def clone(content: Mapping[str, Any]) -> Content:
    """Shallow copy of a document; nested values are shared, never mutated."""

    return dict(content)


def merge(target: Content, source: Mapping[str, Any]) -> Content:
    """Copy ``source`` fields onto ``target``; source values win on collision."""

    target.update(source)
    return target


def get_mapping(content: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = content.get(key)
    return value if isinstance(value, Mapping) else None


def get_list(content: Mapping[str, Any], key: str) -> list[Any] | None:
    value = content.get(key)
    return value if isinstance(value, list) else None


def get_str(content: Mapping[str, Any], key: str) -> str | None:
    value = content.get(key)
    return value if isinstance(value, str) else None
