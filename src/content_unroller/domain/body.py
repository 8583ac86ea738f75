"""Discover embedded content references inside ``bodyXML`` markup."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from content_unroller.domain.identity import InvalidIdentityError, extract_uuid

__all__ = [
    "BodyParseError",
    "DYNAMIC_CONTENT_TYPE",
    "IMAGE_SET_TYPE",
    "extract_embedded",
]

IMAGE_SET_TYPE = "http://www.ft.com/ontology/content/ImageSet"
DYNAMIC_CONTENT_TYPE = "http://www.ft.com/ontology/content/DynamicContent"

_EMBED_TAG = "ft-content"


class BodyParseError(ValueError):
    """Raised when the body markup cannot be parsed."""


def extract_embedded(body_xml: str, type_filter: str) -> list[str]:
    """Return identities of embedded ``ft-content`` references matching ``type_filter``.

    References are returned in document order and duplicates are kept. The
    filter is a regular expression searched for anywhere in the ``type``
    attribute (anchor it with ``^`` to match prefixes); only elements flagged
    ``data-embedded="true"`` are considered. The body must be well-formed XML:
    HTML-only entities such as ``&nbsp;`` or unclosed ``<br>`` tags raise
    :class:`BodyParseError`.
    """

    try:
        pattern = re.compile(type_filter)
    except re.error as exc:
        raise BodyParseError(f"Invalid type filter {type_filter!r}: {exc}") from exc

    try:
        root = ET.fromstring(f"<unroll-root>{body_xml}</unroll-root>")
    except ET.ParseError as exc:
        raise BodyParseError(f"Cannot parse body markup: {exc}") from exc

    identities: list[str] = []
    for element in root.iter(_EMBED_TAG):
        if element.get("data-embedded") != "true":
            continue
        content_type = element.get("type") or ""
        if not pattern.search(content_type):
            continue
        try:
            identities.append(extract_uuid(element.get("url")))
        except InvalidIdentityError:
            continue
    return identities
