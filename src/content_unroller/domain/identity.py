"""Helpers for reading and building content identities."""

from __future__ import annotations

import re
import uuid
from typing import Any

__all__ = [
    "InvalidIdentityError",
    "create_id",
    "extract_uuid",
    "is_valid_uuid",
]

_UUID_SUFFIX_RE = re.compile(
    r"([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})/?$"
)


class InvalidIdentityError(ValueError):
    """Raised when an ``id`` value does not end with a valid UUID."""


def is_valid_uuid(value: Any) -> bool:
    """Return True when ``value`` is a canonical UUID string."""

    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return _UUID_SUFFIX_RE.fullmatch(value) is not None


def extract_uuid(value: Any) -> str:
    """Return the UUID found at the end of an ``id`` URL."""

    if not isinstance(value, str) or not value:
        raise InvalidIdentityError(f"No identity found in {value!r}.")
    match = _UUID_SUFFIX_RE.search(value.strip())
    if match is None:
        raise InvalidIdentityError(f"Cannot extract UUID from {value!r}.")
    candidate = match.group(1)
    try:
        uuid.UUID(candidate)
    except ValueError as exc:  # pragma: no cover - regex already constrains shape
        raise InvalidIdentityError(f"Invalid UUID {candidate!r}.") from exc
    return candidate


def create_id(api_host: str, path: str, identity: str) -> str:
    """Build a public content URL such as ``http://api.ft.com/content/<uuid>``."""

    return f"{api_host.rstrip('/')}/{path.strip('/')}/{identity}"
