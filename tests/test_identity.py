"""Tests for identity helpers."""

from __future__ import annotations

import pytest

from content_unroller.domain.identity import InvalidIdentityError, create_id, extract_uuid, is_valid_uuid

UUID = "639cd952-149f-11e7-2ea7-a07ecd9ac73f"


def test_extract_uuid_from_content_url():
    assert extract_uuid(f"http://www.ft.com/content/{UUID}") == UUID
    assert extract_uuid(f"http://api.ft.com/content/{UUID}/") == UUID
    assert extract_uuid(UUID) == UUID


@pytest.mark.parametrize("value", [None, "", 42, "http://www.ft.com/content/not-a-uuid", f"{UUID}/extra"])
def test_extract_uuid_rejects_invalid_values(value):
    with pytest.raises(InvalidIdentityError):
        extract_uuid(value)


def test_is_valid_uuid():
    assert is_valid_uuid(UUID)
    assert not is_valid_uuid(f"http://www.ft.com/content/{UUID}")
    assert not is_valid_uuid(None)


def test_create_id():
    assert create_id("http://api.ft.com/", "content", UUID) == f"http://api.ft.com/content/{UUID}"
