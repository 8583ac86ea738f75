"""Tests for SetMemberResolver."""

from __future__ import annotations

import copy

from content_unroller.domain.members import SetMemberResolver

API_HOST = "http://api.ft.com"
SET_ID = "639cd952-149f-11e7-2ea7-a07ecd9ac73f"
MEMBER_1 = "71231d3a-13c7-11e7-2ea7-a07ecd9ac73f"
MEMBER_2 = "0261ea4a-1474-11e7-1e92-847abda1ac65"


def content_url(identity: str) -> str:
    return f"{API_HOST}/content/{identity}"


def test_member_fields_are_merged_with_fetched_values_winning():
    resolver = SetMemberResolver(API_HOST)
    image_set = {"id": content_url(SET_ID), "members": [{"id": content_url(MEMBER_1), "caption": "c"}]}
    fetched = {MEMBER_1: {"title": "T"}}

    members = resolver.resolve_members(image_set, fetched)

    assert members == [{"id": content_url(MEMBER_1), "caption": "c", "title": "T"}]


def test_fetched_values_override_stub_on_collision():
    resolver = SetMemberResolver(API_HOST)
    image_set = {"members": [{"id": content_url(MEMBER_1), "caption": "stub"}]}
    fetched = {MEMBER_1: {"caption": "fetched"}}

    assert resolver.resolve_members(image_set, fetched) == [{"id": content_url(MEMBER_1), "caption": "fetched"}]


def test_missing_members_stay_bare_and_invalid_members_are_dropped():
    resolver = SetMemberResolver(API_HOST)
    image_set = {
        "members": [
            {"id": content_url(MEMBER_1)},
            {"id": "http://api.ft.com/content/nope"},
            "not-a-member",
            {"id": content_url(MEMBER_2)},
        ]
    }
    fetched = {MEMBER_2: {"title": "second"}}

    members = resolver.resolve_members(image_set, fetched)

    assert members == [
        {"id": content_url(MEMBER_1)},
        {"id": content_url(MEMBER_2), "title": "second"},
    ]


def test_inputs_are_not_mutated():
    resolver = SetMemberResolver(API_HOST)
    image_set = {"id": content_url(SET_ID), "members": [{"id": content_url(MEMBER_1)}]}
    fetched = {SET_ID: image_set, MEMBER_1: {"title": "T"}}
    snapshot = copy.deepcopy(fetched)

    resolved = resolver.resolve_set(SET_ID, fetched)

    assert fetched == snapshot
    assert resolved["members"] == [{"id": content_url(MEMBER_1), "title": "T"}]


def test_resolve_set_substitutes_stub_for_missing_set():
    resolver = SetMemberResolver(API_HOST)

    assert resolver.resolve_set(SET_ID, {}) == {"id": content_url(SET_ID)}


def test_resolve_set_returns_non_set_content_as_is():
    resolver = SetMemberResolver(API_HOST)
    image = {"id": content_url(SET_ID), "title": "plain image"}

    assert resolver.resolve_set(SET_ID, {SET_ID: image}) is image
