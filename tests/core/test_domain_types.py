"""Domain Types — enum values the API exposes."""

from uuid import uuid4

from skillswap.core.domain_types import (
    ADMIN_PAGES, ANONYMOUS_PAGES, Availability, MessageId, Page, RequestId,
    RequestStatus, UserId, UserRole,
)


def test_request_status_has_three_states():
    assert {s.value for s in RequestStatus} == {"pending", "accepted", "rejected"}


def test_availability_values():
    assert [a.value for a in Availability] == ["Weekends", "Evenings", "Weekdays"]


def test_roles():
    assert {r.value for r in UserRole} == {"user", "admin"}


def test_page_groups():
    assert len(Page) == 12
    assert ANONYMOUS_PAGES == {Page.HOME, Page.LOGIN, Page.SIGNUP}
    assert all(p.value.startswith("admin") for p in ADMIN_PAGES)
    assert not ADMIN_PAGES & ANONYMOUS_PAGES


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert RequestId(uid) == uid
    assert MessageId(uid) == uid
