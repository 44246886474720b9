"""User Schemas — profile edits and profile views."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from pydantic import ValidationError

from skillswap.schemas.user import OwnProfile, ProfileUpdate, PublicProfile


def _feedback(name, rating, created_at):
    return SimpleNamespace(
        from_name=name, from_user_id=uuid4(), rating=rating,
        comment=f"from {name}", created_at=created_at,
    )


def _user(**overrides):
    now = datetime.now(timezone.utc)
    data = dict(
        id=uuid4(), email="ana@example.com", name="Ana", location="Lisbon",
        profile_photo_url=None, skills_offered=["Python"], skills_wanted=["Guitar"],
        availability="Weekends", rating=4.5, role="user", is_public=True,
        is_banned=False, is_profile_complete=True, created_at=now,
        contact_info={"github": "https://github.com/ana"},
        feedback_received=[
            _feedback("Old", 4, now - timedelta(days=2)),
            _feedback("New", 5, now),
        ],
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def test_profile_update_strips_name():
    assert ProfileUpdate(name="  Ana ").name == "Ana"


def test_profile_update_rejects_blank_name():
    with pytest.raises(ValidationError):
        ProfileUpdate(name="   ")


def test_profile_update_rejects_unknown_availability():
    with pytest.raises(ValidationError):
        ProfileUpdate(availability="Mornings")


def test_profile_update_unset_fields_excluded():
    assert ProfileUpdate(is_public=False).model_dump(exclude_unset=True) == {"is_public": False}


def test_public_profile_feedback_newest_first_with_from_alias():
    profile = PublicProfile.from_model(_user())
    dumped = profile.model_dump(by_alias=True)
    assert [f["from"] for f in dumped["feedback"]] == ["New", "Old"]
    assert dumped["feedback_count"] == 2
    assert dumped["contact_info"]["github"] == "https://github.com/ana"
    assert "email" not in dumped


def test_public_profile_without_feedback_list_keeps_count():
    profile = PublicProfile.from_model(_user(), include_feedback=False)
    assert profile.feedback == []
    assert profile.feedback_count == 2


def test_own_profile_adds_private_fields():
    profile = OwnProfile.from_model(_user(is_banned=True))
    assert profile.email == "ana@example.com"
    assert profile.is_banned is True
    assert profile.feedback[0].from_ == "New"
