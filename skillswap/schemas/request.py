"""Skill Request Schemas — create, status update and list views."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SkillRequestCreate(BaseModel):
    to_user_id: UUID
    offered_skill: str = Field(min_length=1, max_length=60)
    wanted_skill: str = Field(min_length=1, max_length=60)
    message: str = Field(min_length=1, max_length=1000)


class StatusUpdate(BaseModel):
    """Recipient's answer. 'pending' is not a valid target."""
    status: Literal["accepted", "rejected"]


class SkillRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    from_user_id: UUID
    from_user_name: str
    from_user_photo: str
    to_user_id: UUID
    to_user_name: str
    offered_skill: str
    wanted_skill: str
    message: str
    status: str
    is_read: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UnreadCount(BaseModel):
    unread: int
