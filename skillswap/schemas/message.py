"""Platform Message Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    # Upper bound re-checked against settings.message_max_length after trimming
    message: str = Field(min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    id: UUID
    message: str
    created_at: datetime | None = None
    seen_by: list[UUID]
    seen_count: int
    is_unread: bool = False

    @classmethod
    def from_model(cls, message, viewer_id: UUID | None = None) -> "MessageResponse":
        seen_by = message.seen_by
        return cls(
            id=message.id,
            message=message.message,
            created_at=message.created_at,
            seen_by=seen_by,
            seen_count=len(seen_by),
            is_unread=viewer_id is not None and viewer_id not in seen_by,
        )


class MarkSeenResult(BaseModel):
    marked: int
