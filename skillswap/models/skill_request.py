"""SkillRequest ORM — a directed proposal to swap one offered skill for one wanted skill.

Invariants:
    - from_user_id != to_user_id (enforced in core/request_rules.py)
    - status is one of pending | accepted | rejected
    - is_read is flipped only by the recipient
    - from_user_name / from_user_photo / to_user_name are snapshots taken at creation
    - updated_at moves on every status or read change
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.db.base import Base


class SkillRequest(Base):
    __tablename__ = "requests"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    from_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    from_user_name: Mapped[str] = mapped_column(String(120), nullable=False)
    from_user_photo: Mapped[str] = mapped_column(
        String(1000), nullable=False, default="",
    )
    to_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    to_user_name: Mapped[str] = mapped_column(String(120), nullable=False)
    offered_skill: Mapped[str] = mapped_column(String(60), nullable=False)
    wanted_skill: Mapped[str] = mapped_column(String(60), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
