"""User ORM — account credentials plus the public skill profile.

Invariants:
    - email is unique and stored lower-cased
    - skills_offered / skills_wanted are JSON lists of normalised skill names
    - rating is the mean of feedback_received ratings (0.0 with no feedback)
    - is_profile_complete is recomputed on every profile update
    - role is "user" or "admin"

Design Decisions:
    - JSON lists are replaced wholesale, never mutated in place (change detection)
    - feedback_received loaded with selectin: async sessions cannot lazy-load
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillswap.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    location: Mapped[str | None] = mapped_column(String(120), nullable=True)
    profile_photo_url: Mapped[str | None] = mapped_column(
        String(1000), nullable=True,
    )
    skills_offered: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    skills_wanted: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    availability: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contact_info: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )

    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="user",
    )
    is_banned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    is_profile_complete: Mapped[bool] = mapped_column(
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

    feedback_received: Mapped[list["Feedback"]] = relationship(
        "Feedback", foreign_keys="Feedback.to_user_id",
        back_populates="to_user", cascade="all, delete-orphan",
        lazy="selectin",
    )
