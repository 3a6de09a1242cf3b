"""
RankPilot — User model.

Users are keyed by their Firebase Auth uid; the row exists mainly to carry
the subscription tier and to own activities.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rankpilot.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tier: Mapped[str] = mapped_column(String(20), nullable=False, default="free")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    activities = relationship(
        "Activity", back_populates="user", cascade="all, delete-orphan",
        lazy="raise", passive_deletes=True,
    )

    def __repr__(self):
        return f"<User {self.id} ({self.tier})>"
