"""
RankPilot — Activity model.
Append-only record of one successful tool invocation per row.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rankpilot.database import Base


class Activity(Base):
    __tablename__ = "activities"

    # Insertion order; breaks ties between rows written in the same clock tick
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    type: Mapped[str] = mapped_column(String(50), nullable=False)      # ActivityType value
    tool: Mapped[str] = mapped_column(String(100), nullable=False)     # display name
    details: Mapped[dict] = mapped_column(JSON, default=dict)
    results_summary: Mapped[str] = mapped_column(Text, default="")

    # Assigned by the database, never by the caller
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Set only by the activity type normalizer
    original_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    schema_migration_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    schema_migration_version: Mapped[str | None] = mapped_column(String(20), nullable=True)

    user = relationship("User", back_populates="activities")

    __table_args__ = (
        Index("ix_activities_user_id_timestamp", "user_id", "timestamp"),
        Index("ix_activities_user_id_id", "user_id", "id"),
    )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type,
            "tool": self.tool,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "details": self.details or {},
            "resultsSummary": self.results_summary or "",
        }
        if self.original_type is not None:
            data["originalType"] = self.original_type
        if self.schema_migration_date is not None:
            data["schemaMigrationDate"] = self.schema_migration_date.isoformat()
        return data

    def __repr__(self):
        return f"<Activity {self.user_id}/{self.id} — {self.type}>"
