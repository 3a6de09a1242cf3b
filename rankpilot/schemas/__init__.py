"""
RankPilot — Pydantic request/response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from rankpilot.schemas.tools import ToolInput, ToolOutput  # noqa: F401


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "1.0.0"
    timestamp: str | None = None
    firebase: bool = False


class ToolRunResponse(BaseModel):
    tool: str
    type: str
    result: dict
    cached: bool = False
    activity_id: str | None = Field(None, alias="activityId")

    model_config = {"populate_by_name": True}


class ActivityOut(BaseModel):
    id: str
    user_id: str = Field(..., alias="userId")
    type: str
    tool: str
    timestamp: datetime | str | None = None
    details: dict = {}
    results_summary: str = Field("", alias="resultsSummary")
    original_type: str | None = Field(None, alias="originalType")
    schema_migration_date: datetime | str | None = Field(None, alias="schemaMigrationDate")

    model_config = {"populate_by_name": True}


class ActivityListResponse(BaseModel):
    activities: list[ActivityOut]
    total: int


class ActivitySummaryResponse(BaseModel):
    counts: dict[str, int]
    total: int
