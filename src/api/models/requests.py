"""Pydantic request models for API endpoints."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from core.config import DEFAULT_PRESET, VIEW_MONTHLY


class SnapshotRequest(BaseModel):
    """Bookings (and notes) as delivered by the store, in its camelCase shape."""

    model_config = ConfigDict(populate_by_name=True)

    events: list[dict] = []
    today: date | None = None


class DashboardRequest(SnapshotRequest):
    preset: str = DEFAULT_PRESET
    custom_start: str | None = Field(default=None, alias="customStart")
    custom_end: str | None = Field(default=None, alias="customEnd")


class CalendarRequest(SnapshotRequest):
    notes: list[dict] = []
    reference_date: date | None = Field(default=None, alias="referenceDate")
    view_mode: str = Field(default=VIEW_MONTHLY, alias="viewMode")
    include_pending: bool = Field(default=False, alias="includePending")
    # Periods to move back (negative) or forward before building the grid
    step: int = Field(default=0, ge=-1200, le=1200)


class ComparisonRequest(SnapshotRequest):
    start_month: str | None = Field(default=None, alias="startMonth")
    end_month: str | None = Field(default=None, alias="endMonth")
