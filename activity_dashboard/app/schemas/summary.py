from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class View(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    ALLTIME = "alltime"

    @property
    def label(self) -> str:
        return VIEW_LABELS[self]


VIEW_LABELS: dict[View, str] = {
    View.DAILY: "Today",
    View.WEEKLY: "This Week",
    View.ALLTIME: "All Time",
}


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    clicks: int = Field(..., ge=0)
    keys: int = Field(..., ge=0)
    distance_pixels: int = Field(..., ge=0)
    distance_thousand_pixels: str


class ViewSummary(BaseModel):
    """Aggregated counters of one view plus its per-day chart series."""

    model_config = ConfigDict(frozen=True)

    view: View
    clicks: int = Field(..., ge=0)
    left_clicks: int = Field(..., ge=0)
    right_clicks: int = Field(..., ge=0)
    middle_clicks: int = Field(..., ge=0)
    keys: int = Field(..., ge=0)
    distance_pixels: int = Field(..., ge=0)
    distance_million_pixels: str
    sessions: int = Field(..., ge=0)
    chart_dates: list[str]
    chart_points: list[ChartPoint]


class ViewOption(BaseModel):
    view: View
    label: str
