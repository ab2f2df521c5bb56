from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from ..services.store import DashboardState
from .charts import DashboardCharts
from .summary import View, ViewSummary


class DashboardResponse(BaseModel):
    state: DashboardState
    view: View
    label: str
    summary: ViewSummary | None = None
    charts: DashboardCharts | None = None
    error: str | None = None
    updated_at: datetime | None = None


class StatusResponse(BaseModel):
    state: DashboardState
    error: str | None = None
    updated_at: datetime | None = None
    days: int = 0
    polling: bool = False
    poll_interval_seconds: float


class SourceErrorResponse(BaseModel):
    error: str
    path: str
