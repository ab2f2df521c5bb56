from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel


class _ChartModel(BaseModel):
    # Chart.js reads camelCase keys (backgroundColor, borderRadius, ...).
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChartDataset(_ChartModel):
    label: str | None = None
    data: list[int | float]
    background_color: str | list[str]
    border_color: str | None = None
    border_width: int | None = None
    border_radius: int | None = None
    fill: bool | None = None
    tension: float | None = None

    @model_serializer(mode="wrap")
    def _drop_unset_options(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Chart.js falls back to its defaults only when a key is absent.
        return {key: value for key, value in handler(self).items() if value is not None}


class ChartData(_ChartModel):
    labels: list[str]
    datasets: list[ChartDataset]


class DashboardCharts(_ChartModel):
    click_distribution: ChartData
    activity_over_time: ChartData
    mouse_distance: ChartData
