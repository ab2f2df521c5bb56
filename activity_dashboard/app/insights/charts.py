from __future__ import annotations

from ..schemas.charts import ChartData, ChartDataset, DashboardCharts
from ..schemas.summary import ViewSummary

CLICK_LABELS = ["Left Clicks", "Right Clicks", "Middle Clicks"]
CLICK_COLORS = ["#1e3a8a", "#0f766e", "#374151"]
CLICK_BORDER_COLOR = "#151111"

CLICKS_LINE_COLOR = "#3b82f6"
CLICKS_FILL_COLOR = "rgba(59, 130, 246, 0.15)"
KEYS_LINE_COLOR = "#14b8a6"
KEYS_FILL_COLOR = "rgba(20, 184, 166, 0.15)"
LINE_TENSION = 0.4

DISTANCE_LABEL = "Mouse Distance (K px)"
DISTANCE_COLOR = "#475569"


def build_click_distribution(summary: ViewSummary) -> ChartData:
    return ChartData(
        labels=list(CLICK_LABELS),
        datasets=[
            ChartDataset(
                data=[summary.left_clicks, summary.right_clicks, summary.middle_clicks],
                background_color=list(CLICK_COLORS),
                border_color=CLICK_BORDER_COLOR,
                border_width=3,
            )
        ],
    )


def build_activity_line(summary: ViewSummary) -> ChartData:
    return ChartData(
        labels=list(summary.chart_dates),
        datasets=[
            ChartDataset(
                label="Clicks",
                data=[point.clicks for point in summary.chart_points],
                border_color=CLICKS_LINE_COLOR,
                background_color=CLICKS_FILL_COLOR,
                fill=True,
                tension=LINE_TENSION,
            ),
            ChartDataset(
                label="Keypresses",
                data=[point.keys for point in summary.chart_points],
                border_color=KEYS_LINE_COLOR,
                background_color=KEYS_FILL_COLOR,
                fill=True,
                tension=LINE_TENSION,
            ),
        ],
    )


def build_distance_bar(summary: ViewSummary) -> ChartData:
    return ChartData(
        labels=list(summary.chart_dates),
        datasets=[
            ChartDataset(
                label=DISTANCE_LABEL,
                data=[float(point.distance_thousand_pixels) for point in summary.chart_points],
                background_color=DISTANCE_COLOR,
                border_radius=8,
            )
        ],
    )


def build_charts(summary: ViewSummary) -> DashboardCharts:
    return DashboardCharts(
        click_distribution=build_click_distribution(summary),
        activity_over_time=build_activity_line(summary),
        mouse_distance=build_distance_bar(summary),
    )
