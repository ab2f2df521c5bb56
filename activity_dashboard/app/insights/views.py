from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..schemas.snapshot import ActivitySnapshot, DayRecord
from ..schemas.summary import ChartPoint, View, ViewSummary
from ..utils.units import million_pixels, thousand_pixels

WEEKLY_WINDOW_DAYS = 7
ALLTIME_CHART_DAYS = 30


class MalformedSnapshot(ValueError):
    """Raised when a snapshot parses but cannot be summarized."""


@dataclass
class _Totals:
    left: int = 0
    right: int = 0
    middle: int = 0
    keys: int = 0
    pixels: int = 0
    sessions: int = 0

    @property
    def clicks(self) -> int:
        return self.left + self.right + self.middle

    def add_day(self, day: DayRecord) -> None:
        self.left += day.mouse_clicks.left
        self.right += day.mouse_clicks.right
        self.middle += day.mouse_clicks.middle
        self.keys += day.keyboard_presses
        self.pixels += day.mouse_movement_pixels
        self.sessions += len(day.sessions)


def sorted_dates(snapshot: ActivitySnapshot) -> list[str]:
    """Return the date keys in ascending order; an empty mapping is malformed."""

    dates = sorted(snapshot.daily_stats)
    if not dates:
        raise MalformedSnapshot("daily_stats is empty; no most recent day")
    return dates


def summarize_view(snapshot: ActivitySnapshot, view: View) -> ViewSummary:
    """Fold the snapshot into the summary shown for ``view``.

    Daily and weekly totals are summed from the most recent day records.
    All-time totals are the lifetime counters as published, while its chart
    still comes from the last thirty day records.
    """

    dates = sorted_dates(snapshot)
    view = View(view)

    if view == View.ALLTIME:
        chart_dates = dates[-ALLTIME_CHART_DAYS:]
        totals = _Totals(
            left=snapshot.total_clicks.left,
            right=snapshot.total_clicks.right,
            middle=snapshot.total_clicks.middle,
            keys=snapshot.total_keys,
            pixels=snapshot.total_mouse_movement_pixels,
            sessions=snapshot.total_sessions,
        )
    else:
        window = 1 if view == View.DAILY else WEEKLY_WINDOW_DAYS
        chart_dates = dates[-window:]
        totals = _Totals()
        for date_key in chart_dates:
            totals.add_day(snapshot.daily_stats[date_key])

    return ViewSummary(
        view=view,
        clicks=totals.clicks,
        left_clicks=totals.left,
        right_clicks=totals.right,
        middle_clicks=totals.middle,
        keys=totals.keys,
        distance_pixels=totals.pixels,
        distance_million_pixels=million_pixels(totals.pixels),
        sessions=totals.sessions,
        chart_dates=list(chart_dates),
        chart_points=_chart_points(snapshot, chart_dates),
    )


def _chart_points(snapshot: ActivitySnapshot, dates: Sequence[str]) -> list[ChartPoint]:
    points = []
    for date_key in dates:
        day = snapshot.daily_stats[date_key]
        points.append(
            ChartPoint(
                clicks=day.mouse_clicks.total,
                keys=day.keyboard_presses,
                distance_pixels=day.mouse_movement_pixels,
                distance_thousand_pixels=thousand_pixels(day.mouse_movement_pixels),
            )
        )
    return points
