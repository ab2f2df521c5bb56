from __future__ import annotations

import argparse
import asyncio
import sys

import httpx

from activity_dashboard.app.core.config import get_settings
from activity_dashboard.app.core.logging import configure_logging
from activity_dashboard.app.insights import MalformedSnapshot, summarize_view
from activity_dashboard.app.schemas.summary import View
from activity_dashboard.app.services.loader import LOAD_ERROR_MESSAGE, SnapshotLoader
from activity_dashboard.app.services.poller import SnapshotPoller
from activity_dashboard.app.services.store import (
    DashboardState,
    SnapshotStore,
    StoreListener,
    StoreStatus,
)
from activity_dashboard.app.utils.units import group_thousands

DEFAULT_URL = "http://127.0.0.1:5000/api/data"
TITLE = "Activity Tracker Dashboard"


def render_status(status: StoreStatus, view: View) -> str:
    """Plain-text rendering of the dashboard cards for one view."""

    lines = [TITLE, "=" * len(TITLE)]
    if status.state == DashboardState.LOADING:
        lines += ["Loading Data...", "Fetching your activity stats"]
        return "\n".join(lines)

    snapshot = status.renderable
    if snapshot is None:
        lines += ["Data Not Found", status.error or LOAD_ERROR_MESSAGE]
        return "\n".join(lines)

    try:
        summary = summarize_view(snapshot, view)
    except MalformedSnapshot:
        lines += ["Data Not Found", LOAD_ERROR_MESSAGE]
        return "\n".join(lines)

    lines += [
        f"[{view.label}]",
        f"Total Clicks    {group_thousands(summary.clicks)}"
        f"  (L {group_thousands(summary.left_clicks)}"
        f" / R {group_thousands(summary.right_clicks)}"
        f" / M {group_thousands(summary.middle_clicks)})",
        f"Keypresses      {group_thousands(summary.keys)}",
        f"Mouse Distance  {summary.distance_million_pixels}M px",
        f"Sessions        {summary.sessions}",
        "",
        "Date        Clicks     Keys   Distance (K px)",
    ]
    for date_key, point in zip(summary.chart_dates, summary.chart_points):
        lines.append(
            f"{date_key}  {point.clicks:>6}  {point.keys:>7}  {point.distance_thousand_pixels:>15}"
        )
    return "\n".join(lines)


def _print_status(view: View) -> StoreListener:
    def _listener(status: StoreStatus) -> None:
        print(render_status(status, view), end="\n\n", flush=True)

    return _listener


async def run_once(url: str, view: View, timeout: float) -> int:
    store = SnapshotStore()
    async with httpx.AsyncClient(timeout=timeout) as client:
        poller = SnapshotPoller(SnapshotLoader(client, url), store, interval_seconds=0)
        status = await poller.poll_once()
    print(render_status(status, view))
    return 0 if status.state == DashboardState.READY else 1


async def watch(url: str, view: View, interval: float, timeout: float) -> None:
    store = SnapshotStore()
    store.add_listener(_print_status(view))
    async with httpx.AsyncClient(timeout=timeout) as client:
        poller = SnapshotPoller(SnapshotLoader(client, url), store, interval_seconds=interval)
        poller.start()
        try:
            await asyncio.Event().wait()
        finally:
            await poller.stop()


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Poll an activity snapshot and print its summary")
    parser.add_argument(
        "--url",
        default=settings.source_url or DEFAULT_URL,
        help="URL serving the activity JSON document",
    )
    parser.add_argument(
        "--view",
        choices=[view.value for view in View],
        default=settings.default_view,
        help="Time window to summarize",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.poll_interval_seconds,
        help="Seconds between polls",
    )
    parser.add_argument("--once", action="store_true", help="Fetch a single time and exit")
    args = parser.parse_args(argv)

    configure_logging()
    view = View(args.view)
    if args.once:
        return asyncio.run(run_once(args.url, view, settings.request_timeout_seconds))

    try:
        asyncio.run(watch(args.url, view, max(args.interval, 0.5), settings.request_timeout_seconds))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
