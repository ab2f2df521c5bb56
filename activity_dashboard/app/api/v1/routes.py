from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from ...insights import MalformedSnapshot, build_charts, summarize_view
from ...schemas.dashboard import DashboardResponse, StatusResponse
from ...schemas.summary import VIEW_LABELS, View, ViewOption
from ...services.loader import LOAD_ERROR_MESSAGE
from ...services.poller import SnapshotPoller
from ...services.store import DashboardState, SnapshotStore, StoreStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["dashboard"])


def get_store(request: Request) -> SnapshotStore:
    return request.app.state.snapshot_store


def get_poller(request: Request) -> SnapshotPoller:
    return request.app.state.poller


def get_default_view(request: Request) -> View:
    return View(request.app.state.settings.default_view)


def _status_response(status_obj: StoreStatus, poller: SnapshotPoller) -> StatusResponse:
    snapshot = status_obj.snapshot
    return StatusResponse(
        state=status_obj.state,
        error=status_obj.error,
        updated_at=status_obj.updated_at,
        days=len(snapshot.daily_stats) if snapshot is not None else 0,
        polling=poller.running,
        poll_interval_seconds=poller.interval_seconds,
    )


@router.get("/views", response_model=list[ViewOption])
async def list_views() -> list[ViewOption]:
    return [ViewOption(view=view, label=label) for view, label in VIEW_LABELS.items()]


@router.get("/status", response_model=StatusResponse)
async def read_status(
    store: SnapshotStore = Depends(get_store),
    poller: SnapshotPoller = Depends(get_poller),
) -> StatusResponse:
    status_obj = await store.get_status()
    return _status_response(status_obj, poller)


@router.post("/refresh", response_model=StatusResponse)
async def refresh_snapshot(poller: SnapshotPoller = Depends(get_poller)) -> StatusResponse:
    status_obj = await poller.poll_once()
    return _status_response(status_obj, poller)


@router.get("/dashboard", response_model=DashboardResponse)
async def read_dashboard(
    view: View | None = Query(default=None),
    store: SnapshotStore = Depends(get_store),
    default_view: View = Depends(get_default_view),
) -> DashboardResponse:
    selected = view or default_view
    status_obj = await store.get_status()
    snapshot = status_obj.renderable
    if snapshot is None:
        return DashboardResponse(
            state=status_obj.state,
            view=selected,
            label=selected.label,
            error=status_obj.error,
            updated_at=status_obj.updated_at,
        )

    try:
        summary = summarize_view(snapshot, selected)
    except MalformedSnapshot as exc:
        logger.warning("Loaded snapshot cannot be summarized: %s", exc)
        return DashboardResponse(
            state=DashboardState.ERROR,
            view=selected,
            label=selected.label,
            error=LOAD_ERROR_MESSAGE,
            updated_at=status_obj.updated_at,
        )

    return DashboardResponse(
        state=status_obj.state,
        view=selected,
        label=selected.label,
        summary=summary,
        charts=build_charts(summary),
        updated_at=status_obj.updated_at,
    )
