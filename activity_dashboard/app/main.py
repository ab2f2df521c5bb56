from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .api.data import router as data_router
from .api.v1.routes import router as v1_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .middleware import RequestLoggingMiddleware
from .services.loader import SnapshotLoader
from .services.poller import SnapshotPoller
from .services.store import SnapshotStore

logger = logging.getLogger(__name__)
FRONTEND_DIR = Path(__file__).resolve().parents[2] / "frontend"
INDEX_FILE = FRONTEND_DIR / "index.html"
LOCAL_SOURCE_BASE_URL = "http://activity-dashboard.local"


def build_source_client(app: FastAPI, settings: Settings) -> tuple[httpx.AsyncClient, str]:
    """Client and URL the poller reads the snapshot from.

    Without ACTIVITY_SOURCE_URL the app polls its own /api/data route through
    an in-process ASGI transport, so no socket is needed.
    """

    timeout = httpx.Timeout(settings.request_timeout_seconds)
    if settings.source_url:
        return httpx.AsyncClient(timeout=timeout), settings.source_url
    client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url=LOCAL_SOURCE_BASE_URL,
        timeout=timeout,
    )
    return client, f"{LOCAL_SOURCE_BASE_URL}/api/data"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire the store, loader and poller; cancel polling on shutdown."""

    configure_logging()
    settings: Settings = get_settings()

    client, source_url = build_source_client(app, settings)
    store = SnapshotStore()
    loader = SnapshotLoader(client, source_url)
    poller = SnapshotPoller(loader, store, interval_seconds=settings.poll_interval_seconds)

    app.state.settings = settings
    app.state.snapshot_store = store
    app.state.poller = poller

    logger.info(
        "Starting activity dashboard %s data_file=%s source=%s",
        settings.version,
        settings.data_file,
        source_url,
    )

    if settings.poll_enabled:
        poller.start()
    else:
        logger.info("Snapshot polling disabled")

    try:
        yield
    finally:
        await poller.stop()
        await client.aclose()


app = FastAPI(title="Activity Dashboard", version=get_settings().version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

if FRONTEND_DIR.exists():
    app.mount("/static", StaticFiles(directory=FRONTEND_DIR, html=False), name="static")
else:  # pragma: no cover
    logger.warning("Frontend directory not found at %s", FRONTEND_DIR)

app.include_router(data_router)
app.include_router(v1_router)


@app.get("/healthz")
async def healthz(request: Request, settings: Settings = Depends(get_settings)) -> dict[str, str]:
    store: SnapshotStore = request.app.state.snapshot_store
    status_obj = await store.get_status()
    return {
        "status": "ok",
        "state": status_obj.state.value,
        "version": settings.version,
    }


@app.get("/metrics")
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/", response_class=HTMLResponse)
async def root() -> str:
    if INDEX_FILE.exists():
        return INDEX_FILE.read_text(encoding="utf-8")
    return "<h1>Activity Tracker Dashboard</h1><p>Frontend is not bundled.</p>"
