from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from activity_dashboard.app.core import config

DayFactory = Callable[..., dict[str, Any]]
PayloadFactory = Callable[..., dict[str, Any]]


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def make_day() -> DayFactory:
    def _make_day(
        left: int = 0,
        right: int = 0,
        middle: int = 0,
        keys: int = 0,
        pixels: int = 0,
        sessions: int = 0,
    ) -> dict[str, Any]:
        return {
            "mouse_clicks": {"left": left, "right": right, "middle": middle},
            "keyboard_presses": keys,
            "mouse_movement_pixels": pixels,
            "sessions": [{"id": f"s{index + 1}"} for index in range(sessions)],
        }

    return _make_day


@pytest.fixture()
def make_payload() -> PayloadFactory:
    """Build a snapshot document; lifetime totals default to the sum of the days."""

    def _make_payload(
        daily_stats: dict[str, dict[str, Any]],
        *,
        total_clicks: dict[str, int] | None = None,
        total_keys: int | None = None,
        total_pixels: int | None = None,
        total_sessions: int | None = None,
    ) -> dict[str, Any]:
        days = list(daily_stats.values())
        if total_clicks is None:
            total_clicks = {
                button: sum(day["mouse_clicks"][button] for day in days)
                for button in ("left", "right", "middle")
            }
        return {
            "total_clicks": total_clicks,
            "total_keys": (
                total_keys
                if total_keys is not None
                else sum(day["keyboard_presses"] for day in days)
            ),
            "total_mouse_movement_pixels": (
                total_pixels
                if total_pixels is not None
                else sum(day["mouse_movement_pixels"] for day in days)
            ),
            "total_sessions": (
                total_sessions
                if total_sessions is not None
                else sum(len(day["sessions"]) for day in days)
            ),
            "daily_stats": daily_stats,
        }

    return _make_payload


@pytest.fixture()
def one_day_payload(make_day: DayFactory, make_payload: PayloadFactory) -> dict[str, Any]:
    return make_payload(
        {
            "2024-01-01": make_day(
                left=5,
                right=2,
                middle=1,
                keys=100,
                pixels=500_000,
                sessions=2,
            )
        }
    )


@pytest.fixture()
def data_file(tmp_path: Path, one_day_payload: dict[str, Any]) -> Path:
    path = tmp_path / "activity_data.json"
    path.write_text(json.dumps(one_day_payload), encoding="utf-8")
    return path


@pytest.fixture()
def test_client(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    data_file: Path,
) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("ACTIVITY_DATA_FILE", str(data_file))
    monkeypatch.setenv("POLL_ENABLED", "false")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "test.log"))
    monkeypatch.setenv("VERSION", "0.1.0-test")
    monkeypatch.delenv("ACTIVITY_SOURCE_URL", raising=False)
    monkeypatch.delenv("DEFAULT_VIEW", raising=False)
    config.get_settings.cache_clear()

    from activity_dashboard.app.main import app

    try:
        with TestClient(app) as client:
            yield client
    finally:
        config.get_settings.cache_clear()
