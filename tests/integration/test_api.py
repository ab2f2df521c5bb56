from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY


def test_health_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["state"] == "loading"
    assert body["version"] == "0.1.0-test"


def test_metrics_endpoint(test_client: TestClient) -> None:
    test_client.get("/healthz")
    response = test_client.get("/metrics")
    assert response.status_code == 200
    assert "activity_dashboard_requests_total" in response.text


def test_index_page(test_client: TestClient) -> None:
    response = test_client.get("/")
    assert response.status_code == 200
    assert "Activity Tracker Dashboard" in response.text


def test_data_endpoint_serves_file(test_client: TestClient, one_day_payload) -> None:
    response = test_client.get("/api/data", params={"t": "1700000000000"})
    assert response.status_code == 200
    assert response.json() == one_day_payload


def test_data_endpoint_missing_file(test_client: TestClient, data_file: Path) -> None:
    data_file.unlink()

    response = test_client.get("/api/data")

    assert response.status_code == 500
    assert response.json() == {"error": "Could not read file", "path": str(data_file)}


def test_data_endpoint_allows_cross_origin(test_client: TestClient) -> None:
    response = test_client.get("/api/data", headers={"Origin": "http://localhost:3000"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_views_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/api/v1/views")
    assert response.status_code == 200
    assert response.json() == [
        {"view": "daily", "label": "Today"},
        {"view": "weekly", "label": "This Week"},
        {"view": "alltime", "label": "All Time"},
    ]


def test_dashboard_before_first_poll(test_client: TestClient) -> None:
    response = test_client.get("/api/v1/dashboard")
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "loading"
    assert body["view"] == "daily"
    assert body["summary"] is None


def test_refresh_then_daily_dashboard(test_client: TestClient) -> None:
    refresh = test_client.post("/api/v1/refresh")
    assert refresh.status_code == 200
    status_body = refresh.json()
    assert status_body["state"] == "ready"
    assert status_body["days"] == 1
    assert status_body["polling"] is False
    assert status_body["poll_interval_seconds"] == 5.0

    response = test_client.get("/api/v1/dashboard", params={"view": "daily"})
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "ready"
    assert body["label"] == "Today"
    summary = body["summary"]
    assert summary["clicks"] == 8
    assert summary["keys"] == 100
    assert summary["distance_million_pixels"] == "0.50"
    assert summary["sessions"] == 2
    assert summary["chart_dates"] == ["2024-01-01"]
    point = summary["chart_points"][0]
    assert (point["clicks"], point["keys"], point["distance_thousand_pixels"]) == (8, 100, "500.0")

    charts = body["charts"]
    assert charts["clickDistribution"]["datasets"][0]["data"] == [5, 2, 1]
    assert charts["activityOverTime"]["labels"] == ["2024-01-01"]
    assert charts["mouseDistance"]["datasets"][0]["data"] == [500.0]
    assert charts["mouseDistance"]["datasets"][0]["backgroundColor"] == "#475569"


def test_view_switch_recomputes_from_same_snapshot(test_client: TestClient) -> None:
    test_client.post("/api/v1/refresh")

    weekly = test_client.get("/api/v1/dashboard", params={"view": "weekly"}).json()
    alltime = test_client.get("/api/v1/dashboard", params={"view": "alltime"}).json()

    assert weekly["label"] == "This Week"
    assert weekly["summary"]["clicks"] == 8
    assert alltime["label"] == "All Time"
    assert alltime["summary"]["sessions"] == 2


def test_unknown_view_is_rejected(test_client: TestClient) -> None:
    response = test_client.get("/api/v1/dashboard", params={"view": "monthly"})
    assert response.status_code == 422


def test_failed_poll_shows_error_until_next_success(
    test_client: TestClient,
    data_file: Path,
    one_day_payload,
) -> None:
    assert test_client.post("/api/v1/refresh").json()["state"] == "ready"

    data_file.unlink()
    failed = test_client.post("/api/v1/refresh")
    assert failed.status_code == 200
    assert failed.json()["state"] == "error"
    assert failed.json()["error"] == "Could not load activity data"

    dashboard = test_client.get("/api/v1/dashboard").json()
    assert dashboard["state"] == "error"
    assert dashboard["error"] == "Could not load activity data"
    assert dashboard["summary"] is None
    assert dashboard["charts"] is None
    assert test_client.get("/healthz").json()["state"] == "error"

    data_file.write_text(json.dumps(one_day_payload), encoding="utf-8")
    recovered = test_client.post("/api/v1/refresh")
    assert recovered.json()["state"] == "ready"
    assert test_client.get("/api/v1/dashboard").json()["summary"]["clicks"] == 8


def test_empty_daily_stats_is_reported_as_error(
    test_client: TestClient,
    data_file: Path,
    make_payload,
) -> None:
    data_file.write_text(json.dumps(make_payload({})), encoding="utf-8")

    status_body = test_client.post("/api/v1/refresh").json()

    assert status_body["state"] == "error"
    assert test_client.get("/api/v1/dashboard").json()["state"] == "error"


def test_self_poll_is_counted_apart_from_client_requests(test_client: TestClient) -> None:
    def sample(name: str, **labels: str) -> float:
        for family in REGISTRY.collect():
            for item in family.samples:
                if item.name == name and all(item.labels.get(k) == v for k, v in labels.items()):
                    return item.value
        return 0.0

    data_labels = {"method": "GET", "path": "/api/data", "status": "200"}
    client_reads = sample("activity_dashboard_requests_total", **data_labels)
    poller_reads = sample("activity_dashboard_poller_requests_total", status="200")

    assert test_client.post("/api/v1/refresh").json()["state"] == "ready"

    assert sample("activity_dashboard_requests_total", **data_labels) == client_reads
    assert sample("activity_dashboard_poller_requests_total", status="200") == poller_reads + 1


def test_index_page_ignores_responses_for_another_view(test_client: TestClient) -> None:
    page = test_client.get("/").text

    assert "payload.view !== view" in page
    assert "view = payload.view" not in page


def test_lifespan_exposes_only_store_poller_and_settings(test_client: TestClient) -> None:
    state = test_client.app.state

    assert state.snapshot_store is not None
    assert state.poller is not None
    assert not hasattr(state, "snapshot_loader")
    assert not hasattr(state, "source_client")
