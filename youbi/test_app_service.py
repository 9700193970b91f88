from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from . import app as app_module


@pytest.fixture
def client() -> Iterable[TestClient]:
    with TestClient(app_module.app, raise_server_exceptions=False) as test_client:
        yield test_client


def test_health_endpoint_returns_uptime_and_version(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "uptime_seconds" in data
    assert data["version"] == app_module.app.version
    assert "X-Request-ID" in response.headers


def test_request_id_header_is_reused_from_client(client: TestClient) -> None:
    response = client.get("/health/live", headers={"X-Request-ID": "test-request-123"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "test-request-123"


def test_weekday_endpoint_returns_label(client: TestClient) -> None:
    response = client.post("/api/weekday", json={"text": "令和7年6月6日", "current_year": 2025})
    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "ok"
    assert data["weekday"] == "金曜日"
    assert data["date"] == "2025-06-06"
    assert data["display_text"] == "金曜日"
    assert data["locale"] == "ja"
    assert data["current_year"] == 2025


def test_weekday_endpoint_reports_invalid_and_empty(client: TestClient) -> None:
    invalid = client.post("/api/weekday", json={"text": "2025/2/29", "current_year": 2025}).json()
    assert invalid["kind"] == "invalid"
    assert invalid["weekday"] is None
    assert invalid["display_text"] == app_module.settings.invalid_label

    empty = client.post("/api/weekday", json={"text": "　", "current_year": 2025}).json()
    assert empty["kind"] == "empty"
    assert empty["display_text"] == ""


def test_weekday_endpoint_fills_in_current_year(monkeypatch, client: TestClient) -> None:
    monkeypatch.setattr(app_module, "current_year", lambda: 2024)
    response = client.post("/api/weekday", json={"text": "2月29日", "locale": "en-long"})
    assert response.status_code == 200
    data = response.json()
    assert data["current_year"] == 2024
    assert data["date"] == "2024-02-29"
    assert data["weekday"] == "Thursday"


def test_current_year_follows_configured_utc_offset(monkeypatch) -> None:
    for offset in (-12, 0, 9, 14):
        monkeypatch.setattr(app_module.settings, "utc_offset_hours", offset)
        expected = datetime.now(timezone(timedelta(hours=offset))).year
        assert app_module.current_year() == expected


def test_weekday_endpoint_defaults_to_wall_clock_year(monkeypatch, client: TestClient) -> None:
    monkeypatch.setattr(app_module.settings, "utc_offset_hours", 9)
    expected = datetime.now(timezone(timedelta(hours=9))).year
    response = client.post("/api/weekday", json={"text": "1月1日"})
    assert response.status_code == 200
    data = response.json()
    assert data["current_year"] == expected
    assert data["date"] == f"{expected:04d}-01-01"


def test_weekday_endpoint_rejects_unknown_locale(client: TestClient) -> None:
    response = client.post("/api/weekday", json={"text": "2025/6/6", "locale": "fr"})
    assert response.status_code == 422


def test_batch_endpoint_keeps_input_order(client: TestClient) -> None:
    payload = {
        "texts": ["2025/6/6", "abc", "", "６月７日", "20250608"],
        "locale": "en-short",
        "current_year": 2025,
    }
    response = client.post("/api/weekday/batch", json=payload)
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["total"] == 5
    assert data["total_valid"] == 3
    assert [item["kind"] for item in data["results"]] == ["ok", "invalid", "empty", "ok", "ok"]
    assert [item["weekday"] for item in data["results"]] == ["Fri", None, None, "Sat", "Sun"]
    assert [item["text"] for item in data["results"]] == payload["texts"]


def test_batch_endpoint_enforces_size_limit(monkeypatch, client: TestClient) -> None:
    monkeypatch.setattr(app_module.settings, "max_batch_size", 2)
    response = client.post("/api/weekday/batch", json={"texts": ["6/6", "6/7", "6/8"]})
    assert response.status_code == 422
    assert "最大2件" in response.json()["detail"]


def test_unhandled_exception_returns_request_id(client: TestClient) -> None:
    if not any(
        getattr(route, "path", None) == "/_test-error"
        for route in app_module.app.router.routes
    ):
        @app_module.app.get("/_test-error")
        async def _raise_error():  # pragma: no cover - used only for tests
            raise RuntimeError("boom")

    response = client.get("/_test-error")
    assert response.status_code == 500
    data = response.json()
    assert "request_id" in data
    assert data["detail"].startswith("サーバー内部")
