"""
Tests for the FastAPI endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from agromet.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _current(**overrides):
    body = {"temperature": 20, "feels_like": 20, "humidity": 55, "uv": 3}
    body.update(overrides)
    return body


def _day(d, **overrides):
    body = {
        "date": d, "label": "x", "temp_max": 28, "temp_min": 18,
        "precip_probability": 0, "precipitation": 0, "humidity": 55,
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True


class TestET0Endpoint:

    def test_et0(self, client):
        resp = client.post("/api/et0", json={"temp_max": 28, "temp_min": 18, "lat": 24.14,
                                             "day_of_year": 150})
        assert resp.status_code == 200
        data = resp.json()
        assert data["et0"] == 11.9
        assert data["day_of_year"] == 150
        assert data["ra"] == pytest.approx(40.165, abs=1e-3)

    def test_et0_from_date(self, client):
        resp = client.post("/api/et0", json={"temp_max": 28, "temp_min": 18, "lat": 24.14,
                                             "date": "2025-05-30"})
        assert resp.json()["day_of_year"] == 150

    def test_inverted_range(self, client):
        resp = client.post("/api/et0", json={"temp_max": 10, "temp_min": 20, "lat": 0,
                                             "day_of_year": 1})
        assert resp.status_code == 400

    def test_latitude_range(self, client):
        resp = client.post("/api/et0", json={"temp_max": 20, "temp_min": 10, "lat": 95,
                                             "day_of_year": 1})
        assert resp.status_code == 422


class TestAdvisoriesEndpoint:

    def test_heat_and_dry(self, client):
        resp = client.post("/api/advisories", json={
            "current": _current(temperature=35, humidity=30),
            "forecast": [],
        })
        assert resp.status_code == 200
        assert [r["severity"] for r in resp.json()] == ["danger", "warning"]

    def test_rain_tomorrow(self, client):
        resp = client.post("/api/advisories", json={
            "current": _current(temperature=10, humidity=90),
            "forecast": [_day("2025-05-30"),
                         _day("2025-05-31", precip_probability=90, precipitation=8)],
        })
        recs = resp.json()
        assert len(recs) == 1
        assert recs[0]["title"] == "Suspend irrigation tomorrow"

    def test_malformed_day(self, client):
        resp = client.post("/api/advisories", json={
            "current": _current(),
            "forecast": [_day("2025-05-30", temp_max=10, temp_min=20)],
        })
        assert resp.status_code == 422

    def test_unordered_forecast(self, client):
        resp = client.post("/api/advisories", json={
            "current": _current(),
            "forecast": [_day("2025-05-31"), _day("2025-05-30")],
        })
        assert resp.status_code == 422


class TestIrrigationAdviceEndpoint:

    def test_report(self, client):
        resp = client.post("/api/irrigation-advice", json={
            "lat": 24.14,
            "target_date": "2025-05-30",
            "kc": 1.0,
            "current": _current(),
            "forecast": [_day("2025-05-30"), _day("2025-05-31")],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["day_of_year"] == 150
        assert data["et0"] == 11.9
        assert data["irrigation_mm"] == pytest.approx(9.9)
        assert [d["date"] for d in data["forecast_et0"]] == ["2025-05-30", "2025-05-31"]
        assert [r["severity"] for r in data["advisories"]] == ["success"]

    def test_kc_out_of_range(self, client):
        resp = client.post("/api/irrigation-advice", json={
            "lat": 24.14, "kc": 3.0, "current": _current(), "forecast": [],
        })
        assert resp.status_code == 422
