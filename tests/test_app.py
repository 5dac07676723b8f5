"""HTTP surface tests (FastAPI TestClient, NASA calls mocked)."""
import httpx
import pytest
from fastapi.testclient import TestClient

from impactlab.app import app, get_neo_client
from impactlab.neo import NeoClient, TTLCache


SCENARIO = {"diameter_m": 500.0, "density_kgm3": 2500.0, "velocity_kms": 28.0, "angle_deg": 45.0}
NEW_YORK = {"lat": 40.7128, "lon": -74.0060}


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _override_neo(handler):
    def _neo_client():
        return NeoClient("TEST_KEY", TTLCache(),
                         http_client=httpx.Client(transport=httpx.MockTransport(handler)))
    app.dependency_overrides[get_neo_client] = _neo_client


# ── health / physics ────────────────────────────────────────────────


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


class TestImpactEndpoints:

    def test_physics(self, client):
        r = client.post("/impact/physics", json=SCENARIO)
        assert r.status_code == 200
        body = r.json()
        assert body["energy_megatons"] == pytest.approx(15318.0, rel=1e-2)
        assert body["shockwave_decibels"] <= 280.0

    @pytest.mark.parametrize("field,value", [("diameter_m", 0), ("velocity_kms", -3), ("angle_deg", 0),
                                             ("angle_deg", 91)])
    def test_physics_rejects_bad_input(self, client, field, value):
        body = dict(SCENARIO, **{field: value})
        assert client.post("/impact/physics", json=body).status_code == 422

    def test_report(self, client):
        r = client.post("/impact/report", json={"parameters": SCENARIO, "location": NEW_YORK})
        assert r.status_code == 200
        body = r.json()
        assert body["location"] == NEW_YORK
        assert body["report"]["crater"]["severity"] == "critical"
        assert body["report"]["summary"]["total_deaths"] > 0
        assert body["report"]["summary"]["event_scale_label"].endswith("Tsar Bomba")

    def test_report_rejects_bad_location(self, client):
        r = client.post("/impact/report", json={"parameters": SCENARIO, "location": {"lat": 95, "lon": 0}})
        assert r.status_code == 422


# ── population ──────────────────────────────────────────────────────


class TestPopulationEndpoint:

    def test_zero_radius(self, client):
        r = client.get("/population", params={**NEW_YORK, "radius": 0})
        assert r.status_code == 200
        body = r.json()
        assert body["population"] == 0
        assert body["area_type"] == "megacity"
        assert [c["name"] for c in body["affected_cities"]] == ["New York"]

    def test_negative_radius(self, client):
        assert client.get("/population", params={**NEW_YORK, "radius": -1}).status_code == 422


# ── NEO ─────────────────────────────────────────────────────────────


class TestNeoEndpoints:

    def test_report_for_neo(self, client, neo_record):
        _override_neo(lambda request: httpx.Response(200, json=neo_record))
        r = client.get("/neo/3542519/report", params={**NEW_YORK, "angle_deg": 30})
        assert r.status_code == 200
        body = r.json()
        assert body["neo"]["id"] == "3542519"
        assert body["parameters"] == {
            "diameter_m": pytest.approx(200.0), "density_kgm3": 1500.0,
            "velocity_kms": 18.5, "angle_deg": 30.0,
        }
        assert "summary" in body["report"]

    def test_neo_without_velocity(self, client, neo_record):
        neo_record["close_approach_data"] = []
        _override_neo(lambda request: httpx.Response(200, json=neo_record))
        r = client.get("/neo/3542519/report", params=NEW_YORK)
        assert r.status_code == 422

    def test_upstream_failure_is_bad_gateway(self, client):
        _override_neo(lambda request: httpx.Response(503))
        r = client.get("/neo/3542519/report", params=NEW_YORK)
        assert r.status_code == 502

    def test_hazardous(self, client, neo_feed):
        _override_neo(lambda request: httpx.Response(200, json=neo_feed))
        r = client.get("/neo/hazardous")
        assert r.status_code == 200
        assert [n["id"] for n in r.json()] == ["3542519"]

    def test_feed(self, client, neo_feed):
        _override_neo(lambda request: httpx.Response(200, json=neo_feed))
        r = client.get("/neo/feed", params={"start_date": "2026-10-20", "end_date": "2026-10-21"})
        assert r.status_code == 200
        body = r.json()
        assert [n["name"] for n in body] == ["(2020 AB)", "(2010 PK9)", "433 Eros"]
        assert body[1]["diameter_avg_km"] == pytest.approx(0.2)
