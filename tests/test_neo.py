"""Tests for NASA NeoWs normalisation, caching and client."""
from datetime import date

import httpx
import pytest

from impactlab.errors import InvalidArgument
from impactlab.neo import (
    NeoClient,
    TTLCache,
    estimate_density,
    impact_parameters_from_neo,
    mask_key,
    parse_neo,
)


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


def _client(handler, cache=None, **kwargs):
    transport = httpx.MockTransport(handler)
    return NeoClient("SECRET_KEY_123", cache if cache is not None else TTLCache(), ttl_s=60.0,
                     http_client=httpx.Client(transport=transport), **kwargs)


# ── parse_neo ───────────────────────────────────────────────────────


class TestParseNeo:

    def test_fields(self, neo_record):
        neo = parse_neo(neo_record)
        assert neo.id == "3542519"
        assert neo.diameter_avg_km == pytest.approx(0.2)
        assert neo.velocity_kms == 18.5
        assert neo.velocity_kmh == 66600.0
        assert neo.miss_distance_lunar == 11.71
        assert neo.eccentricity == pytest.approx(0.6841)
        assert neo.is_hazardous is True
        assert neo.close_approach_date == "2026-Oct-20 03:14"

    def test_missing_approach_data_reads_as_zero(self, neo_record):
        neo_record["close_approach_data"] = []
        del neo_record["orbital_data"]
        neo = parse_neo(neo_record)
        assert neo.velocity_kms == 0.0
        assert neo.miss_distance_km == 0.0
        assert neo.close_approach_date is None
        assert neo.orbital_period_days == 0.0


# ── estimate_density / impact_parameters_from_neo ───────────────────


class TestImpactParametersFromNeo:

    @pytest.mark.parametrize("h,expected", [
        (25.0, 1500.0), (20.5, 1500.0), (20.0, 2500.0), (17.5, 2500.0), (17.0, 3500.0), (10.0, 3500.0),
    ])
    def test_density_bands(self, h, expected):
        assert estimate_density(h) == expected

    def test_defaults(self, neo_record):
        params = impact_parameters_from_neo(parse_neo(neo_record))
        assert params.diameter_m == pytest.approx(200.0)
        assert params.velocity_kms == 18.5
        assert params.density_kgm3 == 1500.0
        assert params.angle_deg == 45.0

    def test_custom_angle(self, neo_record):
        assert impact_parameters_from_neo(parse_neo(neo_record), angle_deg=60.0).angle_deg == 60.0

    def test_no_velocity_is_rejected(self, neo_record):
        neo_record["close_approach_data"] = []
        with pytest.raises(InvalidArgument):
            impact_parameters_from_neo(parse_neo(neo_record))


# ── TTLCache ────────────────────────────────────────────────────────


class TestTTLCache:

    def test_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.put("k", {"v": 1}, expires_at=10.0)
        clock.t = 5.0
        assert cache.get("k") == {"v": 1}
        clock.t = 10.0
        assert cache.get("k") is None

    def test_put_drops_expired_entries(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.put("feed_2026-10-01_2026-10-08", 1, expires_at=10.0)
        cache.put("feed_2026-10-02_2026-10-09", 2, expires_at=100.0)
        clock.t = 20.0
        cache.put("feed_2026-10-03_2026-10-10", 3, expires_at=120.0)
        assert len(cache) == 2
        assert cache.get("feed_2026-10-02_2026-10-09") == 2
        assert cache.get("feed_2026-10-03_2026-10-10") == 3

    def test_missing_and_clear(self):
        cache = TTLCache()
        assert cache.get("nope") is None
        cache.put("k", 1, expires_at=cache.now() + 100)
        cache.clear()
        assert cache.get("k") is None


# ── NeoClient ───────────────────────────────────────────────────────


class TestNeoClient:

    def test_get_asteroid_is_cached(self, neo_record):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=neo_record)

        client = _client(handler)
        first = client.get_asteroid("3542519")
        second = client.get_asteroid("3542519")
        assert first == second
        assert len(calls) == 1
        assert calls[0].url.path.endswith("/neo/3542519")
        assert calls[0].url.params["api_key"] == "SECRET_KEY_123"

    def test_cache_expires(self, neo_record):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=neo_record)

        clock = FakeClock()
        client = _client(handler, cache=TTLCache(clock=clock))
        client.get_asteroid("3542519")
        clock.t = 61.0
        client.get_asteroid("3542519")
        assert len(calls) == 2

    def test_feed_default_window(self, neo_feed):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json=neo_feed)

        _client(handler).get_feed(start_date=date(2026, 10, 18))
        assert seen["start_date"] == "2026-10-18"
        assert seen["end_date"] == "2026-10-25"

    def test_list_sorted_by_miss_distance(self, neo_feed):
        client = _client(lambda request: httpx.Response(200, json=neo_feed))
        names = [n.name for n in client.list_asteroids(date(2026, 10, 20), date(2026, 10, 21))]
        assert names == ["(2020 AB)", "(2010 PK9)", "433 Eros"]

    def test_hazardous_only(self, neo_feed):
        client = _client(lambda request: httpx.Response(200, json=neo_feed))
        hazardous = client.get_hazardous(date(2026, 10, 20), date(2026, 10, 21))
        assert [n.id for n in hazardous] == ["3542519"]

    def test_http_error_propagates(self):
        client = _client(lambda request: httpx.Response(404, json={"error": "not found"}))
        with pytest.raises(httpx.HTTPStatusError):
            client.get_asteroid("missing")

    def test_errors_are_not_cached(self, neo_record):
        responses = [httpx.Response(500), httpx.Response(200, json=neo_record)]
        client = _client(lambda request: responses.pop(0))
        with pytest.raises(httpx.HTTPStatusError):
            client.get_asteroid("3542519")
        assert client.get_asteroid("3542519").id == "3542519"


def test_mask_key():
    assert mask_key("SECRET_KEY_123") == "SEC***123"
    assert mask_key("abc") == "***"
    assert mask_key(None) is None
