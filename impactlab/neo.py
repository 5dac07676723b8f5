from __future__ import annotations
import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional

import httpx

from .config import DEFAULT_NEO_BASE_URL
from .scaling_laws import ImpactParameters

DEFAULT_IMPACT_ANGLE_DEG = 45.0


def mask_key(s: Optional[str]) -> Optional[str]:
    if not s:
        return s
    return s[:3] + "***" + s[-3:] if len(s) > 6 else "***"


# -------------------------------
# Record normalisation
# -------------------------------

@dataclass(frozen=True)
class NeoRecord:
    id: str
    name: str
    nasa_jpl_url: str | None
    diameter_min_km: float
    diameter_max_km: float
    velocity_kms: float
    velocity_kmh: float
    miss_distance_km: float
    miss_distance_lunar: float
    miss_distance_au: float
    close_approach_date: str | None
    eccentricity: float
    semi_major_axis_au: float
    inclination_deg: float
    orbital_period_days: float
    is_hazardous: bool
    absolute_magnitude: float

    @property
    def diameter_avg_km(self) -> float:
        return (self.diameter_min_km + self.diameter_max_km) / 2.0


def _num(block: Dict[str, Any] | None, key: str) -> float:
    """NeoWs ships most numbers as strings; a missing value reads as 0."""
    if not block:
        return 0.0
    raw = block.get(key)
    return float(raw) if raw not in (None, "") else 0.0


def parse_neo(raw: Dict[str, Any]) -> NeoRecord:
    approaches = raw.get("close_approach_data") or []
    approach = approaches[0] if approaches else {}
    diameter = raw["estimated_diameter"]["kilometers"]
    orbital = raw.get("orbital_data") or {}

    return NeoRecord(
        id=str(raw["id"]),
        name=raw["name"],
        nasa_jpl_url=raw.get("nasa_jpl_url"),
        diameter_min_km=float(diameter["estimated_diameter_min"]),
        diameter_max_km=float(diameter["estimated_diameter_max"]),
        velocity_kms=_num(approach.get("relative_velocity"), "kilometers_per_second"),
        velocity_kmh=_num(approach.get("relative_velocity"), "kilometers_per_hour"),
        miss_distance_km=_num(approach.get("miss_distance"), "kilometers"),
        miss_distance_lunar=_num(approach.get("miss_distance"), "lunar"),
        miss_distance_au=_num(approach.get("miss_distance"), "astronomical"),
        close_approach_date=approach.get("close_approach_date_full"),
        eccentricity=_num(orbital, "eccentricity"),
        semi_major_axis_au=_num(orbital, "semi_major_axis"),
        inclination_deg=_num(orbital, "inclination"),
        orbital_period_days=_num(orbital, "orbital_period"),
        is_hazardous=bool(raw.get("is_potentially_hazardous_asteroid", False)),
        absolute_magnitude=float(raw["absolute_magnitude_h"]),
    )


def estimate_density(absolute_magnitude: float) -> float:
    """Bulk density (kg/m^3) guessed from brightness: dark C-type, S-type, dense M-type."""
    if absolute_magnitude > 20:
        return 1500.0
    if absolute_magnitude > 17:
        return 2500.0
    return 3500.0


def impact_parameters_from_neo(neo: NeoRecord,
                               angle_deg: float = DEFAULT_IMPACT_ANGLE_DEG) -> ImpactParameters:
    """Raises InvalidArgument when the record has no usable size or velocity."""
    return ImpactParameters(
        diameter_m=neo.diameter_avg_km * 1000.0,
        density_kgm3=estimate_density(neo.absolute_magnitude),
        velocity_kms=neo.velocity_kms,
        angle_deg=angle_deg,
    )


# -------------------------------
# Response cache
# -------------------------------

class TTLCache:
    """Explicit expiring cache; `clock` returns seconds (monotonic by default)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, tuple[Any, float]] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: Any, expires_at: float) -> None:
        now = self._clock()
        for stale in [k for k, (_, exp) in self._entries.items() if now >= exp]:
            del self._entries[stale]
        self._entries[key] = (value, expires_at)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        print("[neo.cache] cleared")


# -------------------------------
# NeoWs client
# -------------------------------

class NeoClient:
    """Thin NASA NeoWs client. HTTP errors propagate as httpx exceptions."""

    def __init__(self, api_key: str, cache: TTLCache,
                 base_url: str = DEFAULT_NEO_BASE_URL,
                 ttl_s: float = 3600.0, timeout_s: float = 15.0,
                 http_client: httpx.Client | None = None):
        self.api_key = api_key
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.ttl_s = ttl_s
        self._client = http_client or httpx.Client(timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    def _get_json(self, cache_key: str, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        cached = self.cache.get(cache_key)
        if cached is not None:
            print(f"[neo.cache] hit key={cache_key}")
            return cached

        url = f"{self.base_url}{path}"
        printable = dict(params, api_key=mask_key(self.api_key))
        print(f"[request] GET {url} params={printable}")
        r = self._client.get(url, params=dict(params, api_key=self.api_key))
        print(f"[http] status={r.status_code}")
        r.raise_for_status()
        data = r.json()
        self.cache.put(cache_key, data, self.cache.now() + self.ttl_s)
        return data

    def get_feed(self, start_date: date | None = None, end_date: date | None = None) -> Dict[str, Any]:
        start_date = start_date or date.today()
        end_date = end_date or (start_date + timedelta(days=7))
        start_s, end_s = start_date.isoformat(), end_date.isoformat()
        data = self._get_json(f"feed_{start_s}_{end_s}", "/feed",
                              {"start_date": start_s, "end_date": end_s})
        print(f"[neo.feed] element_count={data.get('element_count')}")
        return data

    def get_asteroid(self, asteroid_id: str) -> NeoRecord:
        data = self._get_json(f"asteroid_{asteroid_id}", f"/neo/{asteroid_id}", {})
        return parse_neo(data)

    def list_asteroids(self, start_date: date | None = None,
                       end_date: date | None = None) -> List[NeoRecord]:
        """All objects of the feed window, closest approach first."""
        feed = self.get_feed(start_date, end_date)
        records = [
            parse_neo(item)
            for items in (feed.get("near_earth_objects") or {}).values()
            for item in items
        ]
        return sorted(records, key=lambda n: n.miss_distance_km)

    def get_hazardous(self, start_date: date | None = None,
                      end_date: date | None = None) -> List[NeoRecord]:
        hazardous = [n for n in self.list_asteroids(start_date, end_date) if n.is_hazardous]
        print(f"[neo.hazardous] count={len(hazardous)}")
        return hazardous
