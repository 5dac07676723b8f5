from __future__ import annotations
from dataclasses import dataclass
from math import pi, sin, cos, sqrt, acos, atan2, radians, isfinite
from typing import Iterable, Literal, Mapping

from .cities import City, MAJOR_CITIES
from .errors import InvalidArgument

R_EARTH_KM = 6371.0
NEAR_CITY_KM = 50.0
BACKGROUND_FACTOR = 0.3  # share of base density outside listed cities

# People per km^2 by area type
AREA_DENSITIES = {
    "megacity":   15000.0,
    "major_city":  8000.0,
    "city":        3000.0,
    "suburban":    1000.0,
    "rural":         50.0,
    "remote":         5.0,
    "ocean":          0.0,
}

AreaType = Literal["megacity", "major_city", "city", "suburban", "rural", "remote", "ocean"]
CitySeverity = Literal["total", "catastrophic", "severe", "moderate", "light"]


@dataclass(frozen=True)
class ImpactLocation:
    lat: float
    lon: float

    def __post_init__(self):
        if not isfinite(self.lat) or not -90.0 <= self.lat <= 90.0:
            raise InvalidArgument(f"lat must lie in [-90, 90], got {self.lat!r}.")
        if not isfinite(self.lon) or not -180.0 <= self.lon <= 180.0:
            raise InvalidArgument(f"lon must lie in [-180, 180], got {self.lon!r}.")


@dataclass(frozen=True)
class AffectedCity:
    city: City
    distance_km: float
    severity: CitySeverity


@dataclass(frozen=True)
class ZoneCasualties:
    population: int
    deaths: int
    injured: int
    radius_km: float


# --- geometry helpers ---

def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance on a spherical Earth."""
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = (sin(d_lat / 2) ** 2
         + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2)
    return R_EARTH_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def _area_km2_of_circle(radius_km: float) -> float:
    return pi * radius_km * radius_km


def city_effective_radius_km(population: int) -> float:
    """Radius of a disk holding `population` at megacity density."""
    return sqrt(population / (pi * AREA_DENSITIES["megacity"]))


def calculate_overlap(distance: float, radius1: float, radius2: float) -> float:
    """
    Share in [0, 1] of circle 2 (the city disk) covered by circle 1 (the query),
    with centres `distance` km apart. Grows with radius1 and never jumps down.
    A circle with no area (radius <= 0) overlaps nothing.
    """
    if radius1 <= 0.0 or radius2 <= 0.0:
        return 0.0
    if distance >= radius1 + radius2:
        return 0.0
    if distance <= radius2 - radius1:
        return (radius1 / radius2) ** 2
    if distance <= radius1 - radius2:
        return 1.0

    r1s, r2s, d = radius1**2, radius2**2, distance
    a1 = acos(max(-1.0, min(1.0, (d**2 + r1s - r2s) / (2.0 * d * radius1))))
    a2 = acos(max(-1.0, min(1.0, (d**2 + r2s - r1s) / (2.0 * d * radius2))))
    kite = (-d + radius1 + radius2) * (d + radius1 - radius2) * (d - radius1 + radius2) * (d + radius1 + radius2)
    lens = r1s * a1 + r2s * a2 - 0.5 * sqrt(max(0.0, kite))
    return max(0.0, min(1.0, lens / (pi * r2s)))


# --- area classification (coarse by construction) ---

def is_ocean_location(lat: float, lon: float) -> bool:
    # Pacific
    if lon > 140 or lon < -80:
        if abs(lat) < 60:
            return True
    # Atlantic
    if -80 < lon < -10:
        if -60 < lat < 10:
            return True
    # Indian
    if 40 < lon < 120:
        if -60 < lat < 10:
            return True
    return False


def classify_area(lat: float, lon: float, cities: Iterable[City] = MAJOR_CITIES) -> AreaType:
    for city in cities:
        if haversine_km(lat, lon, city.lat, city.lon) < NEAR_CITY_KM:
            if city.population > 10_000_000:
                return "megacity"
            if city.population > 5_000_000:
                return "major_city"
            return "city"

    if is_ocean_location(lat, lon):
        return "ocean"

    abs_lat = abs(lat)
    if abs_lat > 60:
        return "remote"
    if abs_lat > 45:
        return "rural"
    return "suburban"


def severity_for_ratio(distance_km: float, radius_km: float) -> CitySeverity:
    ratio = distance_km / radius_km if radius_km > 0.0 else 0.0
    if ratio < 0.2:
        return "total"
    if ratio < 0.4:
        return "catastrophic"
    if ratio < 0.6:
        return "severe"
    if ratio < 0.8:
        return "moderate"
    return "light"


def _check_radius(radius_km: float) -> None:
    if not isfinite(radius_km) or radius_km < 0.0:
        raise InvalidArgument(f"radius_km must be a non-negative finite number, got {radius_km!r}.")


class PopulationEstimator:
    """
    Affected-population estimate around a fixed impact point.

    Each listed city is treated as a uniform disk at megacity density and
    weighted by its overlap with the query circle; a background density from
    the impact point's area type covers everything else.
    """

    def __init__(self, location: ImpactLocation, cities: Iterable[City] = MAJOR_CITIES):
        self.location = location
        self.cities = tuple(cities)
        self.area_type: AreaType = classify_area(location.lat, location.lon, self.cities)
        self._distances = tuple(
            haversine_km(location.lat, location.lon, c.lat, c.lon) for c in self.cities
        )

    @property
    def background_density(self) -> float:
        return AREA_DENSITIES[self.area_type]

    def estimate_population_in_radius(self, radius_km: float) -> int:
        _check_radius(radius_km)
        total = 0.0
        for city, distance in zip(self.cities, self._distances):
            city_r = city_effective_radius_km(city.population)
            if distance <= radius_km + city_r:
                total += city.population * calculate_overlap(distance, radius_km, city_r)

        total += _area_km2_of_circle(radius_km) * self.background_density * BACKGROUND_FACTOR
        return round(total)

    def get_affected_cities(self, radius_km: float) -> list[AffectedCity]:
        _check_radius(radius_km)
        affected = [
            AffectedCity(city=city, distance_km=distance,
                         severity=severity_for_ratio(distance, radius_km))
            for city, distance in zip(self.cities, self._distances)
            if distance <= radius_km
        ]
        return sorted(affected, key=lambda a: a.distance_km)

    def casualties_by_zone(self, zones: Mapping[str, tuple[float, float]]) -> dict[str, ZoneCasualties]:
        """zones: name -> (radius_km, mortality_rate in [0, 1])."""
        out = {}
        for name, (radius_km, mortality_rate) in zones.items():
            if not 0.0 <= mortality_rate <= 1.0:
                raise InvalidArgument(f"mortality_rate for '{name}' must lie in [0, 1], got {mortality_rate!r}.")
            population = self.estimate_population_in_radius(radius_km)
            out[name] = ZoneCasualties(
                population=population,
                deaths=round(population * mortality_rate),
                injured=round(population * (1.0 - mortality_rate) * 0.8),
                radius_km=radius_km,
            )
        return out
