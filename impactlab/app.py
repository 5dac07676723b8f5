from datetime import date
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from .config import Settings, load_settings
from .errors import InvalidArgument
from .neo import NeoClient, NeoRecord, TTLCache, impact_parameters_from_neo
from .population import ImpactLocation, PopulationEstimator
from .report import generate_report
from .scaling_laws import ImpactParameters, compute_physical_outputs

app = FastAPI(title="Impact Lab (asteroid impact effects & casualty estimates)", version="1.0.0")
app.state.neo_cache = TTLCache()


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def get_neo_client(settings: Settings = Depends(get_settings)) -> Iterator[NeoClient]:
    client = NeoClient(
        api_key=settings.nasa_api_key,
        cache=app.state.neo_cache,
        base_url=settings.neo_base_url,
        ttl_s=settings.neo_cache_ttl_s,
        timeout_s=settings.http_timeout_s,
    )
    try:
        yield client
    finally:
        client.close()


# -------------------------------
# Health
# -------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}

# -------------------------------
# Impact simulation endpoints
# -------------------------------

class ImpactParametersIn(BaseModel):
    diameter_m: float = Field(..., gt=0, description="Impactor diameter in meters")
    density_kgm3: float = Field(..., gt=0, description="Bulk density in kg/m^3")
    velocity_kms: float = Field(..., gt=0, description="Impact speed in km/s")
    angle_deg: float = Field(45.0, gt=0, le=90, description="Entry angle to horizontal in degrees")

class LocationIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

class ImpactRequest(BaseModel):
    parameters: ImpactParametersIn
    location: LocationIn


def _build_params(p: ImpactParametersIn) -> ImpactParameters:
    try:
        return ImpactParameters(
            diameter_m=p.diameter_m,
            density_kgm3=p.density_kgm3,
            velocity_kms=p.velocity_kms,
            angle_deg=p.angle_deg,
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))

def _build_location(lat: float, lon: float) -> ImpactLocation:
    try:
        return ImpactLocation(lat=lat, lon=lon)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))

def _report_payload(params: ImpactParameters, location: ImpactLocation) -> Dict[str, Any]:
    outputs = compute_physical_outputs(params)
    report = generate_report(params, location, outputs)
    return {
        "parameters": vars(params),
        "location": vars(location),
        "physical": vars(outputs),
        "report": report.to_dict(),
    }


@app.post("/impact/physics")
def impact_physics(p: ImpactParametersIn):
    params = _build_params(p)
    print(f"[physics] diameter_m={params.diameter_m} velocity_kms={params.velocity_kms} "
          f"density={params.density_kgm3} angle={params.angle_deg}")
    return vars(compute_physical_outputs(params))


@app.post("/impact/report")
def impact_report(req: ImpactRequest):
    params = _build_params(req.parameters)
    location = _build_location(req.location.lat, req.location.lon)
    return _report_payload(params, location)

# ---------------------------------
# Population
# ---------------------------------
@app.get("/population")
def get_population(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    radius: float = Query(..., ge=0, description="Radius in kilometers"),
):
    location = _build_location(lat, lon)
    estimator = PopulationEstimator(location)
    print(f"[population] lat={lat} lon={lon} radius_km={radius} area_type={estimator.area_type}")
    return {
        "population": estimator.estimate_population_in_radius(radius),
        "area_type": estimator.area_type,
        "radius_used_km": radius,
        "affected_cities": [
            {
                "name": a.city.name,
                "population": a.city.population,
                "distance_km": a.distance_km,
                "severity": a.severity,
            }
            for a in estimator.get_affected_cities(radius)
        ],
    }

# ---------------------------------
# NASA NEO endpoints
# ---------------------------------

def _neo_summary(n: NeoRecord) -> Dict[str, Any]:
    out = vars(n).copy()
    out["diameter_avg_km"] = n.diameter_avg_km
    return out

def _upstream_error(e: httpx.HTTPError) -> HTTPException:
    print(f"[neo.error] {e!r}")
    return HTTPException(status_code=502, detail=f"Error fetching data from NASA NeoWs: {str(e)}")


@app.get("/neo/feed")
def neo_feed(
    start_date: Optional[date] = Query(None, description="YYYY-MM-DD, defaults to today"),
    end_date: Optional[date] = Query(None, description="YYYY-MM-DD, defaults to start + 7 days"),
    client: NeoClient = Depends(get_neo_client),
) -> List[Dict[str, Any]]:
    try:
        return [_neo_summary(n) for n in client.list_asteroids(start_date, end_date)]
    except httpx.HTTPError as e:
        raise _upstream_error(e)


@app.get("/neo/hazardous")
def neo_hazardous(client: NeoClient = Depends(get_neo_client)) -> List[Dict[str, Any]]:
    try:
        return [_neo_summary(n) for n in client.get_hazardous()]
    except httpx.HTTPError as e:
        raise _upstream_error(e)


@app.get("/neo/{asteroid_id}/report")
def neo_report(
    asteroid_id: str,
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    angle_deg: float = Query(45.0, gt=0, le=90, description="Assumed entry angle to horizontal"),
    client: NeoClient = Depends(get_neo_client),
):
    try:
        neo = client.get_asteroid(asteroid_id)
    except httpx.HTTPError as e:
        raise _upstream_error(e)

    try:
        params = impact_parameters_from_neo(neo, angle_deg=angle_deg)
    except InvalidArgument as e:
        raise HTTPException(status_code=422, detail=f"NEO {asteroid_id} cannot be simulated: {e}")
    location = _build_location(lat, lon)

    payload = _report_payload(params, location)
    payload["neo"] = _neo_summary(neo)
    return payload
