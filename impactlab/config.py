import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import InvalidArgument

DEFAULT_NEO_BASE_URL = "https://api.nasa.gov/neo/rest/v1"


@dataclass(frozen=True)
class Settings:
    nasa_api_key: str = "DEMO_KEY"
    neo_base_url: str = DEFAULT_NEO_BASE_URL
    neo_cache_ttl_s: float = 3600.0
    http_timeout_s: float = 15.0


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise InvalidArgument(f"{name} must be a number, got {raw!r}.")
    if value <= 0:
        raise InvalidArgument(f"{name} must be positive, got {raw!r}.")
    return value


def load_settings() -> Settings:
    """Read settings from the environment, after loading a local .env if present."""
    load_dotenv()
    return Settings(
        nasa_api_key=os.getenv("NASA_API_KEY") or "DEMO_KEY",
        neo_base_url=(os.getenv("NASA_NEO_BASE_URL") or DEFAULT_NEO_BASE_URL).rstrip("/"),
        neo_cache_ttl_s=_float_env("NEO_CACHE_TTL_S", 3600.0),
        http_timeout_s=_float_env("HTTP_TIMEOUT_S", 15.0),
    )
