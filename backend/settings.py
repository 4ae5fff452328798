import os

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    return float(val)


class Settings:
    def __init__(self) -> None:
        # Upstream services
        self.NOMINATIM_BASE_URL: str = os.getenv(
            "NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org"
        ).rstrip("/")
        self.NOMINATIM_USER_AGENT: str | None = os.getenv("NOMINATIM_USER_AGENT")
        self.NOMINATIM_REFERER: str | None = os.getenv("NOMINATIM_REFERER")
        self.NOMINATIM_TIMEOUT: float = _as_float(os.getenv("NOMINATIM_TIMEOUT"), 10.0)
        self.OVERPASS_URL: str = os.getenv(
            "OVERPASS_URL", "https://overpass-api.de/api/interpreter"
        )
        self.OVERPASS_TIMEOUT: float = _as_float(os.getenv("OVERPASS_TIMEOUT"), 30.0)
        self.OSRM_BASE_URL: str = os.getenv(
            "OSRM_BASE_URL", "https://router.project-osrm.org"
        ).rstrip("/")
        self.OSRM_TIMEOUT: float = _as_float(os.getenv("OSRM_TIMEOUT"), 15.0)

        # Search behaviour
        self.SEARCH_COUNTRY_CODE: str = os.getenv("SEARCH_COUNTRY_CODE", "ro")
        self.SEARCH_COUNTRY_NAME: str = os.getenv("SEARCH_COUNTRY_NAME", "Romania")
        self.SEARCH_ACCEPT_LANGUAGE: str = os.getenv("SEARCH_ACCEPT_LANGUAGE", "ro,en")
        self.SEARCH_FETCH_LIMIT: int = _as_int(os.getenv("SEARCH_FETCH_LIMIT"), 50)
        self.SEARCH_RESULT_CAP: int = _as_int(os.getenv("SEARCH_RESULT_CAP"), 15)
        self.SEARCH_MIN_QUERY_LENGTH: int = _as_int(os.getenv("SEARCH_MIN_QUERY_LENGTH"), 2)

        # Extent enrichment. Boxes narrower or shorter than the threshold
        # (degrees, roughly 30 km) are re-queried against Overpass.
        self.EXTENT_ENRICHMENT_ENABLED: bool = _as_bool(
            os.getenv("EXTENT_ENRICHMENT_ENABLED"), True
        )
        self.SMALL_BBOX_THRESHOLD_DEG: float = _as_float(
            os.getenv("SMALL_BBOX_THRESHOLD_DEG"), 0.3
        )
        self.ENRICH_MAX_WORKERS: int = _as_int(os.getenv("ENRICH_MAX_WORKERS"), 8)


settings = Settings()
