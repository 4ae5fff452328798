"""Forward geocoding against OpenStreetMap Nominatim.

Raw Nominatim records are turned into CandidateRecord objects here; the
rest of the search pipeline never looks at Nominatim JSON directly.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Optional

import requests

from domain.models import CandidateRecord
from services.bbox import parse_nominatim_bbox
from services.result_types import classify
from settings import Settings, settings

logger = logging.getLogger(__name__)
# requests.Session is not guaranteed thread-safe; enrichment workers and
# concurrent API requests each get their own.
_local = threading.local()
_logged_ua = False

FALLBACK_UA = "ro-inframap/0.1 (contact: example@example.com)"

# Motorway / national / county / communal road codes, or the spelled-out words.
_ROAD_QUERY_RE = re.compile(
    r"^(a\d+|dn\d+|dj\d+|dc\d+|autostrada|drum\s+na[tțţ]ional)",
    re.IGNORECASE,
)


class GeocodingError(RuntimeError):
    """The primary geocoding request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def get_session() -> requests.Session:
    """The calling thread's shared requests.Session, created on first use."""
    session = getattr(_local, "session", None)
    if session is None:
        session = requests.Session()
        _local.session = session
    return session


def redact_email(ua: str) -> str:
    if "@" not in ua:
        return ua
    return re.sub(r"\S+@\S+", "<redacted>", ua)


def build_headers(cfg: Settings = settings) -> dict[str, str]:
    """Headers sent to Nominatim; the UA is required by its usage policy."""
    global _logged_ua
    ua = cfg.NOMINATIM_USER_AGENT
    if ua is None:
        ua = FALLBACK_UA
        if not _logged_ua:
            logger.warning(
                "NOMINATIM_USER_AGENT not set in environment; using fallback UA. "
                "This may violate Nominatim usage policy."
            )
    if not _logged_ua:
        logger.debug("Nominatim User-Agent: %s", redact_email(ua))
        _logged_ua = True
    headers = {
        "User-Agent": ua,
        "Accept-Language": cfg.SEARCH_ACCEPT_LANGUAGE,
    }
    if cfg.NOMINATIM_REFERER:
        headers["Referer"] = cfg.NOMINATIM_REFERER
    return headers


def is_road_query(query: str) -> bool:
    """Does the query look like a road code or a road-type word?"""
    return bool(_ROAD_QUERY_RE.match(query.strip()))


def build_search_query(query: str, cfg: Settings = settings) -> str:
    """Strip the query and bias road queries toward the country's network."""
    trimmed = query.strip()
    if is_road_query(trimmed):
        return f"{trimmed}, {cfg.SEARCH_COUNTRY_NAME}"
    return trimmed


def fetch_candidates(
    query: str,
    *,
    session: Optional[requests.Session] = None,
    cfg: Settings = settings,
) -> list[dict[str, Any]]:
    """
    Run one Nominatim /search request and return its raw records.

    Backend-side dedupe is switched off; the pipeline groups road segments
    itself. Raises GeocodingError for transport errors, non-2xx responses
    and payloads that are not a JSON list.
    """
    params = {
        "q": build_search_query(query, cfg),
        "format": "jsonv2",
        "countrycodes": cfg.SEARCH_COUNTRY_CODE,
        "addressdetails": "1",
        "namedetails": "1",
        "limit": str(cfg.SEARCH_FETCH_LIMIT),
        "dedupe": "0",
    }
    http = session or get_session()
    url = f"{cfg.NOMINATIM_BASE_URL}/search"
    try:
        resp = http.get(url, params=params, headers=build_headers(cfg), timeout=cfg.NOMINATIM_TIMEOUT)
    except requests.RequestException as exc:
        logger.warning("Nominatim search error for q=%r: %s", params["q"], exc)
        raise GeocodingError(f"Nominatim request failed: {exc}") from exc

    if not resp.ok:
        logger.warning("Nominatim search for q=%r returned HTTP %s", params["q"], resp.status_code)
        raise GeocodingError(
            f"Nominatim request failed with HTTP {resp.status_code}",
            status_code=resp.status_code,
        )

    try:
        data = resp.json()
    except ValueError as exc:
        logger.warning("Nominatim search JSON error for q=%r: %s", params["q"], exc)
        raise GeocodingError(f"Nominatim returned invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise GeocodingError("Unexpected Nominatim response format")
    return [item for item in data if isinstance(item, dict)]


def _display_name_head(display_name: str) -> str:
    return display_name.split(",")[0].strip()


def to_candidate(item: dict[str, Any], idx: int) -> Optional[CandidateRecord]:
    """Convert one raw Nominatim record; None when it has no usable position."""
    try:
        lat = float(item["lat"])
        lng = float(item["lon"])
    except (KeyError, TypeError, ValueError):
        logger.debug("Skipping Nominatim record %s without coordinates", idx)
        return None

    display_name = str(item.get("display_name") or "")
    namedetails = item.get("namedetails") or {}
    if not isinstance(namedetails, dict):
        namedetails = {}
    name = namedetails.get("name")
    ref = namedetails.get("ref") or None
    if not name:
        name = _display_name_head(display_name)

    osm_id = item.get("osm_id")
    # jsonv2 calls it "category"; the plain json format uses "class".
    category = item.get("category") or item.get("class")
    bbox = parse_nominatim_bbox(item.get("boundingbox"))
    return CandidateRecord(
        id=str(osm_id) if osm_id is not None else str(idx),
        name=name,
        display_name=display_name,
        lat=lat,
        lng=lng,
        type=classify(item.get("type"), category),
        bbox=bbox,
        group_boxes=[bbox] if bbox else [],
        ref=ref,
    )


def to_candidates(items: list[dict[str, Any]]) -> list[CandidateRecord]:
    """Convert a page of records, keeping ids unique within the page."""
    candidates: list[CandidateRecord] = []
    seen_ids: set[str] = set()
    for idx, item in enumerate(items):
        cand = to_candidate(item, idx)
        if cand is None:
            continue
        if cand.id in seen_ids:
            cand.id = f"{cand.id}-{idx}"
        seen_ids.add(cand.id)
        candidates.append(cand)
    return candidates
