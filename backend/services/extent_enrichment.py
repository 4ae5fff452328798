"""
Widen the extent of road results using Overpass.

Nominatim often only knows a few kilometres of a motorway even after all
of its segments have been merged. For such records we ask Overpass for
every way/relation carrying the road's reference code and use the union
of their bounds instead.
"""
from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, List, Optional

import requests

from domain.models import BBox, CandidateRecord
from services.bbox import (
    ROMANIA_BBOX,
    bbox_has_area,
    bbox_is_small,
    center_within,
    merge_bboxes,
    parse_overpass_bounds,
)
from services.geocoding import FALLBACK_UA, get_session
from services.result_types import is_linear
from settings import Settings, settings

logger = logging.getLogger(__name__)

# "A1", "DN7", "DN1A", "DJ107", "DC12" anywhere in the name.
_ROAD_CODE_RE = re.compile(r"\b(A|DN|DJ|DC)\s?(\d{1,4}[A-Z]?)\b", re.IGNORECASE)
# Spelled-out forms: "Autostrada 1", "Drumul Național 7".
_SPELLED_MOTORWAY_RE = re.compile(r"\bautostrada\s+(\d{1,3})\b", re.IGNORECASE)
_SPELLED_NATIONAL_RE = re.compile(
    r"\bdrum(?:ul)?\s+na[tțţ]ional\s+(\d{1,3}[A-Z]?)\b", re.IGNORECASE
)
_CODE_PARTS_RE = re.compile(r"^([A-Z]+)(\d.*)$")


def extract_road_code(name: str) -> Optional[str]:
    """
    Pull a normalized road reference ("A1", "DN7") out of a name or query.

    Returns None when nothing matches; callers skip enrichment rather than
    guess a code.
    """
    if not name:
        return None
    match = _ROAD_CODE_RE.search(name)
    if match:
        return f"{match.group(1)}{match.group(2)}".upper()
    match = _SPELLED_MOTORWAY_RE.search(name)
    if match:
        return f"A{match.group(1)}"
    match = _SPELLED_NATIONAL_RE.search(name)
    if match:
        return f"DN{match.group(1)}".upper()
    return None


@dataclass(frozen=True)
class OverpassStrategy:
    name: str
    build_query: Callable[[str, Settings], str]


def _country_area_query(code: str, cfg: Settings) -> str:
    iso = cfg.SEARCH_COUNTRY_CODE.upper()
    return (
        f"[out:json][timeout:{int(cfg.OVERPASS_TIMEOUT)}];"
        f'area["ISO3166-1"="{iso}"][admin_level=2]->.country;'
        "("
        f'way["highway"]["ref"="{code}"](area.country);'
        f'relation["type"="route"]["route"="road"]["ref"="{code}"](area.country);'
        ");"
        "out tags bb;"
    )


def _ref_pattern(code: str) -> str:
    """Overpass regex matching code inside a ';' separated ref list, e.g. 'DN 7;E85'."""
    match = _CODE_PARTS_RE.match(code)
    if match:
        letters, number = match.groups()
        body = f"{letters} ?{number}"
    else:
        body = code
    return f"(^|;) *{body} *(;|$)"


def _country_bbox_query(code: str, cfg: Settings) -> str:
    west, south, east, north = ROMANIA_BBOX
    area = f"({south},{west},{north},{east})"
    pattern = _ref_pattern(code)
    return (
        f"[out:json][timeout:{int(cfg.OVERPASS_TIMEOUT)}];"
        "("
        f'way["ref"~"{pattern}",i]{area};'
        f'relation["ref"~"{pattern}",i]{area};'
        ");"
        "out tags bb;"
    )


# Tried in order; the first one producing a usable extent wins.
OVERPASS_STRATEGIES: List[OverpassStrategy] = [
    OverpassStrategy("country_area", _country_area_query),
    OverpassStrategy("country_bbox", _country_bbox_query),
]


def _overpass_headers(cfg: Settings) -> dict[str, str]:
    return {
        "User-Agent": cfg.NOMINATIM_USER_AGENT or FALLBACK_UA,
        "Content-Type": "text/plain; charset=utf-8",
    }


def fetch_overpass_extent(
    query: str,
    *,
    session: Optional[requests.Session] = None,
    cfg: Settings = settings,
) -> Optional[BBox]:
    """
    POST one Overpass QL query and union the bounds of what it matched.

    Elements whose bounds are centred outside the country are ignored.
    Returns None on any transport or parsing problem, or when nothing
    usable matched.
    """
    http = session or get_session()
    try:
        resp = http.post(
            cfg.OVERPASS_URL,
            data=query.encode("utf-8"),
            headers=_overpass_headers(cfg),
            timeout=cfg.OVERPASS_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.info("Overpass query failed: %s", exc)
        return None

    elements = data.get("elements") if isinstance(data, dict) else None
    if not isinstance(elements, list):
        return None
    boxes: List[BBox] = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        bounds = parse_overpass_bounds(element.get("bounds"))
        if bounds and center_within(bounds):
            boxes.append(bounds)
    return merge_bboxes(boxes)


def needs_enrichment(cand: CandidateRecord, cfg: Settings = settings) -> bool:
    return is_linear(cand.type) and bbox_is_small(cand.bbox, cfg.SMALL_BBOX_THRESHOLD_DEG)


def enrich_candidate(
    cand: CandidateRecord,
    *,
    session: Optional[requests.Session] = None,
    cfg: Settings = settings,
) -> CandidateRecord:
    """
    Replace a too-small road extent with one from Overpass.

    Leaves the record alone when it is not a road, when its box is already
    large enough, when no road code can be read from its ref tag or name,
    or when every strategy comes back empty.
    """
    if not needs_enrichment(cand, cfg):
        return cand
    # The backend's own ref tag wins over whatever the name spells out.
    code = extract_road_code(cand.ref or "") or extract_road_code(cand.name)
    if code is None:
        logger.debug("No road code for %r; keeping extent", cand.name)
        return cand

    for strategy in OVERPASS_STRATEGIES:
        extent = fetch_overpass_extent(
            strategy.build_query(code, cfg), session=session, cfg=cfg
        )
        if bbox_has_area(extent):
            logger.debug("Extent for %s from %s: %s", code, strategy.name, extent)
            cand.bbox = extent
            return cand
        logger.debug("Strategy %s found nothing for %s", strategy.name, code)
    return cand


def enrich_candidates(
    candidates: List[CandidateRecord],
    *,
    session: Optional[requests.Session] = None,
    cfg: Settings = settings,
) -> List[CandidateRecord]:
    """
    Enrich every flagged record concurrently; output keeps input order.
    """
    results = list(candidates)
    flagged = [idx for idx, cand in enumerate(results) if needs_enrichment(cand, cfg)]
    if not flagged:
        return results

    workers = max(1, min(cfg.ENRICH_MAX_WORKERS, len(flagged)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(enrich_candidate, results[idx], session=session, cfg=cfg): idx
            for idx in flagged
        }
        for f in as_completed(futures):
            idx = futures[f]
            try:
                results[idx] = f.result()
            except Exception as exc:
                logger.info("Extent enrichment failed for %r: %s", results[idx].name, exc)
    return results
