"""
Driving routes between waypoints using the public OSRM demo server.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests

from domain.models import RouteResult, Waypoint
from services.geocoding import get_session
from settings import Settings, settings

logger = logging.getLogger(__name__)


class RoutingError(RuntimeError):
    """The routing backend could not be reached."""


def fetch_route(
    waypoints: Sequence[Waypoint],
    *,
    session: Optional[requests.Session] = None,
    cfg: Settings = settings,
) -> Optional[RouteResult]:
    """
    Ask OSRM for a driving route through the waypoints, in order.

    Returns None for fewer than two waypoints, a non-2xx answer or an empty
    route list. Transport errors raise RoutingError.
    """
    if len(waypoints) < 2:
        return None
    coords = ";".join(f"{w.lng},{w.lat}" for w in waypoints)
    url = f"{cfg.OSRM_BASE_URL}/route/v1/driving/{coords}"
    http = session or get_session()
    try:
        resp = http.get(
            url,
            params={"overview": "full", "geometries": "geojson"},
            timeout=cfg.OSRM_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.warning("OSRM route error for %d waypoints: %s", len(waypoints), exc)
        raise RoutingError(f"OSRM request failed: {exc}") from exc

    if not resp.ok:
        logger.warning("OSRM returned HTTP %s", resp.status_code)
        return None
    try:
        data = resp.json()
    except ValueError:
        return None

    routes = data.get("routes") if isinstance(data, dict) else None
    if not routes:
        return None
    route = routes[0]
    return RouteResult(
        geometry=route["geometry"],
        distance_km=round(route["distance"] / 1000, 1),
        duration_min=round(route["duration"] / 60),
    )
