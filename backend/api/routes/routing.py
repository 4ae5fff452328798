"""
Route planning API routes.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from domain.models import Waypoint
from services.routing import RoutingError, fetch_route

router = APIRouter()


class WaypointRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    name: Optional[str] = None


class RouteRequest(BaseModel):
    waypoints: List[WaypointRequest]


class RouteResponse(BaseModel):
    geometry: Dict[str, Any]
    distance_km: float
    duration_min: int


@router.post("", response_model=RouteResponse)
def plan_route(payload: RouteRequest):
    """Driving route through the waypoints in the given order."""
    if len(payload.waypoints) < 2:
        raise HTTPException(status_code=400, detail="At least two waypoints are required")

    waypoints = [Waypoint(lat=w.lat, lng=w.lng, name=w.name) for w in payload.waypoints]
    try:
        route = fetch_route(waypoints)
    except RoutingError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    if route is None:
        raise HTTPException(status_code=404, detail="No route found")
    return RouteResponse(**route.to_dict())
