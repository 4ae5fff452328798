"""
Core domain models for the infrastructure map search.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# (west, south, east, north) in WGS84 degrees
BBox = Tuple[float, float, float, float]


class ResultType(str, Enum):
    """Semantic kind of a search result. Closed set."""
    HIGHWAY = "highway"
    ROAD = "road"
    STREET = "street"
    CITY = "city"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display label shown next to grouped results in the UI."""
        return _RESULT_TYPE_LABELS[self]


_RESULT_TYPE_LABELS = {
    ResultType.HIGHWAY: "Autostradă",
    ResultType.ROAD: "Drum Național",
    ResultType.STREET: "Stradă",
    ResultType.CITY: "Localitate",
    ResultType.OTHER: "Locație",
}

# Order in which result groups are listed by the search box.
RESULT_TYPE_ORDER: Tuple[ResultType, ...] = (
    ResultType.HIGHWAY,
    ResultType.ROAD,
    ResultType.STREET,
    ResultType.CITY,
    ResultType.OTHER,
)


@dataclass(frozen=True)
class SearchResult:
    """
    One geocoded candidate as handed to the caller.

    Built fresh for every query and never mutated afterwards.
    """
    id: str
    name: str
    display_name: str
    lat: float
    lng: float
    type: ResultType
    bbox: Optional[BBox] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "lat": self.lat,
            "lng": self.lng,
            "type": self.type.value,
            "bbox": list(self.bbox) if self.bbox else None,
        }


@dataclass
class CandidateRecord:
    """
    Working record used while a search response is being cleaned up.

    group_boxes collects every box reported for a road group during
    deduplication; ref is the OSM `ref` tag (e.g. "A2;E81") when Nominatim
    reported one, read before the name during extent enrichment. Neither
    survives into SearchResult.
    """
    id: str
    name: str
    display_name: str
    lat: float
    lng: float
    type: ResultType
    bbox: Optional[BBox] = None
    group_boxes: List[BBox] = field(default_factory=list)
    ref: Optional[str] = None

    def to_result(self) -> SearchResult:
        return SearchResult(
            id=self.id,
            name=self.name,
            display_name=self.display_name,
            lat=self.lat,
            lng=self.lng,
            type=self.type,
            bbox=self.bbox,
        )


@dataclass
class Waypoint:
    """A stop on a planned driving route."""
    lat: float
    lng: float
    name: Optional[str] = None


@dataclass
class RouteResult:
    """Driving path between waypoints."""
    geometry: Dict[str, Any]  # GeoJSON LineString
    distance_km: float
    duration_min: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "geometry": self.geometry,
            "distance_km": self.distance_km,
            "duration_min": self.duration_min,
        }
