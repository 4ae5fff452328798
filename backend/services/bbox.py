"""
Bounding box helpers.

Boxes are (west, south, east, north) tuples in degrees throughout the
search pipeline. Nominatim and Overpass each report extents in their own
order; the parse helpers here are the only place that knows about that.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Optional, Sequence

from domain.models import BBox

# Approximate country rectangle, tight enough to exclude most of Serbia/Bulgaria.
ROMANIA_BBOX: BBox = (20.2, 43.6, 30.0, 48.3)


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def make_bbox(west: float, south: float, east: float, north: float) -> Optional[BBox]:
    """Return a box, or None when the corners are not finite or are inverted."""
    if not _finite(west, south, east, north):
        return None
    if west > east or south > north:
        return None
    return (west, south, east, north)


def parse_nominatim_bbox(raw: Any) -> Optional[BBox]:
    """
    Parse a Nominatim `boundingbox` field.

    Nominatim reports [south, north, west, east] as strings. Anything that
    does not parse is treated as an absent extent.
    """
    if not isinstance(raw, (list, tuple)) or len(raw) != 4:
        return None
    try:
        south, north, west, east = (float(v) for v in raw)
    except (TypeError, ValueError):
        return None
    return make_bbox(west, south, east, north)


def parse_overpass_bounds(raw: Any) -> Optional[BBox]:
    """Parse an Overpass `bounds` object (minlat/minlon/maxlat/maxlon)."""
    if not isinstance(raw, dict):
        return None
    try:
        return make_bbox(
            float(raw["minlon"]),
            float(raw["minlat"]),
            float(raw["maxlon"]),
            float(raw["maxlat"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


def merge_bboxes(boxes: Iterable[BBox]) -> Optional[BBox]:
    """Smallest box enclosing every input box; None for no boxes."""
    boxes = list(boxes)
    if not boxes:
        return None
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def bbox_size(bbox: Sequence[float]) -> tuple[float, float]:
    """(width, height) in degrees."""
    west, south, east, north = bbox
    return (east - west, north - south)


def bbox_is_small(bbox: Optional[BBox], threshold: float) -> bool:
    """True when the box is missing or narrower/shorter than threshold degrees."""
    if bbox is None:
        return True
    width, height = bbox_size(bbox)
    return width < threshold or height < threshold


def bbox_has_area(bbox: Optional[BBox]) -> bool:
    if bbox is None:
        return False
    width, height = bbox_size(bbox)
    return width > 0 and height > 0


def bbox_center(bbox: BBox) -> tuple[float, float]:
    """(lng, lat) of the box centre."""
    west, south, east, north = bbox
    return ((west + east) / 2.0, (south + north) / 2.0)


def center_within(bbox: BBox, area: BBox = ROMANIA_BBOX) -> bool:
    """True when the centre of bbox lies strictly inside area."""
    lng, lat = bbox_center(bbox)
    return area[0] < lng < area[2] and area[1] < lat < area[3]
