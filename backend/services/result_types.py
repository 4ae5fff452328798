from typing import Optional

from domain.models import ResultType

# Nominatim category values we care about.
ROAD_CATEGORY = "highway"
PLACE_CATEGORY = "place"

_ROAD_SUBTYPES = {
    "motorway": ResultType.HIGHWAY,
    "trunk": ResultType.HIGHWAY,
    "primary": ResultType.ROAD,
    "secondary": ResultType.ROAD,
    "tertiary": ResultType.ROAD,
    "residential": ResultType.STREET,
    "living_street": ResultType.STREET,
}

_PLACE_SUBTYPES = {
    "city": ResultType.CITY,
    "town": ResultType.CITY,
    "village": ResultType.CITY,
}

LINEAR_TYPES = frozenset({ResultType.HIGHWAY, ResultType.ROAD})


def classify(subtype: Optional[str], category: Optional[str]) -> ResultType:
    """Map a Nominatim (category, type) pair onto a ResultType.

    Unknown road subtypes count as roads and unknown place subtypes as
    cities; every other category is OTHER.
    """
    if category == ROAD_CATEGORY:
        return _ROAD_SUBTYPES.get(subtype or "", ResultType.ROAD)
    if category == PLACE_CATEGORY:
        return _PLACE_SUBTYPES.get(subtype or "", ResultType.CITY)
    return ResultType.OTHER


def is_linear(result_type: ResultType) -> bool:
    return result_type in LINEAR_TYPES
