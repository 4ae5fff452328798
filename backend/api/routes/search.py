"""
Search API routes.

Backs the map's search box.
"""
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from domain.models import RESULT_TYPE_ORDER
from services.geocoding import GeocodingError
from services.search import get_default_search_service

router = APIRouter()


class SearchResultResponse(BaseModel):
    id: str
    name: str
    displayName: str
    lat: float
    lng: float
    type: str
    typeLabel: str
    bbox: Optional[List[float]] = None


class ResultGroupResponse(BaseModel):
    type: str
    label: str
    ids: List[str]


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResultResponse]
    groups: List[ResultGroupResponse]


def group_results(results) -> List[ResultGroupResponse]:
    """Result ids per type in display order; types with no results are left out."""
    groups = []
    for rtype in RESULT_TYPE_ORDER:
        ids = [r.id for r in results if r.type is rtype]
        if ids:
            groups.append(ResultGroupResponse(type=rtype.value, label=rtype.label, ids=ids))
    return groups


@router.get("", response_model=SearchResponse)
def search_locations(q: str = Query("", max_length=200)):
    """
    Geocode a free-text query.

    Road results are merged per route name and carry an extent covering
    the whole route where one could be found.
    """
    service = get_default_search_service()
    try:
        results = service.search(q)
    except GeocodingError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return SearchResponse(
        query=q,
        results=[
            SearchResultResponse(**r.to_dict(), typeLabel=r.type.label)
            for r in results
        ],
        groups=group_results(results),
    )
