"""
Location search used by the map's search box.

Pipeline: Nominatim search -> classify -> merge road segments -> widen
small road extents via Overpass -> cap the list.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import requests

from domain.models import SearchResult
from services.dedupe import dedupe_linear_results
from services.extent_enrichment import enrich_candidates
from services.geocoding import fetch_candidates, to_candidates
from settings import Settings, settings


class SearchService:
    """
    Search pipeline bound to one configuration.

    Without an explicit session every thread (API worker or enrichment
    worker) uses its own from services.geocoding.get_session. A session
    passed in is shared by all of them and must tolerate that.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        cfg: Optional[Settings] = None,
    ):
        self.session = session
        self.cfg = cfg or settings
        self.logger = logging.getLogger(__name__)

    def search(self, query: str) -> List[SearchResult]:
        """
        Search for places, roads and highways matching query.

        Empty or too-short queries return [] without touching the network.
        GeocodingError from the primary request propagates; enrichment
        problems never do.
        """
        trimmed = (query or "").strip()
        if not trimmed or len(trimmed) < self.cfg.SEARCH_MIN_QUERY_LENGTH:
            return []

        raw = fetch_candidates(trimmed, session=self.session, cfg=self.cfg)
        candidates = to_candidates(raw)
        unique = dedupe_linear_results(candidates)
        # Enrichment keeps length and order, so records past the cap are dropped first.
        kept = unique[: self.cfg.SEARCH_RESULT_CAP]
        if self.cfg.EXTENT_ENRICHMENT_ENABLED:
            kept = enrich_candidates(kept, session=self.session, cfg=self.cfg)

        results = [cand.to_result() for cand in kept]
        self.logger.debug(
            "SearchService.search: q=%r raw=%d unique=%d returned=%d",
            trimmed,
            len(raw),
            len(unique),
            len(results),
        )
        return results


_default_search_service: Optional[SearchService] = None


def get_default_search_service() -> SearchService:
    global _default_search_service
    if _default_search_service is None:
        _default_search_service = SearchService()
    return _default_search_service


def search(query: str) -> List[SearchResult]:
    return get_default_search_service().search(query)
