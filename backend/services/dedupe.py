"""
Collapse road segments that Nominatim reports as separate records.

A motorway usually comes back as many disjoint ways sharing one name. The
map wants one entry per named route with a single extent covering all of
its segments.
"""
from typing import Dict, List

from domain.models import CandidateRecord
from services.bbox import merge_bboxes
from services.result_types import is_linear


def dedupe_linear_results(candidates: List[CandidateRecord]) -> List[CandidateRecord]:
    """
    Keep the first record for each highway/road name (case-insensitive).

    Later records with the same name contribute their boxes (and their ref
    tag, if the kept record has none) to the kept record and are dropped.
    Non-road records pass through in place. Each kept road record ends up
    with the union of its group's boxes as its bbox.
    """
    groups: Dict[str, CandidateRecord] = {}
    unique: List[CandidateRecord] = []
    for cand in candidates:
        if not is_linear(cand.type):
            unique.append(cand)
            continue
        key = cand.name.lower()
        first = groups.get(key)
        if first is None:
            groups[key] = cand
            unique.append(cand)
            if not cand.group_boxes and cand.bbox:
                cand.group_boxes.append(cand.bbox)
        else:
            if cand.bbox:
                first.group_boxes.append(cand.bbox)
            if first.ref is None:
                first.ref = cand.ref

    for cand in groups.values():
        merged = merge_bboxes(cand.group_boxes)
        if merged is not None:
            cand.bbox = merged
    return unique
