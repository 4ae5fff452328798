"""
Tests for merging road segments reported as separate records.
"""
from domain.models import CandidateRecord, ResultType
from services.dedupe import dedupe_linear_results


def _cand(cid, name, rtype, bbox=None, ref=None):
    return CandidateRecord(
        id=cid,
        name=name,
        display_name=f"{name}, România",
        lat=45.0,
        lng=25.0,
        type=rtype,
        bbox=bbox,
        group_boxes=[bbox] if bbox else [],
        ref=ref,
    )


class TestDedupeLinearResults:
    def test_same_named_highways_collapse_into_first_seen(self):
        cands = [
            _cand("1", "Autostrada A1", ResultType.HIGHWAY, (25.9, 44.40, 26.0, 44.45)),
            _cand("2", "Autostrada A1", ResultType.HIGHWAY, (24.9, 44.50, 25.0, 44.55)),
            _cand("3", "Autostrada A1", ResultType.HIGHWAY, (23.8, 44.60, 23.9, 44.62)),
        ]

        result = dedupe_linear_results(cands)

        assert [c.id for c in result] == ["1"]
        assert result[0].bbox == (23.8, 44.40, 26.0, 44.62)

    def test_grouping_is_case_insensitive(self):
        cands = [
            _cand("1", "DN7", ResultType.ROAD, (24.0, 45.0, 24.1, 45.1)),
            _cand("2", "dn7", ResultType.ROAD, (24.5, 45.5, 24.6, 45.6)),
        ]
        result = dedupe_linear_results(cands)
        assert [c.id for c in result] == ["1"]
        assert result[0].bbox == (24.0, 45.0, 24.6, 45.6)

    def test_highway_and_road_share_a_group_by_name(self):
        cands = [
            _cand("1", "DN1", ResultType.HIGHWAY, (26.0, 44.5, 26.1, 44.6)),
            _cand("2", "DN1", ResultType.ROAD, (25.5, 45.0, 25.6, 45.1)),
        ]
        result = dedupe_linear_results(cands)
        assert [c.id for c in result] == ["1"]
        assert result[0].type is ResultType.HIGHWAY

    def test_non_road_records_pass_through_in_position(self):
        cands = [
            _cand("c1", "Sibiu", ResultType.CITY, (24.0, 45.7, 24.3, 45.9)),
            _cand("h1", "Autostrada A1", ResultType.HIGHWAY, (24.0, 45.8, 24.1, 45.9)),
            _cand("s1", "Strada Mare", ResultType.STREET),
            _cand("s2", "Strada Mare", ResultType.STREET),
            _cand("h2", "Autostrada A1", ResultType.HIGHWAY, (23.0, 45.8, 23.1, 45.9)),
            _cand("o1", "Muzeul Brukenthal", ResultType.OTHER),
        ]

        result = dedupe_linear_results(cands)

        assert [c.id for c in result] == ["c1", "h1", "s1", "s2", "o1"]
        assert result[0].bbox == (24.0, 45.7, 24.3, 45.9)

    def test_group_without_boxes_keeps_bbox_absent(self):
        cands = [
            _cand("1", "DN7", ResultType.ROAD),
            _cand("2", "DN7", ResultType.ROAD),
        ]
        result = dedupe_linear_results(cands)
        assert len(result) == 1
        assert result[0].bbox is None

    def test_first_record_without_box_takes_later_boxes(self):
        cands = [
            _cand("1", "DN7", ResultType.ROAD),
            _cand("2", "DN7", ResultType.ROAD, (24.0, 45.0, 24.1, 45.1)),
        ]
        result = dedupe_linear_results(cands)
        assert result[0].id == "1"
        assert result[0].bbox == (24.0, 45.0, 24.1, 45.1)

    def test_kept_record_adopts_later_ref_when_it_has_none(self):
        cands = [
            _cand("1", "Autostrada Soarelui", ResultType.HIGHWAY, (26.0, 44.4, 26.1, 44.45)),
            _cand("2", "Autostrada Soarelui", ResultType.HIGHWAY, (25.9, 44.3, 26.0, 44.35), ref="A2"),
            _cand("3", "Autostrada Soarelui", ResultType.HIGHWAY, ref="A2;E81"),
        ]
        result = dedupe_linear_results(cands)
        assert [c.id for c in result] == ["1"]
        assert result[0].ref == "A2"

    def test_kept_record_ref_is_not_overwritten(self):
        cands = [
            _cand("1", "DN1", ResultType.ROAD, ref="DN1;E60"),
            _cand("2", "DN1", ResultType.ROAD, ref="DN1"),
        ]
        assert dedupe_linear_results(cands)[0].ref == "DN1;E60"

    def test_running_twice_is_a_no_op(self):
        cands = [
            _cand("1", "Autostrada A1", ResultType.HIGHWAY, (25.9, 44.40, 26.0, 44.45)),
            _cand("2", "Brașov", ResultType.CITY, (25.5, 45.6, 25.7, 45.7)),
            _cand("3", "Autostrada A1", ResultType.HIGHWAY, (23.8, 44.60, 23.9, 44.62)),
            _cand("4", "DN1", ResultType.ROAD),
        ]
        once = dedupe_linear_results(cands)
        snapshot = [(c.id, c.bbox) for c in once]

        twice = dedupe_linear_results(once)

        assert [(c.id, c.bbox) for c in twice] == snapshot
