import pytest

from domain.models import RESULT_TYPE_ORDER, ResultType
from services.result_types import classify, is_linear


@pytest.mark.parametrize(
    "subtype,expected",
    [
        ("motorway", ResultType.HIGHWAY),
        ("trunk", ResultType.HIGHWAY),
        ("primary", ResultType.ROAD),
        ("secondary", ResultType.ROAD),
        ("tertiary", ResultType.ROAD),
        ("residential", ResultType.STREET),
        ("living_street", ResultType.STREET),
        ("service", ResultType.ROAD),
        ("motorway_link", ResultType.ROAD),
    ],
)
def test_classify_road_category(subtype, expected):
    assert classify(subtype, "highway") is expected


@pytest.mark.parametrize("subtype", ["city", "town", "village", "hamlet", "suburb"])
def test_classify_place_category_is_always_city(subtype):
    assert classify(subtype, "place") is ResultType.CITY


def test_classify_other_categories():
    assert classify("restaurant", "amenity") is ResultType.OTHER
    assert classify("motorway", "boundary") is ResultType.OTHER
    assert classify("city", None) is ResultType.OTHER
    assert classify(None, None) is ResultType.OTHER


def test_place_subtype_under_road_category_stays_a_road():
    assert classify("city", "highway") is ResultType.ROAD


def test_missing_subtype_uses_category_default():
    assert classify(None, "highway") is ResultType.ROAD
    assert classify("", "place") is ResultType.CITY


def test_is_linear():
    assert is_linear(ResultType.HIGHWAY)
    assert is_linear(ResultType.ROAD)
    assert not is_linear(ResultType.STREET)
    assert not is_linear(ResultType.CITY)
    assert not is_linear(ResultType.OTHER)


def test_result_type_labels_and_order():
    assert ResultType.HIGHWAY.label == "Autostradă"
    assert ResultType.OTHER.label == "Locație"
    assert set(RESULT_TYPE_ORDER) == set(ResultType)
    assert RESULT_TYPE_ORDER[0] is ResultType.HIGHWAY
