"""Column detection across differently named source schemas."""

from flowmaplogic.detect import detect_fields
from flowmaplogic.types import FieldSpec


def test_detects_japanese_headers(occto_rows):
    spec = detect_fields(occto_rows[0])
    assert spec == FieldSpec(
        area="対象エリア",
        line_id="送電線名",
        power="潮流(MW)",
        capacity="運用容量(MW)",
        time="時刻",
    )


def test_detects_english_headers_case_insensitive(english_rows):
    spec = detect_fields(english_rows[0])
    assert spec.area == "Area"
    assert spec.line_id == "LineName"
    assert spec.power == "Power_MW"
    assert spec.capacity == "Capacity"
    assert spec.time == "Time"


def test_missing_fields_are_none():
    spec = detect_fields({"line": "L1", "flow": "10"})
    assert spec.line_id == "line"
    assert spec.power is None
    assert spec.capacity is None
    assert spec.time is None
    assert spec.area is None


def test_empty_record_resolves_nothing():
    assert detect_fields({}) == FieldSpec()


def test_first_matching_key_in_record_order_wins():
    """A key containing 'mw' is taken as power if it comes first, even when it is a capacity column."""
    spec = detect_fields({"line": "L1", "capacity_mw": "100", "p_mw": "50"})
    assert spec.power == "capacity_mw"
    assert spec.capacity == "capacity_mw"

    spec = detect_fields({"line": "L1", "p_mw": "50", "capacity_mw": "100"})
    assert spec.power == "p_mw"


def test_candidate_order_does_not_override_key_order():
    # 'line' is an earlier candidate than 'name', but the 'name' key comes first
    spec = detect_fields({"name": "N", "line": "L"})
    assert spec.line_id == "name"
