import json
from datetime import datetime, timezone

import pytest

from flowmaplogic.mapping import parse_mapping

# 03:04 UTC == 12:04 JST
NOW = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return NOW


@pytest.fixture
def mapping_doc():
    return {
        "map": {
            "東京::北東京線": {"canonical": "TKY-001", "capacity_mw": 3000},
            "1::L2": {"canonical": "HKD-002", "capacity_mw": 200},
            "3::L3": {"canonical": "TKY-003"},
        }
    }


@pytest.fixture
def resolver(mapping_doc):
    return parse_mapping(mapping_doc)


@pytest.fixture
def mapping_file(tmp_path, mapping_doc):
    p = tmp_path / "line_map.json"
    p.write_text(json.dumps(mapping_doc, ensure_ascii=False), encoding="utf-8")
    return p


@pytest.fixture
def occto_rows():
    # Japanese headers as published by the operator
    return [
        {"対象エリア": "東京", "送電線名": "北東京線", "潮流(MW)": "1,200", "運用容量(MW)": "3000", "時刻": "09:30"},
        {"対象エリア": "東京", "送電線名": "北東京線", "潮流(MW)": "-1,500", "運用容量(MW)": "3000", "時刻": "10:00"},
        {"対象エリア": "東京", "送電線名": "南線", "潮流(MW)": "N/A", "運用容量(MW)": "", "時刻": "10:00"},
    ]


@pytest.fixture
def english_rows():
    return [
        {"Area": "1", "LineName": "L1", "Power_MW": "-40", "Capacity": "100", "Time": "09:30"},
        {"Area": "1", "LineName": "L2", "Power_MW": "80", "Capacity": "", "Time": "09:30"},
    ]
