"""Canonical id resolution and mapping-file loading."""

import logging

import pytest

from flowmaplogic.exceptions import MappingError
from flowmaplogic.mapping import CanonicalResolver, load_mapping, mapping_key, parse_mapping


def test_resolve_hit_and_miss(resolver):
    assert resolver.resolve("東京", "北東京線") == "TKY-001"
    assert resolver.resolve(1, "L2") == "HKD-002"
    # unmapped names pass through untouched
    assert resolver.resolve("1", "LineX") == "LineX"
    # keys are exact: same name in another area is not mapped
    assert resolver.resolve("2", "L2") == "L2"


def test_fallback_capacity(resolver):
    assert resolver.fallback_capacity("1", "L2") == 200
    assert resolver.fallback_capacity("3", "L3") is None
    assert resolver.fallback_capacity("9", "nope") is None


def test_mapping_key_format():
    assert mapping_key(1, "L1") == "1::L1"
    assert mapping_key("東京", "北東京線") == "東京::北東京線"


def test_empty_resolver_is_identity():
    r = CanonicalResolver.empty()
    assert len(r) == 0
    assert r.resolve("1", "A") == "A"


def test_load_mapping_from_file(mapping_file):
    r = load_mapping(mapping_file)
    assert len(r) == 3
    assert "1::L2" in r


def test_load_mapping_missing_file_degrades(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="flowmaplogic.mapping"):
        r = load_mapping(tmp_path / "absent.json")
    assert len(r) == 0
    assert r.resolve("1", "L2") == "L2"
    assert "using external line names" in caplog.text


def test_load_mapping_corrupt_file_degrades(tmp_path, caplog):
    p = tmp_path / "bad.json"
    p.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="flowmaplogic.mapping"):
        r = load_mapping(p)
    assert len(r) == 0
    assert caplog.records


def test_load_mapping_schema_mismatch_degrades(tmp_path):
    p = tmp_path / "wrong.json"
    p.write_text('{"map": {"1::A": {"capacity_mw": 10}}}', encoding="utf-8")
    assert len(load_mapping(p)) == 0


def test_load_mapping_without_map_key_is_empty(tmp_path):
    p = tmp_path / "nomap.json"
    p.write_text("{}", encoding="utf-8")
    assert len(load_mapping(p)) == 0


def test_parse_mapping_rejects_bad_document():
    with pytest.raises(MappingError):
        parse_mapping(["not", "a", "mapping"])


def test_malformed_entries_are_skipped_not_the_table(caplog):
    doc = {
        "map": {
            "1::A": {"canonical": "HKD-A", "capacity_mw": 100},
            "1::B": {"capacity_mw": 10},
            "1::C": "not an entry",
        }
    }
    with caplog.at_level(logging.WARNING, logger="flowmaplogic.mapping"):
        r = parse_mapping(doc)
    assert len(r) == 1
    assert r.resolve("1", "A") == "HKD-A"
    assert r.resolve("1", "B") == "B"
    assert len(caplog.records) == 1
    assert "skipped 2 malformed mapping entries" in caplog.text
