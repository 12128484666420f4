"""Tests for rule table loading."""

import json
from pathlib import Path

import pytest

from whistler_gtfs.errors import RuleTableError, UnexpectedRouteCodeError
from whistler_gtfs.gtfs.models import Direction
from whistler_gtfs.rules.table import RuleTable


def test_default_table(rules: RuleTable) -> None:
    """Test the packaged table loads with its literal entries."""
    assert rules.agency_id == "1"
    assert rules.agency_color == "34B233"
    assert rules.route_type == 3
    assert len(rules.route_colors) == 13
    assert rules.alpha_route_colors == {"20X": "004B8D", "25X": "EC1A8D"}


def test_route_code_digits(rules: RuleTable) -> None:
    """Test digit-only short names parse as-is."""
    assert rules.route_code("20") == 20
    assert rules.route_code(" 99 ") == 99


def test_route_code_suffixes(rules: RuleTable) -> None:
    """Test lettered variants get large offsets."""
    assert rules.route_code("20X") == 24_000_020
    assert rules.route_code("20x") == 24_000_020
    assert rules.route_code("7W") == 23_000_007
    assert rules.route_code("20X") > rules.route_code("99")


@pytest.mark.parametrize("short_name", ["20Z", "X", ""])
def test_route_code_unexpected(rules: RuleTable, short_name: str) -> None:
    """Test unknown suffixes are rejected."""
    with pytest.raises(UnexpectedRouteCodeError):
        rules.route_code(short_name)


def test_headsign_rules_keyed_by_code_and_direction(rules: RuleTable) -> None:
    """Test headsign rules are indexed by route code and direction flag."""
    (rule,) = rules.headsign_rules[(24_000_020, 0)]
    assert rule.route == "20X"
    assert rule.direction is Direction.NORTH
    assert rule.matches("VILLAGE EXP")
    assert not rule.matches("Village")


def test_merge_rules_keep_file_order(rules: RuleTable) -> None:
    """Test merge rules of a route keep their order."""
    labels = [merge.label for merge in rules.merge_rules[20]]
    assert labels == ["Vlg", "Cheakamus"]


def test_route_codes(rules: RuleTable) -> None:
    """Test every covered route code is listed."""
    codes = rules.route_codes()
    assert codes == sorted(codes)
    assert {1, 2, 4, 20, 99, 24_000_020, 24_000_025} <= set(codes)


def test_dict_round_trip(rules: RuleTable) -> None:
    """Test a dumped table loads back identically."""
    reloaded = RuleTable.from_dict(rules.to_dict())
    assert reloaded.route_colors == rules.route_colors
    assert reloaded.headsign_rules == rules.headsign_rules
    assert reloaded.merge_rules == rules.merge_rules


def test_load_custom_table(tmp_path: Path, rules: RuleTable) -> None:
    """Test an edited table file is picked up."""
    data = rules.to_dict()
    data["route_colors"]["11"] = "123abc"
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    table = RuleTable.load(path)

    assert table.route_colors[11] == "123ABC"
    assert table.source == str(path)


def test_load_invalid_json(tmp_path: Path) -> None:
    """Test broken JSON is reported as a rule table error."""
    path = tmp_path / "rules.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RuleTableError, match="not valid JSON"):
        RuleTable.load(path)


@pytest.mark.parametrize(
    "change,message",
    [
        (lambda d: d.pop("headsigns"), "missing keys"),
        (lambda d: d["route_colors"].update({"4": "green"}), "invalid color"),
        (lambda d: d["route_colors"].update({"4A": "00A84F"}), "not numeric"),
        (lambda d: d["headsigns"][0].update({"direction": "UP"}), "unknown direction"),
        (lambda d: d["headsigns"][0].update({"route": "4Q"}), "Unexpected route short name"),
        (lambda d: d["merges"][0].pop("label"), "malformed entry"),
        (lambda d: d.update({"schema_version": 99}), "schema_version"),
    ],
)
def test_invalid_tables(rules: RuleTable, change, message: str) -> None:
    """Test malformed tables are rejected with a clear message."""
    data = rules.to_dict()
    change(data)

    with pytest.raises(RuleTableError, match=message):
        RuleTable.from_dict(data)
