"""Rule table: route colors, headsign rules and headsign merge rules."""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from whistler_gtfs.errors import RuleTableError, UnexpectedRouteCodeError
from whistler_gtfs.gtfs.models import Direction
from whistler_gtfs.version import RULES_SCHEMA_VERSION

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "whistler.json"

COLOR = re.compile(r"[0-9A-Fa-f]{6}")
DIGITS = re.compile(r"\d+")

REQUIRED_KEYS = ("agency_id", "route_colors", "headsigns", "merges")


@dataclass(frozen=True)
class HeadsignRule:
    """Raw headsigns of one route and direction flag mapped to a canonical direction."""

    route: str
    route_code: int
    direction_id: int
    direction: Direction
    headsigns: tuple[str, ...]

    def matches(self, headsign: str) -> bool:
        """Case-insensitive match against the expected raw headsigns."""
        folded = headsign.casefold()
        return any(folded == expected.casefold() for expected in self.headsigns)


@dataclass(frozen=True)
class MergeRule:
    """Headsign values of one route that collapse into a single label."""

    route: str
    route_code: int
    label: str
    headsigns: tuple[str, ...]

    def accepts(self, *values: str) -> bool:
        return all(value in self.headsigns for value in values)


@dataclass
class RuleTable:
    """
    Literal lookup tables for one agency.

    Headsign and merge rules are keyed by route code, the integer derived
    from a route short name by `route_code`. Rules keep the order of the
    source file; the first matching rule wins.
    """

    agency_id: str
    agency_color: str = "34B233"
    route_type: int = 3
    ignored_route_colors: frozenset[str] = frozenset({"000000"})
    suffix_offsets: dict[str, int] = field(default_factory=dict)
    route_colors: dict[int, str] = field(default_factory=dict)
    alpha_route_colors: dict[str, str] = field(default_factory=dict)
    headsign_rules: dict[tuple[int, int], list[HeadsignRule]] = field(default_factory=dict)
    merge_rules: dict[int, list[MergeRule]] = field(default_factory=dict)
    source: str = "<memory>"

    @classmethod
    def default(cls) -> "RuleTable":
        """Load the packaged Whistler table."""
        return cls.load(DEFAULT_RULES_PATH)

    @classmethod
    def load(cls, path: str | Path) -> "RuleTable":
        """Load and validate a rule table from a JSON file."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuleTableError(str(path), f"not valid JSON ({e})") from e

        table = cls.from_dict(data, source=str(path))
        logger.info(
            f"Loaded rule table {path}: {len(table.route_colors) + len(table.alpha_route_colors)} "
            f"colors, {sum(len(r) for r in table.headsign_rules.values())} headsign rules, "
            f"{sum(len(r) for r in table.merge_rules.values())} merge rules"
        )
        return table

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<memory>") -> "RuleTable":
        """Build a table from its JSON document."""
        if not isinstance(data, dict):
            raise RuleTableError(source, "top level must be an object")
        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise RuleTableError(source, f"missing keys: {', '.join(missing)}")

        schema_version = data.get("schema_version", RULES_SCHEMA_VERSION)
        if schema_version != RULES_SCHEMA_VERSION:
            raise RuleTableError(source, f"unsupported schema_version {schema_version}")

        try:
            return cls._build(data, source)
        except (KeyError, TypeError, ValueError) as e:
            raise RuleTableError(source, f"malformed entry ({e!r})") from e

    @classmethod
    def _build(cls, data: dict[str, Any], source: str) -> "RuleTable":
        table = cls(
            agency_id=str(data["agency_id"]),
            agency_color=_color(source, data.get("agency_color", "34B233")),
            route_type=int(data.get("route_type", 3)),
            ignored_route_colors=frozenset(
                _color(source, c) for c in data.get("ignored_route_colors", ["000000"])
            ),
            suffix_offsets={
                str(suffix).upper(): int(offset)
                for suffix, offset in data.get("suffix_offsets", {}).items()
            },
            source=source,
        )

        for code, color in data["route_colors"].items():
            if not DIGITS.fullmatch(str(code)):
                raise RuleTableError(source, f"route_colors key {code!r} is not numeric")
            table.route_colors[int(code)] = _color(source, color)

        for short_name, color in data.get("alpha_route_colors", {}).items():
            table.alpha_route_colors[str(short_name).upper()] = _color(source, color)

        for entry in data["headsigns"]:
            rule = HeadsignRule(
                route=str(entry["route"]),
                route_code=table._rule_code(entry["route"]),
                direction_id=int(entry["direction_id"]),
                direction=_direction(source, entry["direction"]),
                headsigns=tuple(entry["headsigns"]),
            )
            table.headsign_rules.setdefault((rule.route_code, rule.direction_id), []).append(rule)

        for entry in data["merges"]:
            merge = MergeRule(
                route=str(entry["route"]),
                route_code=table._rule_code(entry["route"]),
                label=entry["label"],
                headsigns=tuple(entry["headsigns"]),
            )
            table.merge_rules.setdefault(merge.route_code, []).append(merge)

        return table

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the JSON document layout."""
        return {
            "schema_version": RULES_SCHEMA_VERSION,
            "agency_id": self.agency_id,
            "agency_color": self.agency_color,
            "route_type": self.route_type,
            "ignored_route_colors": sorted(self.ignored_route_colors),
            "suffix_offsets": dict(self.suffix_offsets),
            "route_colors": {str(code): color for code, color in sorted(self.route_colors.items())},
            "alpha_route_colors": dict(self.alpha_route_colors),
            "headsigns": [
                {
                    "route": rule.route,
                    "direction_id": rule.direction_id,
                    "direction": rule.direction.name,
                    "headsigns": list(rule.headsigns),
                }
                for rules in self.headsign_rules.values()
                for rule in rules
            ],
            "merges": [
                {"route": merge.route, "label": merge.label, "headsigns": list(merge.headsigns)}
                for merges in self.merge_rules.values()
                for merge in merges
            ],
        }

    def route_code(self, short_name: str) -> int:
        """
        Normalize a route short name to its integer route code.

        Digit-only names parse as-is. Names like `20X` take their first digit
        run plus the offset configured for the trailing letter, so lettered
        variants stay unique and sort after the plain routes.
        """
        short_name = short_name.strip()
        if DIGITS.fullmatch(short_name):
            return int(short_name)

        match = DIGITS.search(short_name)
        if match:
            suffix = short_name[-1].upper()
            if suffix in self.suffix_offsets:
                return int(match.group()) + self.suffix_offsets[suffix]

        raise UnexpectedRouteCodeError(
            f"Unexpected route short name {short_name!r}", record=short_name
        )

    def route_codes(self) -> list[int]:
        """Every route code the table has rules for, sorted."""
        codes = set(self.route_colors)
        codes.update(self.route_code(name) for name in self.alpha_route_colors)
        codes.update(code for code, _ in self.headsign_rules)
        codes.update(self.merge_rules)
        return sorted(codes)

    def _rule_code(self, route: Any) -> int:
        try:
            return self.route_code(str(route))
        except UnexpectedRouteCodeError as e:
            raise RuleTableError(self.source, str(e)) from e


def _color(source: str, value: Any) -> str:
    if not isinstance(value, str) or not COLOR.fullmatch(value):
        raise RuleTableError(source, f"invalid color {value!r}")
    return value.upper()


def _direction(source: str, value: Any) -> Direction:
    try:
        return Direction[str(value).upper()]
    except KeyError:
        raise RuleTableError(source, f"unknown direction {value!r}") from None
