"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from whistler_gtfs.agency import WhistlerAgencyTools
from whistler_gtfs.gtfs.models import Route, Trip
from whistler_gtfs.rules.table import RuleTable


@pytest.fixture
def gtfs_whistler() -> Path:
    """Path to a small Whistler feed covered by the rule table."""
    return Path(__file__).parent / "fixtures" / "gtfs_whistler"


@pytest.fixture
def gtfs_unexpected() -> Path:
    """Path to a feed with values the rule table does not cover."""
    return Path(__file__).parent / "fixtures" / "gtfs_unexpected"


@pytest.fixture
def rules() -> RuleTable:
    """Packaged Whistler rule table."""
    return RuleTable.default()


@pytest.fixture
def tools(rules: RuleTable) -> WhistlerAgencyTools:
    """Agency hooks without service filtering."""
    return WhistlerAgencyTools(rules)


def make_route(short_name: str, color: str = "", agency_id: str = "1", **kwargs: str) -> Route:
    """Route with defaults for the fields the rules ignore."""
    return Route(
        route_id=kwargs.pop("route_id", f"{short_name}-WHI"),
        agency_id=agency_id,
        route_short_name=short_name,
        route_long_name=kwargs.pop("route_long_name", ""),
        route_type=3,
        route_color=color,
        **kwargs,
    )


def make_trip(route: Route, headsign: str, direction_id: int, trip_id: str = "T1") -> Trip:
    return Trip(
        trip_id=trip_id,
        route_id=route.route_id,
        service_id="WK",
        trip_headsign=headsign,
        direction_id=direction_id,
    )
