"""Data models for GTFS records and normalized output."""

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Canonical direction label shown for a trip."""

    NORTH = "North"
    SOUTH = "South"
    CLOCKWISE = "Clockwise"
    COUNTERCLOCKWISE = "Counterclockwise"


@dataclass(frozen=True)
class Agency:
    """GTFS agency."""

    agency_id: str
    agency_name: str
    agency_timezone: str


@dataclass(frozen=True)
class Route:
    """GTFS route."""

    route_id: str
    agency_id: str
    route_short_name: str
    route_long_name: str
    route_type: int
    route_desc: str = ""
    route_color: str = ""
    route_text_color: str = ""


@dataclass(frozen=True)
class Trip:
    """GTFS trip."""

    trip_id: str
    route_id: str
    service_id: str
    trip_headsign: str = ""
    direction_id: int = 0


@dataclass(frozen=True)
class Stop:
    """GTFS stop with coordinates."""

    stop_id: str
    name: str
    lat: float
    lon: float
    stop_code: str = ""


@dataclass(frozen=True)
class Calendar:
    """GTFS calendar entry."""

    service_id: str
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool
    start_date: str  # YYYYMMDD
    end_date: str  # YYYYMMDD


@dataclass(frozen=True)
class CalendarDate:
    """GTFS calendar date exception."""

    service_id: str
    date: str  # YYYYMMDD
    exception_type: int  # 1 = added, 2 = removed


@dataclass
class RouteData:
    """Normalized route."""

    route_id: int
    route_id_gtfs: str
    short_name: str
    long_name: str
    color: str


@dataclass
class TripData:
    """Normalized trip variant, one per route and direction after merging."""

    route_id: int
    route_id_gtfs: str
    headsign_value: str
    direction: Direction
    trip_ids: list[str] = field(default_factory=list)


@dataclass
class StopData:
    """Normalized stop."""

    stop_id: int
    stop_id_gtfs: str
    code: str
    name: str
    lat: float
    lon: float


@dataclass
class TransformReport:
    """Counters and rule mismatches collected during a run."""

    stats: dict[str, int] = field(default_factory=dict)
    mismatches: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches


@dataclass
class TransformResult:
    """Everything produced by one run."""

    routes: list[RouteData]
    trips: list[TripData]
    stops: list[StopData]
    report: TransformReport


@dataclass
class TransformConfig:
    """Configuration for a transform run."""

    input_path: str
    rules_path: str | None = None  # packaged table when unset
    service_ids: set[str] | None = None  # no service filtering when unset
    on_mismatch: str = "halt"  # halt, skip
