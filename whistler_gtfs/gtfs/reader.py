"""GTFS feed reader."""

import csv
import logging
from pathlib import Path

from whistler_gtfs.gtfs.models import Agency, Calendar, CalendarDate, Route, Stop, Trip

logger = logging.getLogger(__name__)


class GTFSReader:
    """Read the GTFS tables the agency rules need from an unpacked feed directory."""

    def __init__(self, gtfs_path: str) -> None:
        """Initialize reader with GTFS directory path."""
        self.gtfs_path = Path(gtfs_path)
        if not self.gtfs_path.is_dir():
            raise ValueError(f"GTFS path not found or not a directory: {gtfs_path}")

        self.agencies: list[Agency] = []
        self.routes: list[Route] = []
        self.trips: list[Trip] = []
        self.stops: list[Stop] = []
        self.calendar: list[Calendar] = []
        self.calendar_dates: list[CalendarDate] = []

    def read_all(self) -> None:
        """Read all GTFS files."""
        logger.info(f"Reading GTFS data from {self.gtfs_path}")
        self.read_agencies()
        self.read_routes()
        self.read_calendar()
        self.read_calendar_dates()
        self.read_trips()
        self.read_stops()
        logger.info(
            f"Loaded {len(self.agencies)} agencies, {len(self.routes)} routes, "
            f"{len(self.trips)} trips, {len(self.stops)} stops, "
            f"{len(self.calendar)} calendar entries, "
            f"{len(self.calendar_dates)} calendar date exceptions"
        )

    def _rows(self, filename: str, required: bool = True) -> list[dict[str, str]]:
        file_path = self.gtfs_path / filename
        if not file_path.exists():
            if required:
                raise FileNotFoundError(f"Required file not found: {file_path}")
            logger.info(f"{filename} not found, skipping")
            return []

        with open(file_path, encoding="utf-8-sig") as f:
            return list(csv.DictReader(f))

    def read_agencies(self) -> None:
        """Read agency.txt."""
        for row in self._rows("agency.txt", required=False):
            self.agencies.append(
                Agency(
                    agency_id=row.get("agency_id", ""),
                    agency_name=row["agency_name"],
                    agency_timezone=row["agency_timezone"],
                )
            )

    def read_routes(self) -> None:
        """Read routes.txt."""
        routes: list[Route] = []
        for row in self._rows("routes.txt"):
            routes.append(
                Route(
                    route_id=row["route_id"],
                    agency_id=row.get("agency_id", ""),
                    route_short_name=row.get("route_short_name", "").strip(),
                    route_long_name=row.get("route_long_name", "").strip(),
                    route_type=int(row["route_type"]),
                    route_desc=row.get("route_desc", "").strip(),
                    route_color=row.get("route_color", "").strip(),
                    route_text_color=row.get("route_text_color", "").strip(),
                )
            )

        # Sort by route_id for a stable processing order
        routes.sort(key=lambda r: r.route_id)
        self.routes = routes

    def read_trips(self) -> None:
        """Read trips.txt."""
        trips: list[Trip] = []
        for row in self._rows("trips.txt"):
            direction = row.get("direction_id", "").strip()
            trips.append(
                Trip(
                    trip_id=row["trip_id"],
                    route_id=row["route_id"],
                    service_id=row["service_id"],
                    trip_headsign=row.get("trip_headsign", "").strip(),
                    direction_id=int(direction) if direction else 0,
                )
            )

        trips.sort(key=lambda t: t.trip_id)
        self.trips = trips

    def read_stops(self) -> None:
        """Read stops.txt."""
        stops: list[Stop] = []
        for row in self._rows("stops.txt"):
            stops.append(
                Stop(
                    stop_id=row["stop_id"],
                    name=row.get("stop_name", ""),
                    lat=float(row["stop_lat"]),
                    lon=float(row["stop_lon"]),
                    stop_code=row.get("stop_code", "").strip(),
                )
            )

        stops.sort(key=lambda s: s.stop_id)
        self.stops = stops

    def read_calendar(self) -> None:
        """Read calendar.txt."""
        for row in self._rows("calendar.txt", required=False):
            self.calendar.append(
                Calendar(
                    service_id=row["service_id"],
                    monday=row["monday"] == "1",
                    tuesday=row["tuesday"] == "1",
                    wednesday=row["wednesday"] == "1",
                    thursday=row["thursday"] == "1",
                    friday=row["friday"] == "1",
                    saturday=row["saturday"] == "1",
                    sunday=row["sunday"] == "1",
                    start_date=row["start_date"],
                    end_date=row["end_date"],
                )
            )

    def read_calendar_dates(self) -> None:
        """Read calendar_dates.txt."""
        for row in self._rows("calendar_dates.txt", required=False):
            self.calendar_dates.append(
                CalendarDate(
                    service_id=row["service_id"],
                    date=row["date"],
                    exception_type=int(row["exception_type"]),
                )
            )
