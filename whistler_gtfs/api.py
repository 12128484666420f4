"""Public API for whistler-gtfs."""

import logging
from datetime import UTC, datetime

from whistler_gtfs.agency import WhistlerAgencyTools
from whistler_gtfs.gtfs.models import TransformConfig, TransformReport, TransformResult
from whistler_gtfs.gtfs.reader import GTFSReader
from whistler_gtfs.rules.table import RuleTable
from whistler_gtfs.transform.routes import build_routes
from whistler_gtfs.transform.stops import build_stops
from whistler_gtfs.transform.trips import build_trips

logger = logging.getLogger(__name__)

ON_MISMATCH_CHOICES = ("halt", "skip")

STATS_KEYS = (
    "routes",
    "trip_variants",
    "trips",
    "stops",
    "calendars",
    "calendar_dates",
    "mismatches",
)


def load_rules(rules_path: str | None = None) -> RuleTable:
    """Load a rule table, or the packaged Whistler table when no path is given."""
    if rules_path is None:
        return RuleTable.default()
    return RuleTable.load(rules_path)


def transform(input_path: str, config: TransformConfig | None = None) -> TransformResult:
    """
    Apply the Whistler rules to an unpacked GTFS feed.

    Args:
        input_path: Path to GTFS directory
        config: Optional transform configuration

    Returns:
        TransformResult with normalized routes, trip variants, stops and a report

    Raises:
        RuleMismatchError: on the first uncovered value when `on_mismatch` is "halt"
    """
    if config is None:
        config = TransformConfig(input_path=input_path)
    if config.on_mismatch not in ON_MISMATCH_CHOICES:
        raise ValueError(
            f"on_mismatch must be one of {ON_MISMATCH_CHOICES}, got {config.on_mismatch!r}"
        )
    skip = config.on_mismatch == "skip"

    logger.info(f"Starting transform: {input_path}")
    start_time = datetime.now(UTC)

    tools = WhistlerAgencyTools(load_rules(config.rules_path), service_ids=config.service_ids)
    report = TransformReport()

    reader = GTFSReader(input_path)
    reader.read_all()

    if tools.excluding_all():
        logger.warning("No useful service ids, excluding the whole agency")
        report.stats = {key: 0 for key in STATS_KEYS}
        return TransformResult(routes=[], trips=[], stops=[], report=report)

    routes = build_routes(reader.routes, tools, report, skip_mismatches=skip)
    trips = build_trips(reader.trips, reader.routes, routes, tools, report, skip_mismatches=skip)
    stops = build_stops(reader.stops, tools, report, skip_mismatches=skip)

    report.stats = {
        "routes": len(routes),
        "trip_variants": len(trips),
        "trips": sum(len(trip.trip_ids) for trip in trips),
        "stops": len(stops),
        "calendars": sum(1 for c in reader.calendar if not tools.exclude_calendar(c)),
        "calendar_dates": sum(
            1 for cd in reader.calendar_dates if not tools.exclude_calendar_date(cd)
        ),
        "mismatches": len(report.mismatches),
    }

    if report.mismatches:
        logger.error(f"Transform finished with {len(report.mismatches)} rule mismatches")

    elapsed = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(f"Transform completed in {elapsed:.2f}s")

    return TransformResult(routes=routes, trips=trips, stops=stops, report=report)


def check_rules(rules_path: str | None = None) -> list[int]:
    """
    Load and validate a rule table.

    Returns:
        Sorted route codes the table covers

    Raises:
        RuleTableError: if the table is malformed
    """
    table = load_rules(rules_path)
    codes = table.route_codes()
    logger.info(f"Rule table {table.source} covers {len(codes)} route codes")
    return codes
