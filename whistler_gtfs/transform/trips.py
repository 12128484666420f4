"""Trip pass: headsign assignment and deduplication of trip variants."""

import logging

from whistler_gtfs.agency import WhistlerAgencyTools
from whistler_gtfs.errors import RuleMismatchError
from whistler_gtfs.gtfs.models import Direction, Route, RouteData, TransformReport, Trip, TripData

logger = logging.getLogger(__name__)


def build_trips(
    trips: list[Trip],
    routes: list[Route],
    kept_routes: list[RouteData],
    tools: WhistlerAgencyTools,
    report: TransformReport,
    skip_mismatches: bool = False,
) -> list[TripData]:
    """
    Build one TripData per route and direction.

    Trips of the same route and direction collapse into a single variant;
    when their cleaned headsigns differ, the agency merge rules decide the
    label the variant keeps.
    """
    logger.info("Building trips")

    routes_by_id = {route.route_id: route for route in routes}
    kept_ids = {route.route_id_gtfs for route in kept_routes}

    variants: dict[tuple[str, Direction], TripData] = {}
    excluded = 0

    for trip in trips:
        if trip.route_id not in kept_ids:
            continue
        if tools.exclude_trip(trip):
            excluded += 1
            continue

        try:
            trip_data = tools.set_trip_headsign(routes_by_id[trip.route_id], trip)
            key = (trip_data.route_id_gtfs, trip_data.direction)
            existing = variants.get(key)
            if existing is None:
                variants[key] = trip_data
                continue
            if existing.headsign_value != trip_data.headsign_value:
                tools.merge_headsign(existing, trip_data)
            existing.trip_ids.extend(trip_data.trip_ids)
        except RuleMismatchError as e:
            if not skip_mismatches:
                raise
            logger.error(f"Skipping trip {trip.trip_id}: {e}")
            report.mismatches.append(str(e))

    if excluded:
        logger.info(f"Excluded {excluded} trips outside the useful service ids")

    trip_data_list = sorted(variants.values(), key=lambda t: (t.route_id, t.direction.name))
    for trip_data in trip_data_list:
        logger.debug(
            f"Route {trip_data.route_id_gtfs} {trip_data.direction.value}: "
            f"{trip_data.headsign_value!r} ({len(trip_data.trip_ids)} trips)"
        )

    logger.info(f"Built {len(trip_data_list)} trip variants")
    return trip_data_list
