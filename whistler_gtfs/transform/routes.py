"""Route pass: inclusion, identifier, long name and color."""

import logging

from whistler_gtfs.agency import WhistlerAgencyTools
from whistler_gtfs.errors import RuleMismatchError
from whistler_gtfs.gtfs.models import Route, RouteData, TransformReport

logger = logging.getLogger(__name__)


def build_routes(
    routes: list[Route],
    tools: WhistlerAgencyTools,
    report: TransformReport,
    skip_mismatches: bool = False,
) -> list[RouteData]:
    """Build RouteData for every route the agency rules keep."""
    logger.info("Building routes")

    route_data: list[RouteData] = []
    excluded = 0

    for route in routes:
        if tools.exclude_route(route):
            excluded += 1
            continue

        try:
            data = RouteData(
                route_id=tools.get_route_id(route),
                route_id_gtfs=route.route_id,
                short_name=route.route_short_name,
                long_name=tools.get_route_long_name(route),
                color=tools.get_route_color(route),
            )
        except RuleMismatchError as e:
            if not skip_mismatches:
                raise
            logger.error(f"Skipping route {route.route_id}: {e}")
            report.mismatches.append(str(e))
            continue

        logger.debug(f"Route {route.route_id} -> {data.route_id} {data.long_name!r} #{data.color}")
        route_data.append(data)

    # Identifiers come from short names, so sort them like the app does
    route_data.sort(key=lambda r: r.route_id)

    if excluded:
        logger.info(f"Excluded {excluded} routes of other agencies")
    logger.info(f"Built {len(route_data)} routes")
    return route_data
