"""Stop pass: identifier and name cleanup."""

import logging

from whistler_gtfs.agency import WhistlerAgencyTools
from whistler_gtfs.errors import RuleMismatchError
from whistler_gtfs.gtfs.models import Stop, StopData, TransformReport

logger = logging.getLogger(__name__)


def build_stops(
    stops: list[Stop],
    tools: WhistlerAgencyTools,
    report: TransformReport,
    skip_mismatches: bool = False,
) -> list[StopData]:
    """Build StopData with cleaned names."""
    logger.info("Building stops")

    stop_data: list[StopData] = []

    for stop in stops:
        try:
            stop_id = tools.get_stop_id(stop)
        except RuleMismatchError as e:
            if not skip_mismatches:
                raise
            logger.error(f"Skipping stop {stop.stop_id}: {e}")
            report.mismatches.append(str(e))
            continue

        stop_data.append(
            StopData(
                stop_id=stop_id,
                stop_id_gtfs=stop.stop_id,
                code=stop.stop_code,
                name=tools.clean_stop_name(stop.name),
                lat=stop.lat,
                lon=stop.lon,
            )
        )

    logger.info(f"Built {len(stop_data)} stops")
    return stop_data
