"""Whistler Transit System bus rules, as per-record hooks for a feed driver."""

import logging
import re

from whistler_gtfs import cleaning
from whistler_gtfs.errors import (
    UnexpectedHeadsignError,
    UnexpectedMergeError,
    UnexpectedRouteCodeError,
    UnexpectedRouteColorError,
    UnexpectedStopIdError,
)
from whistler_gtfs.gtfs.models import Calendar, CalendarDate, Route, Stop, Trip, TripData
from whistler_gtfs.rules.table import RuleTable

logger = logging.getLogger(__name__)

EXCH = "Exch"
EXCHANGE = re.compile(r"(^|\W)exchange(\W|$)", re.IGNORECASE)
EXCHANGE_REPLACEMENT = r"\1" + EXCH + r"\2"

FREE_SHUTTLE_SERVICE = re.compile(r"(^|\W)free (?:service|shuttle)(\W|$)", re.IGNORECASE)
ENDS_WITH_FREE_SERVICE = re.compile(r"\s+free (?:service|shuttle)$", re.IGNORECASE)

# The spelled out qualifier only; the `Exp` abbreviation tags express variants
EXPRESS = re.compile(r"(^|\W)express(\W|$)", re.IGNORECASE)

ENDS_WITH_VIA = re.compile(r"\(?-?\bvia\s.*$", re.IGNORECASE)
ENDS_WITH_DASH = re.compile(r"\s*-+\s*$")

STARTS_WITH_DCOM = re.compile(r"^\(-DCOM-\)", re.IGNORECASE)
STARTS_WITH_IMPL = re.compile(r"^\(-IMPL-\)", re.IGNORECASE)


class WhistlerAgencyTools:
    """
    Hooks called by the feed driver for each route, trip and stop record.

    Every raw value the rule table does not cover raises a
    `RuleMismatchError` subclass; the caller decides whether to halt or
    skip the record.
    """

    def __init__(self, rules: RuleTable | None = None, service_ids: set[str] | None = None) -> None:
        self.rules = rules if rules is not None else RuleTable.default()
        self.service_ids = service_ids
        # feed route_id -> route code, filled while assigning headsigns
        self.route_codes: dict[str, int] = {}

    # Service filtering

    def excluding_all(self) -> bool:
        """True when a useful-service set was supplied and it is empty."""
        return self.service_ids is not None and not self.service_ids

    def exclude_calendar(self, calendar: Calendar) -> bool:
        return self.service_ids is not None and calendar.service_id not in self.service_ids

    def exclude_calendar_date(self, calendar_date: CalendarDate) -> bool:
        return self.service_ids is not None and calendar_date.service_id not in self.service_ids

    # Agency

    def get_agency_color(self) -> str:
        return self.rules.agency_color

    def get_agency_route_type(self) -> int:
        return self.rules.route_type

    # Routes

    def exclude_route(self, route: Route) -> bool:
        """Keep only routes run by the configured agency."""
        return route.agency_id != self.rules.agency_id

    def get_route_id(self, route: Route) -> int:
        """Route identifier derived from the short name, see `RuleTable.route_code`."""
        try:
            return self.rules.route_code(route.route_short_name)
        except UnexpectedRouteCodeError as e:
            raise UnexpectedRouteCodeError(f"Unexpected route ID for {route}!", record=route) from e

    def get_route_long_name(self, route: Route) -> str:
        long_name = route.route_long_name or route.route_desc
        long_name = cleaning.clean_slashes(long_name)
        long_name = cleaning.clean_numbers(long_name)
        long_name = cleaning.clean_street_types(long_name)
        return cleaning.clean_label(long_name)

    def get_route_color(self, route: Route) -> str:
        """
        Feed color, or the table color when the feed has none.

        Black is treated as missing. Lettered short names are looked up by
        name first, then every other name by its numeric code.
        """
        color = route.route_color.upper()
        if color in self.rules.ignored_route_colors:
            color = ""
        if color:
            return color

        short_name = route.route_short_name.strip()
        if not cleaning.is_digits_only(short_name):
            alpha_color = self.rules.alpha_route_colors.get(short_name.upper())
            if alpha_color:
                return alpha_color
            raise UnexpectedRouteColorError(f"Unexpected route color {route}!", record=route)

        color = self.rules.route_colors.get(int(short_name))
        if color is None:
            raise UnexpectedRouteColorError(f"Unexpected route color {route}!", record=route)
        return color

    # Trips

    def exclude_trip(self, trip: Trip) -> bool:
        return self.service_ids is not None and trip.service_id not in self.service_ids

    def set_trip_headsign(self, route: Route, trip: Trip) -> TripData:
        """Assign the cleaned headsign and canonical direction of a trip."""
        code = self.get_route_id(route)
        self.route_codes[route.route_id] = code

        for rule in self.rules.headsign_rules.get((code, trip.direction_id), []):
            if rule.matches(trip.trip_headsign):
                return TripData(
                    route_id=code,
                    route_id_gtfs=route.route_id,
                    headsign_value=self.clean_trip_headsign(trip.trip_headsign),
                    direction=rule.direction,
                    trip_ids=[trip.trip_id],
                )

        raise UnexpectedHeadsignError(
            f"{route.route_id}:{route.route_short_name} Unexpected trips head-sign for {trip}!",
            record=trip,
        )

    def merge_headsign(self, trip: TripData, trip_to_merge: TripData) -> bool:
        """
        Merge the headsign of `trip_to_merge` into `trip`.

        Returns True once `trip.headsign_value` holds the merged label.
        """
        if not trip.headsign_value or not trip_to_merge.headsign_value:
            trip.headsign_value = trip.headsign_value or trip_to_merge.headsign_value
            return True
        if trip.headsign_value == trip_to_merge.headsign_value:
            return True

        code = self.route_codes.get(trip.route_id_gtfs)
        if code is not None:
            for merge in self.rules.merge_rules.get(code, []):
                if merge.accepts(trip.headsign_value, trip_to_merge.headsign_value):
                    logger.debug(
                        f"Merged {trip.headsign_value!r} & {trip_to_merge.headsign_value!r} "
                        f"into {merge.label!r}"
                    )
                    trip.headsign_value = merge.label
                    return True

        raise UnexpectedMergeError(
            f"Unexpected trips to merge {trip} & {trip_to_merge}.", record=(trip, trip_to_merge)
        )

    def clean_trip_headsign(self, headsign: str) -> str:
        if cleaning.is_uppercase_only(headsign):
            headsign = headsign.lower()
        headsign = EXCHANGE.sub(EXCHANGE_REPLACEMENT, headsign)
        headsign = FREE_SHUTTLE_SERVICE.sub(r"\1\2", headsign)
        headsign = ENDS_WITH_FREE_SERVICE.sub("", headsign)
        headsign = EXPRESS.sub(r"\1\2", headsign)
        headsign = ENDS_WITH_VIA.sub("", headsign)
        headsign = cleaning.keep_to_and_remove_via(headsign)
        headsign = ENDS_WITH_DASH.sub("", headsign)
        headsign = cleaning.CLEAN_AND.sub(cleaning.CLEAN_AND_REPLACEMENT, headsign)
        headsign = cleaning.CLEAN_PARENTHESE1.sub(cleaning.CLEAN_PARENTHESE1_REPLACEMENT, headsign)
        headsign = cleaning.CLEAN_PARENTHESE2.sub(cleaning.CLEAN_PARENTHESE2_REPLACEMENT, headsign)
        headsign = cleaning.clean_slashes(headsign)
        headsign = cleaning.clean_street_types(headsign)
        headsign = cleaning.clean_numbers(headsign)
        return cleaning.clean_label(headsign)

    # Stops

    def clean_stop_name(self, name: str) -> str:
        name = STARTS_WITH_DCOM.sub("", name)
        name = STARTS_WITH_IMPL.sub("", name)
        name = cleaning.clean_bounds(name)
        name = cleaning.CLEAN_AND.sub(cleaning.CLEAN_AND_REPLACEMENT, name)
        name = cleaning.CLEAN_AT.sub(cleaning.CLEAN_AT_REPLACEMENT, name)
        name = EXCHANGE.sub(EXCHANGE_REPLACEMENT, name)
        name = cleaning.clean_street_types(name)
        name = cleaning.clean_numbers(name)
        return cleaning.clean_label(name)

    def get_stop_id(self, stop: Stop) -> int:
        """Numeric stop id, falling back to the stop code."""
        for value in (stop.stop_id, stop.stop_code):
            if cleaning.is_digits_only(value):
                return int(value)
        raise UnexpectedStopIdError(f"Unexpected stop ID for {stop}!", record=stop)
