"""Whistler GTFS - Whistler Transit System bus feed rules."""

from whistler_gtfs.api import check_rules, transform
from whistler_gtfs.version import RULES_SCHEMA_VERSION, VERSION

__version__ = VERSION
__all__ = ["RULES_SCHEMA_VERSION", "VERSION", "check_rules", "transform"]
