"""Errors raised when a feed record does not match the rule table."""

from typing import Any


class RuleMismatchError(Exception):
    """
    A raw feed value is not covered by the rule table.

    The feed changed upstream and the rule table must be updated.
    """

    def __init__(self, message: str, record: Any = None) -> None:
        super().__init__(message)
        self.record = record


class UnexpectedRouteColorError(RuleMismatchError):
    """No color is known for the route code."""


class UnexpectedRouteCodeError(RuleMismatchError):
    """The route short name cannot be turned into a route code."""


class UnexpectedHeadsignError(RuleMismatchError):
    """No headsign rule matches the trip."""


class UnexpectedMergeError(RuleMismatchError):
    """Two trip headsigns cannot be merged."""


class UnexpectedStopIdError(RuleMismatchError):
    """Neither the stop id nor the stop code is numeric."""


class RuleTableError(Exception):
    """
    The rule table file is malformed.
    """

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Invalid rule table {source}: {message}")
        self.source = source
