"""
Exceptions shared by the duty timeline services.
"""


class InputError(ValueError):
    """Raised when the route event sequence cannot be turned into a log."""

    pass


class TimelineConsistencyError(AssertionError):
    """Raised when a day timeline does not cover exactly 24 gapless hours."""

    pass
