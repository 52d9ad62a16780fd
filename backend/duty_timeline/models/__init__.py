"""
Duty timeline models package.

Immutable value objects for the driver's daily log sheet. Nothing here is
stored in the database; timelines are rebuilt from route events on demand.
"""

from .duty_status import DutyStatus, HaltType, STATUS_ROW_ORDER
from .route_event import RouteEvent
from .day_timeline import (
    DayTimeline,
    HOURS_PER_DAY,
    Segment,
    StatusTotals,
)

__all__ = [
    "DutyStatus",
    "HaltType",
    "STATUS_ROW_ORDER",
    "RouteEvent",
    "DayTimeline",
    "HOURS_PER_DAY",
    "Segment",
    "StatusTotals",
]
