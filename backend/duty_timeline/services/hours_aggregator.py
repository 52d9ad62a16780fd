"""
Hours Aggregator Service.

Sums the hours of each duty status for a day timeline, producing the
totals shown in the right-hand column of the log sheet.
"""

import logging
from typing import Dict, List

from common.validators import format_clock_time
from ..exceptions import TimelineConsistencyError
from ..models import DayTimeline, DutyStatus, STATUS_ROW_ORDER, StatusTotals

logger = logging.getLogger(__name__)


class HoursAggregatorService:
    """
    Service for per-status hour totals of day timelines.

    Single Responsibility: Duty status hour accounting only.
    """

    def __init__(self):
        """Initialize hours aggregator."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def aggregate(self, day_timeline: DayTimeline) -> StatusTotals:
        """
        Calculate total hours per duty status for one day.

        Args:
            day_timeline: A timeline produced by the timeline builder

        Returns:
            StatusTotals with all four statuses present, zero when unused
        """
        day_timeline.check_invariants()

        hours = {status: 0.0 for status in STATUS_ROW_ORDER}
        for segment in day_timeline.segments:
            hours[segment.status] += segment.duration_hours

        totals = StatusTotals(
            day=day_timeline.day,
            hours=hours,
            formatted={status: format_clock_time(value) for status, value in hours.items()},
        )
        if not totals.is_complete:
            raise TimelineConsistencyError(
                f"Day {day_timeline.day} totals add up to {totals.total_hours}h"
            )

        self.logger.debug(f"Day {day_timeline.day} totals: {totals.formatted}")
        return totals

    def aggregate_all(self, timelines: List[DayTimeline]) -> List[StatusTotals]:
        """Calculate totals for every day of a trip."""
        return [self.aggregate(timeline) for timeline in timelines]

    def summarize_trip(self, timelines: List[DayTimeline]) -> Dict:
        """
        Summarize duty hours across all days of a trip.

        Returns:
            Dict with day count, per-status hours and formatted totals
        """
        status_hours = {status: 0.0 for status in STATUS_ROW_ORDER}

        for totals in self.aggregate_all(timelines):
            for status, value in totals.hours.items():
                status_hours[status] += value

        on_duty_hours = (
            status_hours[DutyStatus.DRIVING]
            + status_hours[DutyStatus.ON_DUTY_NOT_DRIVING]
        )

        return {
            "number_of_days": len(timelines),
            "status_hours": {
                status.value: round(value, 4) for status, value in status_hours.items()
            },
            "status_formatted": {
                status.value: format_clock_time(value)
                for status, value in status_hours.items()
            },
            "on_duty_hours": round(on_duty_hours, 4),
            "total_hours": round(sum(status_hours.values()), 4),
        }
