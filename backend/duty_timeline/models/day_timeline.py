"""
Day timeline models for the driver's daily log sheet.

Contains the Segment, DayTimeline and StatusTotals value objects. They are
immutable: the timeline builder creates them from a snapshot of route
events and the whole set is rebuilt whenever the events change.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from common.validators import format_clock_time, format_duration_hm
from ..exceptions import TimelineConsistencyError
from .duty_status import DutyStatus, STATUS_ROW_ORDER

HOURS_PER_DAY = 24
TIME_TOLERANCE_HOURS = 1e-6


@dataclass(frozen=True)
class Segment:
    """
    Contiguous stretch of one duty status within a day.

    Attributes:
        start: Start time in hours after midnight
        end: End time in hours after midnight
        status: Duty status for this stretch
        description: Remark text for the stretch
        location_name: Human-readable location
        latitude/longitude: Coordinates parsed from the location (optional)
        is_filler: True for off-duty padding added by the builder
    """

    start: float
    end: float
    status: DutyStatus
    description: str = ""
    location_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_filler: bool = False

    @property
    def duration_hours(self) -> float:
        return self.end - self.start

    @property
    def start_label(self) -> str:
        return format_clock_time(self.start)

    @property
    def end_label(self) -> str:
        return format_clock_time(self.end)

    @property
    def duration_label(self) -> str:
        """Duration as shown in the chart tooltip, e.g. '2h 30m'."""
        return format_duration_hm(self.duration_hours)

    @property
    def is_rest_break(self) -> bool:
        return "rest break" in (self.description or "")

    def to_dict(self) -> Dict:
        return {
            "start": self.start,
            "end": self.end,
            "start_time": self.start_label,
            "end_time": self.end_label,
            "duration_hours": round(self.duration_hours, 4),
            "duration_display": self.duration_label,
            "status": self.status.value,
            "status_display": self.status.label,
            "description": self.description,
            "location": self.location_name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "is_filler": self.is_filler,
        }


@dataclass(frozen=True)
class DayTimeline:
    """
    Gapless 24-hour accounting of duty statuses for one trip day.

    Segments are sorted by start, contiguous, and span exactly [0, 24].
    """

    day: int
    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    def check_invariants(self) -> "DayTimeline":
        """Raise TimelineConsistencyError unless the day covers 00:00-24:00."""
        if not self.segments:
            raise TimelineConsistencyError(f"Day {self.day} has no segments")

        first, last = self.segments[0], self.segments[-1]
        if abs(first.start) > TIME_TOLERANCE_HOURS:
            raise TimelineConsistencyError(
                f"Day {self.day} starts at {first.start}h instead of midnight"
            )
        if abs(last.end - HOURS_PER_DAY) > TIME_TOLERANCE_HOURS:
            raise TimelineConsistencyError(
                f"Day {self.day} ends at {last.end}h instead of 24h"
            )

        for previous, current in zip(self.segments, self.segments[1:]):
            if abs(previous.end - current.start) > TIME_TOLERANCE_HOURS:
                raise TimelineConsistencyError(
                    f"Day {self.day} has a gap or overlap at {previous.end}h"
                )
        for segment in self.segments:
            if segment.end < segment.start:
                raise TimelineConsistencyError(
                    f"Day {self.day} has a negative-length segment at {segment.start}h"
                )

        return self

    def to_dict(self) -> Dict:
        return {
            "day": self.day,
            "segments": [segment.to_dict() for segment in self.segments],
        }


@dataclass(frozen=True)
class StatusTotals:
    """
    Hours spent in each duty status during one day.

    Attributes:
        day: Trip day the totals belong to
        hours: Raw hour totals for all four statuses
        formatted: The same totals as "HH:MM" strings
    """

    day: int
    hours: Dict[DutyStatus, float]
    formatted: Dict[DutyStatus, str]

    @property
    def total_hours(self) -> float:
        return sum(self.hours.values())

    @property
    def is_complete(self) -> bool:
        return abs(self.total_hours - HOURS_PER_DAY) <= TIME_TOLERANCE_HOURS

    def to_dict(self) -> Dict:
        return {
            "day": self.day,
            "hours": {status.value: self.hours[status] for status in STATUS_ROW_ORDER},
            "formatted": {
                status.value: self.formatted[status] for status in STATUS_ROW_ORDER
            },
            "total_hours": round(self.total_hours, 6),
            "is_complete": self.is_complete,
        }
