"""
Timeline Builder Service.

Folds the ordered route events of a trip into one gapless 24-hour duty
status timeline per trip day, as drawn on the driver's daily log sheet.

The fold carries an explicit state (active day, clock, open segments, last
known location). Each event produces the next state; a day is closed by
padding it with off-duty time up to midnight, and the 24-hour invariant is
checked every time a day is closed.

Single Responsibility: Turning route events into day timelines only.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

from ..conf import chart_settings
from ..exceptions import InputError, TimelineConsistencyError
from ..models import (
    DayTimeline,
    DutyStatus,
    HOURS_PER_DAY,
    RouteEvent,
    Segment,
)
from ..models.day_timeline import TIME_TOLERANCE_HOURS
from .location_parser import ParsedLocation, parse_location
from .status_mapper import classify

logger = logging.getLogger(__name__)

END_OF_DAY_DESCRIPTION = "End of the day"
IDLE_DAY_DESCRIPTION = "Off duty"


@dataclass(frozen=True)
class TimelineState:
    """Fold state between two route events."""

    current_day: int
    clock: float
    segments: Tuple[Segment, ...]
    last_location: ParsedLocation
    completed: Tuple[DayTimeline, ...] = field(default_factory=tuple)


class TimelineBuilderService:
    """
    Service for building per-day duty status timelines from route events.

    The builder is pure: the same events always produce equal timelines and
    the input is never modified.
    """

    def __init__(
        self,
        placeholder_location: Optional[str] = None,
        max_trip_days: Optional[int] = None,
    ):
        """Initialize timeline builder."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        settings = chart_settings()
        if placeholder_location is None:
            placeholder_location = settings["PLACEHOLDER_LOCATION"]
        if max_trip_days is None:
            max_trip_days = settings["MAX_TRIP_DAYS"]
        self.placeholder_location = placeholder_location
        self.max_trip_days = max_trip_days

    def build(self, events: Iterable[RouteEvent]) -> List[DayTimeline]:
        """
        Build day timelines for a trip.

        Args:
            events: Route events ordered by day

        Returns:
            One DayTimeline per day number from 1 to the last event's day
            (more if long events roll the clock past midnight)

        Raises:
            InputError: negative duration, day outside 1..max_trip_days,
                or decreasing days
        """
        events = list(events)
        self.validate_events(events)

        if not events:
            self.logger.debug("No route events, returning empty timeline")
            return []

        try:
            state = self.initial_state()
            last_index = len(events) - 1
            for index, event in enumerate(events):
                state = self.apply_event(state, event, is_last=index == last_index)
            state = self._close_day(state)

            self.logger.info(
                f"Built {len(state.completed)} day timelines from {len(events)} events"
            )
            return list(state.completed)

        except (InputError, TimelineConsistencyError):
            raise
        except Exception as e:
            self.logger.error(f"Failed to build duty timelines: {str(e)}")
            raise TimelineBuildError(f"Failed to build duty timelines: {str(e)}") from e

    def build_from_instructions(self, instructions: Iterable[Dict]) -> List[DayTimeline]:
        """Build timelines from upstream route instruction dictionaries."""
        return self.build(RouteEvent.from_instruction(item) for item in instructions)

    def validate_events(self, events: List[RouteEvent]):
        """Reject event sequences that cannot form a log."""
        previous_day = None

        for index, event in enumerate(events):
            if not math.isfinite(event.duration_minutes):
                raise InputError(f"Event {index} has a non-finite duration")
            if event.duration_minutes < 0:
                raise InputError(
                    f"Event {index} has negative duration ({event.duration_minutes} min)"
                )
            if event.day < 1:
                raise InputError(f"Event {index} has invalid day {event.day}")
            if event.day > self.max_trip_days:
                raise InputError(
                    f"Event {index} is on day {event.day}, trips are limited to "
                    f"{self.max_trip_days} days"
                )
            if previous_day is not None and event.day < previous_day:
                raise InputError(
                    f"Event {index} goes back from day {previous_day} to day {event.day}"
                )
            previous_day = event.day

    def initial_state(self) -> TimelineState:
        return TimelineState(
            current_day=1,
            clock=0.0,
            segments=(),
            last_location=ParsedLocation(name=self.placeholder_location),
        )

    def apply_event(
        self, state: TimelineState, event: RouteEvent, is_last: bool = False
    ) -> TimelineState:
        """
        Fold one route event into the state.

        A later day number closes the active day (and backfills skipped
        days). Events still declaring an earlier day after the clock rolled
        past midnight stay in the active day.
        """
        if event.day > state.current_day:
            state = self._close_day(state)
            while state.current_day < event.day:
                state = self._close_day(state)

        location = parse_location(event.location, self.placeholder_location)
        start = state.clock
        end = start + event.duration_hours

        if end - HOURS_PER_DAY > TIME_TOLERANCE_HOURS:
            self.logger.warning(
                f"Event on day {state.current_day} runs past midnight "
                f"({end:.2f}h), clipping it at 24:00"
            )

        segment = Segment(
            start=start,
            end=min(end, float(HOURS_PER_DAY)),
            status=classify(event.halt_type),
            description=event.description,
            location_name=location.name,
            latitude=location.latitude,
            longitude=location.longitude,
        )
        self.logger.debug(
            f"Day {state.current_day}: {segment.status.value} "
            f"{segment.start_label}-{segment.end_label}"
        )

        state = replace(
            state,
            clock=end,
            segments=state.segments + (segment,),
            last_location=location if event.location else state.last_location,
        )

        # Roll over between events only, never inside one
        if state.clock >= HOURS_PER_DAY - TIME_TOLERANCE_HOURS and not is_last:
            state = self._close_day(state)

        return state

    def _close_day(self, state: TimelineState) -> TimelineState:
        """Pad the active day with off-duty time, emit it and open the next day."""
        if state.current_day > self.max_trip_days:
            raise InputError(
                f"Route events run past day {self.max_trip_days}, "
                f"trips are limited to {self.max_trip_days} days"
            )

        segments = state.segments

        if state.clock < HOURS_PER_DAY - TIME_TOLERANCE_HOURS:
            segments = segments + (
                Segment(
                    start=state.clock,
                    end=float(HOURS_PER_DAY),
                    status=DutyStatus.OFF_DUTY,
                    description=END_OF_DAY_DESCRIPTION if segments else IDLE_DAY_DESCRIPTION,
                    location_name=state.last_location.name,
                    latitude=state.last_location.latitude,
                    longitude=state.last_location.longitude,
                    is_filler=True,
                ),
            )

        timeline = DayTimeline(day=state.current_day, segments=segments).check_invariants()

        return replace(
            state,
            current_day=state.current_day + 1,
            clock=0.0,
            segments=(),
            completed=state.completed + (timeline,),
        )


class TimelineBuildError(Exception):
    """Exception raised when building duty timelines fails unexpectedly."""

    pass
