"""
Chart Geometry for the daily log sheet grid.

Maps time of day to chart pixels and back, snaps segment boundaries onto
hourly gridlines, and resolves pointer positions to segments. Drawing and
hit-testing both go through ``ChartGeometry.segment_span`` so the two can
never disagree about where a segment is.

A ChartGeometry is built for one pixel size. When the chart is resized a
new instance must be created from the new dimensions.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..conf import chart_settings
from ..exceptions import InputError
from ..models import DayTimeline, DutyStatus, HOURS_PER_DAY, STATUS_ROW_ORDER, Segment

# Float slack when comparing against the snap threshold (2.1h - 2h != 0.1h)
SNAP_EPSILON = 1e-9


def time_to_x(t: float, origin_x: float, width: float) -> float:
    """Map hours after midnight onto [origin_x, origin_x + width]."""
    return origin_x + (t / HOURS_PER_DAY) * width


def x_to_time(x: float, origin_x: float, width: float) -> float:
    """Map a pixel back onto hours after midnight (inverse of time_to_x)."""
    return (x - origin_x) / width * HOURS_PER_DAY


@dataclass(frozen=True)
class ChartLayout:
    """Fixed pixel measurements of the log sheet chart."""

    label_width: float = 120
    totals_width: float = 80
    header_height: float = 30
    row_height: float = 40
    hit_tolerance: float = 10
    snap_threshold_hours: float = 0.1

    @classmethod
    def from_settings(cls) -> "ChartLayout":
        return cls(**chart_settings()["LAYOUT"])


@dataclass(frozen=True)
class HitResult:
    """Segment found under the pointer."""

    index: int
    segment: Segment
    status: DutyStatus
    start_x: float
    end_x: float

    def to_dict(self) -> Dict:
        return {
            "index": self.index,
            "status": self.status.value,
            "status_display": self.status.label,
            "start_x": self.start_x,
            "end_x": self.end_x,
            "segment": self.segment.to_dict(),
        }


class ChartGeometry:
    """
    Pixel geometry of one log sheet chart.

    The chart area starts after the status label column and ends before the
    totals column. Each duty status row has its baseline (the line segments
    are drawn on) at the bottom of the row.
    """

    def __init__(
        self,
        width: float,
        height: Optional[float] = None,
        layout: Optional[ChartLayout] = None,
    ):
        self.layout = layout or ChartLayout.from_settings()
        self.width = float(width)
        if height is None:
            height = chart_settings()["DEFAULT_CHART_HEIGHT"]
        self.height = float(height)

        self.origin_x = float(self.layout.label_width)
        self.chart_width = self.width - self.layout.label_width - self.layout.totals_width
        self.chart_y = float(self.layout.header_height)

        if self.chart_width <= 0:
            raise InputError(
                f"Chart width {width}px leaves no room for the {HOURS_PER_DAY}h grid"
            )

    def __repr__(self):
        return f"ChartGeometry(width={self.width}, height={self.height})"

    def time_to_x(self, t: float) -> float:
        return time_to_x(t, self.origin_x, self.chart_width)

    def x_to_time(self, x: float) -> float:
        return x_to_time(x, self.origin_x, self.chart_width)

    def gridline_x(self, hour: int) -> float:
        """Pixel position of the vertical gridline for a whole hour (0-24)."""
        return self.time_to_x(hour)

    def gridline_positions(self) -> List[float]:
        return [self.gridline_x(hour) for hour in range(HOURS_PER_DAY + 1)]

    def snap_x(self, t: float) -> float:
        """
        Pixel for a segment boundary at time t.

        Boundaries within the snap threshold of a whole hour land exactly on
        that hour's gridline.
        """
        nearest_hour = round(t)
        if abs(t - nearest_hour) <= self.layout.snap_threshold_hours + SNAP_EPSILON:
            return self.gridline_x(nearest_hour)
        return self.time_to_x(t)

    def snap_pixel(self, x: float) -> float:
        """Snap a raw pixel the same way a segment boundary at that pixel is drawn."""
        return self.snap_x(self.x_to_time(x))

    def segment_span(self, segment: Segment) -> Tuple[float, float]:
        """Start and end pixels of a segment as drawn on its row."""
        return self.snap_x(segment.start), self.snap_x(segment.end)

    def row_index(self, status: DutyStatus) -> int:
        return STATUS_ROW_ORDER.index(status)

    def row_top_y(self, status: DutyStatus) -> float:
        return self.chart_y + self.row_index(status) * self.layout.row_height

    def row_baseline_y(self, status: DutyStatus) -> float:
        return self.row_top_y(status) + self.layout.row_height

    @property
    def grid_bottom_y(self) -> float:
        return self.chart_y + len(STATUS_ROW_ORDER) * self.layout.row_height

    def status_at_y(self, y: float) -> Optional[DutyStatus]:
        """Status row whose baseline is within hit tolerance of y."""
        for status in STATUS_ROW_ORDER:
            if abs(y - self.row_baseline_y(status)) <= self.layout.hit_tolerance:
                return status
        return None

    def hit_test(
        self, mouse_x: float, mouse_y: float, day_timeline: DayTimeline
    ) -> Optional[HitResult]:
        """
        Find the segment under the pointer.

        A shared boundary pixel belongs to the earlier segment, i.e. the one
        ending at that time.
        """
        status = self.status_at_y(mouse_y)
        if status is None:
            return None

        for index, segment in enumerate(day_timeline.segments):
            if segment.status != status:
                continue
            start_x, end_x = self.segment_span(segment)
            if start_x <= mouse_x <= end_x:
                return HitResult(
                    index=index,
                    segment=segment,
                    status=status,
                    start_x=start_x,
                    end_x=end_x,
                )

        return None
