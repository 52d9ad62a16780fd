"""
Log Sheet Renderer Service for the driver's daily log.

Turns a day timeline and its totals into drawing primitives for the
24-hour duty status chart (gridlines, status rows, segment lines,
transition lines, rest break markers and the hover tooltip) and renders
them as SVG or as an HTML log sheet.

The renderer holds no business logic: timelines, totals and pixel
positions all come from the other duty timeline services.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.utils.html import escape

from ..conf import chart_settings
from ..models import DayTimeline, HOURS_PER_DAY, STATUS_ROW_ORDER, StatusTotals
from .chart_geometry import ChartGeometry, HitResult

logger = logging.getLogger(__name__)

# Approximate advance of one 12px Arial character, used to size tooltips
TOOLTIP_CHAR_WIDTH = 7


def hour_label(hour: int) -> str:
    """Label of an hour gridline on the log sheet header."""
    if hour == 0:
        return "Mid"
    if hour == 12:
        return "Noon"
    return str(hour)


@dataclass
class ChartDrawing:
    """
    Drawing primitives for one day's chart.

    Every entry is a plain dictionary so the drawing can be returned as JSON
    to a client that paints it on its own canvas.
    """

    day: int
    width: float
    height: float
    gridlines: List[Dict] = field(default_factory=list)
    rows: List[Dict] = field(default_factory=list)
    segments: List[Dict] = field(default_factory=list)
    transitions: List[Dict] = field(default_factory=list)
    break_markers: List[Dict] = field(default_factory=list)
    tooltip: Optional[Dict] = None

    def to_dict(self) -> Dict:
        return {
            "day": self.day,
            "width": self.width,
            "height": self.height,
            "gridlines": self.gridlines,
            "rows": self.rows,
            "segments": self.segments,
            "transitions": self.transitions,
            "break_markers": self.break_markers,
            "tooltip": self.tooltip,
        }


class LogSheetRendererService:
    """
    Service for rendering daily log sheet charts.

    Single Responsibility: Log sheet rendering and visual representation
    """

    def __init__(self):
        """Initialize log sheet renderer service."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = chart_settings()

    def build_chart(
        self,
        day_timeline: DayTimeline,
        totals: StatusTotals,
        geometry: ChartGeometry,
        hovered: Optional[HitResult] = None,
    ) -> ChartDrawing:
        """
        Create the drawing primitives for one day.

        Args:
            day_timeline: Timeline to draw
            totals: Totals for the same day (shown right of each row)
            geometry: Pixel geometry for the current chart size
            hovered: Segment under the pointer, if any

        Returns:
            ChartDrawing ready for render_svg or JSON export
        """
        try:
            drawing = ChartDrawing(
                day=day_timeline.day, width=geometry.width, height=geometry.height
            )

            self._add_gridlines(drawing, geometry)
            self._add_rows(drawing, totals, geometry)
            self._add_segments(drawing, day_timeline, geometry)

            if hovered is not None:
                drawing.tooltip = self._tooltip(hovered, geometry)

            return drawing

        except Exception as e:
            self.logger.error(f"Failed to build chart for day {day_timeline.day}: {str(e)}")
            raise LogSheetRenderingError(f"Failed to build chart: {str(e)}") from e

    def _add_gridlines(self, drawing: ChartDrawing, geometry: ChartGeometry):
        for hour, x in enumerate(geometry.gridline_positions()):
            drawing.gridlines.append(
                {
                    "hour": hour,
                    "label": hour_label(hour),
                    "x": x,
                    "y1": geometry.chart_y,
                    "y2": geometry.grid_bottom_y,
                }
            )

    def _add_rows(self, drawing: ChartDrawing, totals: StatusTotals, geometry: ChartGeometry):
        positions = geometry.gridline_positions()
        half_hour_ticks = [
            (positions[hour] + positions[hour + 1]) / 2 for hour in range(HOURS_PER_DAY)
        ]

        for status in STATUS_ROW_ORDER:
            drawing.rows.append(
                {
                    "status": status.value,
                    "label": status.label,
                    "total": totals.formatted[status],
                    "baseline_y": geometry.row_baseline_y(status),
                    "x1": geometry.origin_x,
                    "x2": geometry.origin_x + geometry.chart_width,
                    "label_x": 10,
                    "total_x": geometry.width - 10,
                    "half_hour_ticks": half_hour_ticks,
                }
            )

    def _add_segments(
        self, drawing: ChartDrawing, day_timeline: DayTimeline, geometry: ChartGeometry
    ):
        colors = self.settings["STATUS_COLORS"]
        previous = None

        for index, segment in enumerate(day_timeline.segments):
            start_x, end_x = geometry.segment_span(segment)
            baseline_y = geometry.row_baseline_y(segment.status)
            color_start, color_end = colors[segment.status.value]

            drawing.segments.append(
                {
                    "index": index,
                    "status": segment.status.value,
                    "x1": start_x,
                    "x2": end_x,
                    "y": baseline_y,
                    "color_start": color_start,
                    "color_end": color_end,
                    "start_time": segment.start_label,
                    "end_time": segment.end_label,
                }
            )

            if previous is not None and previous.status != segment.status:
                drawing.transitions.append(
                    {
                        "index": index,
                        "x": start_x,
                        "y1": geometry.row_baseline_y(previous.status),
                        "y2": baseline_y,
                        "color": color_end,
                    }
                )

            if segment.is_rest_break:
                top_y = geometry.row_top_y(segment.status)
                drawing.break_markers.append(
                    {
                        "index": index,
                        "label": f"Break {index}",
                        "x": start_x,
                        "y": top_y - 10,
                        "arrow": [
                            (start_x, top_y - 5),
                            (start_x - 4, top_y - 15),
                            (start_x + 4, top_y - 15),
                        ],
                    }
                )

            previous = segment

    def _tooltip(self, hovered: HitResult, geometry: ChartGeometry) -> Dict:
        text = hovered.segment.duration_label
        width = len(text) * TOOLTIP_CHAR_WIDTH + 20
        center_x = hovered.start_x + (hovered.end_x - hovered.start_x) / 2

        return {
            "index": hovered.index,
            "text": text,
            "x": center_x - width / 2,
            "y": geometry.row_top_y(hovered.status) - 30,
            "width": width,
            "height": 20,
        }

    def render_svg(self, drawing: ChartDrawing) -> str:
        """
        Render drawing primitives as a standalone SVG document.

        Args:
            drawing: ChartDrawing from build_chart

        Returns:
            SVG markup string
        """
        try:
            grid_color = self.settings["GRID_COLOR"]
            text_color = self.settings["TEXT_COLOR"]
            parts = []
            gradients = []

            for gridline in drawing.gridlines:
                parts.append(
                    '<text x="{x:.2f}" y="20" text-anchor="middle" font-size="12" '
                    'fill="{fill}">{label}</text>'
                    '<line x1="{x:.2f}" y1="{y1:.2f}" x2="{x:.2f}" y2="{y2:.2f}" '
                    'stroke="{stroke}" stroke-width="1"/>'.format(
                        fill=text_color, stroke=grid_color, **gridline
                    )
                )

            for row in drawing.rows:
                y = row["baseline_y"]
                parts.append(
                    '<line x1="{x1:.2f}" y1="{y:.2f}" x2="{x2:.2f}" y2="{y:.2f}" '
                    'stroke="{stroke}" stroke-width="1"/>'.format(
                        x1=row["x1"], x2=row["x2"], y=y, stroke=grid_color
                    )
                )
                for tick_x in row["half_hour_ticks"]:
                    parts.append(
                        '<line x1="{x:.2f}" y1="{y1:.2f}" x2="{x:.2f}" y2="{y2:.2f}" '
                        'stroke="{stroke}" stroke-width="1"/>'.format(
                            x=tick_x, y1=y - 5, y2=y + 5, stroke=grid_color
                        )
                    )
                parts.append(
                    '<text x="{lx}" y="{ty:.2f}" text-anchor="start" font-size="12" '
                    'fill="{fill}">{label}</text>'
                    '<text x="{rx:.2f}" y="{ty:.2f}" text-anchor="end" font-size="12" '
                    'fill="{fill}">{total}</text>'.format(
                        lx=row["label_x"],
                        rx=row["total_x"],
                        ty=y - 5,
                        fill=text_color,
                        label=escape(row["label"]),
                        total=escape(row["total"]),
                    )
                )

            for segment in drawing.segments:
                gradient_id = f"segment-{drawing.day}-{segment['index']}"
                gradients.append(
                    '<linearGradient id="{id}" gradientUnits="userSpaceOnUse" '
                    'x1="{x1:.2f}" y1="0" x2="{x2:.2f}" y2="0">'
                    '<stop offset="0" stop-color="{start}"/>'
                    '<stop offset="1" stop-color="{end}"/>'
                    "</linearGradient>".format(
                        id=gradient_id,
                        x1=segment["x1"],
                        x2=segment["x2"],
                        start=segment["color_start"],
                        end=segment["color_end"],
                    )
                )
                parts.append(
                    '<line class="segment {status}" x1="{x1:.2f}" y1="{y:.2f}" '
                    'x2="{x2:.2f}" y2="{y:.2f}" stroke="url(#{id})" '
                    'stroke-width="4"/>'.format(id=gradient_id, **segment)
                )

            for transition in drawing.transitions:
                parts.append(
                    '<line class="transition" x1="{x:.2f}" y1="{y1:.2f}" x2="{x:.2f}" '
                    'y2="{y2:.2f}" stroke="{color}" stroke-width="2"/>'.format(
                        **transition
                    )
                )

            for marker in drawing.break_markers:
                points = " ".join(f"{x:.2f},{y:.2f}" for x, y in marker["arrow"])
                parts.append(
                    '<text x="{x:.2f}" y="{y:.2f}" text-anchor="middle" font-size="10" '
                    'fill="#ffffff">{label}</text>'
                    '<polygon points="{points}" fill="#ffffff"/>'.format(
                        x=marker["x"],
                        y=marker["y"],
                        label=escape(marker["label"]),
                        points=points,
                    )
                )

            if drawing.tooltip:
                tooltip = drawing.tooltip
                parts.append(
                    '<g class="tooltip"><rect x="{x:.2f}" y="{y:.2f}" width="{width:.2f}" '
                    'height="{height}" fill="rgba(0, 0, 0, 0.8)"/>'
                    '<text x="{cx:.2f}" y="{ty:.2f}" text-anchor="middle" font-size="12" '
                    'fill="#ffffff">{text}</text></g>'.format(
                        cx=tooltip["x"] + tooltip["width"] / 2,
                        ty=tooltip["y"] + 15,
                        x=tooltip["x"],
                        y=tooltip["y"],
                        width=tooltip["width"],
                        height=tooltip["height"],
                        text=escape(tooltip["text"]),
                    )
                )

            return (
                '<svg xmlns="http://www.w3.org/2000/svg" class="duty-status-chart" '
                'data-day="{day}" width="{width:.0f}" height="{height:.0f}" '
                'viewBox="0 0 {width:.0f} {height:.0f}" font-family="Arial, sans-serif">'
                "<defs>{gradients}</defs>{body}</svg>"
            ).format(
                day=drawing.day,
                width=drawing.width,
                height=drawing.height,
                gradients="".join(gradients),
                body="".join(parts),
            )

        except Exception as e:
            self.logger.error(f"Failed to render SVG for day {drawing.day}: {str(e)}")
            raise LogSheetRenderingError(f"Failed to render SVG: {str(e)}") from e

    def remarks_for_day(
        self, day_timeline: DayTimeline, placeholder: Optional[str] = None
    ) -> List[str]:
        """Remarks lines ("HH:MM: description at location") for known locations."""
        if placeholder is None:
            placeholder = self.settings["PLACEHOLDER_LOCATION"]

        return [
            f"{segment.start_label}: {segment.description} at {segment.location_name}"
            for segment in day_timeline.segments
            if segment.location_name and segment.location_name != placeholder
        ]

    def render_day_html(
        self,
        day_timeline: DayTimeline,
        totals: StatusTotals,
        geometry: ChartGeometry,
        hovered: Optional[HitResult] = None,
        placeholder: Optional[str] = None,
    ) -> str:
        """Render one day's log sheet: totals summary, chart and remarks."""
        drawing = self.build_chart(day_timeline, totals, geometry, hovered)

        summary = "".join(
            '<div class="total"><p class="status">{label}</p>'
            '<p class="hours">{hours}</p></div>'.format(
                label=escape(status.label), hours=totals.formatted[status]
            )
            for status in STATUS_ROW_ORDER
        )
        remarks = "".join(
            f"<li>{escape(line)}</li>"
            for line in self.remarks_for_day(day_timeline, placeholder)
        )

        return """
            <section class="daily-log" data-day="{day}">
                <h3>Day {day}</h3>
                <div class="totals-summary">{summary}</div>
                <div class="duty-status-chart">{chart}</div>
                <div class="remarks-section">
                    <h4>Remarks</h4>
                    <ul>{remarks}</ul>
                </div>
            </section>
            """.format(
            day=day_timeline.day,
            summary=summary,
            chart=self.render_svg(drawing),
            remarks=remarks,
        )

    def render_trip_html(
        self,
        timelines: List[DayTimeline],
        totals: List[StatusTotals],
        geometry: ChartGeometry,
        placeholder: Optional[str] = None,
    ) -> str:
        """Render the log sheets of every trip day as one HTML document."""
        days = "".join(
            self.render_day_html(timeline, day_totals, geometry, placeholder=placeholder)
            for timeline, day_totals in zip(timelines, totals)
        )
        self.logger.info(f"Rendered log sheets for {len(timelines)} days")

        return """
            <div class="eld-log-sheet">
                <div class="log-header">
                    <h2>Driver's Daily Log Sheet</h2>
                    <span>Duration: {count} {unit}</span>
                </div>
                {days}
            </div>
            """.format(
            count=len(timelines),
            unit="day" if len(timelines) == 1 else "days",
            days=days,
        )


class LogSheetRenderingError(Exception):
    """Exception raised when log sheet rendering fails."""

    pass
