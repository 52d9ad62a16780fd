"""
Duty Timeline Services Package.

This package contains the business logic that turns planned route events
into the driver's daily log sheet.

Services:
- classify: Map raw halt types to duty statuses
- parse_location: Extract location names and coordinates
- TimelineBuilderService: Fold route events into 24-hour day timelines
- HoursAggregatorService: Per-status hour totals
- ChartGeometry: Time/pixel mapping, gridline snapping and hit-testing
- LogSheetRendererService: Chart drawing primitives, SVG and HTML output
"""

from .status_mapper import classify
from .location_parser import ParsedLocation, parse_location
from .timeline_builder import TimelineBuilderService, TimelineBuildError
from .hours_aggregator import HoursAggregatorService
from .chart_geometry import ChartGeometry, ChartLayout, HitResult, time_to_x, x_to_time
from .log_sheet_renderer import (
    ChartDrawing,
    LogSheetRendererService,
    LogSheetRenderingError,
)

__all__ = [
    'classify',
    'ParsedLocation',
    'parse_location',
    'TimelineBuilderService',
    'TimelineBuildError',
    'HoursAggregatorService',
    'ChartGeometry',
    'ChartLayout',
    'HitResult',
    'time_to_x',
    'x_to_time',
    'ChartDrawing',
    'LogSheetRendererService',
    'LogSheetRenderingError',
]
