"""
Duty Timeline API Views.

Provides REST API endpoints that build the driver's daily log sheet from
planned route instructions: per-day duty status timelines with totals,
rendered log sheet charts, and pointer hit-testing for chart tooltips.
Every request carries the full instruction list; nothing is stored.
"""

import logging

from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .conf import chart_settings
from .exceptions import InputError
from .serializers import (
    DutyTimelineRequestSerializer,
    HitTestRequestSerializer,
    LogSheetRenderRequestSerializer,
)
from .services.chart_geometry import ChartGeometry
from .services.hours_aggregator import HoursAggregatorService
from .services.log_sheet_renderer import LogSheetRendererService
from .services.timeline_builder import TimelineBuilderService

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"status": "ok"})


def _build_log(serializer):
    """Build timelines and totals for a validated request."""
    builder = TimelineBuilderService(
        placeholder_location=serializer.validated_data.get("placeholder_location")
    )
    timelines = builder.build(serializer.get_route_events())
    totals = HoursAggregatorService().aggregate_all(timelines)
    return builder, timelines, totals


def _geometry(validated_data):
    """Chart geometry for the pixel size requested (fresh on every request)."""
    settings = chart_settings()
    return ChartGeometry(
        width=validated_data.get("width") or settings["DEFAULT_CHART_WIDTH"],
        height=validated_data.get("height") or settings["DEFAULT_CHART_HEIGHT"],
    )


def _day_not_found(day, timelines):
    return Response(
        {
            "error": f"Day {day} is not part of this trip",
            "number_of_days": len(timelines),
        },
        status=status.HTTP_404_NOT_FOUND,
    )


def _invalid_input(error):
    return Response(
        {"error": "Invalid route instructions", "details": str(error)},
        status=status.HTTP_400_BAD_REQUEST,
    )


class DutyTimelineViewSet(viewsets.ViewSet):
    """
    ViewSet for building duty status timelines.

    Turns route instructions into one 24-hour timeline per trip day
    with per-status totals and remarks.
    """

    permission_classes = [AllowAny]

    @action(detail=False, methods=["post"])
    def build(self, request):
        """
        Build the daily log timelines for a trip.

        Request Body:
            route_instructions (list): Instructions with day, duration (minutes),
                halt_type, current_location and description
            placeholder_location (string, optional): Name for unknown locations
        """
        serializer = DutyTimelineRequestSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            builder, timelines, totals = _build_log(serializer)
            renderer = LogSheetRendererService()
            aggregator = HoursAggregatorService()

            days = [
                {
                    "day": timeline.day,
                    "segments": timeline.to_dict()["segments"],
                    "totals": day_totals.to_dict(),
                    "remarks": renderer.remarks_for_day(
                        timeline, builder.placeholder_location
                    ),
                }
                for timeline, day_totals in zip(timelines, totals)
            ]

            logger.info(f"Built duty timelines for {len(days)} days")
            return Response(
                {
                    "days": days,
                    "trip_summary": aggregator.summarize_trip(timelines),
                    "generated_at": timezone.now(),
                }
            )

        except InputError as e:
            logger.warning(f"Rejected route instructions: {str(e)}")
            return _invalid_input(e)
        except Exception as e:
            logger.error(f"Duty timeline build failed: {str(e)}")
            return Response(
                {"error": "Duty timeline build failed", "details": str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class LogSheetChartViewSet(viewsets.ViewSet):
    """
    ViewSet for log sheet charts.

    Renders the 24-hour duty status chart of one trip day and resolves
    pointer positions on it.
    """

    permission_classes = [AllowAny]

    @action(detail=False, methods=["post"])
    def render_chart(self, request):
        """
        Render the chart of one day.

        Request Body:
            route_instructions (list): Trip route instructions
            day (int): Trip day to draw
            width/height (float, optional): Chart size in pixels
            hover_x/hover_y (float, optional): Pointer position for the tooltip
            output (string): 'svg', 'html' or 'json'
        """
        serializer = LogSheetRenderRequestSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            validated_data = serializer.validated_data
            builder, timelines, totals = _build_log(serializer)

            day = validated_data["day"]
            if day > len(timelines):
                return _day_not_found(day, timelines)

            timeline, day_totals = timelines[day - 1], totals[day - 1]
            geometry = _geometry(validated_data)
            renderer = LogSheetRendererService()

            hovered = None
            if validated_data.get("hover_x") is not None:
                hovered = geometry.hit_test(
                    validated_data["hover_x"], validated_data["hover_y"], timeline
                )

            output = validated_data["output"]
            if output == "html":
                content = renderer.render_day_html(
                    timeline, day_totals, geometry, hovered, builder.placeholder_location
                )
            else:
                drawing = renderer.build_chart(timeline, day_totals, geometry, hovered)
                content = drawing.to_dict() if output == "json" else renderer.render_svg(drawing)

            logger.info(f"Rendered day {day} log sheet as {output}")
            return Response(
                {
                    "day": day,
                    "output": output,
                    "content": content,
                    "hovered": hovered.to_dict() if hovered else None,
                    "totals": day_totals.to_dict(),
                }
            )

        except InputError as e:
            return _invalid_input(e)
        except Exception as e:
            logger.error(f"Log sheet rendering failed: {str(e)}")
            return Response(
                {"error": "Failed to render log sheet", "details": str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @action(detail=False, methods=["post"])
    def hit_test(self, request):
        """
        Find the segment under a pointer position.

        Request Body:
            route_instructions (list): Trip route instructions
            day (int): Trip day shown in the chart
            width/height (float, optional): Chart size in pixels
            mouse_x/mouse_y (float): Pointer position in pixels
        """
        serializer = HitTestRequestSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            validated_data = serializer.validated_data
            _, timelines, _ = _build_log(serializer)

            day = validated_data["day"]
            if day > len(timelines):
                return _day_not_found(day, timelines)

            geometry = _geometry(validated_data)
            hit = geometry.hit_test(
                validated_data["mouse_x"], validated_data["mouse_y"], timelines[day - 1]
            )

            return Response(
                {
                    "day": day,
                    "hit": hit.to_dict() if hit else None,
                    "tooltip": hit.segment.duration_label if hit else None,
                }
            )

        except InputError as e:
            return _invalid_input(e)
        except Exception as e:
            logger.error(f"Hit test failed: {str(e)}")
            return Response(
                {"error": "Hit test failed", "details": str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
