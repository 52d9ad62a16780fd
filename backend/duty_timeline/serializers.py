"""
Duty Timeline API Serializers.

Provides validation for the log sheet endpoints. Route instructions use the
upstream trip planner's wire names (``duration``, ``current_location``) and
are mapped onto RouteEvent fields. Ordering rules (non-decreasing days,
non-negative durations) are enforced by the timeline builder, not here.
"""

from rest_framework import serializers

from .models import RouteEvent


class RouteInstructionSerializer(serializers.Serializer):
    """
    Serializer for one route instruction of a planned trip.
    """

    day = serializers.IntegerField(help_text="Trip day (1-based)")

    duration = serializers.FloatField(
        source="duration_minutes",
        help_text="Duration of the instruction in minutes",
    )

    halt_type = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        default="",
        help_text="Halt type (DRIVE, STOP, ON_DUTY_NOT_DRIVING, BREAK, OFF_DUTY, SLEEPER)",
    )

    current_location = serializers.CharField(
        source="location",
        required=False,
        allow_blank=True,
        allow_null=True,
        default="",
        help_text="Location, optionally formatted as 'Name (lat, lon)'",
    )

    description = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        default="",
        help_text="Remark text for the instruction",
    )


class DutyTimelineRequestSerializer(serializers.Serializer):
    """
    Serializer for timeline build requests.
    """

    route_instructions = RouteInstructionSerializer(
        many=True,
        help_text="Route instructions ordered by day",
    )

    placeholder_location = serializers.CharField(
        required=False,
        max_length=100,
        help_text="Name used when an instruction has no location",
    )

    def get_route_events(self):
        """Return the validated instructions as RouteEvent objects."""
        return [
            RouteEvent.from_instruction(item)
            for item in self.validated_data["route_instructions"]
        ]


class LogSheetChartRequestSerializer(DutyTimelineRequestSerializer):
    """
    Serializer for chart requests on one day of the log sheet.
    """

    day = serializers.IntegerField(min_value=1, help_text="Trip day to draw")

    width = serializers.FloatField(
        required=False,
        min_value=1,
        help_text="Chart width in pixels",
    )

    height = serializers.FloatField(
        required=False,
        min_value=1,
        help_text="Chart height in pixels",
    )


class LogSheetRenderRequestSerializer(LogSheetChartRequestSerializer):
    """
    Serializer for log sheet render requests.
    """

    hover_x = serializers.FloatField(
        required=False,
        allow_null=True,
        help_text="Pointer x position for the hover tooltip",
    )

    hover_y = serializers.FloatField(
        required=False,
        allow_null=True,
        help_text="Pointer y position for the hover tooltip",
    )

    output = serializers.ChoiceField(
        choices=[("svg", "SVG"), ("html", "HTML"), ("json", "JSON")],
        default="svg",
        help_text="Output format",
    )

    def validate(self, data):
        """Hover position needs both coordinates."""
        has_x = data.get("hover_x") is not None
        has_y = data.get("hover_y") is not None

        if has_x != has_y:
            raise serializers.ValidationError(
                "hover_x and hover_y must be provided together"
            )

        return data


class HitTestRequestSerializer(LogSheetChartRequestSerializer):
    """
    Serializer for pointer hit-test requests.
    """

    mouse_x = serializers.FloatField(help_text="Pointer x position in pixels")
    mouse_y = serializers.FloatField(help_text="Pointer y position in pixels")
