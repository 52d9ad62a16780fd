"""
Common validators and utilities for the log sheet application.

This module contains shared validation logic and time formatting helpers
used by the duty timeline services and the API layer.
"""

from math import floor

from django.core.exceptions import ValidationError
from django.core.validators import BaseValidator


class GPSCoordinateValidator(BaseValidator):
    """
    Validator for GPS coordinates (latitude/longitude).

    Ensures coordinates are within valid ranges:
    - Latitude: -90 to 90 degrees
    - Longitude: -180 to 180 degrees
    """

    def __init__(self, coordinate_type="latitude"):
        self.coordinate_type = coordinate_type

        if coordinate_type == "latitude":
            limit_value = (-90, 90)
            message = "Latitude must be between -90 and 90 degrees."
        elif coordinate_type == "longitude":
            limit_value = (-180, 180)
            message = "Longitude must be between -180 and 180 degrees."
        else:
            raise ValueError("coordinate_type must be 'latitude' or 'longitude'")

        super().__init__(limit_value, message=message)

    def compare(self, value, limit_value):
        min_val, max_val = limit_value
        return not (min_val <= value <= max_val)

    def clean(self, value):
        return float(value)


def validate_latitude(value):
    """Validate latitude coordinate."""
    validator = GPSCoordinateValidator("latitude")
    validator(value)


def validate_longitude(value):
    """Validate longitude coordinate."""
    validator = GPSCoordinateValidator("longitude")
    validator(value)


def is_valid_coordinate_pair(latitude, longitude) -> bool:
    """Return True when both coordinates are inside their valid ranges."""
    try:
        validate_latitude(latitude)
        validate_longitude(longitude)
    except ValidationError:
        return False
    return True


def _split_hours(hours: float) -> tuple[int, int]:
    """Split fractional hours into whole hours and rounded minutes."""
    whole_hours = floor(hours)
    minutes = round((hours - whole_hours) * 60)

    # Rounding 59.5+ minutes up must carry into the hour
    if minutes == 60:
        whole_hours += 1
        minutes = 0

    return whole_hours, minutes


def format_clock_time(hours: float) -> str:
    """
    Format fractional hours as a log sheet clock time.

    Examples: 2.5 -> "02:30", 24 -> "24:00", 1.9999 -> "02:00".
    """
    whole_hours, minutes = _split_hours(hours)
    return f"{whole_hours:02d}:{minutes:02d}"


def format_duration_hm(hours: float) -> str:
    """Format a duration in hours as "Xh Ym" for chart tooltips."""
    whole_hours, minutes = _split_hours(hours)
    return f"{whole_hours}h {minutes}m"
