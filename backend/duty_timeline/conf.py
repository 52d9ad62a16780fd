"""
Settings access for the duty timeline app.

Projects override any of the defaults below through the ``DUTY_LOG_SHEET``
dictionary in their Django settings; nested dictionaries are merged key by
key.
"""

from copy import deepcopy
from typing import Dict

from django.conf import settings

DEFAULTS = {
    # Name used when an event carries no usable location text
    "PLACEHOLDER_LOCATION": "Unknown Location",
    # Longest trip, in days, a single build may produce
    "MAX_TRIP_DAYS": 366,
    # Chart layout in CSS pixels
    "LAYOUT": {
        "label_width": 120,
        "totals_width": 80,
        "header_height": 30,
        "row_height": 40,
        "hit_tolerance": 10,
        "snap_threshold_hours": 0.1,
    },
    "DEFAULT_CHART_WIDTH": 800,
    "DEFAULT_CHART_HEIGHT": 200,
    # Line gradient per duty status (start, end)
    "STATUS_COLORS": {
        "off_duty": ("#f87171", "#dc2626"),
        "sleeper_berth": ("#60a5fa", "#2563eb"),
        "driving": ("#facc15", "#ca8a04"),
        "on_duty_not_driving": ("#fb923c", "#ea580c"),
    },
    "GRID_COLOR": "rgba(255, 255, 255, 0.2)",
    "TEXT_COLOR": "#d1d5db",
}


def chart_settings() -> Dict:
    """Return the effective log sheet settings (defaults merged with overrides)."""
    overrides = getattr(settings, "DUTY_LOG_SHEET", {}) or {}
    merged = deepcopy(DEFAULTS)

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value

    return merged
