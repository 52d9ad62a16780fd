"""
Location parsing for duty status remarks.

Route instructions carry locations such as "Springfield, IL (39.78, -89.65)".
The log sheet only shows the name; coordinates are kept when present and
valid.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from common.validators import is_valid_coordinate_pair

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "Unknown Location"

_NUMBER = r"[-+]?\d+(?:\.\d+)?"
LOCATION_PATTERN = re.compile(
    rf"^(?P<name>.*?)\s*\(\s*(?P<lat>{_NUMBER})\s*,\s*(?P<lon>{_NUMBER})\s*\)\s*$"
)


@dataclass(frozen=True)
class ParsedLocation:
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def parse_location(
    text: Optional[str], placeholder: str = DEFAULT_PLACEHOLDER
) -> ParsedLocation:
    """
    Extract a location name and optional coordinates.

    Args:
        text: Location string, optionally ending in "(lat, lon)"
        placeholder: Name to use when the text is empty

    Returns:
        ParsedLocation; never raises for malformed input
    """
    if text is None or not str(text).strip():
        return ParsedLocation(name=placeholder)

    text = str(text)
    match = LOCATION_PATTERN.match(text)
    if not match:
        return ParsedLocation(name=text)

    name = match.group("name").strip() or placeholder
    latitude = float(match.group("lat"))
    longitude = float(match.group("lon"))

    if not is_valid_coordinate_pair(latitude, longitude):
        logger.debug(f"Ignoring out-of-range coordinates in location '{text}'")
        return ParsedLocation(name=name)

    return ParsedLocation(name=name, latitude=latitude, longitude=longitude)
