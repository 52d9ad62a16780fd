"""
Route event model.

A RouteEvent is one instruction from the upstream trip planner: a stretch
of driving, a stop or a rest period on a given trip day.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class RouteEvent:
    """
    One route/halt event of a planned trip.

    Attributes:
        day: Trip day the event belongs to (1-based)
        duration_minutes: Length of the event in minutes
        halt_type: Raw halt classification (DRIVE, STOP, BREAK, ...)
        location: Location text, optionally "Name (lat, lon)"
        description: Free text shown in the remarks section
    """

    day: int
    duration_minutes: float
    halt_type: str = ""
    location: str = ""
    description: str = ""

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60

    @classmethod
    def from_instruction(cls, instruction: Dict) -> "RouteEvent":
        """Build an event from a route instruction (wire or validated field names)."""
        return cls(
            day=int(instruction["day"]),
            duration_minutes=float(
                instruction.get("duration_minutes", instruction.get("duration", 0))
            ),
            halt_type=instruction.get("halt_type") or "",
            location=instruction.get("location", instruction.get("current_location"))
            or "",
            description=instruction.get("description") or "",
        )
