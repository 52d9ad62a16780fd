"""
Duty status and halt type choices.

DutyStatus matches the four grid rows of the driver's daily log sheet,
in the order they are drawn. HaltType lists the raw stop classifications
sent by the upstream route planner.
"""

from django.db import models


class DutyStatus(models.TextChoices):
    OFF_DUTY = "off_duty", "Off Duty"
    SLEEPER_BERTH = "sleeper_berth", "Sleeper Berth"
    DRIVING = "driving", "Driving"
    ON_DUTY_NOT_DRIVING = "on_duty_not_driving", "On Duty (Not Driving)"


class HaltType(models.TextChoices):
    DRIVE = "DRIVE", "Drive"
    STOP = "STOP", "Stop"
    ON_DUTY_NOT_DRIVING = "ON_DUTY_NOT_DRIVING", "On Duty (Not Driving)"
    BREAK = "BREAK", "Break"
    OFF_DUTY = "OFF_DUTY", "Off Duty"
    SLEEPER = "SLEEPER", "Sleeper Berth"


# Row order on the log sheet grid (top to bottom)
STATUS_ROW_ORDER = (
    DutyStatus.OFF_DUTY,
    DutyStatus.SLEEPER_BERTH,
    DutyStatus.DRIVING,
    DutyStatus.ON_DUTY_NOT_DRIVING,
)
