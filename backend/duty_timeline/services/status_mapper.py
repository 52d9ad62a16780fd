"""
Status mapping between upstream halt types and log sheet duty statuses.
"""

from typing import Optional

from ..models import DutyStatus, HaltType

HALT_TYPE_TO_STATUS = {
    HaltType.DRIVE: DutyStatus.DRIVING,
    HaltType.STOP: DutyStatus.ON_DUTY_NOT_DRIVING,
    HaltType.ON_DUTY_NOT_DRIVING: DutyStatus.ON_DUTY_NOT_DRIVING,
    HaltType.BREAK: DutyStatus.OFF_DUTY,
    HaltType.OFF_DUTY: DutyStatus.OFF_DUTY,
    HaltType.SLEEPER: DutyStatus.SLEEPER_BERTH,
}


def classify(halt_type: Optional[str]) -> DutyStatus:
    """
    Map a raw halt type onto one of the four duty statuses.

    Unknown or missing halt types count as off duty.
    """
    if not halt_type:
        return DutyStatus.OFF_DUTY
    return HALT_TYPE_TO_STATUS.get(str(halt_type).strip().upper(), DutyStatus.OFF_DUTY)
