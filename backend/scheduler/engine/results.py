"""
Engine decisions: accepted intervals or typed rejections
"""
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .intervals import Interval


class RejectionReason(str, Enum):
    """Business-rule violations reported by the engine"""
    OUT_OF_HOURS = "out_of_hours"
    CONFLICT = "conflict"
    TOO_LONG = "too_long"
    NOT_CONTIGUOUS = "not_contiguous"
    UNAVAILABLE = "unavailable"
    INVALID_INTERVAL = "invalid_interval"


DEFAULT_MESSAGES = {
    RejectionReason.OUT_OF_HOURS: "The requested time is outside the room's opening hours.",
    RejectionReason.CONFLICT: "Time slot is already booked.",
    RejectionReason.TOO_LONG: "Select one or two consecutive slots.",
    RejectionReason.NOT_CONTIGUOUS: "Selected slots must be back to back.",
    RejectionReason.UNAVAILABLE: "Selected time is no longer available.",
    RejectionReason.INVALID_INTERVAL: "End time must be after start time on the same day.",
}


@dataclass(frozen=True)
class Accepted:
    interval: Interval
    ok = True


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    message: str = ""
    ok = False

    def __post_init__(self):
        if not self.message:
            object.__setattr__(self, "message", DEFAULT_MESSAGES[self.reason])

    def as_detail(self) -> dict:
        return {"reason": self.reason.value, "message": self.message}


Decision = Union[Accepted, Rejected]
