"""
Appointment matching: validate a customer's slot selection against
a staff member's resolved availability
"""
from dataclasses import dataclass
from datetime import date, time
from typing import Iterable, Optional

from ..config import get_settings
from .intervals import Interval
from .results import Accepted, Decision, Rejected, RejectionReason
from .time_grid import are_contiguous, at, format_hhmm, slot_duration


@dataclass(frozen=True)
class AppointmentSlot:
    """Validated appointment tuple handed to the caller for persistence"""
    staff_username: str
    day: date
    start_time: time
    end_time: time

    @property
    def time_range(self) -> str:
        """'09:00 - 10:00' as stored on the request"""
        return f"{format_hhmm(self.start_time)} - {format_hhmm(self.end_time)}"


def validate_selection(
    resolved_slots: Iterable[time],
    selected_slots: Iterable[time],
    day: Optional[date] = None,
    minutes: Optional[int] = None,
    max_slots: Optional[int] = None
) -> Decision:
    """
    Check a customer's selected slots

    Rules, in order:
        1. one to `max_slots` entries (default MAX_APPOINTMENT_SLOTS) -> TOO_LONG
        2. two entries must be exactly one slot apart -> NOT_CONTIGUOUS
        3. every entry must be in resolved_slots -> UNAVAILABLE

    Selections are re-validated here even when the client only offered
    open slots, since its view of availability may be stale.

    Args:
        resolved_slots: effective availability for the staff member and date
        selected_slots: slot starts chosen by the customer, any order
        day: date the interval is anchored on
        minutes: slot length (defaults to SLOT_DURATION_MINUTES)
        max_slots: longest allowed selection in slots

    Returns:
        Accepted(interval from first start to last start + one slot) or Rejected
    """
    if max_slots is None:
        max_slots = get_settings().MAX_APPOINTMENT_SLOTS

    selected = sorted(selected_slots)
    if not selected or len(selected) > max_slots:
        return Rejected(RejectionReason.TOO_LONG)

    for previous, current in zip(selected, selected[1:]):
        if not are_contiguous(previous, current, minutes):
            return Rejected(RejectionReason.NOT_CONTIGUOUS)

    available = set(resolved_slots)
    if any(slot not in available for slot in selected):
        return Rejected(RejectionReason.UNAVAILABLE)

    anchor = day or date.today()
    start = at(anchor, selected[0])
    end = at(anchor, selected[-1]) + slot_duration(minutes)
    return Accepted(Interval(start, end))
