"""
Availability and conflict resolution engine

Pure, synchronous functions over snapshots of room, booking and schedule
data. Callers own persistence and the critical section around it.
"""
from .intervals import Interval, IntervalSet, format_range, merge_slots
from .matcher import AppointmentSlot, validate_selection
from .results import Accepted, Decision, Rejected, RejectionReason
from .rooms import RoomHours, SlotStatus, list_slots, selection_interval, validate_booking
from .schedule import (
    ScheduleFormatError,
    StaffSchedule,
    format_ranges,
    override_ranges,
    resolve,
    resolve_range,
    weekly_ranges,
)
from .time_grid import format_hhmm, parse_hhmm, slot_end, slots_between

__all__ = [
    "Interval",
    "IntervalSet",
    "format_range",
    "merge_slots",
    "AppointmentSlot",
    "validate_selection",
    "Accepted",
    "Decision",
    "Rejected",
    "RejectionReason",
    "RoomHours",
    "SlotStatus",
    "list_slots",
    "selection_interval",
    "validate_booking",
    "ScheduleFormatError",
    "StaffSchedule",
    "format_ranges",
    "override_ranges",
    "resolve",
    "resolve_range",
    "weekly_ranges",
    "format_hhmm",
    "parse_hhmm",
    "slot_end",
    "slots_between",
]
