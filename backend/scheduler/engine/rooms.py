"""
Room availability: slot listing and booking validation against opening hours
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, List, Optional

from .intervals import Interval, IntervalSet
from .results import Accepted, Decision, Rejected, RejectionReason
from .time_grid import at, format_12h, format_hhmm, parse_hhmm, slot_duration, slot_minutes, slots_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomHours:
    """Daily opening hours of a room, valid every day"""
    open_time: time
    close_time: time

    @classmethod
    def from_record(cls, record: Any) -> "RoomHours":
        """
        Build from a room record

        Accepts a mapping or an object exposing open_time/close_time
        (or openTime/closeTime) as "HH:MM" strings or time objects.
        """
        def field(*names):
            for name in names:
                if isinstance(record, dict):
                    if name in record:
                        return record[name]
                elif hasattr(record, name):
                    return getattr(record, name)
            raise ValueError(f"Room record has no {names[0]}")

        return cls(
            parse_hhmm(field("open_time", "openTime")),
            parse_hhmm(field("close_time", "closeTime")),
        )

    @property
    def is_valid(self) -> bool:
        return self.open_time < self.close_time

    def on(self, day: date) -> Interval:
        return Interval(at(day, self.open_time), at(day, self.close_time))

    def __str__(self) -> str:
        return f"{format_hhmm(self.open_time)}-{format_hhmm(self.close_time)}"


@dataclass(frozen=True)
class SlotStatus:
    """One slot of a room's day grid"""
    start: datetime
    end: datetime
    is_booked: bool

    @property
    def label(self) -> str:
        return format_12h(self.start.time())


def _as_interval(booking: Any) -> Interval:
    if isinstance(booking, Interval):
        return booking
    if isinstance(booking, dict):
        return Interval(booking["start_time"], booking["end_time"])
    return Interval(booking.start_time, booking.end_time)


def _hours(room: Any) -> RoomHours:
    return room if isinstance(room, RoomHours) else RoomHours.from_record(room)


def list_slots(
    room: Any,
    day: date,
    existing_bookings: Iterable[Any],
    minutes: Optional[int] = None
) -> List[SlotStatus]:
    """
    Slot grid for a room on a day

    Args:
        room: RoomHours or a room record
        day: calendar day
        existing_bookings: Interval objects, booking records or dicts
            with start_time/end_time datetimes
        minutes: slot length (defaults to SLOT_DURATION_MINUTES)

    Returns:
        list[SlotStatus] in start order; a slot is booked when any
        booking strictly overlaps it
    """
    hours = _hours(room)
    booked = IntervalSet(_as_interval(b) for b in existing_bookings)
    length = slot_duration(minutes)

    result = []
    for start in slots_between(hours.open_time, hours.close_time, minutes):
        slot = Interval(at(day, start), at(day, start) + length)
        result.append(SlotStatus(slot.start, slot.end, booked.overlaps_any(slot)))
    return result


def selection_interval(
    first: datetime,
    last: Optional[datetime] = None,
    minutes: Optional[int] = None
) -> Interval:
    """
    Proposed booking from clicked slot starts

    Clicks may come in either order; the interval runs from the earlier
    slot's start to the end of the later slot. A lone start books exactly
    one slot.
    """
    span = Interval.covering(first, last or first)
    return Interval(span.start, span.end + slot_duration(minutes))


def on_grid(hours: RoomHours, proposed: Interval, minutes: Optional[int] = None) -> bool:
    """True when `proposed` starts on a slot boundary and covers whole slots"""
    step = slot_duration(minutes)
    offset = proposed.start - at(proposed.start.date(), hours.open_time)
    return offset % step == timedelta(0) and proposed.duration % step == timedelta(0)


def validate_booking(
    room: Any,
    proposed: Interval,
    existing_bookings: Iterable[Any],
    minutes: Optional[int] = None
) -> Decision:
    """
    Decide whether a proposed booking may be persisted

    Checks, in order: well-formed interval on a single day, inside the
    room's opening hours, aligned to whole slots counted from opening
    time, no strict overlap with existing bookings.
    """
    if not proposed.is_valid or proposed.start.date() != proposed.end.date():
        return Rejected(RejectionReason.INVALID_INTERVAL)

    hours = _hours(room)
    if not hours.on(proposed.start.date()).contains(proposed):
        return Rejected(
            RejectionReason.OUT_OF_HOURS,
            f"Bookings must be between {format_hhmm(hours.open_time)} and {format_hhmm(hours.close_time)}."
        )

    if not on_grid(hours, proposed, minutes):
        return Rejected(
            RejectionReason.INVALID_INTERVAL,
            f"Bookings must cover whole {slot_minutes(minutes)}-minute slots starting from {format_hhmm(hours.open_time)}."
        )

    conflicts = IntervalSet(_as_interval(b) for b in existing_bookings).conflicts(proposed)
    if conflicts:
        logger.debug("Proposed %s overlaps %d booking(s)", proposed, len(conflicts))
        return Rejected(RejectionReason.CONFLICT)

    return Accepted(proposed)
