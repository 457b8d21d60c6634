"""
Slot grid: fixed slot granularity and slot-boundary arithmetic
"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Union

from ..config import get_settings


def slot_minutes(minutes: Optional[int] = None) -> int:
    """Resolve the slot length, falling back to SLOT_DURATION_MINUTES"""
    if minutes is None:
        minutes = get_settings().SLOT_DURATION_MINUTES
    if minutes <= 0:
        raise ValueError(f"Slot duration must be positive, got {minutes}")
    return minutes


def slot_duration(minutes: Optional[int] = None) -> timedelta:
    return timedelta(minutes=slot_minutes(minutes))


def parse_hhmm(value: Union[str, time]) -> time:
    """
    Parse a wall-clock "HH:MM" string into datetime.time

    Seconds are accepted ("09:00:00") and dropped.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    value = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time().replace(second=0)
        except ValueError:
            continue
    raise ValueError(f"Invalid time {value!r}, expected HH:MM")


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def format_12h(value: time) -> str:
    """9:00 AM style label"""
    return value.strftime("%I:%M %p").lstrip("0")


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def from_minutes(total: int) -> time:
    return time(total // 60, total % 60)


def slots_between(open_time: time, close_time: time, minutes: Optional[int] = None) -> List[time]:
    """
    All slot starts in [open_time, close_time)

    The last slot ends at or before close_time; a trailing partial
    period is dropped. Empty when open_time >= close_time.
    """
    step = slot_minutes(minutes)
    start = to_minutes(open_time)
    end = to_minutes(close_time)

    slots = []
    current = start
    while current + step <= end:
        slots.append(from_minutes(current))
        current += step
    return slots


def slot_end(start: time, minutes: Optional[int] = None) -> time:
    """Wall-clock end of the slot starting at `start` (00:00 after the last slot of a day)"""
    return (at(date.min, start) + slot_duration(minutes)).time()


def are_contiguous(first: time, second: time, minutes: Optional[int] = None) -> bool:
    """True when `second` starts exactly one slot after `first`"""
    return to_minutes(second) - to_minutes(first) == slot_minutes(minutes)


def at(day: date, value: time) -> datetime:
    """Wall-clock datetime for a slot on a given day"""
    return datetime.combine(day, value)
