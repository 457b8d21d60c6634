"""
Half-open time intervals, overlap testing and slot merging
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, List, Optional

from .time_grid import at, format_12h, format_hhmm, slot_duration, slot_minutes, to_minutes

# Anchor day for display ranges that carry no calendar date
DISPLAY_DAY = date(2000, 1, 3)


@dataclass(frozen=True)
class Interval:
    """
    Half-open wall-clock range [start, end)

    Construction does not enforce start < end; callers check `is_valid`
    so that malformed input can be rejected as a value.
    """
    start: datetime
    end: datetime

    @classmethod
    def covering(cls, first: datetime, second: datetime) -> "Interval":
        """Interval between two endpoints given in either order"""
        if second < first:
            first, second = second, first
        return cls(first, second)

    @classmethod
    def for_slot(cls, day: date, start: time, minutes: Optional[int] = None) -> "Interval":
        begin = at(day, start)
        return cls(begin, begin + slot_duration(minutes))

    @property
    def is_valid(self) -> bool:
        return self.start < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "Interval") -> bool:
        # Touching endpoints do not overlap
        return self.start < other.end and other.start < self.end

    def contains(self, other: "Interval") -> bool:
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        return format_range(self)


class IntervalSet:
    """Read-only collection of intervals answering overlap queries"""

    def __init__(self, intervals: Iterable[Interval] = ()):
        self._intervals = sorted(intervals, key=lambda i: (i.start, i.end))

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def overlaps_any(self, proposed: Interval) -> bool:
        return any(member.overlaps(proposed) for member in self._intervals)

    def conflicts(self, proposed: Interval) -> List[Interval]:
        """Members overlapping `proposed`, in start order"""
        return [member for member in self._intervals if member.overlaps(proposed)]


def merge_slots(
    starts: Iterable[time],
    minutes: Optional[int] = None,
    day: Optional[date] = None
) -> List[Interval]:
    """
    Collapse slot starts into minimal contiguous ranges

    Starts are sorted and de-duplicated first. Consecutive starts exactly
    one slot apart extend the current range; any other gap opens a new one.
    Each range ends one slot after its last start.

    Args:
        starts: slot start times
        minutes: slot length (defaults to SLOT_DURATION_MINUTES)
        day: calendar day to anchor the ranges on (a fixed display day if omitted)

    Returns:
        list of Interval in ascending start order
    """
    step = slot_minutes(minutes)
    ordered = sorted(set(starts))
    if not ordered:
        return []

    anchor = day or DISPLAY_DAY
    length = timedelta(minutes=step)

    ranges = []
    run_start = ordered[0]
    previous = ordered[0]
    for current in ordered[1:]:
        if to_minutes(current) - to_minutes(previous) != step:
            ranges.append(Interval(at(anchor, run_start), at(anchor, previous) + length))
            run_start = current
        previous = current
    ranges.append(Interval(at(anchor, run_start), at(anchor, previous) + length))
    return ranges


def format_range(interval: Interval, twelve_hour: bool = True) -> str:
    """
    "9:00 AM - 11:00 AM" (or "09:00 - 11:00")
    """
    fmt = format_12h if twelve_hour else format_hhmm
    return f"{fmt(interval.start.time())} - {fmt(interval.end.time())}"
