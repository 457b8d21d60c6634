"""
Staff schedule: recurring weekly template plus date-specific overrides

A staff member's availability is stored as one JSON blob. This module is
the only code that reads or writes that blob.

Resolution rule for a date:
    1. an override for the date, if present, is returned as-is
       (an empty override means "closed that day");
    2. otherwise the weekly slots for the date's weekday;
    3. otherwise nothing.
"""
import json
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from .intervals import format_range, merge_slots
from .time_grid import format_hhmm, parse_hhmm

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

SCHEDULE_VERSION = 1


class ScheduleFormatError(ValueError):
    """Raised when a stored schedule blob cannot be interpreted"""


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def normalize_weekday(value: str) -> str:
    """'monday' / 'MONDAY' -> 'Monday'"""
    name = value.strip().capitalize()
    if name not in WEEKDAYS:
        raise ScheduleFormatError(f"Unknown weekday {value!r}")
    return name


def date_key(day: Union[date, str]) -> str:
    """ISO date key used for overrides"""
    if isinstance(day, date):
        return day.isoformat()
    try:
        return date.fromisoformat(day.strip()).isoformat()
    except ValueError:
        raise ScheduleFormatError(f"Invalid date {day!r}, expected YYYY-MM-DD")


def _slot_set(values: Iterable[Any]) -> FrozenSet[time]:
    if isinstance(values, (str, bytes)):
        raise ScheduleFormatError("Slots must be a list of HH:MM strings")
    try:
        return frozenset(parse_hhmm(v) for v in values)
    except (AttributeError, TypeError, ValueError) as e:
        raise ScheduleFormatError(f"Invalid slot list: {e}")


def _frozen(mapping: Dict[str, FrozenSet[time]]) -> Mapping[str, FrozenSet[time]]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class StaffSchedule:
    """
    Immutable availability value owned by one staff member

    weekly:    weekday name -> slot starts
    overrides: ISO date -> slot starts replacing the weekly slots that day
    """
    weekly: Mapping[str, FrozenSet[time]] = field(default_factory=lambda: _frozen({}))
    overrides: Mapping[str, FrozenSet[time]] = field(default_factory=lambda: _frozen({}))
    version: int = SCHEDULE_VERSION

    # ---- serialization ----

    @classmethod
    def from_blob(cls, blob: Union[str, bytes, Mapping, None]) -> "StaffSchedule":
        """
        Parse a stored schedule

        Accepts the structured form
            {"version": 1, "weekly": {...}, "overrides": {...}}
        and the older flat form where weekday names and ISO dates share
        one object: {"Monday": ["09:00"], "2024-06-10": []}.
        Empty input yields an empty schedule.
        """
        if blob is None:
            return cls()
        if isinstance(blob, (str, bytes)):
            if not blob.strip():
                return cls()
            try:
                data = json.loads(blob)
            except json.JSONDecodeError as e:
                raise ScheduleFormatError(f"Schedule is not valid JSON: {e}")
        else:
            data = blob

        if not isinstance(data, Mapping):
            raise ScheduleFormatError("Schedule must be a JSON object")

        if "weekly" in data or "overrides" in data:
            weekly_data = data.get("weekly") or {}
            override_data = data.get("overrides") or {}
            version = data.get("version", SCHEDULE_VERSION)
            if not isinstance(weekly_data, Mapping) or not isinstance(override_data, Mapping):
                raise ScheduleFormatError("weekly and overrides must be objects")
        else:
            weekly_data, override_data = {}, {}
            for key, value in data.items():
                if isinstance(key, str) and key.strip().capitalize() in WEEKDAYS:
                    weekly_data[key] = value
                else:
                    override_data[key] = value
            version = SCHEDULE_VERSION

        try:
            version = int(version)
        except (TypeError, ValueError):
            raise ScheduleFormatError(f"Invalid schedule version {version!r}")

        weekly = {normalize_weekday(k): _slot_set(v) for k, v in weekly_data.items()}
        overrides = {date_key(k): _slot_set(v) for k, v in override_data.items()}
        return cls(_frozen(weekly), _frozen(overrides), version)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "weekly": {
                day: sorted(format_hhmm(t) for t in self.weekly[day])
                for day in WEEKDAYS if day in self.weekly
            },
            "overrides": {
                key: sorted(format_hhmm(t) for t in self.overrides[key])
                for key in sorted(self.overrides)
            },
        }

    def to_blob(self) -> str:
        return json.dumps(self.to_dict())

    # ---- immutable updates ----

    def with_weekday(self, weekday: str, slots: Iterable[Any]) -> "StaffSchedule":
        """Replace the recurring slots of one weekday; an empty set removes it"""
        weekly = dict(self.weekly)
        name = normalize_weekday(weekday)
        slot_set = _slot_set(slots)
        if slot_set:
            weekly[name] = slot_set
        else:
            weekly.pop(name, None)
        return StaffSchedule(_frozen(weekly), self.overrides, self.version)

    def with_override(self, day: Union[date, str], slots: Iterable[Any]) -> "StaffSchedule":
        """Set the slots for one date; an empty set marks the date closed"""
        overrides = dict(self.overrides)
        overrides[date_key(day)] = _slot_set(slots)
        return StaffSchedule(self.weekly, _frozen(overrides), self.version)

    def without_override(self, day: Union[date, str]) -> "StaffSchedule":
        """Drop an override so the date falls back to the weekly template"""
        overrides = dict(self.overrides)
        overrides.pop(date_key(day), None)
        return StaffSchedule(self.weekly, _frozen(overrides), self.version)

    def has_override(self, day: Union[date, str]) -> bool:
        return date_key(day) in self.overrides


def resolve(schedule: StaffSchedule, day: date) -> FrozenSet[time]:
    """Effective slot starts for a date (override wins, even when empty)"""
    key = date_key(day)
    if key in schedule.overrides:
        return schedule.overrides[key]
    return schedule.weekly.get(weekday_name(day), frozenset())


def resolve_range(schedule: StaffSchedule, start: date, end: date) -> Dict[date, FrozenSet[time]]:
    """Resolved slots for every date in [start, end]"""
    result = {}
    current = start
    while current <= end:
        result[current] = resolve(schedule, current)
        current += timedelta(days=1)
    return result


def format_ranges(
    slots: Iterable[time],
    minutes: Optional[int] = None,
    twelve_hour: bool = True
) -> List[str]:
    """Contiguous display ranges, e.g. ["9:00 AM - 11:00 AM"]"""
    return [format_range(r, twelve_hour) for r in merge_slots(slots, minutes)]


def weekly_ranges(schedule: StaffSchedule, minutes: Optional[int] = None) -> Dict[str, List[str]]:
    """Weekday -> display ranges, Monday first, empty days omitted"""
    return {
        day: format_ranges(schedule.weekly[day], minutes)
        for day in WEEKDAYS if schedule.weekly.get(day)
    }


def override_ranges(schedule: StaffSchedule, minutes: Optional[int] = None) -> Dict[str, List[str]]:
    """ISO date -> display ranges; closed dates map to an empty list"""
    return {
        key: format_ranges(schedule.overrides[key], minutes)
        for key in sorted(schedule.overrides)
    }
