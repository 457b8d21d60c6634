"""Tests for intervals, overlap and range merging."""
from datetime import datetime, time

from scheduler.engine import Interval, IntervalSet, format_range, format_ranges, merge_slots


def iv(start, end, day=10):
    return Interval(datetime(2024, 6, day, *start), datetime(2024, 6, day, *end))


class TestInterval:
    def test_strict_overlap(self):
        assert iv((9, 0), (10, 0)).overlaps(iv((9, 30), (10, 30)))
        assert iv((9, 30), (10, 30)).overlaps(iv((9, 0), (10, 0)))

    def test_touching_intervals_do_not_overlap(self):
        assert not iv((9, 0), (10, 0)).overlaps(iv((10, 0), (11, 0)))
        assert not iv((10, 0), (11, 0)).overlaps(iv((9, 0), (10, 0)))

    def test_containment(self):
        assert iv((9, 0), (17, 0)).contains(iv((9, 0), (10, 0)))
        assert not iv((9, 0), (17, 0)).contains(iv((16, 30), (17, 30)))

    def test_validity(self):
        assert iv((9, 0), (9, 30)).is_valid
        assert not iv((9, 0), (9, 0)).is_valid
        assert not iv((10, 0), (9, 0)).is_valid

    def test_covering_orders_endpoints(self):
        interval = Interval.covering(datetime(2024, 6, 10, 11), datetime(2024, 6, 10, 9))
        assert interval.start.hour == 9
        assert interval.end.hour == 11


class TestIntervalSet:
    def test_conflicts_in_start_order(self):
        members = IntervalSet([iv((13, 0), (14, 0)), iv((9, 0), (10, 0)), iv((15, 0), (16, 0))])
        conflicts = members.conflicts(iv((9, 30), (13, 30)))
        assert conflicts == [iv((9, 0), (10, 0)), iv((13, 0), (14, 0))]

    def test_empty_set(self):
        assert not IntervalSet().overlaps_any(iv((9, 0), (10, 0)))
        assert len(IntervalSet()) == 0


class TestMerge:
    def test_back_to_back_slots_form_one_range(self):
        ranges = merge_slots([time(9, 0), time(9, 30), time(10, 0)], 30)
        assert len(ranges) == 1
        assert format_range(ranges[0], twelve_hour=False) == "09:00 - 10:30"

    def test_gap_starts_new_range(self):
        ranges = merge_slots([time(10, 0), time(9, 0)], 30)
        assert [format_range(r, twelve_hour=False) for r in ranges] == ["09:00 - 09:30", "10:00 - 10:30"]

    def test_duplicates_are_ignored(self):
        assert len(merge_slots([time(9, 0), time(9, 0), time(9, 30)], 30)) == 1

    def test_empty(self):
        assert merge_slots([], 30) == []

    def test_display_ranges(self):
        assert format_ranges([time(9, 0), time(9, 30), time(10, 0), time(10, 30)]) == ["9:00 AM - 11:00 AM"]

    def test_last_slot_of_day_ends_at_midnight(self):
        ranges = merge_slots([time(23, 0), time(23, 30)], 30)
        assert format_range(ranges[0], twelve_hour=False) == "23:00 - 00:00"
        assert ranges[0].is_valid
