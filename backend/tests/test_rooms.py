"""Tests for room slot listing and booking validation."""
from datetime import date, datetime, time

import pytest

from scheduler.engine import (
    Accepted,
    Interval,
    Rejected,
    RejectionReason,
    RoomHours,
    list_slots,
    selection_interval,
    validate_booking,
)

DAY = date(2024, 6, 10)
ROOM = {"id": 1, "open_time": "09:00", "close_time": "17:00"}


def at(hour, minute=0):
    return datetime(2024, 6, 10, hour, minute)


def booking(start, end):
    return {"start_time": at(*start), "end_time": at(*end)}


class TestRoomHours:
    def test_from_mapping(self):
        hours = RoomHours.from_record(ROOM)
        assert hours.open_time == time(9, 0)
        assert hours.close_time == time(17, 0)
        assert str(hours) == "09:00-17:00"

    def test_from_camel_case_record(self):
        hours = RoomHours.from_record({"openTime": "08:00", "closeTime": "12:00"})
        assert hours == RoomHours(time(8, 0), time(12, 0))

    def test_missing_field(self):
        with pytest.raises(ValueError):
            RoomHours.from_record({"open_time": "09:00"})


class TestListSlots:
    def test_grid_covers_opening_hours(self):
        slots = list_slots(ROOM, DAY, [], 30)
        assert len(slots) == 16
        assert slots[0].start == at(9)
        assert slots[-1].end == at(17)
        assert slots[0].label == "9:00 AM"
        assert not any(s.is_booked for s in slots)

    def test_booked_slots_are_marked(self):
        slots = list_slots(ROOM, DAY, [booking((9, 30), (10, 30))], 30)
        booked = [s.start.time() for s in slots if s.is_booked]
        assert booked == [time(9, 30), time(10, 0)]

    def test_partial_overlap_marks_slot(self):
        slots = list_slots(ROOM, DAY, [booking((9, 15), (9, 45))], 30)
        booked = [s.start.time() for s in slots if s.is_booked]
        assert booked == [time(9, 0), time(9, 30)]

    def test_accepts_intervals_and_records(self):
        class Record:
            start_time = at(16)
            end_time = at(17)

        slots = list_slots(ROOM, DAY, [Interval(at(9), at(9, 30)), Record()], 30)
        assert slots[0].is_booked
        assert slots[-1].is_booked
        assert not slots[1].is_booked


class TestValidateBooking:
    def test_accepts_free_interval(self):
        decision = validate_booking(ROOM, Interval(at(9), at(10)), [])
        assert isinstance(decision, Accepted)
        assert decision.ok
        assert decision.interval == Interval(at(9), at(10))

    @pytest.mark.parametrize("start, end, conflict", [
        ((9, 30), (10, 30), True),
        ((8, 0), (17, 0), True),
        ((10, 0), (11, 0), False),
        ((8, 30), (9, 0), False),
        ((9, 0), (10, 0), True),
        ((8, 30), (9, 30), True),
    ])
    def test_conflict_iff_strict_overlap(self, start, end, conflict):
        room = {"open_time": "08:00", "close_time": "18:00"}
        existing = [booking((9, 0), (10, 0))]
        decision = validate_booking(room, Interval(at(*start), at(*end)), existing)
        if conflict:
            assert decision.reason == RejectionReason.CONFLICT
        else:
            assert isinstance(decision, Accepted)

    def test_adjacent_booking_does_not_conflict(self):
        decision = validate_booking(ROOM, Interval(at(10), at(11)), [booking((9, 0), (10, 0))])
        assert isinstance(decision, Accepted)

    @pytest.mark.parametrize("start, end", [
        ((7, 0), (8, 0)),
        ((8, 30), (9, 30)),
        ((16, 30), (17, 30)),
    ])
    def test_out_of_hours(self, start, end):
        decision = validate_booking(ROOM, Interval(at(*start), at(*end)), [])
        assert isinstance(decision, Rejected)
        assert decision.reason == RejectionReason.OUT_OF_HOURS
        assert decision.message == "Bookings must be between 09:00 and 17:00."

    def test_out_of_hours_reported_before_conflict(self):
        existing = [booking((8, 0), (10, 0))]
        decision = validate_booking(ROOM, Interval(at(8, 30), at(9, 30)), existing)
        assert decision.reason == RejectionReason.OUT_OF_HOURS

    def test_booking_up_to_closing_time(self):
        decision = validate_booking(ROOM, Interval(at(16, 30), at(17)), [])
        assert isinstance(decision, Accepted)

    @pytest.mark.parametrize("proposed", [
        Interval(datetime(2024, 6, 10, 10), datetime(2024, 6, 10, 9)),
        Interval(datetime(2024, 6, 10, 10), datetime(2024, 6, 10, 10)),
        Interval(datetime(2024, 6, 10, 16), datetime(2024, 6, 11, 10)),
    ])
    def test_invalid_interval(self, proposed):
        decision = validate_booking(ROOM, proposed, [])
        assert decision.reason == RejectionReason.INVALID_INTERVAL
        assert decision.as_detail()["reason"] == "invalid_interval"


class TestSlotGrid:
    @pytest.mark.parametrize("start, end", [
        ((9, 7), (9, 13)),
        ((9, 15), (9, 45)),
        ((9, 0), (9, 45)),
        ((10, 30), (10, 40)),
    ])
    def test_off_grid_interval(self, start, end):
        decision = validate_booking(ROOM, Interval(at(*start), at(*end)), [], 30)
        assert decision.reason == RejectionReason.INVALID_INTERVAL
        assert "whole 30-minute slots" in decision.message

    def test_grid_counts_from_opening_time(self):
        room = {"open_time": "09:15", "close_time": "17:15"}
        assert isinstance(validate_booking(room, Interval(at(9, 15), at(10, 15)), [], 30), Accepted)
        decision = validate_booking(room, Interval(at(9, 30), at(10, 0)), [], 30)
        assert decision.reason == RejectionReason.INVALID_INTERVAL

    def test_several_whole_slots(self):
        assert isinstance(validate_booking(ROOM, Interval(at(13), at(15, 30)), [], 30), Accepted)

    def test_out_of_hours_reported_before_grid(self):
        decision = validate_booking(ROOM, Interval(at(7, 7), at(7, 13)), [], 30)
        assert decision.reason == RejectionReason.OUT_OF_HOURS


class TestSelectionInterval:
    def test_single_start_books_one_slot(self):
        assert selection_interval(at(9), minutes=30) == Interval(at(9), at(9, 30))

    def test_clicks_in_reverse_order(self):
        assert selection_interval(at(11), at(9), 30) == Interval(at(9), at(11, 30))
