"""Tests for appointment slot selection."""
from datetime import date, datetime, time

import pytest

from scheduler.engine import Accepted, AppointmentSlot, Interval, RejectionReason, validate_selection

DAY = date(2024, 6, 10)
OPEN = [time(9, 0), time(9, 30), time(10, 0), time(11, 0)]


class TestValidateSelection:
    def test_two_adjacent_slots(self):
        decision = validate_selection(OPEN, [time(9, 0), time(9, 30)], day=DAY, minutes=30)
        assert isinstance(decision, Accepted)
        assert decision.interval == Interval(datetime(2024, 6, 10, 9), datetime(2024, 6, 10, 10))

    def test_order_of_selection_does_not_matter(self):
        decision = validate_selection(OPEN, [time(10, 0), time(9, 30)], day=DAY, minutes=30)
        assert decision.interval.start == datetime(2024, 6, 10, 9, 30)

    def test_single_slot(self):
        decision = validate_selection(OPEN, [time(11, 0)], day=DAY, minutes=30)
        assert decision.interval.duration.total_seconds() == 30 * 60

    @pytest.mark.parametrize("selected", [
        [],
        [time(9, 0), time(9, 30), time(10, 0)],
    ])
    def test_too_long(self, selected):
        decision = validate_selection(OPEN, selected, day=DAY, minutes=30, max_slots=2)
        assert decision.reason == RejectionReason.TOO_LONG

    def test_not_contiguous(self):
        decision = validate_selection(OPEN, [time(9, 0), time(10, 0)], day=DAY, minutes=30)
        assert decision.reason == RejectionReason.NOT_CONTIGUOUS

    def test_same_slot_twice(self):
        decision = validate_selection(OPEN, [time(9, 0), time(9, 0)], day=DAY, minutes=30)
        assert decision.reason == RejectionReason.NOT_CONTIGUOUS

    def test_unavailable(self):
        decision = validate_selection(OPEN, [time(10, 30), time(11, 0)], day=DAY, minutes=30)
        assert decision.reason == RejectionReason.UNAVAILABLE

    def test_too_long_checked_before_availability(self):
        decision = validate_selection([], [time(13, 0), time(13, 30), time(14, 0)], day=DAY, minutes=30)
        assert decision.reason == RejectionReason.TOO_LONG

    def test_longer_selections_when_configured(self):
        selected = [time(9, 0), time(9, 30), time(10, 0)]
        decision = validate_selection(OPEN, selected, day=DAY, minutes=30, max_slots=3)
        assert decision.interval.end == datetime(2024, 6, 10, 10, 30)


def test_appointment_slot_time_range():
    slot = AppointmentSlot("advisor", DAY, time(9, 0), time(10, 0))
    assert slot.time_range == "09:00 - 10:00"
