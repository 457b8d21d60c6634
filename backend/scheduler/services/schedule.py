"""
Staff schedule service: loading, editing and resolving office hours
"""
import logging
from datetime import date, time, timedelta
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..engine import Interval, IntervalSet, ScheduleFormatError, StaffSchedule, resolve_range
from ..engine.time_grid import at
from ..models.appointment import AppointmentRequest
from ..models.staff import StaffMember

logger = logging.getLogger(__name__)


def request_interval(request: AppointmentRequest) -> Interval:
    """Interval held by a request; an end of 00:00 means midnight of the next day"""
    day = request.appointment_date
    end = at(day, request.end_time)
    if request.end_time <= request.start_time:
        end += timedelta(days=1)
    return Interval(at(day, request.start_time), end)


class ScheduleService:
    """Staff availability management"""

    def __init__(self, db: Session):
        self.db = db

    def get_staff(self, username: str) -> Optional[StaffMember]:
        return self.db.query(StaffMember).filter(
            StaffMember.username == username.lower()
        ).first()

    def list_staff(self) -> List[StaffMember]:
        return self.db.query(StaffMember).order_by(StaffMember.username).all()

    def load_schedule(self, staff: StaffMember) -> StaffSchedule:
        """
        Parse the stored blob; an unreadable blob counts as no availability
        """
        try:
            return StaffSchedule.from_blob(staff.office_hours)
        except ScheduleFormatError as e:
            logger.warning("Unreadable office hours for %s: %s", staff.username, e)
            return StaffSchedule()

    def save_schedule(self, staff: StaffMember, schedule: StaffSchedule) -> StaffSchedule:
        staff.office_hours = schedule.to_blob()
        self.db.commit()
        self.db.refresh(staff)
        return schedule

    def set_weekday(self, staff: StaffMember, weekday: str, slots: Iterable[str]) -> StaffSchedule:
        """Replace the recurring slots for one weekday"""
        schedule = self.load_schedule(staff).with_weekday(weekday, slots)
        logger.info("Weekly slots for %s on %s updated", staff.username, weekday)
        return self.save_schedule(staff, schedule)

    def set_override(self, staff: StaffMember, target_date: date, slots: Iterable[str]) -> StaffSchedule:
        """Replace the slots for one date (empty list closes the day)"""
        schedule = self.load_schedule(staff).with_override(target_date, slots)
        logger.info("Override for %s on %s set", staff.username, target_date)
        return self.save_schedule(staff, schedule)

    def clear_override(self, staff: StaffMember, target_date: date) -> StaffSchedule:
        schedule = self.load_schedule(staff).without_override(target_date)
        logger.info("Override for %s on %s cleared", staff.username, target_date)
        return self.save_schedule(staff, schedule)

    def available_range(self, staff: StaffMember, start: date, end: date) -> Dict[date, List[time]]:
        """
        Open slots for every date in [start, end]: the resolved schedule
        minus slots already held by confirmed appointments
        """
        resolved = resolve_range(self.load_schedule(staff), start, end)
        confirmed = self.db.query(AppointmentRequest).filter(
            AppointmentRequest.staff_username == staff.username,
            AppointmentRequest.appointment_date >= start,
            AppointmentRequest.appointment_date <= end,
            AppointmentRequest.status == "confirmed"
        ).all()
        held = IntervalSet(request_interval(r) for r in confirmed)
        return {
            day: [
                slot for slot in sorted(slots)
                if not held.overlaps_any(Interval.for_slot(day, slot))
            ]
            for day, slots in resolved.items()
        }

    def available_slots(self, staff: StaffMember, target_date: date) -> List[time]:
        return self.available_range(staff, target_date, target_date)[target_date]
