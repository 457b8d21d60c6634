"""
Appointment request service: matching selections and status transitions
"""
import logging
from datetime import date, time
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..config import get_settings
from ..engine import Accepted, AppointmentSlot, Decision, IntervalSet, validate_selection
from ..models.appointment import APPOINTMENT_STATUSES, AppointmentRequest
from ..models.staff import StaffMember
from .locks import appointment_locks
from .schedule import ScheduleService, request_interval

settings = get_settings()
logger = logging.getLogger(__name__)

FINAL_STATUSES = tuple(s for s in APPOINTMENT_STATUSES if s != "pending")


class StatusTransitionError(Exception):
    """Raised when a request cannot move to the requested status"""


def is_past(request: AppointmentRequest, today: Optional[date] = None) -> bool:
    """Display-only state: the request's date is before today"""
    return request.appointment_date < (today or date.today())


class AppointmentService:
    """Appointment requests against staff availability"""

    def __init__(self, db: Session):
        self.db = db
        self.schedule = ScheduleService(db)

    def create_request(
        self,
        staff: StaffMember,
        target_date: date,
        selected_slots: Iterable[time],
        **contact
    ) -> Tuple[Decision, Optional[AppointmentRequest]]:
        """
        Match a slot selection and store it as a pending request

        Returns:
            (decision, request) - request is None when rejected
        """
        with appointment_locks.hold(("staff", staff.username, target_date)):
            available = self.schedule.available_slots(staff, target_date)
            decision = validate_selection(
                available,
                list(selected_slots),
                day=target_date,
                minutes=settings.SLOT_DURATION_MINUTES,
                max_slots=settings.MAX_APPOINTMENT_SLOTS
            )
            if not isinstance(decision, Accepted):
                logger.info(
                    "Appointment rejected for %s on %s: %s",
                    staff.username, target_date, decision.reason.value
                )
                return decision, None

            slot = AppointmentSlot(
                staff_username=staff.username,
                day=target_date,
                start_time=decision.interval.start.time(),
                end_time=decision.interval.end.time()
            )
            request = AppointmentRequest(
                staff_username=slot.staff_username,
                appointment_date=slot.day,
                start_time=slot.start_time,
                end_time=slot.end_time,
                status="pending",
                **contact
            )
            self.db.add(request)
            self.db.commit()
            self.db.refresh(request)

        logger.info("Appointment request #%s for %s on %s %s", request.id, staff.username, target_date, slot.time_range)
        return decision, request

    def list_requests(self, staff_username: Optional[str] = None) -> List[AppointmentRequest]:
        query = self.db.query(AppointmentRequest)
        if staff_username:
            query = query.filter(AppointmentRequest.staff_username == staff_username.lower())
        return query.order_by(
            AppointmentRequest.appointment_date.desc(),
            AppointmentRequest.start_time
        ).all()

    def get_request(self, request_id: int) -> Optional[AppointmentRequest]:
        return self.db.query(AppointmentRequest).filter(AppointmentRequest.id == request_id).first()

    def set_status(
        self,
        request: AppointmentRequest,
        status: str,
        today: Optional[date] = None
    ) -> AppointmentRequest:
        """
        Move a pending request to confirmed or rejected, exactly once

        Raises:
            StatusTransitionError: target is not final, the request was
                already decided, its date has passed, or confirming would
                overlap another confirmed request of the same staff member
        """
        if status not in FINAL_STATUSES:
            raise StatusTransitionError(f"Status must be one of {', '.join(FINAL_STATUSES)}")

        with appointment_locks.hold(("staff", request.staff_username, request.appointment_date)):
            self.db.refresh(request)
            if request.status != "pending":
                raise StatusTransitionError(f"Request already {request.status}")
            if is_past(request, today):
                raise StatusTransitionError("Request date has passed")

            if status == "confirmed":
                self._ensure_free(request)

            request.status = status
            self.db.commit()
            self.db.refresh(request)

        logger.info("Appointment request #%s %s", request.id, status)
        return request

    def _ensure_free(self, request: AppointmentRequest):
        confirmed = self.db.query(AppointmentRequest).filter(
            AppointmentRequest.staff_username == request.staff_username,
            AppointmentRequest.appointment_date == request.appointment_date,
            AppointmentRequest.status == "confirmed",
            AppointmentRequest.id != request.id
        ).all()
        held = IntervalSet(request_interval(r) for r in confirmed)
        if held.overlaps_any(request_interval(request)):
            raise StatusTransitionError("Overlaps an already confirmed appointment")
