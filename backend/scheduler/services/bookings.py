"""
Room booking service: snapshot queries, validation and persistence
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..config import get_settings
from ..engine import Accepted, Decision, Interval, SlotStatus, list_slots, validate_booking
from ..models.booking import Booking
from ..models.room import Room
from .locks import booking_locks

settings = get_settings()
logger = logging.getLogger(__name__)


class BookingService:
    """Rooms and their bookings"""

    def __init__(self, db: Session):
        self.db = db
        self.slot_duration = settings.SLOT_DURATION_MINUTES

    def get_room(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def bookings_for_day(self, room_id: int, target_date: date) -> List[Booking]:
        """
        All bookings of a room whose interval intersects the calendar day
        """
        day_start = datetime.combine(target_date, time.min)
        day_end = day_start + timedelta(days=1)
        return self.db.query(Booking).filter(
            Booking.room_id == room_id,
            Booking.start_time < day_end,
            Booking.end_time > day_start
        ).order_by(Booking.start_time).all()

    def list_bookings(self, target_date: Optional[date] = None) -> List[Booking]:
        query = self.db.query(Booking)
        if target_date is not None:
            day_start = datetime.combine(target_date, time.min)
            query = query.filter(
                Booking.start_time < day_start + timedelta(days=1),
                Booking.end_time > day_start
            )
        return query.order_by(Booking.start_time).all()

    def room_slots(self, room: Room, target_date: date) -> List[SlotStatus]:
        """Free/booked slot grid for a room on a date"""
        return list_slots(
            room,
            target_date,
            self.bookings_for_day(room.id, target_date),
            self.slot_duration
        )

    def create_booking(self, room: Room, proposed: Interval, **details) -> Tuple[Decision, Optional[Booking]]:
        """
        Validate and persist a booking

        The snapshot is read, checked and written while holding the room's
        lock, so two concurrent requests for the same slot cannot both pass.

        Returns:
            (decision, booking) - booking is None when rejected
        """
        with booking_locks.hold(("room", room.id)):
            existing = self.bookings_for_day(room.id, proposed.start.date())
            decision = validate_booking(room, proposed, existing, self.slot_duration)

            if not isinstance(decision, Accepted):
                logger.info(
                    "Booking rejected for room %s %s: %s",
                    room.id, proposed, decision.reason.value
                )
                return decision, None

            booking = Booking(
                room_id=room.id,
                start_time=decision.interval.start,
                end_time=decision.interval.end,
                status="pending",
                **details
            )
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)

        logger.info("Booking #%s created for room %s at %s", booking.id, room.id, decision.interval)
        return decision, booking

    def approve_booking(self, booking_id: int) -> Optional[Booking]:
        booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            return None
        booking.status = "confirmed"
        self.db.commit()
        self.db.refresh(booking)
        logger.info("Booking #%s confirmed", booking_id)
        return booking

    def delete_booking(self, booking_id: int) -> bool:
        """Remove a booking (rejecting a request also deletes it)"""
        booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            return False
        self.db.delete(booking)
        self.db.commit()
        logger.info("Booking #%s deleted", booking_id)
        return True

    def delete_room(self, room: Room) -> int:
        """
        Delete a room, applying ROOM_DELETE_POLICY to its bookings

        cascade: bookings of the room are deleted with it
        orphan:  bookings are kept and still reference the old room id

        Returns:
            number of bookings deleted
        """
        room_id = room.id
        removed = 0
        with booking_locks.hold(("room", room_id)):
            if settings.ROOM_DELETE_POLICY == "cascade":
                removed = self.db.query(Booking).filter(
                    Booking.room_id == room_id
                ).delete(synchronize_session=False)
            self.db.delete(room)
            self.db.commit()

        logger.info("Room #%s deleted (%s, %d booking(s) removed)", room_id, settings.ROOM_DELETE_POLICY, removed)
        return removed
