"""
Room booking model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Booking(Base):
    """Reservation of one room for one contiguous interval"""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, nullable=False, index=True)  # rooms.id, see ROOM_DELETE_POLICY
    user_id = Column(String(256), nullable=True)
    customer_name = Column(String(256), nullable=False)
    customer_email = Column(String(256), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    organization = Column(String(256), nullable=True)
    purpose = Column(Text, nullable=False)
    need_assistance = Column(Boolean, default=False, nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    status = Column(String(20), default="pending")  # pending, confirmed
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<Booking room={self.room_id} {self.start_time}-{self.end_time} (Status: {self.status})>"
