"""
Appointment request model
"""
from sqlalchemy import Column, Integer, Date, Time, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base

APPOINTMENT_STATUSES = ("pending", "confirmed", "rejected")


class AppointmentRequest(Base):
    """Customer request for a staff member's time"""

    __tablename__ = "appointment_requests"

    id = Column(Integer, primary_key=True, index=True)
    staff_username = Column(String(256), nullable=False, index=True)
    appointment_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    customer_name = Column(String(256), nullable=False)
    customer_email = Column(String(256), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    business_name = Column(String(256), nullable=True)
    reason = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, rejected
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<AppointmentRequest {self.appointment_date} {self.start_time} (Status: {self.status})>"
