"""
SQLAlchemy models
"""
from .room import Room
from .booking import Booking
from .staff import StaffMember
from .appointment import AppointmentRequest, APPOINTMENT_STATUSES

__all__ = [
    "Room",
    "Booking",
    "StaffMember",
    "AppointmentRequest",
    "APPOINTMENT_STATUSES",
]
