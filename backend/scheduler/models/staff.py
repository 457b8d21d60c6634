"""
Staff member model
"""
from sqlalchemy import Column, Integer, String, Text
from ..database import Base


class StaffMember(Base):
    """
    Staff member accepting appointment requests.
    office_hours holds the serialized StaffSchedule blob
    (weekly template + date overrides).
    """

    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(256), nullable=False, unique=True, index=True)
    full_name = Column(String(256), nullable=True)
    email = Column(String(256), nullable=True)
    office_hours = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)

    def __repr__(self):
        return f"<StaffMember {self.username}>"
