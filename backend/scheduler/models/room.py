"""
Room model
"""
from sqlalchemy import Column, Integer, String, Text
from ..database import Base


class Room(Base):
    """Bookable room with daily opening hours"""

    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    capacity = Column(Integer, nullable=False)
    image_url = Column(Text, nullable=True)
    open_time = Column(String(5), nullable=False, default="09:00")  # HH:MM
    close_time = Column(String(5), nullable=False, default="17:00")  # HH:MM

    def __repr__(self):
        return f"<Room {self.name} {self.open_time}-{self.close_time}>"
