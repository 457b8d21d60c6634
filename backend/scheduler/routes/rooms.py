"""
API router for rooms and room bookings
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..engine import Accepted, Interval, RoomHours, format_range, selection_interval
from ..models.booking import Booking
from ..models.room import Room
from ..services.bookings import BookingService
from .errors import parse_date, rejection_error

settings = get_settings()
router = APIRouter(prefix="/api", tags=["rooms"])


# ==================== Pydantic Schemas ====================

class RoomBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = None
    capacity: int = Field(..., ge=1)
    image_url: Optional[str] = None
    open_time: str = Field(settings.DEFAULT_OPEN_TIME, pattern=r"^\d{2}:\d{2}$")  # HH:MM
    close_time: str = Field(settings.DEFAULT_CLOSE_TIME, pattern=r"^\d{2}:\d{2}$")  # HH:MM


class RoomResponse(RoomBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class SlotResponse(BaseModel):
    start: str  # "YYYY-MM-DDTHH:MM"
    end: str
    label: str  # "9:00 AM"
    is_booked: bool


class RoomSlotsResponse(BaseModel):
    room_id: int
    date: str
    open_time: str
    close_time: str
    slots: List[SlotResponse]


class BookingCreate(BaseModel):
    room_id: int
    start_time: datetime
    end_time: Optional[datetime] = None  # defaults to one slot
    user_id: Optional[str] = None
    customer_name: str = Field(..., min_length=1, max_length=256)
    customer_email: str = Field(..., min_length=3, max_length=256)
    customer_phone: str = Field(..., min_length=5, max_length=20)
    organization: Optional[str] = None
    purpose: str = Field(..., min_length=1)
    need_assistance: bool = False


class BookingResponse(BaseModel):
    id: int
    room_id: int
    customer_name: str
    purpose: str
    start_time: datetime
    end_time: datetime
    status: str
    time_range: str

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            customer_name=booking.customer_name,
            purpose=booking.purpose,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=booking.status,
            time_range=format_range(Interval(booking.start_time, booking.end_time))
        )


def _check_hours(data: RoomBase):
    try:
        hours = RoomHours.from_record(data.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not hours.is_valid:
        raise HTTPException(status_code=400, detail="Opening time must be before closing time")


# ==================== Rooms ====================

@router.get("/rooms", response_model=List[RoomResponse])
async def get_rooms(db: Session = Depends(get_db)):
    """List all rooms"""
    return db.query(Room).order_by(Room.id).all()


@router.post("/rooms", response_model=RoomResponse, status_code=201)
async def create_room(data: RoomBase, db: Session = Depends(get_db)):
    """Create a room"""
    _check_hours(data)
    room = Room(**data.model_dump())
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


@router.put("/rooms/{room_id}", response_model=RoomResponse)
async def update_room(room_id: int, data: RoomBase, db: Session = Depends(get_db)):
    """Update a room; existing bookings are left untouched"""
    _check_hours(data)
    room = BookingService(db).get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    for key, value in data.model_dump().items():
        setattr(room, key, value)
    db.commit()
    db.refresh(room)
    return room


@router.delete("/rooms/{room_id}")
async def delete_room(room_id: int, db: Session = Depends(get_db)):
    """Delete a room (bookings follow ROOM_DELETE_POLICY)"""
    service = BookingService(db)
    room = service.get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    removed = service.delete_room(room)
    return {"success": True, "bookings_removed": removed}


@router.get("/rooms/{room_id}/slots/{date_str}", response_model=RoomSlotsResponse)
async def get_room_slots(room_id: int, date_str: str, db: Session = Depends(get_db)):
    """Free/booked slot grid of a room for a date"""
    target_date = parse_date(date_str)
    service = BookingService(db)
    room = service.get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")

    slots = service.room_slots(room, target_date)
    return RoomSlotsResponse(
        room_id=room.id,
        date=date_str,
        open_time=room.open_time,
        close_time=room.close_time,
        slots=[
            SlotResponse(
                start=slot.start.strftime("%Y-%m-%dT%H:%M"),
                end=slot.end.strftime("%Y-%m-%dT%H:%M"),
                label=slot.label,
                is_booked=slot.is_booked
            )
            for slot in slots
        ]
    )


# ==================== Bookings ====================

@router.get("/bookings", response_model=List[BookingResponse])
async def get_bookings(
    date_str: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD"),
    db: Session = Depends(get_db)
):
    """All bookings, optionally limited to one day"""
    target_date = parse_date(date_str) if date_str else None
    return [BookingResponse.from_booking(b) for b in BookingService(db).list_bookings(target_date)]


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(data: BookingCreate, db: Session = Depends(get_db)):
    """Book a room"""
    service = BookingService(db)
    room = service.get_room(data.room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")

    # Wall-clock times: any offset sent by the client is dropped, not converted
    start = data.start_time.replace(tzinfo=None)
    if data.end_time is None:
        proposed = selection_interval(start, minutes=settings.SLOT_DURATION_MINUTES)
    else:
        proposed = Interval(start, data.end_time.replace(tzinfo=None))

    decision, booking = service.create_booking(
        room,
        proposed,
        **data.model_dump(exclude={"room_id", "start_time", "end_time"})
    )
    if not isinstance(decision, Accepted):
        raise rejection_error(decision)
    return BookingResponse.from_booking(booking)


@router.post("/bookings/{booking_id}/approve", response_model=BookingResponse)
async def approve_booking(booking_id: int, db: Session = Depends(get_db)):
    """Confirm a pending booking"""
    booking = BookingService(db).approve_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return BookingResponse.from_booking(booking)


@router.delete("/bookings/{booking_id}")
async def delete_booking(booking_id: int, db: Session = Depends(get_db)):
    """Delete or reject a booking"""
    if not BookingService(db).delete_booking(booking_id):
        raise HTTPException(status_code=404, detail="Booking not found")
    return {"success": True}
