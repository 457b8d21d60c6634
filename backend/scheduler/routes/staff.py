"""
API router for staff office hours
"""
from datetime import time, timedelta
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..engine import (
    ScheduleFormatError,
    StaffSchedule,
    format_hhmm,
    format_ranges,
    override_ranges,
    slot_end,
    weekly_ranges,
)
from ..engine.schedule import weekday_name
from ..engine.time_grid import format_12h
from ..models.staff import StaffMember
from ..services.schedule import ScheduleService
from .errors import parse_date

router = APIRouter(prefix="/api/staff", tags=["staff"])


# ==================== Pydantic Schemas ====================

class SlotsUpdate(BaseModel):
    slots: List[str] = Field(default_factory=list)  # ["09:00", "09:30"]


class StaffSummary(BaseModel):
    username: str
    full_name: Optional[str]
    bio: Optional[str]
    weekly: Dict[str, List[str]]  # weekday -> display ranges


class ScheduleResponse(BaseModel):
    username: str
    version: int
    weekly: Dict[str, List[str]]  # weekday -> ["09:00", ...]
    overrides: Dict[str, List[str]]  # YYYY-MM-DD -> ["09:00", ...]
    weekly_ranges: Dict[str, List[str]]
    override_ranges: Dict[str, List[str]]


class TimeSlotResponse(BaseModel):
    value: str  # "HH:MM"
    end: str  # "HH:MM"
    label: str  # "9:00 AM"

    @classmethod
    def from_slot(cls, slot: time) -> "TimeSlotResponse":
        return cls(value=format_hhmm(slot), end=format_hhmm(slot_end(slot)), label=format_12h(slot))


class AvailabilityResponse(BaseModel):
    username: str
    date: str
    is_override: bool
    slots: List[TimeSlotResponse]
    ranges: List[str]


class DayAvailability(BaseModel):
    date: str
    weekday: str
    ranges: List[str]


class WeekResponse(BaseModel):
    username: str
    days: List[DayAvailability]


def _schedule_response(staff: StaffMember, schedule: StaffSchedule) -> ScheduleResponse:
    data = schedule.to_dict()
    return ScheduleResponse(
        username=staff.username,
        version=schedule.version,
        weekly=data["weekly"],
        overrides=data["overrides"],
        weekly_ranges=weekly_ranges(schedule),
        override_ranges=override_ranges(schedule)
    )


def _get_staff_or_404(service: ScheduleService, username: str) -> StaffMember:
    staff = service.get_staff(username)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return staff


# ==================== API Endpoints ====================

@router.get("", response_model=List[StaffSummary])
async def list_staff(db: Session = Depends(get_db)):
    """Staff members with their weekly hours as display ranges"""
    service = ScheduleService(db)
    return [
        StaffSummary(
            username=staff.username,
            full_name=staff.full_name,
            bio=staff.bio,
            weekly=weekly_ranges(service.load_schedule(staff))
        )
        for staff in service.list_staff()
    ]


@router.get("/{username}/schedule", response_model=ScheduleResponse)
async def get_schedule(username: str, db: Session = Depends(get_db)):
    service = ScheduleService(db)
    staff = _get_staff_or_404(service, username)
    return _schedule_response(staff, service.load_schedule(staff))


@router.put("/{username}/schedule/weekly/{weekday}", response_model=ScheduleResponse)
async def set_weekly_slots(username: str, weekday: str, data: SlotsUpdate, db: Session = Depends(get_db)):
    """Replace the recurring slots of one weekday"""
    service = ScheduleService(db)
    staff = _get_staff_or_404(service, username)
    try:
        schedule = service.set_weekday(staff, weekday, data.slots)
    except ScheduleFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _schedule_response(staff, schedule)


@router.put("/{username}/schedule/overrides/{date_str}", response_model=ScheduleResponse)
async def set_override(username: str, date_str: str, data: SlotsUpdate, db: Session = Depends(get_db)):
    """Replace the slots of one date; an empty list closes the day"""
    target_date = parse_date(date_str)
    service = ScheduleService(db)
    staff = _get_staff_or_404(service, username)
    try:
        schedule = service.set_override(staff, target_date, data.slots)
    except ScheduleFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _schedule_response(staff, schedule)


@router.delete("/{username}/schedule/overrides/{date_str}", response_model=ScheduleResponse)
async def clear_override(username: str, date_str: str, db: Session = Depends(get_db)):
    """Return a date to the weekly template"""
    target_date = parse_date(date_str)
    service = ScheduleService(db)
    staff = _get_staff_or_404(service, username)
    return _schedule_response(staff, service.clear_override(staff, target_date))


@router.get("/{username}/availability/{date_str}", response_model=AvailabilityResponse)
async def get_availability(username: str, date_str: str, db: Session = Depends(get_db)):
    """Open slots of a staff member for one date"""
    target_date = parse_date(date_str)
    service = ScheduleService(db)
    staff = _get_staff_or_404(service, username)

    slots = service.available_slots(staff, target_date)
    return AvailabilityResponse(
        username=staff.username,
        date=date_str,
        is_override=service.load_schedule(staff).has_override(target_date),
        slots=[TimeSlotResponse.from_slot(s) for s in slots],
        ranges=format_ranges(slots)
    )


@router.get("/{username}/week/{date_str}", response_model=WeekResponse)
async def get_week(username: str, date_str: str, db: Session = Depends(get_db)):
    """Open ranges for seven days starting at a date"""
    start = parse_date(date_str)
    service = ScheduleService(db)
    staff = _get_staff_or_404(service, username)

    days = service.available_range(staff, start, start + timedelta(days=6))
    return WeekResponse(
        username=staff.username,
        days=[
            DayAvailability(date=day.isoformat(), weekday=weekday_name(day), ranges=format_ranges(slots))
            for day, slots in days.items()
        ]
    )
