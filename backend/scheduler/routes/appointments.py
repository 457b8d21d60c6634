"""
API router for appointment requests
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..engine import Accepted, format_hhmm
from ..models.appointment import AppointmentRequest
from ..services.appointments import AppointmentService, StatusTransitionError, is_past
from ..services.schedule import ScheduleService
from .errors import parse_date, parse_time, rejection_error

router = APIRouter(prefix="/api", tags=["appointments"])


# ==================== Pydantic Schemas ====================

class AppointmentCreate(BaseModel):
    staff_username: str = Field(..., min_length=1)
    appointment_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")  # YYYY-MM-DD
    slots: List[str] = Field(..., description="Selected slot starts, HH:MM")
    customer_name: str = Field(..., min_length=2, max_length=256)
    customer_email: str = Field(..., min_length=3, max_length=256)
    customer_phone: str = Field(..., min_length=5, max_length=20)
    business_name: Optional[str] = None
    reason: str = Field(..., min_length=1)


class AppointmentResponse(BaseModel):
    id: int
    staff_username: str
    appointment_date: str
    start_time: str
    end_time: str
    time_range: str
    customer_name: str
    customer_email: str
    customer_phone: str
    business_name: Optional[str]
    reason: str
    status: str
    is_past: bool

    @classmethod
    def from_request(cls, request: AppointmentRequest, today: Optional[date] = None) -> "AppointmentResponse":
        start = format_hhmm(request.start_time)
        end = format_hhmm(request.end_time)
        return cls(
            id=request.id,
            staff_username=request.staff_username,
            appointment_date=request.appointment_date.strftime("%Y-%m-%d"),
            start_time=start,
            end_time=end,
            time_range=f"{start} - {end}",
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            business_name=request.business_name,
            reason=request.reason,
            status=request.status,
            is_past=is_past(request, today)
        )


class StatusUpdate(BaseModel):
    status: str = Field(..., pattern=r"^(confirmed|rejected)$")


# ==================== API Endpoints ====================

@router.post("/appointments", response_model=AppointmentResponse, status_code=201)
async def create_appointment(data: AppointmentCreate, db: Session = Depends(get_db)):
    """Request an appointment with a staff member"""
    target_date = parse_date(data.appointment_date)
    selected = [parse_time(s) for s in data.slots]

    staff = ScheduleService(db).get_staff(data.staff_username)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")

    decision, request = AppointmentService(db).create_request(
        staff,
        target_date,
        selected,
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        business_name=data.business_name,
        reason=data.reason
    )
    if not isinstance(decision, Accepted):
        raise rejection_error(decision)
    return AppointmentResponse.from_request(request)


@router.get("/appointments", response_model=List[AppointmentResponse])
async def get_appointments(
    staff: Optional[str] = Query(None, description="Staff username"),
    db: Session = Depends(get_db)
):
    """Appointment requests, newest date first"""
    today = date.today()
    return [
        AppointmentResponse.from_request(r, today)
        for r in AppointmentService(db).list_requests(staff)
    ]


@router.patch("/appointments/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(appointment_id: int, data: StatusUpdate, db: Session = Depends(get_db)):
    """Confirm or reject a pending request"""
    service = AppointmentService(db)
    request = service.get_request(appointment_id)
    if not request:
        raise HTTPException(status_code=404, detail="Appointment request not found")
    try:
        request = service.set_status(request, data.status)
    except StatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return AppointmentResponse.from_request(request)
