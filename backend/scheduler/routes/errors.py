"""
HTTP helpers shared by the API routers
"""
from datetime import date, datetime, time

from fastapi import HTTPException

from ..engine import Rejected, RejectionReason, parse_hhmm


def rejection_error(decision: Rejected) -> HTTPException:
    """Engine rejection -> 409 for double-booking, 400 otherwise"""
    status_code = 409 if decision.reason == RejectionReason.CONFLICT else 400
    return HTTPException(status_code=status_code, detail=decision.as_detail())


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")


def parse_time(value: str) -> time:
    try:
        return parse_hhmm(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid time {value!r}. Use HH:MM")
