"""
Database initialization script
Creates the tables and adds demo rooms and staff
"""
import sys
sys.path.insert(0, '.')

from scheduler.database import init_db, session_scope
from scheduler.engine import StaffSchedule
from scheduler.models.room import Room
from scheduler.models.staff import StaffMember

INITIAL_ROOMS = [
    {
        "name": "Conference Room A",
        "description": "Projector, whiteboard and video conferencing.",
        "capacity": 12,
        "open_time": "08:00",
        "close_time": "18:00"
    },
    {
        "name": "Meeting Pod",
        "description": "Quiet room for small meetings and calls.",
        "capacity": 4,
        "open_time": "09:00",
        "close_time": "17:00"
    },
    {
        "name": "Workshop Hall",
        "description": "Open floor for trainings and events.",
        "capacity": 40,
        "open_time": "10:00",
        "close_time": "20:00"
    },
]

MORNING = ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]
AFTERNOON = ["13:00", "13:30", "14:00", "14:30", "15:00", "15:30"]

INITIAL_STAFF = [
    {
        "username": "advisor",
        "full_name": "Business Advisor",
        "email": "advisor@example.com",
        "bio": "Business plans, funding and registration questions.",
        "weekly": {
            "Monday": MORNING + AFTERNOON,
            "Wednesday": MORNING,
            "Friday": AFTERNOON,
        }
    },
    {
        "username": "mentor",
        "full_name": "Technology Mentor",
        "email": "mentor@example.com",
        "bio": "Product, prototyping and software questions.",
        "weekly": {
            "Tuesday": MORNING,
            "Thursday": MORNING + AFTERNOON,
        }
    },
]


def init_rooms(db):
    existing = db.query(Room).count()
    if existing > 0:
        print(f"Rooms already exist ({existing}), skipping...")
        return

    for room_data in INITIAL_ROOMS:
        db.add(Room(**room_data))
    print(f"Added {len(INITIAL_ROOMS)} rooms!")


def init_staff(db):
    added = 0
    for staff_data in INITIAL_STAFF:
        data = dict(staff_data)
        weekly = data.pop("weekly")
        if db.query(StaffMember).filter(StaffMember.username == data["username"]).first():
            continue

        schedule = StaffSchedule()
        for weekday, slots in weekly.items():
            schedule = schedule.with_weekday(weekday, slots)
        db.add(StaffMember(office_hours=schedule.to_blob(), **data))
        added += 1

    print(f"Added {added} staff members!")


if __name__ == "__main__":
    print("Creating tables...")
    init_db()
    print("Tables created!")

    with session_scope() as db:
        init_rooms(db)
        init_staff(db)

    print("\nInitialization complete!")
    print("Start the server: python -m uvicorn scheduler.main:app --reload")
