"""
Bootstrap data used when the store has no value for a slot.

Creates (in memory; persisted by the first sync):
- one academic year, current, at term 1
- two sample students
- the root Administrator account and a duty Staff account
"""
from datetime import datetime, timezone
from typing import List

from app.auth.security import hash_password
from app.core.enums import Gender, Role, YearStatus
from app.core.schemas import AcademicYear, Student, User

SEED_YEAR_ID = "YEAR-2024"
ROOT_USER_ID = "USR-ROOT"
STAFF_USER_ID = "USR-STAFF"

DEFAULT_ROOT_EMAIL = "administrator@school.edu"
DEFAULT_ROOT_PASSWORD = "admin123"
DEFAULT_STAFF_EMAIL = "staff@school.edu"
DEFAULT_STAFF_PASSWORD = "staff123"


def seed_years() -> List[AcademicYear]:
    return [
        AcademicYear(
            id=SEED_YEAR_ID,
            label="Academic Year 2024",
            status=YearStatus.CURRENT,
            start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            current_term=1,
        )
    ]


def seed_students() -> List[Student]:
    return [
        Student(
            id="STU-1",
            reg_number="L3/SOD/001",
            full_name="Kwame Mensah",
            class_name="L3 SOD A",
            gender=Gender.MALE,
            parent_contact="+250 781 123 456",
        ),
        Student(
            id="STU-2",
            reg_number="L4/AUT/012",
            full_name="Zainab Keita",
            class_name="L4 AUT A",
            gender=Gender.FEMALE,
            parent_contact="+250 782 987 654",
        ),
    ]


def seed_users() -> List[User]:
    return [
        User(
            id=ROOT_USER_ID,
            full_name="System Administrator",
            email=DEFAULT_ROOT_EMAIL,
            password_hash=hash_password(DEFAULT_ROOT_PASSWORD),
            role=Role.ADMINISTRATOR,
        ),
        User(
            id=STAFF_USER_ID,
            full_name="Duty Staff Member",
            email=DEFAULT_STAFF_EMAIL,
            password_hash=hash_password(DEFAULT_STAFF_PASSWORD),
            role=Role.STAFF,
        ),
    ]
