"""Stored entities. Field aliases are camelCase so persisted documents and backups keep the browser format."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.enums import (
    ActionTaken,
    DismissalStatus,
    ExitStatus,
    Gender,
    Role,
    SMSStatus,
    YearStatus,
)


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class User(CamelModel):
    """Directory entry. Only the bcrypt hash of the password is kept."""

    id: str
    full_name: str
    email: str
    password_hash: str
    role: Role
    last_login: Optional[datetime] = None


class SessionUser(CamelModel):
    """User as exposed to callers and held in the current-session slot (no credentials)."""

    id: str
    full_name: str
    email: str
    role: Role
    last_login: Optional[datetime] = None


class LoginEvent(CamelModel):
    id: str
    user_id: str
    user_name: str
    user_role: Role
    timestamp: datetime
    browser_info: str = ""


class AcademicYear(CamelModel):
    """Only one year is ever `Current`; closed years stay valid as keys for historical records."""

    id: str
    label: str
    status: YearStatus
    start_date: datetime
    end_date: Optional[datetime] = None
    current_term: int = 1


class Student(CamelModel):
    id: str
    reg_number: str
    full_name: str
    class_name: str = Field(..., alias="class")
    gender: Gender
    parent_contact: str


class DisciplineCase(CamelModel):
    id: str
    student_id: str
    year_id: str
    term: int
    offense_type: str
    description: str = ""
    action_taken: ActionTaken = ActionTaken.NONE
    case_date: date = Field(..., alias="date")
    recorded_by: str
    points_deducted: int = Field(0, ge=0)


class WeekendDismissal(CamelModel):
    """Derived from a `Weekend` case; Active -> Completed only."""

    id: str
    student_id: str
    year_id: str
    term: int
    reason: str
    start_date: date
    return_date: date
    status: DismissalStatus = DismissalStatus.ACTIVE


class ExitPermission(CamelModel):
    """Away -> Returned only. Overdue is derived, never stored."""

    id: str
    student_id: str
    year_id: str
    term: int
    reason: str
    destination: str
    parent_contact: str
    departure_date: date
    expected_return_date: date
    status: ExitStatus = ExitStatus.AWAY


# Browser backups write SMS timestamps with toLocaleString(), e.g. "10/19/2026, 8:05:00 PM".
LOCALE_TIMESTAMP_FORMATS = ("%m/%d/%Y, %I:%M:%S %p", "%m/%d/%Y, %H:%M:%S", "%d/%m/%Y, %H:%M:%S")


class SMSLog(CamelModel):
    id: str
    recipient_name: str
    phone_number: str
    message: str
    timestamp: datetime
    status: SMSStatus

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_locale_timestamp(cls, value):
        if isinstance(value, str):
            for fmt in LOCALE_TIMESTAMP_FORMATS:
                try:
                    return datetime.strptime(value.strip(), fmt)
                except ValueError:
                    continue
        return value


class AppState(CamelModel):
    """Everything the store holds, loaded into memory at startup."""

    user: Optional[SessionUser] = None
    system_users: List[User] = Field(default_factory=list)
    students: List[Student] = Field(default_factory=list)
    cases: List[DisciplineCase] = Field(default_factory=list)
    sms_logs: List[SMSLog] = Field(default_factory=list)
    years: List[AcademicYear] = Field(default_factory=list)
    active_year_id: str = ""
    active_term: int = 1
    weekend_dismissals: List[WeekendDismissal] = Field(default_factory=list)
    exit_permissions: List[ExitPermission] = Field(default_factory=list)
    login_events: List[LoginEvent] = Field(default_factory=list)


class Balance(CamelModel):
    """Marks left out of the base budget. `remaining` may go negative; it is never clamped."""

    student_id: str
    removed: int
    remaining: int
