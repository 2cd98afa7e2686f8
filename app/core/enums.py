from enum import Enum


class Role(str, Enum):
    ADMINISTRATOR = "Administrator"
    ADMIN = "Admin"
    STAFF = "Staff"


PRIVILEGED_ROLES = (Role.ADMINISTRATOR, Role.ADMIN)


class YearStatus(str, Enum):
    CURRENT = "Current"
    CLOSED = "Closed"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ActionTaken(str, Enum):
    NONE = "None"
    WARNING = "Warning"
    WEEKEND = "Weekend"
    DISMISSAL = "Dismissal"


class DismissalStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"


class ExitStatus(str, Enum):
    AWAY = "Away"
    RETURNED = "Returned"


class SMSStatus(str, Enum):
    SENT = "Sent"
    FAILED = "Failed"


class SlotKey(str, Enum):
    """Names of the persisted documents; kept identical to the browser storage keys."""

    SESSION_USER = "sdms_user"
    USERS = "sdms_users"
    STUDENTS = "sdms_students"
    CASES = "sdms_cases"
    SMS_LOGS = "sdms_sms"
    YEARS = "sdms_years"
    ACTIVE_YEAR = "sdms_active_year"
    ACTIVE_TERM = "sdms_active_term"
    DISMISSALS = "sdms_dismissals"
    EXIT_PERMISSIONS = "sdms_exit_permissions"
    LOGIN_EVENTS = "sdms_login_events"
