from app.core.config import settings
from app.core.schemas import DisciplineCase, ExitPermission


def case_notice(student_name: str, case: DisciplineCase) -> str:
    return (
        f"Official Notification: {student_name} recorded with {case.offense_type} "
        f"in Term {case.term}. Action: {case.action_taken.value}. Marks deducted: {case.points_deducted}."
    )


def departure_notice(student_name: str, permission: ExitPermission) -> str:
    return (
        f"Departure Log: {student_name} has left {settings.school_name} for {permission.destination}. "
        f"Reason: {permission.reason}. Expected back on {permission.expected_return_date.isoformat()}."
    )


def arrival_notice(student_name: str, permission: ExitPermission) -> str:
    return (
        f"Arrival Confirmation: {student_name} has successfully returned to {settings.school_name} "
        f"from {permission.destination} and is now back in school custody."
    )
