"""Read-side helpers over the period-scoped collections, plus the shared SMS audit write."""

from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, TypeVar

from app.core.config import settings
from app.core.context import AppContext
from app.core.enums import ExitStatus
from app.core.identifiers import new_id
from app.core.schemas import AppState, Balance, ExitPermission, SMSLog, Student

REMOVED_STUDENT_LABEL = "Removed Student"

T = TypeVar("T")


def find_student(state: AppState, student_id: str) -> Optional[Student]:
    return next((s for s in state.students if s.id == student_id), None)


def student_label(state: AppState, student_id: str) -> str:
    """Display name; records pointing at a deleted student resolve to a placeholder instead of failing."""
    student = find_student(state, student_id)
    return student.full_name if student else REMOVED_STUDENT_LABEL


def in_year(records: Iterable[T], year_id: str) -> List[T]:
    return [r for r in records if r.year_id == year_id]


def in_term(records: Iterable[T], term: Optional[int]) -> List[T]:
    """`term=None` means all terms."""
    if term is None:
        return list(records)
    return [r for r in records if r.term == term]


def compute_balance(state: AppState, student_id: str, year_id: Optional[str] = None) -> Balance:
    """Lifetime balance when `year_id` is None, otherwise only cases stamped with that year count."""
    cases = [c for c in state.cases if c.student_id == student_id]
    if year_id is not None:
        cases = in_year(cases, year_id)
    removed = sum(c.points_deducted for c in cases)
    return Balance(student_id=student_id, removed=removed, remaining=settings.total_base_marks - removed)


def is_overdue(permission: ExitPermission, today: Optional[date] = None) -> bool:
    """Away and due back today or earlier: overdue from the start of the expected return day."""
    today = today or date.today()
    return permission.status == ExitStatus.AWAY and permission.expected_return_date <= today


def record_notification(ctx: AppContext, recipient_name: str, phone_number: str, message: str) -> SMSLog:
    """Hand the message to the dispatcher and append its audit entry. The caller syncs the SMS slot."""
    status = ctx.dispatcher.dispatch(phone_number, message)
    entry = SMSLog(
        id=new_id("SMS"),
        recipient_name=recipient_name,
        phone_number=phone_number,
        message=message,
        timestamp=datetime.now(timezone.utc),
        status=status,
    )
    ctx.state.sms_logs.append(entry)
    return entry
