"""
Ledger domain events. Filing a case publishes CaseFiled; handlers may answer with derived events
(a Weekend action opens a WeekendDismissal). Handlers are pure: the ledger applies what they return.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, List, Optional

from app.core.config import settings
from app.core.enums import ActionTaken, DismissalStatus
from app.core.identifiers import new_id
from app.core.schemas import DisciplineCase, Student, WeekendDismissal


@dataclass(frozen=True)
class CaseFiled:
    case: DisciplineCase
    student: Student
    filed_on: date


@dataclass(frozen=True)
class DismissalOpened:
    dismissal: WeekendDismissal
    source_case_id: str


def open_weekend_dismissal(event: CaseFiled) -> Optional[DismissalOpened]:
    case = event.case
    if case.action_taken != ActionTaken.WEEKEND:
        return None
    dismissal = WeekendDismissal(
        id=new_id("WD"),
        student_id=event.student.id,
        year_id=case.year_id,
        term=case.term,
        reason=case.description,
        start_date=event.filed_on,
        return_date=event.filed_on + timedelta(days=settings.weekend_dismissal_days),
        status=DismissalStatus.ACTIVE,
    )
    return DismissalOpened(dismissal=dismissal, source_case_id=case.id)


CASE_FILED_HANDLERS: List[Callable[[CaseFiled], Optional[DismissalOpened]]] = [open_weekend_dismissal]


def handle_case_filed(event: CaseFiled) -> List[DismissalOpened]:
    results = []
    for handler in CASE_FILED_HANDLERS:
        outcome = handler(event)
        if outcome is not None:
            results.append(outcome)
    return results
