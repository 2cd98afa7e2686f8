from collections import Counter
from datetime import date
from typing import Optional

from app.core.context import AppContext
from app.core.enums import DismissalStatus, ExitStatus
from app.core.ledger import find_student, in_term, in_year

from .schemas import DashboardSummary, DisciplineReport, OffenseCount, ReportRow

RECENT_CASES = 5
NOT_AVAILABLE = "N/A"


def dashboard_summary(ctx: AppContext, term: Optional[int] = None) -> DashboardSummary:
    """Active-year figures; `term=None` aggregates the whole year."""
    year_id = ctx.active_year_id
    cases = in_term(in_year(ctx.state.cases, year_id), term)
    dismissals = in_term(in_year(ctx.state.weekend_dismissals, year_id), term)
    permissions = in_term(in_year(ctx.state.exit_permissions, year_id), term)

    offenses = Counter(c.offense_type for c in cases)
    return DashboardSummary(
        term=term if term is not None else "all",
        total_students=len(ctx.state.students),
        incident_records=len(cases),
        total_deductions=sum(c.points_deducted for c in cases),
        infractions=sum(1 for c in cases if c.points_deducted > 0),
        active_dismissals=sum(1 for d in dismissals if d.status == DismissalStatus.ACTIVE),
        students_away=sum(1 for p in permissions if p.status == ExitStatus.AWAY),
        offense_breakdown=[OffenseCount(name=name, count=count) for name, count in offenses.items()],
        recent_cases=list(reversed(cases[-RECENT_CASES:])),
    )


def discipline_report(
    ctx: AppContext,
    class_name: Optional[str] = None,
    term: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> DisciplineReport:
    """Active-year cases filtered by class, term and an inclusive date range."""
    rows = []
    for case in in_term(in_year(ctx.state.cases, ctx.active_year_id), term):
        student = find_student(ctx.state, case.student_id)
        if class_name and (student is None or student.class_name != class_name):
            continue
        if start_date and case.case_date < start_date:
            continue
        if end_date and case.case_date > end_date:
            continue
        rows.append(
            ReportRow(
                case_date=case.case_date,
                term=case.term,
                student_name=student.full_name if student else NOT_AVAILABLE,
                reg_number=student.reg_number if student else NOT_AVAILABLE,
                class_name=student.class_name if student else NOT_AVAILABLE,
                offense_type=case.offense_type,
                description=case.description,
                action_taken=case.action_taken.value,
                points_deducted=case.points_deducted,
                recorded_by=case.recorded_by,
            )
        )
    return DisciplineReport(
        class_name=class_name,
        term=term,
        start_date=start_date,
        end_date=end_date,
        rows=rows,
        total_points=sum(r.points_deducted for r in rows),
    )
