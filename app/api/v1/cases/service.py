"""Discipline cases: filing (with parent notification and derived dismissals), edits and removal."""

from datetime import date
from typing import List, Optional

from fastapi import status

from app.core.context import AppContext
from app.core.enums import SlotKey
from app.core.events import CaseFiled, handle_case_filed
from app.core.exceptions import ServiceError
from app.core.identifiers import new_id
from app.core.ledger import find_student, in_term, in_year, record_notification, student_label
from app.core.schemas import DisciplineCase
from app.notifications.messages import case_notice

from .schemas import CaseCreate, CaseListResponse, CaseUpdate, CaseView


def _to_view(ctx: AppContext, case: DisciplineCase) -> CaseView:
    return CaseView(**case.model_dump(), student_name=student_label(ctx.state, case.student_id))


def list_cases(
    ctx: AppContext,
    search: Optional[str] = None,
    term: Optional[int] = None,
) -> CaseListResponse:
    """Active-year cases, newest first, optionally narrowed by term and free text."""
    cases = in_term(in_year(ctx.state.cases, ctx.active_year_id), term)
    views = [_to_view(ctx, c) for c in reversed(cases)]
    if search:
        needle = search.strip().lower()
        views = [
            v
            for v in views
            if needle in v.student_name.lower()
            or needle in v.description.lower()
            or needle in v.offense_type.lower()
            or needle in _reg_number(ctx, v.student_id).lower()
        ]
    return CaseListResponse(items=views, total=len(views))


def _reg_number(ctx: AppContext, student_id: str) -> str:
    student = find_student(ctx.state, student_id)
    return student.reg_number if student else ""


def get_case(ctx: AppContext, case_id: str) -> Optional[DisciplineCase]:
    return next((c for c in ctx.state.cases if c.id == case_id), None)


async def add_case(ctx: AppContext, payload: CaseCreate, recorded_by: str) -> DisciplineCase:
    student = find_student(ctx.state, payload.student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)

    case = DisciplineCase(
        id=new_id("CASE"),
        student_id=student.id,
        year_id=ctx.active_year_id,
        term=ctx.active_term,
        offense_type=payload.offense_type,
        description=payload.description,
        action_taken=payload.action_taken,
        case_date=payload.case_date,
        recorded_by=recorded_by,
        points_deducted=payload.points_deducted,
    )
    ctx.state.cases.append(case)

    record_notification(
        ctx,
        recipient_name=student.full_name,
        phone_number=student.parent_contact,
        message=case_notice(student.full_name, case),
    )

    for opened in handle_case_filed(CaseFiled(case=case, student=student, filed_on=date.today())):
        ctx.state.weekend_dismissals.append(opened.dismissal)

    await ctx.sync(SlotKey.CASES, SlotKey.SMS_LOGS, SlotKey.DISMISSALS)
    return case


async def update_case(ctx: AppContext, case_id: str, payload: CaseUpdate) -> Optional[DisciplineCase]:
    """Replace by id. Dismissals opened by the original filing are not revisited."""
    existing = get_case(ctx, case_id)
    if existing is None:
        return None
    if find_student(ctx.state, payload.student_id) is None:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)

    updated = DisciplineCase(
        id=existing.id,
        student_id=payload.student_id,
        year_id=existing.year_id,
        term=existing.term,
        offense_type=payload.offense_type,
        description=payload.description,
        action_taken=payload.action_taken,
        case_date=payload.case_date,
        recorded_by=existing.recorded_by,
        points_deducted=payload.points_deducted,
    )
    ctx.state.cases = [updated if c.id == case_id else c for c in ctx.state.cases]
    await ctx.sync(SlotKey.CASES)
    return updated


async def delete_case(ctx: AppContext, case_id: str) -> bool:
    before = len(ctx.state.cases)
    ctx.state.cases = [c for c in ctx.state.cases if c.id != case_id]
    if len(ctx.state.cases) == before:
        return False
    await ctx.sync(SlotKey.CASES)
    return True
