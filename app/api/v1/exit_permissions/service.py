"""Campus exit permissions: departure (Away) and confirmed return (Returned), each with a parent SMS."""

from datetime import date, timedelta
from typing import Optional

from fastapi import status

from app.core.config import settings
from app.core.context import AppContext
from app.core.enums import ExitStatus, SlotKey
from app.core.exceptions import ServiceError
from app.core.identifiers import new_id
from app.core.ledger import find_student, in_term, in_year, is_overdue, record_notification, student_label
from app.core.schemas import ExitPermission
from app.notifications.messages import arrival_notice, departure_notice

from .schemas import ExitPermissionCreate, ExitPermissionListResponse, ExitPermissionView


def list_exit_permissions(
    ctx: AppContext,
    term: Optional[int] = None,
    today: Optional[date] = None,
) -> ExitPermissionListResponse:
    permissions = in_term(in_year(ctx.state.exit_permissions, ctx.active_year_id), term)
    items = [
        ExitPermissionView(
            **p.model_dump(),
            student_name=student_label(ctx.state, p.student_id),
            overdue=is_overdue(p, today),
        )
        for p in reversed(permissions)
    ]
    return ExitPermissionListResponse(
        items=items,
        away_count=sum(1 for p in permissions if p.status == ExitStatus.AWAY),
        overdue_count=sum(1 for v in items if v.overdue),
    )


async def add_exit_permission(ctx: AppContext, payload: ExitPermissionCreate) -> ExitPermission:
    student = find_student(ctx.state, payload.student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)

    permission = ExitPermission(
        id=new_id("EXIT"),
        student_id=student.id,
        year_id=ctx.active_year_id,
        term=ctx.active_term,
        reason=payload.reason,
        destination=payload.destination,
        parent_contact=payload.parent_contact or student.parent_contact,
        departure_date=payload.departure_date,
        expected_return_date=payload.expected_return_date
        or payload.departure_date + timedelta(days=settings.exit_permission_default_days),
        status=ExitStatus.AWAY,
    )
    ctx.state.exit_permissions.append(permission)

    record_notification(
        ctx,
        recipient_name=student.full_name,
        phone_number=permission.parent_contact,
        message=departure_notice(student.full_name, permission),
    )
    await ctx.sync(SlotKey.EXIT_PERMISSIONS, SlotKey.SMS_LOGS)
    return permission


async def complete_exit_permission(ctx: AppContext, permission_id: str) -> Optional[ExitPermission]:
    """
    Confirm the student's return. Unknown ids are a silent no-op. Every call that finds the
    permission appends one arrival SMS, including repeat calls on an already returned permission.
    """
    permission = next((p for p in ctx.state.exit_permissions if p.id == permission_id), None)
    if permission is None:
        return None

    permission.status = ExitStatus.RETURNED
    name = student_label(ctx.state, permission.student_id)
    record_notification(
        ctx,
        recipient_name=name,
        phone_number=permission.parent_contact,
        message=arrival_notice(name, permission),
    )
    await ctx.sync(SlotKey.EXIT_PERMISSIONS, SlotKey.SMS_LOGS)
    return permission
