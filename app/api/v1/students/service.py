from typing import List, Optional

from fastapi import status

from app.core.context import AppContext
from app.core.enums import SlotKey
from app.core.exceptions import ServiceError
from app.core.identifiers import new_id
from app.core.ledger import compute_balance, find_student
from app.core.schemas import Student

from .schemas import (
    BalanceScope,
    StudentBalanceResponse,
    StudentCreate,
    StudentListResponse,
    StudentUpdate,
    StudentView,
)


def _to_view(ctx: AppContext, student: Student) -> StudentView:
    balance = compute_balance(ctx.state, student.id, year_id=ctx.active_year_id)
    return StudentView(**student.model_dump(), removed=balance.removed, remaining=balance.remaining)


def list_students(
    ctx: AppContext,
    class_name: Optional[str] = None,
    search: Optional[str] = None,
) -> StudentListResponse:
    students: List[Student] = list(ctx.state.students)
    if class_name:
        students = [s for s in students if s.class_name == class_name]
    if search:
        needle = search.strip().lower()
        students = [s for s in students if needle in s.full_name.lower() or needle in s.reg_number.lower()]
    items = [_to_view(ctx, s) for s in students]
    return StudentListResponse(items=items, total=len(items))


def list_classes(ctx: AppContext) -> List[str]:
    return sorted({s.class_name for s in ctx.state.students})


def get_student(ctx: AppContext, student_id: str) -> StudentView:
    student = find_student(ctx.state, student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    return _to_view(ctx, student)


def get_balance(ctx: AppContext, student_id: str, scope: BalanceScope = "year") -> StudentBalanceResponse:
    """Balances of removed students are still computable from their remaining cases (none after a delete)."""
    year_id = ctx.active_year_id if scope == "year" else None
    balance = compute_balance(ctx.state, student_id, year_id=year_id)
    return StudentBalanceResponse(**balance.model_dump(), scope=scope)


async def add_student(ctx: AppContext, payload: StudentCreate) -> Student:
    # regNumber uniqueness is an institutional convention and is not enforced here
    student = Student(id=new_id("STU"), **payload.model_dump())
    ctx.state.students.append(student)
    await ctx.sync(SlotKey.STUDENTS)
    return student


async def update_student(ctx: AppContext, student_id: str, payload: StudentUpdate) -> Student:
    if not find_student(ctx.state, student_id):
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    updated = Student(id=student_id, **payload.model_dump())
    ctx.state.students = [updated if s.id == student_id else s for s in ctx.state.students]
    await ctx.sync(SlotKey.STUDENTS)
    return updated


async def delete_student(ctx: AppContext, student_id: str) -> None:
    """
    Remove the student and every case filed against them. Weekend dismissals and exit permissions
    keep the dangling id and are listed under the removed-student label.
    """
    ctx.state.students = [s for s in ctx.state.students if s.id != student_id]
    ctx.state.cases = [c for c in ctx.state.cases if c.student_id != student_id]
    await ctx.sync(SlotKey.STUDENTS, SlotKey.CASES)
