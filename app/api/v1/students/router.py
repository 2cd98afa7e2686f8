from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.auth.dependencies import get_current_user
from app.auth.rbac import require_role
from app.core.context import AppContext, get_context
from app.core.enums import Role
from app.core.exceptions import ServiceError
from app.core.schemas import SessionUser, Student

from .schemas import BalanceScope, StudentBalanceResponse, StudentCreate, StudentListResponse, StudentUpdate, StudentView
from . import service

router = APIRouter(prefix="/api/v1/students", tags=["students"])

# Staff may read the roster and file cases, but not change student records.
require_editor = require_role(Role.ADMINISTRATOR, Role.ADMIN)


@router.get("", response_model=StudentListResponse)
async def list_students(
    class_name: Optional[str] = Query(None, alias="class"),
    search: Optional[str] = Query(None, description="Matches name or reg number"),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> StudentListResponse:
    return service.list_students(ctx, class_name=class_name, search=search)


@router.get("/classes", response_model=List[str])
async def list_classes(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> List[str]:
    return service.list_classes(ctx)


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
async def create_student(
    payload: StudentCreate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> Student:
    return await service.add_student(ctx, payload)


@router.get("/{student_id}", response_model=StudentView)
async def get_student(
    student_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> StudentView:
    try:
        return service.get_student(ctx, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{student_id}/balance", response_model=StudentBalanceResponse)
async def get_balance(
    student_id: str,
    scope: BalanceScope = Query("year"),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> StudentBalanceResponse:
    """`year` counts the active year only; `lifetime` counts every case on record."""
    return service.get_balance(ctx, student_id, scope=scope)


@router.put("/{student_id}", response_model=Student)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_editor),
) -> Student:
    try:
        return await service.update_student(ctx, student_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_role(Role.ADMINISTRATOR)),
) -> Response:
    """Administrator only. Cascades to the student's cases."""
    await service.delete_student(ctx, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
