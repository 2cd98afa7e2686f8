from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.auth.dependencies import get_current_user
from app.core.context import AppContext, get_context
from app.core.exceptions import ServiceError
from app.core.schemas import DisciplineCase, SessionUser

from .schemas import CaseCreate, CaseListResponse, CaseUpdate
from . import service

router = APIRouter(prefix="/api/v1/cases", tags=["cases"])


@router.get("", response_model=CaseListResponse)
async def list_cases(
    search: Optional[str] = Query(None, description="Matches student name, reg number, description or offense"),
    term: Optional[int] = Query(None, ge=1, le=3),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> CaseListResponse:
    return service.list_cases(ctx, search=search, term=term)


@router.post("", response_model=DisciplineCase, status_code=status.HTTP_201_CREATED)
async def create_case(
    payload: CaseCreate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> DisciplineCase:
    """File a case in the active period. The parent is notified; a Weekend action opens a dismissal."""
    try:
        return await service.add_case(ctx, payload, recorded_by=current_user.role.value)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{case_id}", response_model=Optional[DisciplineCase])
async def update_case(
    case_id: str,
    payload: CaseUpdate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> Optional[DisciplineCase]:
    """Returns null when the case no longer exists."""
    try:
        return await service.update_case(ctx, case_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case(
    case_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> Response:
    await service.delete_case(ctx, case_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
