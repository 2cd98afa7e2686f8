from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.rbac import require_privileged
from app.core.context import AppContext, get_context
from app.core.exceptions import ServiceError
from app.core.schemas import AcademicYear, SessionUser

from .schemas import ActivePeriodResponse, EndYearRequest, SwitchTermRequest, YearArchiveResponse
from . import service

router = APIRouter(prefix="/api/v1/academic-years", tags=["academic-years"])


@router.get("", response_model=List[AcademicYear])
async def list_academic_years(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> List[AcademicYear]:
    """All years, oldest first; exactly one is Current."""
    return service.list_academic_years(ctx)


@router.get("/active", response_model=ActivePeriodResponse)
async def get_active_period(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> ActivePeriodResponse:
    """The (year, term) pair new records are stamped with."""
    return service.get_active_period(ctx)


@router.post("/active/term", response_model=ActivePeriodResponse)
async def switch_term(
    payload: SwitchTermRequest,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> ActivePeriodResponse:
    return await service.switch_term(ctx, payload.term)


@router.post("/end", response_model=AcademicYear, status_code=status.HTTP_201_CREATED)
async def end_academic_year(
    payload: EndYearRequest,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> AcademicYear:
    """Archive the current year and open a new one. Historical records stay queryable by their year id."""
    try:
        return await service.end_academic_year(ctx, payload.label)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{year_id}/archive", response_model=YearArchiveResponse)
async def get_year_archive(
    year_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> YearArchiveResponse:
    try:
        return service.get_year_archive(ctx, year_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
