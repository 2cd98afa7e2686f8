from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import get_current_user
from app.core.context import AppContext, get_context
from app.core.schemas import SessionUser, WeekendDismissal

from .schemas import DismissalListResponse
from . import service

router = APIRouter(prefix="/api/v1/weekend-dismissals", tags=["weekend-dismissals"])


@router.get("", response_model=DismissalListResponse)
async def list_dismissals(
    term: Optional[int] = Query(None, ge=1, le=3),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> DismissalListResponse:
    """Dismissals of the active year, newest first."""
    return service.list_dismissals(ctx, term=term)


@router.post("/{dismissal_id}/complete", response_model=Optional[WeekendDismissal])
async def complete_dismissal(
    dismissal_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> Optional[WeekendDismissal]:
    return await service.complete_dismissal(ctx, dismissal_id)
