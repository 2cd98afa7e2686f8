from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.dependencies import get_current_user
from app.core.context import AppContext, get_context
from app.core.exceptions import ServiceError
from app.core.schemas import ExitPermission, SessionUser

from .schemas import ExitPermissionCreate, ExitPermissionListResponse
from . import service

router = APIRouter(prefix="/api/v1/exit-permissions", tags=["exit-permissions"])


@router.get("", response_model=ExitPermissionListResponse)
async def list_exit_permissions(
    term: Optional[int] = Query(None, ge=1, le=3),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> ExitPermissionListResponse:
    """Exit permissions of the active year, newest first, with the derived overdue flag."""
    return service.list_exit_permissions(ctx, term=term)


@router.post("", response_model=ExitPermission, status_code=status.HTTP_201_CREATED)
async def create_exit_permission(
    payload: ExitPermissionCreate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> ExitPermission:
    try:
        return await service.add_exit_permission(ctx, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{permission_id}/return", response_model=Optional[ExitPermission])
async def confirm_return(
    permission_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> Optional[ExitPermission]:
    """Returns null when the permission no longer exists."""
    return await service.complete_exit_permission(ctx, permission_id)
