from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.auth.rbac import require_privileged
from app.auth.schemas import UserCreate, UserUpdate
from app.core.context import AppContext, get_context
from app.core.exceptions import ServiceError
from app.core.schemas import LoginEvent, SessionUser
from app.db.seed import ROOT_USER_ID

from . import service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=List[SessionUser])
async def list_users(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> List[SessionUser]:
    return service.list_users(ctx)


@router.post("", response_model=SessionUser, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> SessionUser:
    try:
        return await service.add_user(ctx, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{user_id}", response_model=SessionUser)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> SessionUser:
    try:
        return await service.update_user(ctx, user_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> Response:
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    if user_id == ROOT_USER_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The root administrator cannot be deleted")
    await service.delete_user(ctx, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/login-events", response_model=List[LoginEvent])
async def list_login_events(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> List[LoginEvent]:
    """Most recent logins first."""
    return service.list_login_events(ctx)
