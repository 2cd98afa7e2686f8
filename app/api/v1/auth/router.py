from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi import status as http_status

from app.auth.dependencies import get_current_user
from app.auth.schemas import LoginRequest, LoginResponse
from app.auth.services import ServiceError, login_user, logout_user
from app.core.context import AppContext, get_context
from app.core.schemas import SessionUser

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    request: Request,
    ctx: AppContext = Depends(get_context),
) -> LoginResponse:
    try:
        return await login_user(ctx, payload, browser_info=request.headers.get("user-agent", ""))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/logout", status_code=http_status.HTTP_204_NO_CONTENT)
async def logout(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> Response:
    """Clear the current-session pointer; the issued token stops being honoured."""
    await logout_user(ctx)
    return Response(status_code=http_status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=SessionUser)
async def me(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    return current_user
