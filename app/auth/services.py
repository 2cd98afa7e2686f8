import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import status

from app.auth.schemas import LoginRequest, LoginResponse
from app.auth.security import create_access_token, verify_password
from app.core.config import settings
from app.core.context import AppContext
from app.core.enums import SlotKey
from app.core.exceptions import ServiceError
from app.core.identifiers import new_id
from app.core.schemas import LoginEvent, SessionUser, User

logger = logging.getLogger(__name__)


def to_session_user(user: User) -> SessionUser:
    return SessionUser(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        role=user.role,
        last_login=user.last_login,
    )


def find_user_by_email(ctx: AppContext, email: str) -> Optional[User]:
    wanted = email.strip().lower()
    return next((u for u in ctx.state.system_users if u.email.lower() == wanted), None)


async def login_user(ctx: AppContext, payload: LoginRequest, browser_info: str = "") -> LoginResponse:
    # 1. Find user by email (case-insensitive), then verify the password hash.
    #    Both failures share one message so the response never reveals which emails exist.
    user = find_user_by_email(ctx, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Rejected login attempt")
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    issued_at = datetime.now(timezone.utc)

    # 2. Stamp lastLogin and record the login event (newest first, capped)
    user.last_login = issued_at
    event = LoginEvent(
        id=new_id("EVT"),
        user_id=user.id,
        user_name=user.full_name,
        user_role=user.role,
        timestamp=issued_at,
        browser_info=browser_info,
    )
    ctx.state.login_events = [event, *ctx.state.login_events][: settings.login_events_cap]

    # 3. Current-session pointer
    session_user = to_session_user(user)
    ctx.state.user = session_user
    await ctx.sync(SlotKey.USERS, SlotKey.LOGIN_EVENTS, SlotKey.SESSION_USER)

    access_token = create_access_token(
        subject={
            "sub": user.id,
            "user_id": user.id,
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
        }
    )
    logger.info("User %s logged in", user.id)
    return LoginResponse(access_token=access_token, user=session_user, issued_at=issued_at)


async def logout_user(ctx: AppContext) -> None:
    ctx.state.user = None
    await ctx.sync(SlotKey.SESSION_USER)
