from typing import List, Optional

from fastapi import status

from app.auth.schemas import UserCreate, UserUpdate
from app.auth.security import hash_password
from app.auth.services import find_user_by_email, to_session_user
from app.core.context import AppContext
from app.core.enums import SlotKey
from app.core.exceptions import ServiceError
from app.core.identifiers import new_id
from app.core.schemas import LoginEvent, SessionUser, User


def _ensure_email_free(ctx: AppContext, email: str, exclude_id: Optional[str] = None) -> None:
    other = find_user_by_email(ctx, email)
    if other and other.id != exclude_id:
        raise ServiceError("Email is already in use", status.HTTP_409_CONFLICT)


def list_users(ctx: AppContext) -> List[SessionUser]:
    return [to_session_user(u) for u in ctx.state.system_users]


async def add_user(ctx: AppContext, payload: UserCreate) -> SessionUser:
    _ensure_email_free(ctx, payload.email)
    user = User(
        id=new_id("USR"),
        full_name=payload.full_name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=payload.role,
    )
    ctx.state.system_users.append(user)
    await ctx.sync(SlotKey.USERS)
    return to_session_user(user)


async def update_user(ctx: AppContext, user_id: str, payload: UserUpdate) -> SessionUser:
    existing = next((u for u in ctx.state.system_users if u.id == user_id), None)
    if not existing:
        raise ServiceError("User not found", status.HTTP_404_NOT_FOUND)
    _ensure_email_free(ctx, payload.email, exclude_id=user_id)

    existing.full_name = payload.full_name
    existing.email = payload.email
    existing.role = payload.role
    if payload.password:
        existing.password_hash = hash_password(payload.password)

    keys = [SlotKey.USERS]
    if ctx.state.user is not None and ctx.state.user.id == user_id:
        ctx.state.user = to_session_user(existing)
        keys.append(SlotKey.SESSION_USER)
    await ctx.sync(*keys)
    return to_session_user(existing)


async def delete_user(ctx: AppContext, user_id: str) -> None:
    """Remove by id. Protecting the acting account and the root account is the caller's job."""
    ctx.state.system_users = [u for u in ctx.state.system_users if u.id != user_id]
    await ctx.sync(SlotKey.USERS)


def list_login_events(ctx: AppContext) -> List[LoginEvent]:
    return list(ctx.state.login_events)
