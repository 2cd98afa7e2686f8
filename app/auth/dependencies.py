from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.auth.security import decode_access_token
from app.auth.services import to_session_user
from app.core.context import AppContext, get_context
from app.core.schemas import SessionUser


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    ctx: AppContext = Depends(get_context),
) -> SessionUser:
    """Resolve the session user. A token is honoured only while the session pointer names the same user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("user_id") or payload.get("sub")
    if not user_id:
        raise credentials_exception

    session = ctx.state.user
    if session is None or session.id != user_id:
        raise credentials_exception

    # Role and name come from the directory, so edits apply without a new login
    user = next((u for u in ctx.state.system_users if u.id == user_id), None)
    if not user:
        raise credentials_exception
    return to_session_user(user)
