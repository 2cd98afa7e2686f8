from fastapi import Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.core.enums import PRIVILEGED_ROLES, Role
from app.core.schemas import SessionUser


def is_privileged(user: SessionUser) -> bool:
    return user.role in PRIVILEGED_ROLES


async def require_privileged(
    current_user: SessionUser = Depends(get_current_user),
) -> SessionUser:
    """Administrator or Admin. Used for user management, term switching and year finalization."""
    if not is_privileged(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user


def require_role(*roles: Role):
    """
    Dependency factory to enforce one of the given roles.

    Example:
        Depends(require_role(Role.ADMINISTRATOR))
    """

    async def _checker(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _checker
