from typing import List

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.core.context import AppContext, get_context
from app.core.schemas import SessionUser, SMSLog

router = APIRouter(prefix="/api/v1/sms-logs", tags=["sms-logs"])


@router.get("", response_model=List[SMSLog])
async def list_sms_logs(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> List[SMSLog]:
    """Notification audit trail across all years, newest first."""
    return list(reversed(ctx.state.sms_logs))
