from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from app.auth.rbac import require_privileged
from app.core.context import AppContext, get_context
from app.core.exceptions import ServiceError
from app.core.schemas import SessionUser
from app.core.state import export_document, import_document

router = APIRouter(prefix="/api/v1/backup", tags=["backup"])


@router.get("/export")
async def export_database(
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> Dict[str, Any]:
    """Every collection plus the user directory (`systemUsers`) in one JSON document."""
    return export_document(ctx.state)


@router.post("/import")
async def import_database(
    document: Dict[str, Any] = Body(...),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(require_privileged),
) -> Dict[str, List[str]]:
    """
    Overwrite the slots present in the document, then reload the whole state from the store.
    A document with any invalid collection is rejected with 400 and nothing is written.
    """
    try:
        written = await import_document(ctx.store, document)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    await ctx.reload()
    return {"imported": [key.value for key in written]}
