from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import get_current_user
from app.core.context import AppContext, get_context
from app.core.schemas import SessionUser

from .schemas import DashboardSummary, DisciplineReport
from . import service

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


def _parse_term(term: str) -> Optional[int]:
    return None if term == "all" else int(term)


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(
    term: Optional[str] = Query(None, pattern="^(1|2|3|all)$", description="1-3 or all; defaults to the active term"),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> DashboardSummary:
    selected = ctx.active_term if term is None else _parse_term(term)
    return service.dashboard_summary(ctx, term=selected)


@router.get("/discipline", response_model=DisciplineReport)
async def get_discipline_report(
    class_name: Optional[str] = Query(None, alias="class"),
    term: Optional[str] = Query(None, pattern="^(1|2|3|all)$", description="1-3 or all; defaults to the active term"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    ctx: AppContext = Depends(get_context),
    current_user: SessionUser = Depends(get_current_user),
) -> DisciplineReport:
    selected = ctx.active_term if term is None else _parse_term(term)
    return service.discipline_report(
        ctx, class_name=class_name, term=selected, start_date=start_date, end_date=end_date
    )
