import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import status

from app.core.context import AppContext
from app.core.enums import SlotKey, YearStatus
from app.core.exceptions import ServiceError
from app.core.identifiers import new_id
from app.core.ledger import in_year
from app.core.schemas import AcademicYear

from .schemas import ActivePeriodResponse, YearArchiveResponse

logger = logging.getLogger(__name__)


def list_academic_years(ctx: AppContext) -> List[AcademicYear]:
    return list(ctx.state.years)


def get_academic_year(ctx: AppContext, year_id: str) -> Optional[AcademicYear]:
    return next((y for y in ctx.state.years if y.id == year_id), None)


def get_active_period(ctx: AppContext) -> ActivePeriodResponse:
    return ActivePeriodResponse(year=get_academic_year(ctx, ctx.active_year_id), term=ctx.active_term)


async def switch_term(ctx: AppContext, term: int) -> ActivePeriodResponse:
    """Move the active term; the current year's `currentTerm` follows. Range 1-3 is the caller's contract."""
    ctx.state.active_term = term
    for year in ctx.state.years:
        if year.status == YearStatus.CURRENT:
            year.current_term = term
    await ctx.sync(SlotKey.ACTIVE_TERM, SlotKey.YEARS)
    logger.info("Active term switched to %s", term)
    return get_active_period(ctx)


async def end_academic_year(ctx: AppContext, label: str) -> AcademicYear:
    """
    Close every current year (status=Closed, endDate=now) and open a new current year at term 1.
    Cases, dismissals and exit permissions are left untouched; only the period new records are
    stamped with changes.
    """
    label = label.strip()
    if not label:
        raise ServiceError("label is required", status.HTTP_400_BAD_REQUEST)

    now = datetime.now(timezone.utc)
    for year in ctx.state.years:
        if year.status == YearStatus.CURRENT:
            year.status = YearStatus.CLOSED
            year.end_date = now

    new_year = AcademicYear(
        id=new_id("YEAR"),
        label=label,
        status=YearStatus.CURRENT,
        start_date=now,
        current_term=1,
    )
    ctx.state.years.append(new_year)
    ctx.state.active_year_id = new_year.id
    ctx.state.active_term = 1
    await ctx.sync(SlotKey.YEARS, SlotKey.ACTIVE_YEAR, SlotKey.ACTIVE_TERM)
    logger.info("Academic year finalized; %s (%s) is now current", new_year.label, new_year.id)
    return new_year


def get_year_archive(ctx: AppContext, year_id: str) -> YearArchiveResponse:
    year = get_academic_year(ctx, year_id)
    if not year:
        raise ServiceError("Academic year not found", status.HTTP_404_NOT_FOUND)
    cases = in_year(ctx.state.cases, year_id)
    return YearArchiveResponse(
        year=year,
        case_count=len(cases),
        points_deducted=sum(c.points_deducted for c in cases),
        cases=cases,
        dismissals=in_year(ctx.state.weekend_dismissals, year_id),
    )
