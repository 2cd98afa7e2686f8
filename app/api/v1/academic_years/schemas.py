from typing import List, Optional

from pydantic import Field

from app.core.schemas import AcademicYear, CamelModel, DisciplineCase, WeekendDismissal


class SwitchTermRequest(CamelModel):
    term: int = Field(..., ge=1, le=3)


class EndYearRequest(CamelModel):
    """Close the current year and open `label` as the new current year at term 1."""

    label: str = Field(..., min_length=1, max_length=100, description="e.g. Academic Year 2025")


class ActivePeriodResponse(CamelModel):
    year: Optional[AcademicYear] = None
    term: int


class YearArchiveResponse(CamelModel):
    """Historical view of one year; records are never removed when a year closes."""

    year: AcademicYear
    case_count: int
    points_deducted: int
    cases: List[DisciplineCase]
    dismissals: List[WeekendDismissal]
