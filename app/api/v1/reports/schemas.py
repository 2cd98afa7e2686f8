from datetime import date
from typing import List, Optional, Union

from app.core.schemas import CamelModel, DisciplineCase


class OffenseCount(CamelModel):
    name: str
    count: int


class DashboardSummary(CamelModel):
    term: Union[int, str]  # 1-3 or "all"
    total_students: int
    incident_records: int
    total_deductions: int
    infractions: int
    active_dismissals: int
    students_away: int
    offense_breakdown: List[OffenseCount]
    recent_cases: List[DisciplineCase]


class ReportRow(CamelModel):
    case_date: date
    term: int
    student_name: str
    reg_number: str
    class_name: str
    offense_type: str
    description: str
    action_taken: str
    points_deducted: int
    recorded_by: str


class DisciplineReport(CamelModel):
    class_name: Optional[str] = None
    term: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rows: List[ReportRow]
    total_points: int
