from datetime import date
from typing import List

from pydantic import Field

from app.core.enums import ActionTaken
from app.core.schemas import CamelModel, DisciplineCase


class CaseCreate(CamelModel):
    """Year and term are stamped from the active period; they are not accepted from the caller."""

    student_id: str = Field(..., min_length=1)
    offense_type: str = Field(..., min_length=1)
    description: str = ""
    action_taken: ActionTaken = ActionTaken.NONE
    case_date: date = Field(default_factory=date.today, alias="date")
    points_deducted: int = Field(0, ge=0)


class CaseUpdate(CaseCreate):
    """Full replacement of the editable fields. The case keeps its original year, term and recorder."""


class CaseView(DisciplineCase):
    student_name: str


class CaseListResponse(CamelModel):
    items: List[CaseView]
    total: int
