from datetime import date
from typing import List, Optional

from pydantic import Field, model_validator

from app.core.schemas import CamelModel, ExitPermission


class ExitPermissionCreate(CamelModel):
    """`parentContact` defaults to the student's; `expectedReturnDate` to a week after departure."""

    student_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    parent_contact: Optional[str] = None
    departure_date: date = Field(default_factory=date.today)
    expected_return_date: Optional[date] = None

    @model_validator(mode="after")
    def validate_dates(self) -> "ExitPermissionCreate":
        if self.expected_return_date is not None and self.expected_return_date < self.departure_date:
            raise ValueError("expectedReturnDate must not be before departureDate")
        return self


class ExitPermissionView(ExitPermission):
    student_name: str
    overdue: bool


class ExitPermissionListResponse(CamelModel):
    items: List[ExitPermissionView]
    away_count: int
    overdue_count: int
