from typing import List, Literal

from pydantic import Field

from app.core.enums import Gender
from app.core.schemas import Balance, CamelModel, Student


class StudentCreate(CamelModel):
    reg_number: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    class_name: str = Field(..., min_length=1, alias="class")
    gender: Gender
    parent_contact: str = Field(..., min_length=1)


class StudentUpdate(StudentCreate):
    pass


class StudentView(Student):
    """Roster entry; the balance counts only cases of the active year."""

    removed: int
    remaining: int


class StudentListResponse(CamelModel):
    items: List[StudentView]
    total: int


BalanceScope = Literal["year", "lifetime"]


class StudentBalanceResponse(Balance):
    scope: BalanceScope
