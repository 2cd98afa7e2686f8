from typing import List

from app.core.schemas import CamelModel, WeekendDismissal


class DismissalView(WeekendDismissal):
    student_name: str


class DismissalListResponse(CamelModel):
    items: List[DismissalView]
    active_count: int
