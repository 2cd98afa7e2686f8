from typing import Optional

from app.core.context import AppContext
from app.core.enums import DismissalStatus, SlotKey
from app.core.ledger import in_term, in_year, student_label
from app.core.schemas import WeekendDismissal

from .schemas import DismissalListResponse, DismissalView


def list_dismissals(ctx: AppContext, term: Optional[int] = None) -> DismissalListResponse:
    dismissals = in_term(in_year(ctx.state.weekend_dismissals, ctx.active_year_id), term)
    items = [
        DismissalView(**d.model_dump(), student_name=student_label(ctx.state, d.student_id))
        for d in reversed(dismissals)
    ]
    return DismissalListResponse(
        items=items,
        active_count=sum(1 for d in dismissals if d.status == DismissalStatus.ACTIVE),
    )


async def complete_dismissal(ctx: AppContext, dismissal_id: str) -> Optional[WeekendDismissal]:
    """Mark the student as back. Unknown ids are a silent no-op; no parent notification is sent."""
    dismissal = next((d for d in ctx.state.weekend_dismissals if d.id == dismissal_id), None)
    if dismissal is None:
        return None
    dismissal.status = DismissalStatus.COMPLETED
    await ctx.sync(SlotKey.DISMISSALS)
    return dismissal
