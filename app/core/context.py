import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError

from app.core.enums import SlotKey, YearStatus
from app.core.schemas import AcademicYear, AppState
from app.core.state import SLOT_FIELDS, dump_slot, load_state
from app.core.store import PersistentStore
from app.notifications.dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


class AppContext:
    """
    The single process-wide session: loaded state, its store and the notification dispatcher.
    Services receive it explicitly; there is exactly one writer, so no locking is done.
    """

    def __init__(self, store: PersistentStore, dispatcher: NotificationDispatcher, state: AppState) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.state = state

    @classmethod
    async def load(cls, store: PersistentStore, dispatcher: NotificationDispatcher) -> "AppContext":
        ctx = cls(store, dispatcher, await load_state(store))
        # Persist seeds and repaired slots right away so later loads see the same ids and hashes.
        await ctx.sync(*SLOT_FIELDS)
        return ctx

    async def reload(self) -> None:
        self.state = await load_state(self.store)
        await self.sync(*SLOT_FIELDS)

    async def sync(self, *keys: SlotKey) -> None:
        """Write the given slots from memory. Failures are logged, never raised."""
        documents = {key: dump_slot(self.state, key) for key in keys}
        try:
            await self.store.save_many(documents)
        except SQLAlchemyError:
            logger.exception("Failed to persist slots: %s", ", ".join(k.value for k in keys))

    @property
    def active_year_id(self) -> str:
        return self.state.active_year_id

    @property
    def active_term(self) -> int:
        return self.state.active_term

    def current_year(self) -> Optional[AcademicYear]:
        for year in self.state.years:
            if year.status == YearStatus.CURRENT:
                return year
        return None


def get_context(request: Request) -> AppContext:
    return request.app.state.context
