import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.enums import SlotKey
from app.core.models import StoreSlot

logger = logging.getLogger(__name__)


class PersistentStore:
    """Key-value storage of named JSON documents. Pure load/save; no domain logic."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def read_raw(self, key: SlotKey) -> Optional[str]:
        async with self._session_factory() as session:
            result = await session.execute(select(StoreSlot.value).where(StoreSlot.key == key.value))
            return result.scalar_one_or_none()

    async def load(self, key: SlotKey, default: Any = None) -> Any:
        """Return the decoded document, or `default` when the slot is absent or holds malformed JSON."""
        raw = await self.read_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Slot %s holds malformed JSON; using default", key.value)
            return default

    async def save(self, key: SlotKey, document: Any) -> None:
        await self.save_many({key: document})

    async def save_many(self, documents: Dict[SlotKey, Any]) -> None:
        if not documents:
            return
        async with self._session_factory() as session:
            for key, document in documents.items():
                await session.merge(StoreSlot(key=key.value, value=json.dumps(document)))
            await session.commit()

    async def write_raw(self, key: SlotKey, raw: str) -> None:
        async with self._session_factory() as session:
            await session.merge(StoreSlot(key=key.value, value=raw))
            await session.commit()

    async def remove(self, key: SlotKey) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(StoreSlot).where(StoreSlot.key == key.value))
            await session.commit()
