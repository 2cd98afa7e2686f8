from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from app.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoreSlot(Base):
    """
    One named JSON document (e.g. sdms_cases). The store is a flat key-value table:
    every collection and pointer of the application state lives in its own slot.
    """

    __tablename__ = "store_slots"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
