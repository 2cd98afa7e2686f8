from app.core.models.store_slot import StoreSlot

__all__ = ["StoreSlot"]
