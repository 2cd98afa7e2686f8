"""Mapping between the in-memory AppState and the store's named slots."""

import logging
from typing import Any, Dict, List

from fastapi import status
from pydantic import TypeAdapter, ValidationError

from app.auth.security import hash_password
from app.core.enums import SlotKey
from app.core.exceptions import ServiceError
from app.core.schemas import AppState
from app.core.store import PersistentStore
from app.db.seed import SEED_YEAR_ID, seed_students, seed_users, seed_years

logger = logging.getLogger(__name__)

SLOT_FIELDS: Dict[SlotKey, str] = {
    SlotKey.SESSION_USER: "user",
    SlotKey.USERS: "system_users",
    SlotKey.STUDENTS: "students",
    SlotKey.CASES: "cases",
    SlotKey.SMS_LOGS: "sms_logs",
    SlotKey.YEARS: "years",
    SlotKey.ACTIVE_YEAR: "active_year_id",
    SlotKey.ACTIVE_TERM: "active_term",
    SlotKey.DISMISSALS: "weekend_dismissals",
    SlotKey.EXIT_PERMISSIONS: "exit_permissions",
    SlotKey.LOGIN_EVENTS: "login_events",
}

# The session pointer belongs to this installation; backups never move it.
IMPORTABLE_SLOTS = [key for key in SLOT_FIELDS if key is not SlotKey.SESSION_USER]

_ADAPTERS: Dict[SlotKey, TypeAdapter] = {
    key: TypeAdapter(AppState.model_fields[field].annotation) for key, field in SLOT_FIELDS.items()
}


def document_key(key: SlotKey) -> str:
    """Name of the slot inside an export document (the camelCase field alias)."""
    field = SLOT_FIELDS[key]
    return AppState.model_fields[field].alias or field


def _default(key: SlotKey) -> Any:
    if key is SlotKey.USERS:
        return seed_users()
    if key is SlotKey.STUDENTS:
        return seed_students()
    if key is SlotKey.YEARS:
        return seed_years()
    if key is SlotKey.ACTIVE_YEAR:
        return SEED_YEAR_ID
    if key is SlotKey.ACTIVE_TERM:
        return 1
    if key is SlotKey.SESSION_USER:
        return None
    return []


def _backfill_period(items: Any) -> Any:
    # Records written before terms existed carry no period; they belong to the seed year, term 1.
    if not isinstance(items, list):
        return items
    for item in items:
        if isinstance(item, dict):
            if not item.get("yearId"):
                item["yearId"] = SEED_YEAR_ID
            if not item.get("term"):
                item["term"] = 1
    return items


def _upgrade_passwords(items: Any) -> Any:
    # Older directories kept plain-text passwords; replace them with a bcrypt hash.
    if not isinstance(items, list):
        return items
    for item in items:
        if isinstance(item, dict) and "password" in item:
            plain = item.pop("password")
            if not item.get("passwordHash") and plain:
                item["passwordHash"] = hash_password(str(plain))
    return items


_PREPARE = {
    SlotKey.CASES: _backfill_period,
    SlotKey.DISMISSALS: _backfill_period,
    SlotKey.USERS: _upgrade_passwords,
}


def _validate(key: SlotKey, raw: Any) -> Any:
    """Validate a decoded document. Raises ValidationError or ValueError on bad content."""
    prepare = _PREPARE.get(key)
    if prepare is not None:
        raw = prepare(raw)
    value = _ADAPTERS[key].validate_python(raw)
    if key is SlotKey.ACTIVE_TERM and not 1 <= value <= 3:
        raise ValueError(f"term {value} is out of range")
    return value


def parse_slot(key: SlotKey, raw: Any) -> Any:
    """Validate a decoded document; corrupt content yields the slot default."""
    if raw is None:
        return _default(key)
    try:
        return _validate(key, raw)
    except (ValidationError, ValueError) as e:
        logger.warning("Slot %s failed validation; using default: %s", key.value, e)
        return _default(key)


def dump_slot(state: AppState, key: SlotKey) -> Any:
    value = getattr(state, SLOT_FIELDS[key])
    return _ADAPTERS[key].dump_python(value, mode="json", by_alias=True)


async def load_state(store: PersistentStore) -> AppState:
    values = {}
    for key, field in SLOT_FIELDS.items():
        values[field] = parse_slot(key, await store.load(key))
    return AppState(**values)


def export_document(state: AppState) -> Dict[str, Any]:
    """Full-state backup: every collection plus the user directory (as `systemUsers`)."""
    return {document_key(key): dump_slot(state, key) for key in SLOT_FIELDS}


async def import_document(store: PersistentStore, document: Dict[str, Any]) -> List[SlotKey]:
    """
    Overwrite the slots present in `document`; absent or empty entries leave the slot untouched.
    Every slot is validated first, so a document with one bad collection writes nothing.
    """
    written: Dict[SlotKey, Any] = {}
    for key in IMPORTABLE_SLOTS:
        value = document.get(document_key(key))
        if not value:
            continue
        try:
            parsed = _validate(key, value)
        except (ValidationError, ValueError) as e:
            logger.warning("Rejected import: %s is invalid", document_key(key))
            raise ServiceError(f"Invalid {document_key(key)} in backup: {e}", status.HTTP_400_BAD_REQUEST)
        written[key] = _ADAPTERS[key].dump_python(parsed, mode="json", by_alias=True)
    await store.save_many(written)
    return list(written)
