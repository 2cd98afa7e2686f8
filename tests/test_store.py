import json
from datetime import datetime, timezone

import pytest

from app.api.v1.cases import service as case_service
from app.api.v1.cases.schemas import CaseCreate
from app.auth.security import verify_password
from app.core.enums import SlotKey, YearStatus
from app.core.models.store_slot import StoreSlot, _utcnow
from app.core.schemas import SMSLog
from app.core.state import export_document, import_document, load_state
from app.core.store import PersistentStore
from app.db.seed import SEED_YEAR_ID


@pytest.mark.asyncio
async def test_empty_store_loads_bootstrap_state(store: PersistentStore) -> None:
    state = await load_state(store)

    assert [y.id for y in state.years] == [SEED_YEAR_ID]
    assert state.years[0].status == YearStatus.CURRENT
    assert state.active_year_id == SEED_YEAR_ID
    assert state.active_term == 1
    assert {u.id for u in state.system_users} == {"USR-ROOT", "USR-STAFF"}
    assert len(state.students) == 2
    assert state.cases == [] and state.sms_logs == [] and state.login_events == []
    assert state.user is None


@pytest.mark.asyncio
async def test_malformed_json_falls_back_to_default(store: PersistentStore) -> None:
    await store.write_raw(SlotKey.CASES, "{not json")
    await store.write_raw(SlotKey.ACTIVE_TERM, "7")

    state = await load_state(store)

    assert state.cases == []
    assert state.active_term == 1


@pytest.mark.asyncio
async def test_invalid_document_falls_back_to_default(store: PersistentStore) -> None:
    await store.save(SlotKey.STUDENTS, [{"id": 1, "fullName": None}])

    state = await load_state(store)

    assert [s.id for s in state.students] == ["STU-1", "STU-2"]


@pytest.mark.asyncio
async def test_legacy_records_are_backfilled_with_seed_period(store: PersistentStore) -> None:
    await store.save(
        SlotKey.CASES,
        [
            {
                "id": "CASE-1",
                "studentId": "STU-1",
                "offenseType": "Lateness",
                "description": "",
                "actionTaken": "Warning",
                "date": "2024-02-01",
                "recordedBy": "Staff",
                "pointsDeducted": 2,
            }
        ],
    )

    state = await load_state(store)

    assert state.cases[0].year_id == SEED_YEAR_ID
    assert state.cases[0].term == 1


@pytest.mark.asyncio
async def test_legacy_plain_passwords_are_hashed(store: PersistentStore) -> None:
    await store.save(
        SlotKey.USERS,
        [{"id": "USR-X", "fullName": "Old Account", "email": "old@school.edu", "password": "legacy1", "role": "Staff"}],
    )

    state = await load_state(store)

    user = state.system_users[0]
    assert user.password_hash != "legacy1"
    assert verify_password("legacy1", user.password_hash)


@pytest.mark.asyncio
async def test_export_bundles_every_collection(store: PersistentStore) -> None:
    document = export_document(await load_state(store))

    assert set(document) == {
        "user",
        "systemUsers",
        "students",
        "cases",
        "smsLogs",
        "years",
        "activeYearId",
        "activeTerm",
        "weekendDismissals",
        "exitPermissions",
        "loginEvents",
    }
    assert document["students"][0]["class"] == "L3 SOD A"
    json.dumps(document)


@pytest.mark.asyncio
async def test_import_overwrites_only_present_slots(store: PersistentStore) -> None:
    state = await load_state(store)
    original_students = [s.id for s in state.students]

    written = await import_document(store, {"activeTerm": 3, "cases": [], "unknown": [1, 2]})

    assert written == [SlotKey.ACTIVE_TERM]
    reloaded = await load_state(store)
    assert reloaded.active_term == 3
    assert [s.id for s in reloaded.students] == original_students


@pytest.mark.asyncio
async def test_backup_round_trip_through_api(client, ctx, admin_headers) -> None:
    exported = (await client.get("/api/v1/backup/export", headers=admin_headers)).json()
    exported["students"] = exported["students"][:1]
    exported["activeTerm"] = 2

    response = await client.post("/api/v1/backup/import", json=exported, headers=admin_headers)

    assert response.status_code == 200
    assert "sdms_user" not in response.json()["imported"]
    assert [s.id for s in ctx.state.students] == ["STU-1"]
    assert ctx.active_term == 2
    # the importing session survives the restore
    assert (await client.get("/api/v1/auth/me", headers=admin_headers)).status_code == 200


@pytest.mark.asyncio
async def test_backup_requires_privileged_role(client, staff_headers) -> None:
    response = await client.get("/api/v1/backup/export", headers=staff_headers)
    assert response.status_code == 403


def _browser_sms(sms_id: str, timestamp: str) -> dict:
    return {
        "id": sms_id,
        "recipientName": "Kwame Mensah",
        "phoneNumber": "+250 781 123 456",
        "message": "Official Notification: Kwame Mensah recorded with Lateness in Term 1.",
        "timestamp": timestamp,
        "status": "Sent",
    }


def test_sms_log_accepts_browser_locale_timestamp() -> None:
    log = SMSLog.model_validate(_browser_sms("SMS-1", "10/19/2026, 8:05:00 PM"))
    assert log.timestamp == datetime(2026, 10, 19, 20, 5, 0)


@pytest.mark.asyncio
async def test_import_browser_backup_keeps_sms_history(client, ctx, admin_headers) -> None:
    await case_service.add_case(
        ctx, CaseCreate(student_id="STU-1", offense_type="Lateness", points_deducted=2), recorded_by="Staff"
    )
    document = {
        "smsLogs": [
            _browser_sms("SMS-1", "10/19/2026, 8:05:00 PM"),
            _browser_sms("SMS-2", "10/20/2026, 7:15:30 AM"),
        ],
        "years": [
            {
                "id": SEED_YEAR_ID,
                "label": "Academic Year 2024",
                "status": "Current",
                "startDate": "2024-01-01T00:00:00.000Z",
                "currentTerm": 1,
            }
        ],
    }

    response = await client.post("/api/v1/backup/import", json=document, headers=admin_headers)

    assert response.status_code == 200
    assert [log.id for log in ctx.state.sms_logs] == ["SMS-1", "SMS-2"]
    assert ctx.state.sms_logs[1].timestamp == datetime(2026, 10, 20, 7, 15, 30)
    persisted = await load_state(ctx.store)
    assert [log.id for log in persisted.sms_logs] == ["SMS-1", "SMS-2"]


@pytest.mark.asyncio
async def test_invalid_backup_is_rejected_without_writing(client, ctx, admin_headers) -> None:
    await case_service.add_case(
        ctx, CaseCreate(student_id="STU-1", offense_type="Lateness", points_deducted=2), recorded_by="Staff"
    )
    document = {
        "activeTerm": 3,
        "smsLogs": [_browser_sms("SMS-1", "not a timestamp")],
    }

    response = await client.post("/api/v1/backup/import", json=document, headers=admin_headers)

    assert response.status_code == 400
    assert "smsLogs" in response.json()["detail"]
    persisted = await load_state(ctx.store)
    assert len(persisted.sms_logs) == 1
    assert persisted.active_term == 1
    assert len(ctx.state.sms_logs) == 1


@pytest.mark.asyncio
async def test_slot_write_stamps_aware_update_time(store: PersistentStore) -> None:
    await store.save(SlotKey.ACTIVE_TERM, 2)

    async with store._session_factory() as session:
        slot = await session.get(StoreSlot, SlotKey.ACTIVE_TERM.value)

    assert slot.updated_at is not None
    assert _utcnow().tzinfo is timezone.utc
