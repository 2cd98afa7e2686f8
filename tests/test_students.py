import pytest
from httpx import AsyncClient

from app.api.v1.academic_years import service as year_service
from app.api.v1.cases import service as case_service
from app.api.v1.cases.schemas import CaseCreate
from app.api.v1.dismissals import service as dismissal_service
from app.api.v1.exit_permissions import service as exit_service
from app.api.v1.exit_permissions.schemas import ExitPermissionCreate
from app.api.v1.students import service as student_service
from app.core.context import AppContext
from app.core.enums import ActionTaken
from app.core.ledger import REMOVED_STUDENT_LABEL

from .conftest import ADMIN_CREDENTIALS, login

NEW_STUDENT = {
    "regNumber": "REG-2024-010",
    "fullName": "Aline Uwase",
    "class": "L5 NET B",
    "gender": "Female",
    "parentContact": "+250 788 111 222",
}


@pytest.mark.asyncio
async def test_roster_shows_active_year_balance(client: AsyncClient, ctx: AppContext, staff_headers) -> None:
    await case_service.add_case(
        ctx, CaseCreate(student_id="STU-1", offense_type="Lateness", points_deducted=8), recorded_by="Staff"
    )

    roster = (await client.get("/api/v1/students", headers=staff_headers)).json()
    kwame = next(s for s in roster["items"] if s["id"] == "STU-1")
    assert kwame["removed"] == 8
    assert kwame["remaining"] == 32
    assert kwame["class"] == "L3 SOD A"

    await year_service.end_academic_year(ctx, "Year 2025")

    year = (await client.get("/api/v1/students/STU-1/balance", headers=staff_headers)).json()
    lifetime = (
        await client.get("/api/v1/students/STU-1/balance", params={"scope": "lifetime"}, headers=staff_headers)
    ).json()
    assert year["remaining"] == 40
    assert lifetime["remaining"] == 32


@pytest.mark.asyncio
async def test_roster_filters(client: AsyncClient, staff_headers) -> None:
    by_class = (await client.get("/api/v1/students", params={"class": "L4 AUT A"}, headers=staff_headers)).json()
    assert [s["fullName"] for s in by_class["items"]] == ["Zainab Keita"]

    classes = (await client.get("/api/v1/students/classes", headers=staff_headers)).json()
    assert classes == ["L3 SOD A", "L4 AUT A"]


@pytest.mark.asyncio
async def test_staff_can_add_but_not_edit_or_delete(client: AsyncClient, staff_headers) -> None:
    created = await client.post("/api/v1/students", json=NEW_STUDENT, headers=staff_headers)
    assert created.status_code == 201
    student_id = created.json()["id"]
    assert student_id.startswith("STU-")

    edit = await client.put(f"/api/v1/students/{student_id}", json=NEW_STUDENT, headers=staff_headers)
    delete = await client.delete(f"/api/v1/students/{student_id}", headers=staff_headers)
    assert edit.status_code == 403
    assert delete.status_code == 403


@pytest.mark.asyncio
async def test_admin_role_can_edit_but_not_delete(client: AsyncClient, admin_headers) -> None:
    deputy = {"fullName": "Deputy", "email": "deputy@school.edu", "password": "deputy123", "role": "Admin"}
    assert (await client.post("/api/v1/users", json=deputy, headers=admin_headers)).status_code == 201
    headers = await login(client, {"email": deputy["email"], "password": deputy["password"]})

    edited = await client.put(
        "/api/v1/students/STU-2", json={**NEW_STUDENT, "fullName": "Zainab K."}, headers=headers
    )
    assert edited.status_code == 200
    assert edited.json()["fullName"] == "Zainab K."

    deleted = await client.delete("/api/v1/students/STU-2", headers=headers)
    assert deleted.status_code == 403

    headers = await login(client, ADMIN_CREDENTIALS)
    missing = await client.put("/api/v1/students/STU-404", json=NEW_STUDENT, headers=headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_delete_cascades_cases_and_orphans_the_rest(ctx: AppContext) -> None:
    await case_service.add_case(
        ctx,
        CaseCreate(student_id="STU-1", offense_type="Fighting", action_taken=ActionTaken.WEEKEND, points_deducted=10),
        recorded_by="Administrator",
    )
    await case_service.add_case(ctx, CaseCreate(student_id="STU-2", offense_type="Noise"), recorded_by="Staff")
    await exit_service.add_exit_permission(
        ctx, ExitPermissionCreate(student_id="STU-1", reason="Family", destination="Huye")
    )

    await student_service.delete_student(ctx, "STU-1")

    assert [s.id for s in ctx.state.students] == ["STU-2"]
    assert [c.student_id for c in ctx.state.cases] == ["STU-2"]
    assert len(ctx.state.weekend_dismissals) == 1
    assert len(ctx.state.exit_permissions) == 1

    dismissals = dismissal_service.list_dismissals(ctx)
    permissions = exit_service.list_exit_permissions(ctx)
    assert dismissals.items[0].student_name == REMOVED_STUDENT_LABEL
    assert permissions.items[0].student_name == REMOVED_STUDENT_LABEL


@pytest.mark.asyncio
async def test_administrator_deletes_student(client: AsyncClient, ctx: AppContext, admin_headers) -> None:
    response = await client.delete("/api/v1/students/STU-2", headers=admin_headers)
    assert response.status_code == 204
    assert (await client.get("/api/v1/students/STU-2", headers=admin_headers)).status_code == 404
