"""Admin endpoints."""
import uuid

from sqlalchemy import select

from conftest import make_entry
from ojt_tracker.models.entry import Entry
from ojt_tracker.models.supervisor import Supervisor
from ojt_tracker.models.user import User
from ojt_tracker.schemas.supervisor import SupervisorCreate
from ojt_tracker.services import account_service
from ojt_tracker.services.supervisor_service import create_supervisor


async def test_non_admin_is_forbidden(client, db_session, auth_headers, other_user):
    for path in ("/api/v1/admin/users", "/api/v1/admin/entries"):
        response = await client.get(path, headers=auth_headers)
        assert response.status_code == 403

    entry = await make_entry(db_session, other_user)
    for path in (f"/api/v1/admin/users/{other_user.id}", f"/api/v1/admin/entries/{entry.id}"):
        response = await client.delete(path, headers=auth_headers)
        assert response.status_code == 403

    assert await db_session.get(User, other_user.id) is not None
    assert await db_session.get(Entry, entry.id) is not None


async def test_list_users_and_entries(client, db_session, admin_auth_headers, test_user, other_user):
    await make_entry(db_session, test_user)
    await make_entry(db_session, other_user)

    response = await client.get("/api/v1/admin/users", headers=admin_auth_headers)
    assert response.status_code == 200
    users = response.json()
    assert {u["email"] for u in users} >= {test_user.email, other_user.email}
    assert all("password_hash" not in u and "reset_token" not in u for u in users)

    response = await client.get("/api/v1/admin/entries", headers=admin_auth_headers)
    assert len(response.json()) == 2


async def test_delete_user_cascades(client, db_session, admin_auth_headers, test_user, other_user):
    await make_entry(db_session, test_user)
    await make_entry(db_session, test_user, method="PT")
    await create_supervisor(
        db_session,
        test_user.id,
        SupervisorCreate(
            name="Dana Reyes",
            email="dana@example.com",
            phone="555-0100",
            certification_level="Level II",
            company="Gulf Inspection Co",
        ),
    )
    kept = await make_entry(db_session, other_user)
    await db_session.commit()
    user_id = test_user.id

    response = await client.delete(f"/api/v1/admin/users/{user_id}", headers=admin_auth_headers)
    assert response.status_code == 204

    assert await db_session.get(User, user_id) is None
    entries = (await db_session.execute(select(Entry))).scalars().all()
    assert [e.id for e in entries] == [kept.id]
    supervisors = (await db_session.execute(select(Supervisor))).scalars().all()
    assert supervisors == []


async def test_admin_cannot_delete_self(client, admin_user, admin_auth_headers):
    response = await client.delete(f"/api/v1/admin/users/{admin_user.id}", headers=admin_auth_headers)
    assert response.status_code == 400


async def test_delete_entry(client, db_session, admin_auth_headers, test_user):
    entry = await make_entry(db_session, test_user)

    response = await client.delete(f"/api/v1/admin/entries/{entry.id}", headers=admin_auth_headers)
    assert response.status_code == 204

    response = await client.delete(f"/api/v1/admin/entries/{entry.id}", headers=admin_auth_headers)
    assert response.status_code == 404

    response = await client.delete(f"/api/v1/admin/users/{uuid.uuid4()}", headers=admin_auth_headers)
    assert response.status_code == 404


async def test_bootstrap_admin(db_session, monkeypatch):
    from ojt_tracker.config import settings

    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "")
    assert await account_service.bootstrap_admin(db_session) is None

    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "admin-pass-123")
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "Boss@Example.com")
    admin = await account_service.bootstrap_admin(db_session)
    assert admin.is_admin is True
    assert admin.email == "boss@example.com"

    # Only once
    assert await account_service.bootstrap_admin(db_session) is None

    authenticated = await account_service.authenticate(db_session, "boss@example.com", "admin-pass-123")
    assert authenticated.id == admin.id
