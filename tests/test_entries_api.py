"""Entry endpoints."""
import uuid
from datetime import date

from conftest import headers_for, make_entry, make_user


ENTRY = {"date": "2024-03-01", "location": "Refinery Unit 4", "method": "ET", "hours": 2}


async def test_create_single_entry(client, auth_headers, test_user):
    response = await client.post("/api/v1/entries", json=ENTRY, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert isinstance(data, dict)
    uuid.UUID(data["id"])
    assert data["user_id"] == str(test_user.id)
    assert data["verified"] is False
    assert data["verified_by"] is None
    assert data["verified_at"] is None
    assert "verification_token" not in data


async def test_create_batch_preserves_order(client, auth_headers):
    batch = [
        ENTRY,
        {"date": "2024-03-02", "location": "Pipeline KP 12", "method": "UT_THK", "hours": 1.5},
    ]

    response = await client.post("/api/v1/entries", json=batch, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert [item["method"] for item in data] == ["ET", "UT_THK"]
    assert all(item["verified"] is False for item in data)


async def test_create_rejects_invalid(client, auth_headers):
    bad_payloads = [
        {**ENTRY, "hours": 0},
        {**ENTRY, "hours": -1},
        {**ENTRY, "method": "XRAY"},
        {**ENTRY, "location": "   "},
        {k: v for k, v in ENTRY.items() if k != "date"},
        [],
    ]
    for payload in bad_payloads:
        response = await client.post("/api/v1/entries", json=payload, headers=auth_headers)
        assert response.status_code == 422, payload


async def test_invalid_item_rejects_whole_batch(client, auth_headers):
    response = await client.post(
        "/api/v1/entries",
        json=[ENTRY, {**ENTRY, "hours": 0}],
        headers=auth_headers,
    )
    assert response.status_code == 422

    listing = await client.get("/api/v1/entries", headers=auth_headers)
    assert listing.json() == []


async def test_requires_authentication(client):
    response = await client.get("/api/v1/entries")
    assert response.status_code in (401, 403)

    response = await client.get("/api/v1/entries", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401


async def test_list_is_scoped_and_filtered(client, db_session, auth_headers, test_user, other_user):
    await make_entry(db_session, test_user, method="ET", verified=False)
    await make_entry(db_session, test_user, method="MT", verified=True, verified_by="Lee")
    await make_entry(db_session, other_user, method="PT")

    response = await client.get("/api/v1/entries", headers=auth_headers)
    assert sorted(item["method"] for item in response.json()) == ["ET", "MT"]

    response = await client.get("/api/v1/entries", params={"verified": "true"}, headers=auth_headers)
    assert [item["method"] for item in response.json()] == ["MT"]


async def test_get_entry_ownership(client, db_session, auth_headers, test_user, other_user):
    mine = await make_entry(db_session, test_user)
    theirs = await make_entry(db_session, other_user)

    response = await client.get(f"/api/v1/entries/{mine.id}", headers=auth_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/entries/{theirs.id}", headers=auth_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"

    response = await client.get(f"/api/v1/entries/{uuid.uuid4()}", headers=auth_headers)
    assert response.status_code == 404


async def test_totals(client, db_session, auth_headers, test_user):
    await make_entry(db_session, test_user, method="ET", hours=2, verified=True, verified_by="Lee")
    await make_entry(db_session, test_user, method="ET", hours=1.5)
    await make_entry(db_session, test_user, method="MT", hours=4)

    response = await client.get("/api/v1/entries/totals", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "all"
    assert data["totals"]["ET"] == 3.5
    assert data["totals"]["MT"] == 4.0
    assert data["totals"]["UTSW"] == 0
    assert len(data["totals"]) == 9
    assert data["total_hours"] == 7.5
    assert data["entry_count"] == 3

    response = await client.get("/api/v1/entries/totals", params={"status": "verified"}, headers=auth_headers)
    assert response.json()["totals"]["ET"] == 2
    assert response.json()["total_hours"] == 2

    response = await client.get("/api/v1/entries/totals", params={"status": "pending"}, headers=auth_headers)
    assert response.status_code == 422


async def test_export_contains_verified_entries_only(client, db_session):
    user = await make_user(db_session, name="Sam Ortiz", employee_number="E-42")
    headers = headers_for(user)
    await make_entry(db_session, user, date=date(2024, 3, 5), method="RT", hours=1.25, verified=True, verified_by="Lee")
    await make_entry(db_session, user, date=date(2024, 3, 1), method="UT_THK", hours=2, verified=True, verified_by="Lee")
    await make_entry(db_session, user, date=date(2024, 3, 3), method="ET", hours=8)

    response = await client.get("/api/v1/entries/export", headers=headers)

    assert response.status_code == 200
    report = response.json()
    assert report["title"] == "Experience Hours (OJT)"
    assert report["employee_name"] == "Sam Ortiz"
    assert report["employee_number"] == "E-42"
    assert [e["date"] for e in report["entries"]] == ["2024-03-01", "2024-03-05"]
    assert report["entries"][0]["method_display"] == "UT Thk."
    assert report["entries"][0]["hours_display"] == "2.0"
    assert report["totals"]["ET"] == 0
    assert report["totals_display"]["RT"] == "1.2"
    assert report["total_hours"] == 3.25
    assert report["method_labels"]["UT_THK"] == "UT Thk."


async def test_create_rejects_non_finite_hours(client, auth_headers):
    for literal in ("Infinity", "-Infinity", "NaN"):
        body = '{"date": "2024-03-01", "location": "Refinery Unit 4", "method": "ET", "hours": %s}' % literal
        response = await client.post(
            "/api/v1/entries",
            content=body,
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 422, literal

    response = await client.get("/api/v1/entries/totals", headers=auth_headers)
    assert response.json()["total_hours"] == 0
