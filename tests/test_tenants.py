"""Tenant lifecycle API tests."""
import pytest
from httpx import AsyncClient


MISSING_ID = "ffffffffffffffffffffffff"


@pytest.mark.asyncio
async def test_create_tenant_starts_active(client: AsyncClient, admin_headers: dict, tenant_payload):
    """New tenants are active with exactly one history entry."""
    response = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload())

    assert response.status_code == 201
    data = response.json()
    assert len(data["id"]) == 24
    assert data["status"] == "active"
    assert len(data["statusHistory"]) == 1
    entry = data["statusHistory"][0]
    assert entry["status"] == "active"
    assert entry["reason"] is None
    assert entry["changedBy"] == "admin-1"
    assert "revision" not in data


@pytest.mark.asyncio
async def test_create_tenant_ignores_status_and_history(client: AsyncClient, manager_headers: dict, tenant_payload):
    payload = tenant_payload(
        status="suspended",
        statusHistory=[{"status": "inactive", "reason": "forged"}],
        revision=99,
    )
    response = await client.post("/api/tenants", headers=manager_headers, json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert [entry["status"] for entry in data["statusHistory"]] == ["active"]


@pytest.mark.asyncio
async def test_create_tenant_applies_setting_defaults(client: AsyncClient, admin_headers: dict, tenant_payload):
    payload = tenant_payload()
    del payload["settings"]

    response = await client.post("/api/tenants", headers=admin_headers, json=payload)

    assert response.status_code == 201
    assert response.json()["settings"] == {
        "timezone": "UTC",
        "dateFormat": "MM/DD/YYYY",
        "language": "en-US",
        "notificationPreferences": {"email": True, "slack": False},
    }


@pytest.mark.asyncio
async def test_create_then_fetch_round_trip(client: AsyncClient, admin_headers: dict, create_tenant):
    created = await create_tenant()

    response = await client.get(f"/api/tenants/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
@pytest.mark.parametrize("name,expected_status", [
    ("ab", 201),
    ("a", 400),
    ("n" * 100, 201),
    ("n" * 101, 400),
])
async def test_create_tenant_name_boundaries(
    client: AsyncClient, admin_headers: dict, tenant_payload, name: str, expected_status: int
):
    response = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(name=name))

    assert response.status_code == expected_status


@pytest.mark.asyncio
async def test_create_tenant_name_messages(client: AsyncClient, admin_headers: dict, tenant_payload):
    short = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(name=" a "))
    long = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(name="n" * 101))
    blank = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(name="   "))

    assert short.json() == {"message": "Name must be at least 2 characters"}
    assert long.json() == {"message": "Name cannot exceed 100 characters"}
    assert blank.json() == {"message": "Name is required"}


@pytest.mark.asyncio
async def test_create_tenant_trims_name(client: AsyncClient, admin_headers: dict, tenant_payload):
    response = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(name="  Globex  "))

    assert response.status_code == 201
    assert response.json()["name"] == "Globex"


@pytest.mark.asyncio
async def test_create_tenant_reports_every_violation(client: AsyncClient, admin_headers: dict):
    response = await client.post("/api/tenants", headers=admin_headers, json={"industry": "Mining"})

    assert response.status_code == 400
    message = response.json()["message"]
    assert "Name is required" in message
    assert "Invalid industry value" in message
    assert "Contact email is required" in message
    assert "Metadata is required" in message


@pytest.mark.asyncio
async def test_create_tenant_rejects_invalid_email(client: AsyncClient, admin_headers: dict, tenant_payload):
    response = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(contact_email="not-an-email"))

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid email format"}


@pytest.mark.asyncio
async def test_create_tenant_rejects_non_object_body(client: AsyncClient, admin_headers: dict):
    response = await client.post("/api/tenants", headers=admin_headers, json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.json() == {"message": "Request body must be a JSON object"}


@pytest.mark.asyncio
async def test_duplicate_email_is_case_insensitive(client: AsyncClient, admin_headers: dict, tenant_payload):
    first = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(contact_email="Billing@Initech.io"))
    second = await client.post("/api/tenants", headers=admin_headers, json=tenant_payload(contact_email="billing@INITECH.io"))

    assert first.status_code == 201
    assert first.json()["contact_email"] == "billing@initech.io"
    assert second.status_code == 400
    assert second.json() == {"message": "A tenant with this email already exists"}


@pytest.mark.asyncio
async def test_get_tenant_malformed_id(client: AsyncClient, viewer_headers: dict):
    response = await client.get("/api/tenants/not-an-id", headers=viewer_headers)

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid tenant ID format"}


@pytest.mark.asyncio
async def test_get_tenant_not_found(client: AsyncClient, viewer_headers: dict):
    response = await client.get(f"/api/tenants/{MISSING_ID}", headers=viewer_headers)

    assert response.status_code == 404
    assert response.json() == {"message": "Tenant not found"}


@pytest.mark.asyncio
async def test_list_tenants_pagination(client: AsyncClient, viewer_headers: dict, create_tenant):
    """Second page of five over fifteen tenants."""
    for index in range(15):
        await create_tenant(name=f"Tenant {index:02d}")

    response = await client.get("/api/tenants?page=2&limit=5", headers=viewer_headers)

    assert response.status_code == 200
    body = response.json()
    assert len(body["data"]) == 5
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 15,
        "limit": 5,
        "hasNext": True,
        "hasPrev": True,
    }


@pytest.mark.asyncio
async def test_list_tenants_sorting(client: AsyncClient, viewer_headers: dict, create_tenant):
    for name in ("Charlie Co", "Alpha Co", "Bravo Co"):
        await create_tenant(name=name)

    ascending = await client.get("/api/tenants?sortBy=name&order=asc", headers=viewer_headers)
    descending = await client.get("/api/tenants?sortBy=name&order=desc", headers=viewer_headers)

    assert [t["name"] for t in ascending.json()["data"]] == ["Alpha Co", "Bravo Co", "Charlie Co"]
    assert [t["name"] for t in descending.json()["data"]] == ["Charlie Co", "Bravo Co", "Alpha Co"]


@pytest.mark.asyncio
async def test_list_tenants_filters(client: AsyncClient, admin_headers: dict, create_tenant):
    tech = await create_tenant(name="Hooli")
    bank = await create_tenant(name="Gringotts", industry="Finance")
    await client.put(
        f"/api/tenants/{bank['id']}/status",
        headers=admin_headers,
        json={"status": "suspended", "reason": "Unpaid invoices"},
    )

    by_industry = await client.get("/api/tenants?industry=Technology", headers=admin_headers)
    by_status = await client.get("/api/tenants?status=suspended", headers=admin_headers)

    assert [t["id"] for t in by_industry.json()["data"]] == [tech["id"]]
    assert [t["id"] for t in by_status.json()["data"]] == [bank["id"]]


@pytest.mark.asyncio
async def test_list_tenants_search_matches_name_or_industry(client: AsyncClient, viewer_headers: dict, create_tenant):
    await create_tenant(name="Umbrella Health")
    await create_tenant(name="Stark Ledger", industry="Finance")
    await create_tenant(name="Wayne Retail", industry="Retail")

    by_name = await client.get("/api/tenants?search=UMBRELLA", headers=viewer_headers)
    by_industry = await client.get("/api/tenants?search=fin", headers=viewer_headers)
    wildcard = await client.get("/api/tenants?search=%25", headers=viewer_headers)

    assert [t["name"] for t in by_name.json()["data"]] == ["Umbrella Health"]
    assert [t["name"] for t in by_industry.json()["data"]] == ["Stark Ledger"]
    assert wildcard.json()["data"] == []


@pytest.mark.asyncio
async def test_list_tenants_rejects_unknown_industry(client: AsyncClient, viewer_headers: dict):
    response = await client.get("/api/tenants?industry=Mining", headers=viewer_headers)

    assert response.status_code == 400
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_update_tenant_fields(client: AsyncClient, manager_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        headers=manager_headers,
        json={"name": "Acme Renamed", "subscription_tier": "Enterprise"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Acme Renamed"
    assert data["subscription_tier"] == "Enterprise"
    assert data["industry"] == tenant["industry"]
    assert data["created_at"] == tenant["created_at"]


@pytest.mark.asyncio
async def test_update_tenant_cannot_change_status(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        headers=admin_headers,
        json={"status": "suspended", "name": "Still Active"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert len(response.json()["statusHistory"]) == 1


@pytest.mark.asyncio
async def test_update_tenant_empty_payload_is_noop(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.put(f"/api/tenants/{tenant['id']}", headers=admin_headers, json={})

    assert response.status_code == 200
    assert response.json() == tenant


@pytest.mark.asyncio
async def test_update_tenant_merges_settings(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        headers=admin_headers,
        json={"settings": {"language": "fr-FR"}, "metadata": {"tags": ["priority"]}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["settings"]["language"] == "fr-FR"
    assert data["settings"]["timezone"] == tenant["settings"]["timezone"]
    assert data["metadata"]["tags"] == ["priority"]
    assert data["metadata"]["region"] == tenant["metadata"]["region"]


@pytest.mark.asyncio
async def test_update_tenant_rejects_unknown_settings_key(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        headers=admin_headers,
        json={"settings": {"theme": "dark"}},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid settings: theme"}


@pytest.mark.asyncio
async def test_update_tenant_duplicate_email(client: AsyncClient, admin_headers: dict, create_tenant):
    first = await create_tenant()
    second = await create_tenant()

    response = await client.put(
        f"/api/tenants/{second['id']}",
        headers=admin_headers,
        json={"contact_email": first["contact_email"].upper()},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "A tenant with this email already exists"}


@pytest.mark.asyncio
async def test_update_tenant_invalid_values(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        headers=admin_headers,
        json={"compliance_level": "Ultra", "name": "x"},
    )

    assert response.status_code == 400
    message = response.json()["message"]
    assert "Invalid compliance level" in message
    assert "Name must be at least 2 characters" in message


@pytest.mark.asyncio
async def test_update_missing_tenant(client: AsyncClient, admin_headers: dict):
    response = await client.put(f"/api/tenants/{MISSING_ID}", headers=admin_headers, json={"name": "Ghost"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_tenant(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.delete(f"/api/tenants/{tenant['id']}", headers=admin_headers)
    fetched = await client.get(f"/api/tenants/{tenant['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Tenant deleted successfully"}
    assert fetched.status_code == 404


@pytest.mark.asyncio
async def test_delete_requires_admin(client: AsyncClient, manager_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.delete(f"/api/tenants/{tenant['id']}", headers=manager_headers)

    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden: Insufficient permissions"}


@pytest.mark.asyncio
async def test_bulk_delete(client: AsyncClient, admin_headers: dict, create_tenant):
    first = await create_tenant()
    second = await create_tenant()
    keeper = await create_tenant()

    response = await client.post(
        "/api/tenants/bulk/delete",
        headers=admin_headers,
        json={"tenantIds": [first["id"], second["id"], MISSING_ID]},
    )
    remaining = await client.get("/api/tenants", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Tenants deleted successfully", "deletedCount": 2}
    assert [t["id"] for t in remaining.json()["data"]] == [keeper["id"]]


@pytest.mark.asyncio
async def test_bulk_delete_rejects_malformed_ids(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.post(
        "/api/tenants/bulk/delete",
        headers=admin_headers,
        json={"tenantIds": [tenant["id"], "123"]},
    )
    still_there = await client.get(f"/api/tenants/{tenant['id']}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["invalidIds"] == ["123"]
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_bulk_delete_rejects_empty_list(client: AsyncClient, admin_headers: dict):
    response = await client.post("/api/tenants/bulk/delete", headers=admin_headers, json={"tenantIds": []})

    assert response.status_code == 400
    assert response.json() == {"message": "tenantIds array cannot be empty"}


@pytest.mark.asyncio
async def test_get_tenant_accepts_upper_case_id(client: AsyncClient, viewer_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.get(f"/api/tenants/{tenant['id'].upper()}", headers=viewer_headers)

    assert response.status_code == 200
    assert response.json()["id"] == tenant["id"]


@pytest.mark.asyncio
async def test_bulk_delete_accepts_upper_case_ids(client: AsyncClient, admin_headers: dict, create_tenant):
    tenant = await create_tenant()

    response = await client.post(
        "/api/tenants/bulk/delete",
        headers=admin_headers,
        json={"tenantIds": [tenant["id"].upper(), tenant["id"]]},
    )
    fetched = await client.get(f"/api/tenants/{tenant['id']}", headers=admin_headers)

    assert response.json()["deletedCount"] == 1
    assert fetched.status_code == 404
