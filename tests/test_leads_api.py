import asyncio

import pytest

from tests.factories import career_payload, enquiry_payload


@pytest.mark.asyncio
async def test_submit_enquiry(client, db):
    response = await client.post("/api/enquiries", json=enquiry_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Enquiry submitted successfully"
    assert body["data"]["type"] == "contact"
    assert body["data"]["propertyId"] is None


@pytest.mark.asyncio
async def test_enquiry_invalid_phone(client, db):
    response = await client.post("/api/enquiries", json=enquiry_payload(phone="12345"))
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid phone number (10 digits starting with 6-9)"}


@pytest.mark.asyncio
async def test_enquiry_missing_field_names_it(client, db):
    payload = enquiry_payload()
    del payload["email"]
    response = await client.post("/api/enquiries", json=payload)
    assert response.status_code == 400
    assert response.json()["error"].startswith("email:")


@pytest.mark.asyncio
async def test_career_application_duplicate_email(client, db):
    first = await client.post("/api/career", json=career_payload())
    second = await client.post("/api/career", json=career_payload(email="asha@example.com"))

    assert first.status_code == 200
    assert first.json()["data"]["email"] == "asha@example.com"
    assert second.status_code == 400
    assert second.json()["error"] == "An application with this email already exists"


@pytest.mark.asyncio
async def test_career_application_other_source(client, db):
    missing = await client.post("/api/career", json=career_payload(referralSource="OTHER"))
    given = await client.post("/api/career", json=career_payload(referralSource="OTHER", referralOther=" A hoarding "))

    assert missing.status_code == 400
    assert missing.json()["error"] == "Please specify how you came to know about us"
    assert given.status_code == 200
    assert given.json()["data"]["referralOther"] == "A hoarding"


@pytest.mark.asyncio
async def test_tac_registration(client, db):
    response = await client.post(
        "/api/tac-registration",
        json={"name": "Meera", "email": "meera@example.com", "phone": "8123456789", "address": "Indiranagar"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Registration submitted successfully"


@pytest.mark.asyncio
async def test_email_subscription_is_idempotent(client, db):
    first = await client.post("/api/email-subscription", json={"email": "News@Example.com"})
    second = await client.post("/api/email-subscription", json={"email": "news@example.com"})

    assert first.status_code == 200
    assert first.json()["message"] == "Successfully subscribed to updates"
    assert second.status_code == 200
    assert second.json()["message"] == "Email already subscribed"
    assert first.json()["data"]["id"] == second.json()["data"]["id"]


@pytest.mark.asyncio
async def test_email_subscription_invalid_email(client, db):
    response = await client.post("/api/email-subscription", json={"email": "not-an-email"})
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_track_page_requires_name(client, db):
    response = await client.post("/api/stats/track", json={"pageName": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "Page name is required"


@pytest.mark.asyncio
async def test_track_page_counts_every_click(client, db, admin_override):
    first = await client.post("/api/stats/track", json={"pageName": "home"})
    assert first.json()["data"]["clickCount"] == 1

    responses = await asyncio.gather(
        *(client.post("/api/stats/track", json={"pageName": "home"}) for _ in range(9))
    )
    assert all(r.status_code == 200 for r in responses)
    await client.post("/api/stats/track", json={"pageName": "projects"})

    stats = (await client.get("/api/admin/stats")).json()["data"]
    assert [(s["pageName"], s["clickCount"]) for s in stats] == [("home", 10), ("projects", 1)]
