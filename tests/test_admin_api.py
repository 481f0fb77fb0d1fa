from pathlib import Path

import pytest

from app.config import settings
from app.dependencies import auth
from tests.factories import blog_payload, career_payload, enquiry_payload, property_payload

MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest.mark.asyncio
async def test_admin_routes_require_token(client, db):
    response = await client.get("/api/admin/properties")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized: Authentication required"}


@pytest.mark.asyncio
async def test_admin_routes_reject_non_admin(client, db, monkeypatch):
    async def fake_verify(token):
        return {"id": 7, "role": "USER"}

    monkeypatch.setattr(auth, "verify_token", fake_verify)
    response = await client.get("/api/admin/enquiries", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    assert response.json()["error"] == "Forbidden: Admin access required"


@pytest.mark.asyncio
async def test_guard_runs_before_body_validation(client, db):
    response = await client.post("/api/admin/properties", json={})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_property_lifecycle(client, db, admin_override):
    created = await client.post(
        "/api/admin/properties",
        json=property_payload(
            projectLaunchDate="01-03-2026 10:00",
            configurations=[
                {"configType": "2 BHK", "carpetAreaSqft": 850, "price": 6500000},
                {"configType": "other", "customConfigType": "Penthouse"},
            ],
        ),
    )
    assert created.status_code == 200
    assert created.json()["message"] == "Property created successfully"
    listing = created.json()["data"]
    assert [c["configType"] for c in listing["configurations"]] == ["2 BHK", "Penthouse"]
    assert listing["configurations"][1]["price"] == 0

    # Configurations are kept when the update omits them
    updated = await client.put(
        f"/api/admin/properties/{listing['id']}",
        json=property_payload(name="Skyline Residency II", slug="skyline-residency", status="reserved"),
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "reserved"
    assert len(updated.json()["data"]["configurations"]) == 2

    replaced = await client.put(
        f"/api/admin/properties/{listing['id']}",
        json=property_payload(slug="skyline-residency", configurations=[]),
    )
    assert replaced.json()["data"]["configurations"] == []

    deleted = await client.delete(f"/api/admin/properties/{listing['id']}")
    assert deleted.json() == {"success": True, "message": "Property deleted successfully"}
    missing = await client.get(f"/api/admin/properties/{listing['id']}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_property_explicit_slug_conflict(client, db, admin_override):
    await client.post("/api/admin/properties", json=property_payload(slug="skyline-phase-one"))
    response = await client.post(
        "/api/admin/properties", json=property_payload(name="Other Tower", slug="skyline-phase-one")
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "A property with this slug already exists"}


@pytest.mark.asyncio
async def test_same_name_listings_get_distinct_slugs(client, db, admin_override):
    first = await client.post("/api/admin/properties", json=property_payload())
    second = await client.post("/api/admin/properties", json=property_payload(location="Sarjapur"))
    third = await client.post("/api/admin/properties", json=property_payload(location="Hebbal"))

    assert [r.status_code for r in (first, second, third)] == [200, 200, 200]
    slugs = [r.json()["data"]["slug"] for r in (first, second, third)]
    assert slugs == ["skyline-residency", "skyline-residency-2", "skyline-residency-3"]


@pytest.mark.asyncio
async def test_update_without_slug_keeps_url(client, db, admin_override):
    created = await client.post("/api/admin/properties", json=property_payload(slug="skyline-phase-one"))
    listing_id = created.json()["data"]["id"]

    updated = await client.put(
        f"/api/admin/properties/{listing_id}", json=property_payload(name="Skyline Residency Phase One")
    )

    assert updated.json()["data"]["slug"] == "skyline-phase-one"
    assert (await client.get("/api/properties/skyline-phase-one")).status_code == 200


@pytest.mark.asyncio
async def test_delete_missing_property(client, db, admin_override):
    response = await client.delete(f"/api/admin/properties/{MISSING_ID}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Property not found"}


@pytest.mark.asyncio
async def test_admin_property_list_paginates(client, db, admin_override):
    for i in range(3):
        await client.post("/api/admin/properties", json=property_payload(name=f"Tower {i}"))

    response = await client.get("/api/admin/properties?limit=2&page=2")

    pagination = response.json()["data"]["pagination"]
    assert len(response.json()["data"]["data"]) == 1
    assert (pagination["totalPages"], pagination["hasNext"], pagination["hasPrev"]) == (2, False, True)


@pytest.mark.asyncio
async def test_blog_admin_crud(client, db, admin_override):
    created = await client.post("/api/admin/blogs", json=blog_payload(published=False))
    blog_id = created.json()["data"]["id"]

    listed = await client.get("/api/admin/blogs")
    assert listed.json()["data"]["pagination"]["total"] == 1

    retitled = await client.put(f"/api/admin/blogs/{blog_id}", json=blog_payload(title="Retitled", published=True))
    assert retitled.json()["data"]["slug"] == "buying-your-first-home"

    updated = await client.put(
        f"/api/admin/blogs/{blog_id}", json=blog_payload(title="New Title", slug="new-title", published=True)
    )
    assert updated.json()["data"]["slug"] == "new-title"

    duplicate = await client.post("/api/admin/blogs", json=blog_payload(title="New Title"))
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "A blog with this slug already exists"

    deleted = await client.delete(f"/api/admin/blogs/{blog_id}")
    assert deleted.json()["message"] == "Blog deleted successfully"
    assert (await client.get(f"/api/admin/blogs/{blog_id}")).status_code == 404


@pytest.mark.asyncio
async def test_blog_with_unusable_title_needs_slug(client, db, admin_override):
    response = await client.post("/api/admin/blogs", json=blog_payload(title="!!!"))
    assert response.status_code == 400
    assert response.json()["error"] == "Slug is required when the title has no letters or digits"


@pytest.mark.asyncio
async def test_video_admin_crud(client, db, admin_override):
    created = await client.post(
        "/api/admin/videos", json={"title": "Site tour", "videoLink": "https://www.youtube.com/watch?v=abc"}
    )
    video_id = created.json()["data"]["id"]
    assert created.json()["data"]["order"] == 0

    updated = await client.put(
        f"/api/admin/videos/{video_id}",
        json={"title": "Site tour", "videoLink": "https://vimeo.com/42", "order": 3},
    )
    assert updated.json()["data"]["order"] == 3

    listed = await client.get("/api/admin/videos")
    assert listed.json()["data"]["pagination"]["limit"] == 12

    assert (await client.delete(f"/api/admin/videos/{video_id}")).status_code == 200
    missing = await client.delete(f"/api/admin/videos/{video_id}")
    assert missing.json() == {"success": False, "error": "Video not found"}


@pytest.mark.asyncio
async def test_enquiries_carry_property_reference(client, db, admin_override):
    listing = (await client.post("/api/admin/properties", json=property_payload())).json()["data"]
    await client.post("/api/enquiries", json=enquiry_payload(propertyId=listing["id"], type="property"))
    await client.post("/api/enquiries", json=enquiry_payload(email="other@example.com"))

    response = await client.get("/api/admin/enquiries?type=property")

    enquiries = response.json()["data"]["data"]
    assert len(enquiries) == 1
    assert enquiries[0]["property"] == {"id": listing["id"], "name": "Skyline Residency"}


@pytest.mark.asyncio
async def test_update_enquiry(client, db, admin_override):
    enquiry = (await client.post("/api/enquiries", json=enquiry_payload())).json()["data"]

    response = await client.patch(f"/api/admin/enquiries/{enquiry['id']}", json={"type": "site-visit"})

    assert response.status_code == 200
    assert response.json()["data"]["type"] == "site-visit"
    assert response.json()["data"]["name"] == enquiry["name"]


@pytest.mark.asyncio
async def test_lead_lists_and_deletes(client, db, admin_override):
    await client.post(
        "/api/tac-registration", json={"name": "Meera", "email": "meera@example.com", "phone": "8123456789"}
    )
    await client.post("/api/email-subscription", json={"email": "news@example.com"})

    registrations = (await client.get("/api/admin/tac-registrations?search=meera")).json()["data"]["data"]
    subscriptions = (await client.get("/api/admin/email-subscriptions")).json()["data"]["data"]
    assert len(registrations) == 1
    assert len(subscriptions) == 1

    assert (await client.delete(f"/api/admin/tac-registrations/{registrations[0]['id']}")).status_code == 200
    assert (await client.delete(f"/api/admin/email-subscriptions/{subscriptions[0]['id']}")).status_code == 200
    missing = await client.get(f"/api/admin/tac-registrations/{registrations[0]['id']}")
    assert missing.json()["error"] == "TAC registration not found"


@pytest.mark.asyncio
async def test_career_list_filters_by_source(client, db, admin_override):
    await client.post("/api/career", json=career_payload())
    await client.post("/api/career", json=career_payload(email="b@example.com", referralSource="YOUTUBE"))

    response = await client.get("/api/admin/career?referralSource=youtube")

    applications = response.json()["data"]["data"]
    assert [a["email"] for a in applications] == ["b@example.com"]
    assert response.json()["data"]["pagination"]["limit"] == 20


@pytest.mark.asyncio
async def test_builder_upsert(client, db, admin_override):
    await client.post("/api/admin/builders", json={"name": "Acme", "about": "Since 1990"})
    saved = await client.post("/api/admin/builders", json={"name": " Acme ", "about": "Since 1991"})

    builders = (await client.get("/api/admin/builders")).json()["data"]

    assert saved.json()["message"] == "Builder saved successfully"
    assert [(b["name"], b["about"]) for b in builders] == [("Acme", "Since 1991")]


@pytest.mark.asyncio
async def test_upload_main_image(client, db, admin_override, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))

    response = await client.post(
        "/api/admin/upload",
        files={"file": ("front.PNG", b"\x89PNG fake", "image/png")},
        data={"slug": "skyline-residency", "imageType": "main"},
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"url": "/uploads/skyline-residency-main.png", "fileName": "skyline-residency-main.png"}
    assert Path(tmp_path / "uploads" / "skyline-residency-main.png").read_bytes() == b"\x89PNG fake"


@pytest.mark.asyncio
async def test_upload_rejects_non_image(client, db, admin_override):
    response = await client.post("/api/admin/upload", files={"file": ("cv.pdf", b"%PDF", "application/pdf")})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid file type. Only images are allowed."


@pytest.mark.asyncio
async def test_upload_without_file(client, db, admin_override):
    response = await client.post("/api/admin/upload", data={"slug": "x"})
    assert response.status_code == 400
    assert response.json()["error"] == "No file provided"


@pytest.mark.asyncio
async def test_upload_extension_comes_from_content_type(client, db, admin_override, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))

    response = await client.post("/api/admin/upload", files={"file": ("page.html", b"<script></script>", "image/png")})

    assert response.status_code == 200
    file_name = response.json()["data"]["fileName"]
    assert file_name.endswith(".png")
    assert not list((tmp_path / "uploads").glob("*.html"))


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(client, db, admin_override, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024 * 1024)

    response = await client.post(
        "/api/admin/upload", files={"file": ("big.jpg", b"\0" * (1024 * 1024 + 1), "image/jpeg")}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "File size exceeds 1MB limit"
    assert not (tmp_path / "uploads").exists()
