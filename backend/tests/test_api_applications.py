"""
Pet Adoption API — Application Endpoint Tests
==============================================

What we test:
    ✅ full adoption scenario: one pet, two applicants, approve the first
    ✅ approve body {"rejectOtherApplications": false}
    ✅ conflict messages for double approval and non-pending applications
    ✅ 404 for a missing application or pet
    ✅ field-qualified validation messages (400)
    ✅ status / pet_id list filters
"""

from uuid import uuid4

import pytest

APPROVED_MESSAGE = "Application approved and pet status updated to adopted"


async def _create_pet(client, **overrides):
    response = await client.post("/api/pets", json={"name": "Rex", "type": "dog", **overrides})
    assert response.status_code == 201
    return response.json()["data"]


async def _apply(client, pet_id, name="Jane Doe", email="jane@example.com"):
    response = await client.post(
        "/api/applications",
        json={"pet_id": pet_id, "applicant_name": name, "applicant_email": email},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestAdoptionScenario:

    @pytest.mark.asyncio
    async def test_approve_first_applicant(self, test_client):
        pet = await _create_pet(test_client)
        first = await _apply(test_client, pet["id"], "First", "first@example.com")
        second = await _apply(test_client, pet["id"], "Second", "second@example.com")
        assert first["status"] == "pending"

        response = await test_client.post(f"/api/applications/{first['id']}/approve")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == APPROVED_MESSAGE
        assert body["data"]["id"] == first["id"]
        assert body["data"]["status"] == "approved"

        pet_after = (await test_client.get(f"/api/pets/{pet['id']}")).json()["data"]
        second_after = (await test_client.get(f"/api/applications/{second['id']}")).json()["data"]
        assert pet_after["status"] == "adopted"
        assert second_after["status"] == "rejected"

        again = await test_client.post(f"/api/applications/{first['id']}/approve")
        assert again.status_code == 400
        assert again.json() == {"status": "error", "message": "Application is already approved"}

        rejected = await test_client.post(f"/api/applications/{second['id']}/approve")
        assert rejected.status_code == 400
        assert rejected.json()["message"] == "Cannot approve application with status: rejected"

        late = await test_client.post(
            "/api/applications",
            json={
                "pet_id": pet["id"],
                "applicant_name": "Late",
                "applicant_email": "late@example.com",
            },
        )
        assert late.status_code == 400
        assert late.json()["message"] == (
            "Pet is not available for adoption. Current status: adopted"
        )

    @pytest.mark.asyncio
    async def test_approve_keeping_other_applications(self, test_client):
        pet = await _create_pet(test_client)
        first = await _apply(test_client, pet["id"])
        second = await _apply(test_client, pet["id"])

        response = await test_client.post(
            f"/api/applications/{first['id']}/approve",
            json={"rejectOtherApplications": False},
        )

        assert response.status_code == 200
        second_after = (await test_client.get(f"/api/applications/{second['id']}")).json()["data"]
        assert second_after["status"] == "pending"

    @pytest.mark.asyncio
    async def test_approve_missing_application_is_404(self, test_client):
        response = await test_client.post(f"/api/applications/{uuid4()}/approve")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Application not found"}

    @pytest.mark.asyncio
    async def test_pet_applications_listing(self, test_client):
        pet = await _create_pet(test_client)
        application = await _apply(test_client, pet["id"])

        response = await test_client.get(f"/api/pets/{pet['id']}/applications")

        assert response.status_code == 200
        assert [a["id"] for a in response.json()["data"]] == [application["id"]]


class TestApplicationEndpoints:

    @pytest.mark.asyncio
    async def test_create_for_missing_pet_is_404(self, test_client):
        response = await test_client.post(
            "/api/applications",
            json={
                "pet_id": str(uuid4()),
                "applicant_name": "Jane Doe",
                "applicant_email": "jane@example.com",
            },
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Pet not found"

    @pytest.mark.asyncio
    async def test_create_validation_message_names_fields(self, test_client):
        response = await test_client.post(
            "/api/applications",
            json={"pet_id": "not-a-uuid", "applicant_name": "Jane", "applicant_email": "nope"},
        )

        assert response.status_code == 400
        message = response.json()["message"]
        assert message.startswith("Validation error: ")
        assert "pet_id:" in message
        assert "applicant_email:" in message

    @pytest.mark.asyncio
    async def test_list_filters(self, test_client):
        rex = await _create_pet(test_client)
        tom = await _create_pet(test_client, name="Tom", type="cat")
        rex_app = await _apply(test_client, rex["id"])
        tom_app = await _apply(test_client, tom["id"])
        await test_client.patch(f"/api/applications/{tom_app['id']}", json={"status": "withdrawn"})

        by_pet = await test_client.get("/api/applications", params={"pet_id": rex["id"]})
        by_status = await test_client.get("/api/applications", params={"status": "withdrawn"})
        everything = await test_client.get("/api/applications")

        assert [a["id"] for a in by_pet.json()["data"]] == [rex_app["id"]]
        assert [a["id"] for a in by_status.json()["data"]] == [tom_app["id"]]
        assert len(everything.json()["data"]) == 2

    @pytest.mark.asyncio
    async def test_list_invalid_status_is_400(self, test_client):
        response = await test_client.get("/api/applications", params={"status": "lost"})

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid status. Must be one of: pending, approved, rejected, withdrawn"
        )

    @pytest.mark.asyncio
    async def test_patch_and_delete(self, test_client):
        pet = await _create_pet(test_client)
        application = await _apply(test_client, pet["id"])

        patched = await test_client.patch(
            f"/api/applications/{application['id']}",
            json={"application_text": "We have a big garden."},
        )
        assert patched.status_code == 200
        assert patched.json()["data"]["application_text"] == "We have a big garden."

        deleted = await test_client.delete(f"/api/applications/{application['id']}")
        assert deleted.status_code == 204
        missing = await test_client.get(f"/api/applications/{application['id']}")
        assert missing.status_code == 404
        assert missing.json()["message"] == "Application not found"
