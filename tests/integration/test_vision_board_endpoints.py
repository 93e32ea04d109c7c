"""Integration tests for vision board endpoints."""
import pytest
from bson import ObjectId


async def create_board(client, headers, **payload):
    payload.setdefault("name", "Growth Plan 2026")
    response = await client.post("/vision-boards", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


async def register_other_user(client):
    await client.post(
        "/auth/register",
        json={"email": "other@example.com", "password": "password123", "name": "Other"},
    )
    response = await client.post(
        "/auth/login",
        json={"email": "other@example.com", "password": "password123"},
    )
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.mark.asyncio
class TestVisionBoardCrud:
    """Tests for creating, reading, listing and deleting boards."""

    async def test_create_board(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)

        assert board["name"] == "Growth Plan 2026"
        assert board["overall_progress"] == 0
        assert board["is_active"] is True
        assert len(board["sections"]) == 8
        assert len(board["strategy_sheet"]) == 20
        assert board["strategy_sheet"]["swotAnalysis"] == {
            "completed": False,
            "data": {"strengths": [], "weaknesses": [], "opportunities": [], "threats": []},
        }

    async def test_create_requires_auth(self, app_client):
        response = await app_client.post("/vision-boards", json={"name": "Plan"})

        assert response.status_code == 401

    async def test_create_with_empty_name(self, app_client, auth_headers):
        response = await app_client.post("/vision-boards", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 422

    async def test_get_board(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)

        response = await app_client.get(f"/vision-boards/{board['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == board["id"]

    async def test_get_board_not_found(self, app_client, auth_headers):
        response = await app_client.get(f"/vision-boards/{ObjectId()}", headers=auth_headers)

        assert response.status_code == 404

    async def test_get_board_malformed_id(self, app_client, auth_headers):
        response = await app_client.get("/vision-boards/not-an-id", headers=auth_headers)

        assert response.status_code == 404

    async def test_other_users_board_is_not_found(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)
        other_headers = await register_other_user(app_client)

        response = await app_client.get(f"/vision-boards/{board['id']}", headers=other_headers)

        assert response.status_code == 404

    async def test_list_and_filter(self, app_client, auth_headers):
        first = await create_board(app_client, auth_headers, name="First")
        second = await create_board(app_client, auth_headers, name="Second")
        await app_client.put(f"/vision-boards/{first['id']}/archive", headers=auth_headers)

        all_boards = await app_client.get("/vision-boards", headers=auth_headers)
        active = await app_client.get("/vision-boards?active=true", headers=auth_headers)
        archived = await app_client.get("/vision-boards?active=false", headers=auth_headers)

        assert {b["id"] for b in all_boards.json()} == {first["id"], second["id"]}
        assert [b["id"] for b in active.json()] == [second["id"]]
        assert [b["id"] for b in archived.json()] == [first["id"]]
        assert archived.json()[0]["archived_at"] is not None

    async def test_delete_board(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)
        await app_client.post(
            f"/progress/{board['id']}/monthly",
            json={"month": "January", "year": 2026, "actual_revenue": 1000},
            headers=auth_headers,
        )

        response = await app_client.delete(f"/vision-boards/{board['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted_count": 1, "monthly_updates_deleted": 1}
        missing = await app_client.get(f"/vision-boards/{board['id']}", headers=auth_headers)
        assert missing.status_code == 404


@pytest.mark.asyncio
class TestSectionUpdates:
    """Tests for PUT /vision-boards/{id}/sections/{name}."""

    async def test_update_strategy_section(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)

        response = await app_client.put(
            f"/vision-boards/{board['id']}/sections/vision",
            json={"data": {"visionStatement": "The default CRM for clinics"}},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["strategy_sheet"]["vision"]["data"] == {"visionStatement": "The default CRM for clinics"}
        assert data["overall_progress"] == 4

    async def test_all_legacy_sections(self, app_client, auth_headers):
        """All eight legacy sections with an empty strategy sheet is 29%."""
        board = await create_board(app_client, auth_headers)
        legacy = list(board["sections"])

        for name in legacy:
            response = await app_client.put(
                f"/vision-boards/{board['id']}/sections/{name}",
                json={"completed": True},
                headers=auth_headers,
            )
            assert response.status_code == 200

        assert response.json()["overall_progress"] == 29
        progress = await app_client.get(f"/vision-boards/{board['id']}/progress", headers=auth_headers)
        assert progress.json()["overall_progress"] == 29
        assert all(section["progress"] == 100 for section in progress.json()["sections"])

    async def test_data_replaced_not_merged(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)
        url = f"/vision-boards/{board['id']}/sections/financialGoals"

        await app_client.put(url, json={"data": {"annualRevenue": 1000000, "profitMargin": 20}}, headers=auth_headers)
        response = await app_client.put(url, json={"data": {"monthlyRevenue": 90000}}, headers=auth_headers)

        assert response.json()["sections"]["financialGoals"]["data"] == {"monthlyRevenue": 90000}

    async def test_clearing_content_lowers_progress(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)
        url = f"/vision-boards/{board['id']}/sections/teamPlan"

        filled = await app_client.put(url, json={"data": {"teamSize": 4}}, headers=auth_headers)
        cleared = await app_client.put(url, json={"data": {"teamSize": 0, "roles": []}}, headers=auth_headers)

        assert filled.json()["overall_progress"] == 4
        assert cleared.json()["overall_progress"] == 0

    async def test_unknown_section(self, app_client, auth_headers):
        """An unknown section is rejected and the board is unchanged."""
        board = await create_board(app_client, auth_headers)

        response = await app_client.put(
            f"/vision-boards/{board['id']}/sections/notARealSection",
            json={"completed": True},
            headers=auth_headers,
        )

        assert response.status_code == 400
        after = await app_client.get(f"/vision-boards/{board['id']}", headers=auth_headers)
        assert after.json()["sections"] == board["sections"]
        assert after.json()["strategy_sheet"] == board["strategy_sheet"]
        assert after.json()["overall_progress"] == 0

    async def test_malformed_strategy_data(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)

        response = await app_client.put(
            f"/vision-boards/{board['id']}/sections/riskManagement",
            json={"data": {"risks": "everything"}},
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_section_on_missing_board(self, app_client, auth_headers):
        response = await app_client.put(
            f"/vision-boards/{ObjectId()}/sections/teamPlan",
            json={"completed": True},
            headers=auth_headers,
        )

        assert response.status_code == 404

    async def test_update_board_with_sections(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)

        response = await app_client.put(
            f"/vision-boards/{board['id']}",
            json={
                "name": "Renamed",
                "sections": {"brandGoals": {"data": {"websiteLeads": 150}}},
                "strategy_sheet": {"bhag": {"completed": True}},
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["overall_progress"] == 7


@pytest.mark.asyncio
class TestProgressViews:
    """Tests for the strategy and module progress endpoints."""

    async def test_strategy_progress_and_summary(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)
        await app_client.put(
            f"/vision-boards/{board['id']}/sections/companyOverview",
            json={"data": {"companyName": "Acme Clinics"}},
            headers=auth_headers,
        )

        progress = await app_client.get(f"/vision-boards/{board['id']}/strategy/progress", headers=auth_headers)
        summary = await app_client.get(f"/vision-boards/{board['id']}/strategy/summary", headers=auth_headers)
        sheet = await app_client.get(f"/vision-boards/{board['id']}/strategy", headers=auth_headers)

        assert progress.json()["completed_sections"] == 1
        assert progress.json()["overall_progress"] == 5
        assert summary.json()["company_name"] == "Acme Clinics"
        assert sheet.json()["companyOverview"]["data"] == {"companyName": "Acme Clinics"}

    async def test_module_progress(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)
        await app_client.put(
            f"/vision-boards/{board['id']}/sections/smartGoals",
            json={"data": {"goals": [{"goal": "Reach $1M ARR"}]}},
            headers=auth_headers,
        )

        targets = await app_client.get(f"/vision-boards/{board['id']}/modules/targets", headers=auth_headers)
        modules = await app_client.get(f"/vision-boards/{board['id']}/modules", headers=auth_headers)

        assert targets.status_code == 200
        assert targets.json()["progress"] == 50
        by_id = {module["module"]: module["progress"] for module in modules.json()}
        assert by_id["collaboration"] == 4
        assert by_id["financial"] == 0

    async def test_unknown_module(self, app_client, auth_headers):
        board = await create_board(app_client, auth_headers)

        response = await app_client.get(f"/vision-boards/{board['id']}/modules/marketing", headers=auth_headers)

        assert response.status_code == 400
