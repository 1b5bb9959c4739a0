import pytest
from sqlalchemy import func, select

from procurement.cost_codes.models import PreferredItem


@pytest.fixture
def scope(corporation):
    return {"corporation_uuid": corporation["uuid"]}


async def create_division(client, headers, scope, number="01", order=1) -> dict:
    response = await client.post(
        "/api/cost-code-divisions",
        json={**scope, "division_number": number, "division_name": f"Division {number}", "division_order": order},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def create_configuration(client, headers, scope, number, **fields) -> dict:
    response = await client.post(
        "/api/cost-code-configurations",
        json={**scope, "cost_code_number": number, "cost_code_name": f"Cost code {number}", **fields},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def count_preferred_items(app) -> int:
    async with app.state.session_factory() as session:
        return await session.scalar(select(func.count()).select_from(PreferredItem))


class TestDivisions:
    async def test_listed_by_order(self, client, admin_headers, scope):
        await create_division(client, admin_headers, scope, "03", order=3)
        await create_division(client, admin_headers, scope, "01", order=1)
        await create_division(client, admin_headers, scope, "02", order=2)

        response = await client.get("/api/cost-code-divisions", params=scope, headers=admin_headers)
        assert [d["division_number"] for d in response.json()["data"]] == ["01", "02", "03"]

    async def test_flags_default(self, client, admin_headers, scope):
        division = await create_division(client, admin_headers, scope)
        assert division["is_active"] is True
        assert division["exclude_in_estimates_and_reports"] is False

    async def test_duplicate_number(self, client, admin_headers, scope):
        await create_division(client, admin_headers, scope)
        response = await client.post(
            "/api/cost-code-divisions",
            json={**scope, "division_number": "01", "division_name": "Again", "division_order": 2},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "A cost code division with this number already exists"
        )

    async def test_order_out_of_range(self, client, admin_headers, scope):
        response = await client.post(
            "/api/cost-code-divisions",
            json={**scope, "division_number": "01", "division_name": "General", "division_order": 101},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Division Order must be a whole number between 1 and 100"
        )

    async def test_delete_blocked_while_referenced(self, client, admin_headers, scope):
        division = await create_division(client, admin_headers, scope)
        config = await create_configuration(
            client, admin_headers, scope, "01-100", division_uuid=division["uuid"]
        )

        response = await client.delete(f"/api/cost-code-divisions/{division['uuid']}", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["error"]["message"] == (
            "Cannot delete cost code division. It is used by cost code configurations."
        )

        await client.delete(f"/api/cost-code-configurations/{config['uuid']}", headers=admin_headers)
        response = await client.delete(f"/api/cost-code-divisions/{division['uuid']}", headers=admin_headers)
        assert response.status_code == 200

    async def test_update_requires_both_flags(self, client, admin_headers, scope):
        response = await client.post(
            "/api/cost-code-divisions",
            json={
                **scope,
                "division_number": "01",
                "division_name": "General",
                "division_order": 1,
                "is_active": False,
                "exclude_in_estimates_and_reports": True,
            },
            headers=admin_headers,
        )
        division = response.json()["data"]
        url = f"/api/cost-code-divisions/{division['uuid']}"
        fields = {"division_number": "01", "division_name": "General Conditions", "division_order": 1}

        response = await client.put(url, json=fields, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Is Active is required"

        response = await client.put(url, json={**fields, "is_active": False}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Exclude In Estimates And Reports is required"

        response = await client.get(url, headers=admin_headers)
        data = response.json()["data"]
        assert (data["division_name"], data["is_active"], data["exclude_in_estimates_and_reports"]) == (
            "General",
            False,
            True,
        )

    async def test_malformed_order_gets_readable_message(self, client, admin_headers, scope):
        response = await client.post(
            "/api/cost-code-divisions",
            json={**scope, "division_number": "01", "division_name": "General", "division_order": "--5"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Division Order must be a whole number between 1 and 100"
        )


class TestConfigurations:
    async def test_preferred_items_keep_their_order(self, client, admin_headers, scope):
        config = await create_configuration(
            client,
            admin_headers,
            scope,
            "01-100",
            preferred_items=[
                {"item_name": "Trailer", "unit_price": 1200},
                {"item_name": "Fencing", "unit_price": "15.50"},
                {"item_name": "Signage"},
            ],
        )
        items = config["preferred_items"]
        assert [i["item_name"] for i in items] == ["Trailer", "Fencing", "Signage"]
        assert [i["unit_price"] for i in items] == [1200.0, 15.5, 0.0]

    async def test_update_replaces_or_keeps_items(self, client, app, admin_headers, scope):
        config = await create_configuration(
            client, admin_headers, scope, "01-100", preferred_items=[{"item_name": "Trailer"}]
        )
        url = f"/api/cost-code-configurations/{config['uuid']}"
        base = {"cost_code_number": "01-100", "cost_code_name": "Mobilization", "is_active": True}

        response = await client.put(url, json=base, headers=admin_headers)
        assert [i["item_name"] for i in response.json()["data"]["preferred_items"]] == ["Trailer"]

        response = await client.put(
            url,
            json={**base, "preferred_items": [{"item_name": "Crane"}, {"item_name": "Generator"}]},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert [i["item_name"] for i in response.json()["data"]["preferred_items"]] == ["Crane", "Generator"]
        assert await count_preferred_items(app) == 2

    async def test_delete_cascades_preferred_items(self, client, app, admin_headers, scope):
        config = await create_configuration(
            client,
            admin_headers,
            scope,
            "01-100",
            preferred_items=[{"item_name": "Trailer"}, {"item_name": "Fencing"}],
        )
        assert await count_preferred_items(app) == 2

        response = await client.delete(f"/api/cost-code-configurations/{config['uuid']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == 'Cost code "01-100" deleted successfully'
        assert await count_preferred_items(app) == 0

        response = await client.get(f"/api/cost-code-configurations/{config['uuid']}", headers=admin_headers)
        assert response.status_code == 404

    async def test_listed_by_order_then_number(self, client, admin_headers, scope):
        await create_configuration(client, admin_headers, scope, "03-100")
        await create_configuration(client, admin_headers, scope, "02-100", order=2)
        await create_configuration(client, admin_headers, scope, "01-100")
        await create_configuration(client, admin_headers, scope, "04-100", order=1)

        response = await client.get("/api/cost-code-configurations", params=scope, headers=admin_headers)
        numbers = [c["cost_code_number"] for c in response.json()["data"]]
        assert numbers == ["04-100", "02-100", "01-100", "03-100"]

    async def test_parent_must_exist_and_differ(self, client, admin_headers, scope):
        parent = await create_configuration(client, admin_headers, scope, "01-000")
        child = await create_configuration(
            client, admin_headers, scope, "01-100", parent_cost_code_uuid=parent["uuid"]
        )
        assert child["parent_cost_code_uuid"] == parent["uuid"]

        response = await client.put(
            f"/api/cost-code-configurations/{child['uuid']}",
            json={
                "cost_code_number": "01-100",
                "cost_code_name": "x",
                "parent_cost_code_uuid": child["uuid"],
                "is_active": True,
            },
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "A cost code cannot be its own parent"

        # Deleting the parent detaches the child
        await client.delete(f"/api/cost-code-configurations/{parent['uuid']}", headers=admin_headers)
        response = await client.get(f"/api/cost-code-configurations/{child['uuid']}", headers=admin_headers)
        assert response.json()["data"]["parent_cost_code_uuid"] is None

    async def test_references_stay_in_corporation(
        self, client, admin_headers, scope, other_corporation
    ):
        foreign_scope = {"corporation_uuid": other_corporation["uuid"]}
        foreign_division = await create_division(client, admin_headers, foreign_scope)
        response = await client.post(
            "/api/uom",
            json={**foreign_scope, "uom_name": "Each", "short_name": "EA"},
            headers=admin_headers,
        )
        foreign_uom = response.json()["data"]

        response = await client.post(
            "/api/cost-code-configurations",
            json={**scope, "cost_code_number": "01", "cost_code_name": "x", "division_uuid": foreign_division["uuid"]},
            headers=admin_headers,
        )
        assert response.status_code == 400

        response = await client.post(
            "/api/cost-code-configurations",
            json={
                **scope,
                "cost_code_number": "01",
                "cost_code_name": "x",
                "preferred_items": [{"item_name": "Bolt", "uom_uuid": foreign_uom["uuid"]}],
            },
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "UOM not found or does not belong to the specified corporation"
        )

    async def test_negative_unit_price(self, client, admin_headers, scope):
        response = await client.post(
            "/api/cost-code-configurations",
            json={**scope, "cost_code_number": "01", "cost_code_name": "x", "preferred_items": [{"item_name": "Bolt", "unit_price": -1}]},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Unit Price must be a number greater than or equal to 0"
        )

    async def test_duplicate_number(self, client, admin_headers, scope):
        await create_configuration(client, admin_headers, scope, "01-100")
        response = await client.post(
            "/api/cost-code-configurations",
            json={**scope, "cost_code_number": "01-100", "cost_code_name": "Again"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "A cost code with this number already exists"
