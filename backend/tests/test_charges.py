import pytest


async def create_charge(client, headers, **fields) -> dict:
    payload = {"charge_name": "Freight In", "charge_type": "FREIGHT", **fields}
    response = await client.post("/api/charges", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestCharges:
    async def test_create_and_get(self, client, admin, admin_headers, corporation):
        response = await client.post(
            "/api/charges",
            json={
                "corporation_uuid": corporation["uuid"],
                "charge_name": "Packing",
                "charge_type": "PACKING",
            },
            headers=admin_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Charge created successfully"
        charge = body["data"]
        assert charge["status"] == "ACTIVE"
        assert charge["created_by"] == admin["user"]["id"]

        response = await client.get(f"/api/charges/{charge['uuid']}", headers=admin_headers)
        assert response.json()["data"]["charge_name"] == "Packing"

    async def test_list_merges_global_and_corporation_rows(
        self, client, admin_headers, corporation, other_corporation
    ):
        global_charge = await create_charge(client, admin_headers, charge_name="Duties", charge_type="CUSTOM_DUTIES")
        own = await create_charge(client, admin_headers, corporation_uuid=corporation["uuid"])
        await create_charge(client, admin_headers, corporation_uuid=other_corporation["uuid"])

        response = await client.get(
            "/api/charges", params={"corporation_uuid": corporation["uuid"]}, headers=admin_headers
        )
        uuids = {c["uuid"] for c in response.json()["data"]}
        assert uuids == {global_charge["uuid"], own["uuid"]}

        response = await client.get("/api/charges", headers=admin_headers)
        assert [c["uuid"] for c in response.json()["data"]] == [global_charge["uuid"]]

    async def test_duplicate_in_same_scope(self, client, admin_headers, corporation):
        await create_charge(client, admin_headers, corporation_uuid=corporation["uuid"])
        response = await client.post(
            "/api/charges",
            json={"corporation_uuid": corporation["uuid"], "charge_name": "Freight In", "charge_type": "FREIGHT"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "ALREADY_EXISTS",
            "message": "A charge with this name and type already exists",
            "details": None,
        }

    async def test_duplicate_global_charge(self, client, admin_headers):
        await create_charge(client, admin_headers)
        response = await client.post(
            "/api/charges",
            json={"charge_name": "Freight In", "charge_type": "FREIGHT"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ALREADY_EXISTS"

    async def test_same_name_in_another_corporation_is_allowed(
        self, client, admin_headers, corporation, other_corporation
    ):
        await create_charge(client, admin_headers, corporation_uuid=corporation["uuid"])
        await create_charge(client, admin_headers, corporation_uuid=other_corporation["uuid"])

    async def test_blank_name_never_reaches_the_service(self, client, admin_headers, monkeypatch):
        async def fail(*args, **kwargs):
            raise AssertionError("service must not be called")

        monkeypatch.setattr("procurement.charges.service.create_charge", fail)
        response = await client.post(
            "/api/charges", json={"charge_name": "", "charge_type": "FREIGHT"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Charge Name is required"

    async def test_invalid_type(self, client, admin_headers):
        response = await client.post(
            "/api/charges", json={"charge_name": "X", "charge_type": "BRIBE"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert "FREIGHT, PACKING, CUSTOM_DUTIES, OTHER" in response.json()["error"]["message"]

    async def test_update_and_delete(self, client, admin_headers):
        charge = await create_charge(client, admin_headers)
        response = await client.put(
            f"/api/charges/{charge['uuid']}",
            json={"charge_name": "Freight Out", "charge_type": "FREIGHT", "status": "INACTIVE"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "INACTIVE"

        response = await client.delete(f"/api/charges/{charge['uuid']}", headers=admin_headers)
        assert response.json()["message"] == "Charge deleted successfully"

        response = await client.get(f"/api/charges/{charge['uuid']}", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CHARGE_NOT_FOUND"

    async def test_viewer_cannot_create(self, client, viewer):
        response = await client.post(
            "/api/charges",
            json={"charge_name": "Freight In", "charge_type": "FREIGHT"},
            headers=viewer["headers"],
        )
        assert response.status_code == 403

    async def test_accountant_can_create(self, client, accountant):
        await create_charge(client, accountant["headers"])

    async def test_non_member_cannot_read_corporation_rows(self, client, viewer, corporation):
        response = await client.get(
            "/api/charges", params={"corporation_uuid": corporation["uuid"]}, headers=viewer["headers"]
        )
        assert response.status_code == 403

    async def test_anonymous_is_unauthorized(self, client):
        response = await client.get("/api/charges")
        assert response.status_code == 401


class TestSalesTaxes:
    @pytest.mark.parametrize("value", [-1, 101, "abc"])
    async def test_out_of_range_rejected(self, client, admin_headers, value):
        response = await client.post(
            "/api/sales-taxes", json={"tax_name": "VAT", "tax_percentage": value}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Tax Percentage must be a number between 0 and 100"
        )

    @pytest.mark.parametrize("value", [0, 100, 55.5])
    async def test_boundaries_stored_as_given(self, client, admin_headers, value):
        response = await client.post(
            "/api/sales-taxes", json={"tax_name": f"Tax {value}", "tax_percentage": value}, headers=admin_headers
        )
        assert response.status_code == 200
        tax = response.json()["data"]

        response = await client.get(f"/api/sales-taxes/{tax['uuid']}", headers=admin_headers)
        assert response.json()["data"]["tax_percentage"] == value

    async def test_corporation_scope(self, client, admin_headers, corporation):
        response = await client.post(
            "/api/sales-taxes",
            json={"corporation_uuid": corporation["uuid"], "tax_name": "State", "tax_percentage": 6.25},
            headers=admin_headers,
        )
        assert response.status_code == 200

        response = await client.get("/api/sales-taxes", headers=admin_headers)
        assert response.json()["data"] == []

        response = await client.get(
            "/api/sales-taxes", params={"corporation_uuid": corporation["uuid"]}, headers=admin_headers
        )
        assert [t["tax_name"] for t in response.json()["data"]] == ["State"]

    async def test_duplicate_name(self, client, admin_headers):
        payload = {"tax_name": "VAT", "tax_percentage": 20}
        assert (await client.post("/api/sales-taxes", json=payload, headers=admin_headers)).status_code == 200
        response = await client.post("/api/sales-taxes", json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ALREADY_EXISTS"

    async def test_update_validates_percentage(self, client, admin_headers):
        response = await client.post(
            "/api/sales-taxes", json={"tax_name": "VAT", "tax_percentage": 20}, headers=admin_headers
        )
        tax = response.json()["data"]
        response = await client.put(
            f"/api/sales-taxes/{tax['uuid']}",
            json={"tax_name": "VAT", "tax_percentage": 120, "status": "ACTIVE"},
            headers=admin_headers,
        )
        assert response.status_code == 400
