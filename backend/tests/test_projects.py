from conftest import create_project


async def create_project_type(client, headers, corporation_uuid, name="Residential") -> dict:
    response = await client.post(
        "/api/project-types",
        json={"corporation_uuid": corporation_uuid, "name": name, "short_name": name[:3].upper()},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def create_item_type(client, headers, project, item_type="Lumber", short_name="LUM") -> dict:
    response = await client.post(
        "/api/item-types",
        json={
            "corporation_uuid": project["corporation_uuid"],
            "project_uuid": project["uuid"],
            "item_type": item_type,
            "short_name": short_name,
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestProjectTypes:
    async def test_duplicate_name(self, client, admin_headers, corporation):
        await create_project_type(client, admin_headers, corporation["uuid"])
        response = await client.post(
            "/api/project-types",
            json={"corporation_uuid": corporation["uuid"], "name": "Residential", "short_name": "R2"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "A project type with this name already exists"

    async def test_delete_blocked_by_active_project(self, client, admin_headers, corporation):
        project_type = await create_project_type(client, admin_headers, corporation["uuid"])
        project = await create_project(
            client, admin_headers, corporation["uuid"], "P-200", project_type_uuid=project_type["uuid"]
        )

        response = await client.delete(f"/api/project-types/{project_type['uuid']}", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["error"]["message"] == (
            "Cannot delete project type. It is currently being used by active projects."
        )

        response = await client.put(
            f"/api/projects/{project['uuid']}",
            json={
                "project_name": project["project_name"],
                "project_id": "P-200",
                "project_type_uuid": project_type["uuid"],
                "is_active": False,
            },
            headers=admin_headers,
        )
        assert response.status_code == 200

        response = await client.delete(f"/api/project-types/{project_type['uuid']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == 'Project type "Residential" deleted successfully'

        response = await client.get(f"/api/projects/{project['uuid']}", headers=admin_headers)
        assert response.json()["data"]["project_type_uuid"] is None

    async def test_delete_unknown(self, client, admin_headers):
        response = await client.delete(
            "/api/project-types/00000000-0000-0000-0000-000000000000", headers=admin_headers
        )
        assert response.status_code == 404

    async def test_update_requires_is_active(self, client, admin_headers, corporation):
        response = await client.post(
            "/api/project-types",
            json={"corporation_uuid": corporation["uuid"], "name": "Retail", "short_name": "RET", "is_active": False},
            headers=admin_headers,
        )
        project_type = response.json()["data"]
        url = f"/api/project-types/{project_type['uuid']}"

        response = await client.put(url, json={"name": "Retail", "short_name": "RT"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Is Active is required"

        response = await client.get(url, headers=admin_headers)
        assert response.json()["data"]["short_name"] == "RET"
        assert response.json()["data"]["is_active"] is False


class TestProjects:
    async def test_type_must_belong_to_corporation(
        self, client, admin_headers, corporation, other_corporation
    ):
        foreign_type = await create_project_type(client, admin_headers, other_corporation["uuid"])
        response = await client.post(
            "/api/projects",
            json={
                "corporation_uuid": corporation["uuid"],
                "project_name": "Tower",
                "project_id": "T-1",
                "project_type_uuid": foreign_type["uuid"],
            },
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Project type not found or does not belong to the specified corporation"
        )

    async def test_duplicate_project_id(self, client, admin_headers, corporation, project):
        response = await client.post(
            "/api/projects",
            json={"corporation_uuid": corporation["uuid"], "project_name": "Other", "project_id": "P-100"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "A project with this project ID already exists"

    async def test_list_and_delete(self, client, admin_headers, corporation, project):
        params = {"corporation_uuid": corporation["uuid"]}
        response = await client.get("/api/projects", params=params, headers=admin_headers)
        assert [p["uuid"] for p in response.json()["data"]] == [project["uuid"]]

        response = await client.delete(f"/api/projects/{project['uuid']}", headers=admin_headers)
        assert response.json()["message"] == 'Project "Project P-100" deleted successfully'

        response = await client.get("/api/projects", params=params, headers=admin_headers)
        assert response.json()["data"] == []


class TestItemTypes:
    async def test_create_reports_project_name(self, client, admin_headers, project):
        item_type = await create_item_type(client, admin_headers, project)
        assert item_type["project_uuid"] == project["uuid"]
        assert item_type["project_name"] == "Project P-100"

    async def test_project_must_belong_to_corporation(
        self, client, admin_headers, project, other_corporation
    ):
        response = await client.post(
            "/api/item-types",
            json={
                "corporation_uuid": other_corporation["uuid"],
                "project_uuid": project["uuid"],
                "item_type": "Lumber",
                "short_name": "LUM",
            },
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Project not found or does not belong to the specified corporation"
        )

    async def test_duplicates_within_project(self, client, admin_headers, corporation, project):
        await create_item_type(client, admin_headers, project)
        for item_type, short_name in (("Lumber", "LB"), ("Timber", "LUM")):
            response = await client.post(
                "/api/item-types",
                json={
                    "corporation_uuid": corporation["uuid"],
                    "project_uuid": project["uuid"],
                    "item_type": item_type,
                    "short_name": short_name,
                },
                headers=admin_headers,
            )
            assert response.status_code == 400
            assert response.json()["error"]["code"] == "ALREADY_EXISTS"

        # The same names are fine in another project
        other = await create_project(client, admin_headers, corporation["uuid"], "P-101")
        await create_item_type(client, admin_headers, other)

    async def test_list_filters_by_project(self, client, admin_headers, corporation, project):
        other = await create_project(client, admin_headers, corporation["uuid"], "P-101")
        lumber = await create_item_type(client, admin_headers, project)
        await create_item_type(client, admin_headers, other, "Concrete", "CON")

        params = {"corporation_uuid": corporation["uuid"]}
        response = await client.get("/api/item-types", params=params, headers=admin_headers)
        assert [i["item_type"] for i in response.json()["data"]] == ["Concrete", "Lumber"]

        response = await client.get(
            "/api/item-types", params={**params, "project_uuid": project["uuid"]}, headers=admin_headers
        )
        assert [i["uuid"] for i in response.json()["data"]] == [lumber["uuid"]]

        response = await client.get(
            "/api/item-types", params={**params, "project_uuid": "bad"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Project UUID must be a valid UUID"

    async def test_delete_unreferenced(self, client, admin_headers, corporation, project):
        item_type = await create_item_type(client, admin_headers, project)

        response = await client.delete(f"/api/item-types/{item_type['uuid']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == 'Item type "Lumber" (LUM) has been deleted successfully'

        response = await client.get(
            "/api/item-types", params={"corporation_uuid": corporation["uuid"]}, headers=admin_headers
        )
        assert response.json()["data"] == []

    async def test_delete_referenced_by_other_project(self, client, admin_headers, corporation, project):
        item_type = await create_item_type(client, admin_headers, project)
        other = await create_project(client, admin_headers, corporation["uuid"], "P-101")

        usage_url = f"/api/item-types/{item_type['uuid']}/usage"
        response = await client.post(usage_url, json={"project_uuid": other["uuid"]}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Item type usage recorded"
        # Recording the same usage again is a no-op
        response = await client.post(usage_url, json={"project_uuid": other["uuid"]}, headers=admin_headers)
        assert response.status_code == 200

        response = await client.delete(f"/api/item-types/{item_type['uuid']}", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["error"]["message"] == (
            "Cannot delete item type. It is currently being used by other projects."
        )

        response = await client.get(f"/api/item-types/{item_type['uuid']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["item_type"] == "Lumber"

        # Once the other project is gone the item type can be deleted
        await client.delete(f"/api/projects/{other['uuid']}", headers=admin_headers)
        response = await client.delete(f"/api/item-types/{item_type['uuid']}", headers=admin_headers)
        assert response.status_code == 200

    async def test_usage_project_must_share_corporation(
        self, client, admin_headers, project, other_corporation
    ):
        item_type = await create_item_type(client, admin_headers, project)
        foreign = await create_project(client, admin_headers, other_corporation["uuid"], "G-1")
        response = await client.post(
            f"/api/item-types/{item_type['uuid']}/usage",
            json={"project_uuid": foreign["uuid"]},
            headers=admin_headers,
        )
        assert response.status_code == 400

    async def test_update(self, client, admin_headers, project):
        item_type = await create_item_type(client, admin_headers, project)
        response = await client.put(
            f"/api/item-types/{item_type['uuid']}",
            json={"item_type": "Dimensional Lumber", "short_name": "DLUM", "is_active": False},
            headers=admin_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["item_type"] == "Dimensional Lumber"
        assert data["project_name"] == "Project P-100"
        assert data["is_active"] is False

    async def test_viewer_cannot_delete(self, client, admin_headers, viewer, project):
        item_type = await create_item_type(client, admin_headers, project)
        response = await client.delete(f"/api/item-types/{item_type['uuid']}", headers=viewer["headers"])
        assert response.status_code == 403
