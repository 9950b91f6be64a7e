"""
Integration Tests for Folders API.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.models.folder import Folder


async def create_folder(client: AsyncClient, headers: dict, name: str, parent_id: str | None = None) -> dict:
    response = await client.post(
        "/api/v1/folders",
        json={"name": name, "parent_id": parent_id},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateFolder:
    """Tests for POST /api/v1/folders."""

    @pytest.mark.asyncio
    async def test_create_root_folder(self, client: AsyncClient, auth_headers: dict, api):
        response = await client.post(
            "/api/v1/folders",
            json={"name": "Projects"},
            headers=auth_headers,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["name"] == "Projects"
        assert data["parent_id"] is None
        assert data["is_system"] is False

    @pytest.mark.asyncio
    async def test_create_subfolder(self, client: AsyncClient, auth_headers: dict):
        parent = await create_folder(client, auth_headers, "Projects")
        child = await create_folder(client, auth_headers, "Garden", parent_id=parent["id"])

        assert child["parent_id"] == parent["id"]

    @pytest.mark.asyncio
    async def test_unknown_parent_rejected(self, client: AsyncClient, auth_headers: dict, api):
        response = await client.post(
            "/api/v1/folders",
            json={"name": "Lost", "parent_id": "missing"},
            headers=auth_headers,
        )

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["details"] == {"parent_id": "missing"}

    @pytest.mark.asyncio
    async def test_other_users_parent_rejected(
        self,
        client: AsyncClient,
        auth_headers: dict,
        other_auth_headers: dict,
        api,
    ):
        theirs = await create_folder(client, other_auth_headers, "Private")

        response = await client.post(
            "/api/v1/folders",
            json={"name": "Sneaky", "parent_id": theirs["id"]},
            headers=auth_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, client: AsyncClient, auth_headers: dict, api):
        response = await client.post("/api/v1/folders", json={"name": ""}, headers=auth_headers)

        api.assert_validation_error(response, field="name")

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, client: AsyncClient, auth_headers: dict, api):
        response = await client.post("/api/v1/folders", json={"name": "   "}, headers=auth_headers)

        api.assert_validation_error(response, field="name")

    @pytest.mark.asyncio
    async def test_name_is_trimmed(self, client: AsyncClient, auth_headers: dict):
        folder = await create_folder(client, auth_headers, "  Projects ")

        assert folder["name"] == "Projects"


class TestFolderTree:
    """Tests for GET /api/v1/folders and /api/v1/folders/tree."""

    @pytest.mark.asyncio
    async def test_tree_nests_children_sorted_by_name(self, client: AsyncClient, auth_headers: dict, api):
        work = await create_folder(client, auth_headers, "Work")
        archive = await create_folder(client, auth_headers, "Archive")
        await create_folder(client, auth_headers, "Q2", parent_id=work["id"])
        await create_folder(client, auth_headers, "Q1", parent_id=work["id"])

        response = await client.get("/api/v1/folders/tree", headers=auth_headers)

        tree = api.assert_success(response)["data"]
        assert [node["name"] for node in tree] == ["Archive", "Work"]
        assert tree[0]["id"] == archive["id"]
        assert tree[0]["children"] == []
        assert [child["name"] for child in tree[1]["children"]] == ["Q1", "Q2"]

    @pytest.mark.asyncio
    async def test_flat_list_is_owner_only(
        self,
        client: AsyncClient,
        auth_headers: dict,
        other_auth_headers: dict,
        api,
    ):
        await create_folder(client, auth_headers, "Mine")
        await create_folder(client, other_auth_headers, "Theirs")

        response = await client.get("/api/v1/folders", headers=auth_headers)

        data = api.assert_success(response)["data"]
        assert [folder["name"] for folder in data] == ["Mine"]

    @pytest.mark.asyncio
    async def test_other_users_folder_not_found(
        self,
        client: AsyncClient,
        auth_headers: dict,
        other_auth_headers: dict,
        api,
    ):
        folder = await create_folder(client, auth_headers, "Mine")

        response = await client.get(f"/api/v1/folders/{folder['id']}", headers=other_auth_headers)

        api.assert_error(response, 404, "RES_NOT_FOUND")


class TestUpdateFolder:
    """Tests for PATCH /api/v1/folders/{folder_id}."""

    @pytest.mark.asyncio
    async def test_rename(self, client: AsyncClient, auth_headers: dict, api):
        folder = await create_folder(client, auth_headers, "Old")

        response = await client.patch(
            f"/api/v1/folders/{folder['id']}",
            json={"name": "New"},
            headers=auth_headers,
        )

        assert api.assert_success(response)["data"]["name"] == "New"

    @pytest.mark.asyncio
    async def test_rename_to_blank_rejected(self, client: AsyncClient, auth_headers: dict, api):
        folder = await create_folder(client, auth_headers, "Old")

        response = await client.patch(
            f"/api/v1/folders/{folder['id']}",
            json={"name": "  "},
            headers=auth_headers,
        )

        api.assert_validation_error(response, field="name")

    @pytest.mark.asyncio
    async def test_move_to_root(self, client: AsyncClient, auth_headers: dict, api):
        parent = await create_folder(client, auth_headers, "Parent")
        child = await create_folder(client, auth_headers, "Child", parent_id=parent["id"])

        response = await client.patch(
            f"/api/v1/folders/{child['id']}",
            json={"parent_id": None},
            headers=auth_headers,
        )

        assert api.assert_success(response)["data"]["parent_id"] is None

    @pytest.mark.asyncio
    async def test_move_into_own_descendant_rejected(self, client: AsyncClient, auth_headers: dict, api):
        top = await create_folder(client, auth_headers, "Top")
        middle = await create_folder(client, auth_headers, "Middle", parent_id=top["id"])
        bottom = await create_folder(client, auth_headers, "Bottom", parent_id=middle["id"])

        response = await client.patch(
            f"/api/v1/folders/{top['id']}",
            json={"parent_id": bottom["id"]},
            headers=auth_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_move_into_itself_rejected(self, client: AsyncClient, auth_headers: dict, api):
        folder = await create_folder(client, auth_headers, "Loop")

        response = await client.patch(
            f"/api/v1/folders/{folder['id']}",
            json={"parent_id": folder["id"]},
            headers=auth_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_system_folder_is_protected(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_user_id: str,
        auth_headers: dict,
        api,
    ):
        inbox = Folder(user_id=test_user_id, name="Inbox", is_system=True)
        db_session.add(inbox)
        await db_session.flush()

        patched = await client.patch(
            f"/api/v1/folders/{inbox.id}",
            json={"name": "Outbox"},
            headers=auth_headers,
        )
        deleted = await client.delete(f"/api/v1/folders/{inbox.id}", headers=auth_headers)

        api.assert_error(patched, 403, "AUTHZ_SYSTEM_RESOURCE")
        api.assert_error(deleted, 403, "AUTHZ_SYSTEM_RESOURCE")


class TestDeleteFolder:
    """Tests for DELETE /api/v1/folders/{folder_id}."""

    @pytest.mark.asyncio
    async def test_contents_move_to_parent(self, client: AsyncClient, auth_headers: dict):
        top = await create_folder(client, auth_headers, "Top")
        doomed = await create_folder(client, auth_headers, "Doomed", parent_id=top["id"])
        child = await create_folder(client, auth_headers, "Child", parent_id=doomed["id"])
        note = await client.post(
            "/api/v1/notes",
            json={"title": "Survivor", "folder_id": doomed["id"]},
            headers=auth_headers,
        )
        note_id = note.json()["data"]["id"]

        response = await client.delete(f"/api/v1/folders/{doomed['id']}", headers=auth_headers)
        assert response.status_code == 204

        moved_child = await client.get(f"/api/v1/folders/{child['id']}", headers=auth_headers)
        assert moved_child.json()["data"]["parent_id"] == top["id"]

        moved_note = await client.get(f"/api/v1/notes/{note_id}", headers=auth_headers)
        assert moved_note.json()["data"]["folder_id"] == top["id"]

        gone = await client.get(f"/api/v1/folders/{doomed['id']}", headers=auth_headers)
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_root_folder_contents_move_to_root(self, client: AsyncClient, auth_headers: dict):
        doomed = await create_folder(client, auth_headers, "Doomed")
        note = await client.post(
            "/api/v1/notes",
            json={"title": "Survivor", "folder_id": doomed["id"]},
            headers=auth_headers,
        )
        note_id = note.json()["data"]["id"]

        await client.delete(f"/api/v1/folders/{doomed['id']}", headers=auth_headers)

        moved_note = await client.get(f"/api/v1/notes/{note_id}", headers=auth_headers)
        assert moved_note.json()["data"]["folder_id"] is None
