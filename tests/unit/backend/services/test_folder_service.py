"""
Unit Tests for Folder Service.

Tests the FolderService business logic with mocked repositories.
"""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from cloudnotes.backend.core.exceptions import SystemResourceError, ValidationError
from cloudnotes.backend.schemas.folder import FolderCreate, FolderUpdate
from cloudnotes.backend.services.folder import FolderService

NOW = datetime(2024, 1, 1)


@pytest.fixture
def service(mock_db_session):
    return FolderService(mock_db_session, "user-1")


def _folder(id: str, name: str = "Folder", parent_id: str | None = None, is_system: bool = False):
    return SimpleNamespace(
        id=id,
        name=name,
        parent_id=parent_id,
        is_system=is_system,
        created_at=NOW,
        updated_at=NOW,
    )


class TestGetTree:
    """Tests for building the folder tree."""

    @pytest.mark.asyncio
    async def test_nests_children(self, service):
        folders = [
            _folder("a", "Alpha"),
            _folder("b", "Beta", parent_id="a"),
            _folder("c", "Gamma", parent_id="b"),
            _folder("d", "Delta"),
        ]

        with patch.object(service.repo, "list_ordered", return_value=folders):
            tree = await service.get_tree()

        assert [node.id for node in tree] == ["a", "d"]
        assert tree[0].children[0].id == "b"
        assert tree[0].children[0].children[0].id == "c"
        assert tree[1].children == []

    @pytest.mark.asyncio
    async def test_orphan_is_shown_at_root(self, service):
        with patch.object(service.repo, "list_ordered", return_value=[_folder("x", parent_id="gone")]):
            tree = await service.get_tree()

        assert [node.id for node in tree] == ["x"]


class TestCreateFolder:
    """Tests for folder creation."""

    @pytest.mark.asyncio
    async def test_missing_parent_rejected(self, service):
        with patch.object(service.repo, "exists", return_value=False), \
             patch.object(service.repo, "create") as mock_create:
            with pytest.raises(ValidationError) as exc_info:
                await service.create_folder(FolderCreate(name="Sub", parent_id="nope"))

        assert exc_info.value.details == {"parent_id": "nope"}
        mock_create.assert_not_called()

    @pytest.mark.asyncio
    async def test_root_folder_skips_parent_check(self, service):
        with patch.object(service.repo, "exists") as mock_exists, \
             patch.object(service.repo, "create", return_value=_folder("n")) as mock_create:
            await service.create_folder(FolderCreate(name="Top"))

        mock_exists.assert_not_called()
        mock_create.assert_called_once_with(name="Top", parent_id=None)


class TestUpdateFolder:
    """Tests for renaming and moving folders."""

    @pytest.mark.asyncio
    async def test_system_folder_rejected(self, service):
        with patch.object(service.repo, "get_by_id", return_value=_folder("s", is_system=True)):
            with pytest.raises(SystemResourceError):
                await service.update_folder("s", FolderUpdate(name="New"))

    @pytest.mark.asyncio
    async def test_move_under_descendant_rejected(self, service):
        with patch.object(service.repo, "get_by_id", return_value=_folder("a")), \
             patch.object(service.repo, "exists", return_value=True), \
             patch.object(service.repo, "ancestor_ids", return_value=["c", "b", "a"]), \
             patch.object(service.repo, "update") as mock_update:
            with pytest.raises(ValidationError):
                await service.update_folder("a", FolderUpdate(parent_id="c"))

        mock_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_move_elsewhere_allowed(self, service):
        with patch.object(service.repo, "get_by_id", return_value=_folder("a")), \
             patch.object(service.repo, "exists", return_value=True), \
             patch.object(service.repo, "ancestor_ids", return_value=["x"]), \
             patch.object(service.repo, "update", return_value=_folder("a", parent_id="x")) as mock_update:
            await service.update_folder("a", FolderUpdate(parent_id="x"))

        mock_update.assert_called_once_with("a", parent_id="x")

    @pytest.mark.asyncio
    async def test_null_name_is_ignored(self, service):
        folder = _folder("a")

        with patch.object(service.repo, "get_by_id", return_value=folder), \
             patch.object(service.repo, "update") as mock_update:
            result = await service.update_folder("a", FolderUpdate(name=None))

        assert result is folder
        mock_update.assert_not_called()


class TestDeleteFolder:
    """Tests for folder deletion."""

    @pytest.mark.asyncio
    async def test_contents_move_to_parent(self, service):
        with patch.object(service.repo, "get_by_id", return_value=_folder("b", parent_id="a")), \
             patch.object(service.repo, "reparent_children") as mock_reparent, \
             patch.object(service.note_repo, "move_folder_contents") as mock_move, \
             patch.object(service.repo, "delete") as mock_delete:
            await service.delete_folder("b")

        mock_reparent.assert_called_once_with("b", "a")
        mock_move.assert_called_once_with("b", "a")
        mock_delete.assert_called_once_with("b")

    @pytest.mark.asyncio
    async def test_system_folder_rejected(self, service):
        with patch.object(service.repo, "get_by_id", return_value=_folder("s", is_system=True)), \
             patch.object(service.repo, "delete") as mock_delete:
            with pytest.raises(SystemResourceError):
                await service.delete_folder("s")

        mock_delete.assert_not_called()
